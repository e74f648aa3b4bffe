"""Pytest configuration and fixtures."""
import pytest
import geopandas as gpd
from shapely.geometry import Polygon, box
from tzlookup.core.resolver import TimeZoneResolver
from tzlookup.spatial.base import QueryResult, SpatialDatabase
from tzlookup.spatial.geodataframe import GeoDataFrameDatabase

COARSE_RESOLUTION = 0.0055
FINE_RESOLUTION = 0.00017


def zone(prefix, zone_id, country_name, alpha2, geometry):
    return {
        "TimezoneIdPrefix": prefix,
        "TimezoneId": zone_id,
        "CountryName": country_name,
        "CountryAlpha2": alpha2,
        "geometry": geometry,
    }


def build_zones(border_longitude: float) -> gpd.GeoDataFrame:
    """Sample timezone polygons with the Germany/Poland border at the given longitude."""
    return gpd.GeoDataFrame(
        [
            zone("Europe/", "Berlin", "Germany", "DE", box(6.0, 47.0, border_longitude, 55.0)),
            zone("Europe/", "Warsaw", "Poland", "PL", box(border_longitude, 49.0, 24.0, 55.0)),
            # Small island surrounded by open sea
            zone("Atlantic/", "Madeira", "Portugal", "PT", box(-17.3, 32.6, -16.6, 32.9)),
            # Broken polygon: prefix without id
            zone("Africa/", None, "Uganda", "UG", box(30.0, 0.0, 31.0, 1.0)),
            # Timezone without country metadata
            zone("Etc/", "GMT", None, None, Polygon([(-40, -40), (-39, -40), (-39, -39), (-40, -39)])),
        ],
        crs="EPSG:4326"
    )


@pytest.fixture
def coarse_zones():
    """Coarse data places the border 0.02 degrees east of the real one."""
    return build_zones(15.02)


@pytest.fixture
def fine_zones():
    return build_zones(15.0)


@pytest.fixture
def coarse_path(tmp_path, coarse_zones):
    path = tmp_path / "timezone16.geojson"
    coarse_zones.to_file(path, driver="GeoJSON")
    return path


@pytest.fixture
def fine_path(tmp_path, fine_zones):
    path = tmp_path / "timezone21.geojson"
    fine_zones.to_file(path, driver="GeoJSON")
    return path


@pytest.fixture
def resolver(coarse_path, fine_path):
    """Resolver over the sample GeoJSON databases."""
    resolver = TimeZoneResolver(coarse_path, fine_path)
    yield resolver
    resolver.close()


class FakeDatabase(SpatialDatabase):
    """
    Scripted database for counting queries.

    ``responder(latitude, longitude)`` returns None for a miss or a
    (fields, safety) tuple for a hit.
    """

    def __init__(self, responder, resolution=COARSE_RESOLUTION, name="fake"):
        super().__init__(f"/nonexistent/{name}.geojson", resolution, name)
        self.responder = responder
        self.queries = []
        self.results = []
        self.close_calls = 0

    def _query(self, latitude, longitude):
        self.queries.append((latitude, longitude))
        response = self.responder(latitude, longitude)
        if response is None:
            return None
        fields, safety = response
        result = QueryResult(fields, safety)
        self.results.append(result)
        return result

    def _close(self):
        self.close_calls += 1

    def all_released(self):
        return all(result.released for result in self.results)


class RecordingDatabase(SpatialDatabase):
    """Wraps a real database and records every query."""

    def __init__(self, inner):
        super().__init__(inner.path, inner.resolution, inner.name)
        self.inner = inner
        self.queries = []
        self.results = []

    def _query(self, latitude, longitude):
        self.queries.append((latitude, longitude))
        result = self.inner.query(latitude, longitude)
        if result is not None:
            self.results.append(result)
        return result

    def _close(self):
        self.inner.close()


BERLIN_FIELDS = [
    ("TimezoneIdPrefix", "Europe/"),
    ("TimezoneId", "Berlin"),
    ("CountryName", "Germany"),
    ("CountryAlpha2", "DE"),
]

WARSAW_FIELDS = [
    ("TimezoneIdPrefix", "Europe/"),
    ("TimezoneId", "Warsaw"),
    ("CountryName", "Poland"),
    ("CountryAlpha2", "PL"),
]


def never(latitude, longitude):
    return None


@pytest.fixture
def recording_resolver(coarse_path, fine_path):
    """Resolver over the sample databases that records every query."""
    coarse = RecordingDatabase(GeoDataFrameDatabase.open(coarse_path, COARSE_RESOLUTION, name="coarse"))
    fine = RecordingDatabase(GeoDataFrameDatabase.open(fine_path, FINE_RESOLUTION, name="fine"))
    resolver = TimeZoneResolver.from_databases(coarse, fine)
    yield resolver
    resolver.close()
