"""Offline timezone resolution for geographic coordinates."""
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from tzlookup.core.escalation import ResolutionEscalator
from tzlookup.core.exceptions import DatabaseOpenError
from tzlookup.core.extraction import extract_fields, extract_timezone
from tzlookup.core.models import Coordinate, LookupResult
from tzlookup.core.overrides import OVERRIDES, BoxOverride, match_override
from tzlookup.core.spiral import SPIRAL_DELTAS, spiral_search
from tzlookup.spatial.base import SpatialDatabase
from tzlookup.spatial.geodataframe import COARSE_RESOLUTION, FINE_RESOLUTION, GeoDataFrameDatabase
from tzlookup.utils.logging import log_structured

PathLike = Union[str, Path]


class TimeZoneResolver:
    """
    Resolve coordinates to IANA timezone identifiers.
    
    Owns a coarse (~0.5km) and a fine (~20m) polygon database. Both are
    opened on construction and closed together by ``close()``.
    
    Usage:
        with TimeZoneResolver("timezone16.geojson", "timezone21.geojson") as resolver:
            resolver.simple(52.52, 13.40)  # "Europe/Berlin"
    """
    
    def __init__(
        self,
        coarse_path: PathLike,
        fine_path: PathLike,
        *,
        coarse_resolution: float = COARSE_RESOLUTION,
        fine_resolution: float = FINE_RESOLUTION,
        overrides: Sequence[BoxOverride] = OVERRIDES,
        spiral_deltas: Sequence[float] = SPIRAL_DELTAS
    ):
        """
        Open both databases.
        
        Args:
            coarse_path: Low resolution polygon file
            fine_path: High resolution polygon file
            coarse_resolution: Nominal coarse resolution in degrees
            fine_resolution: Nominal fine resolution in degrees
            overrides: Fixed answers applied by ``simple``
            spiral_deltas: Ring distances for the corrective search
            
        Raises:
            DatabaseOpenError: If either database cannot be opened. Its
                ``role`` attribute names which one.
        """
        fine = _open_database(fine_path, fine_resolution, "fine")
        try:
            coarse = _open_database(coarse_path, coarse_resolution, "coarse")
        except DatabaseOpenError:
            fine.close()
            raise
        
        self._attach(coarse, fine, overrides, spiral_deltas)
    
    @classmethod
    def from_databases(
        cls,
        coarse: SpatialDatabase,
        fine: SpatialDatabase,
        *,
        overrides: Sequence[BoxOverride] = OVERRIDES,
        spiral_deltas: Sequence[float] = SPIRAL_DELTAS
    ) -> "TimeZoneResolver":
        """Build a resolver around two open databases. The resolver takes ownership."""
        resolver = cls.__new__(cls)
        resolver._attach(coarse, fine, overrides, spiral_deltas)
        return resolver
    
    def _attach(
        self,
        coarse: SpatialDatabase,
        fine: SpatialDatabase,
        overrides: Sequence[BoxOverride],
        spiral_deltas: Sequence[float]
    ):
        self.coarse = coarse
        self.fine = fine
        self.overrides = tuple(overrides)
        self.spiral_deltas = tuple(spiral_deltas)
        self.escalator = ResolutionEscalator(coarse, fine)
        self._closed = False
    
    @property
    def closed(self) -> bool:
        return self._closed
    
    def lookup(self, latitude: float, longitude: float) -> Optional[LookupResult]:
        """
        Resolve timezone, country name and alpha2 code for a coordinate.
        
        No overrides and no corrective search are applied.
        
        Args:
            latitude: Latitude in degrees
            longitude: Longitude in degrees
            
        Returns:
            LookupResult, or None if the coordinate does not resolve
        """
        fields = self.escalator.resolve(Coordinate(latitude, longitude), extract_fields)
        if fields is None:
            return None
        return LookupResult.from_fields(fields)
    
    def simple(self, latitude: float, longitude: float) -> Optional[str]:
        """
        Resolve the timezone identifier for a coordinate.
        
        Checks the override boxes first, then the databases, then probes
        nearby coordinates to get past gaps in the polygon data.
        
        Args:
            latitude: Latitude in degrees
            longitude: Longitude in degrees
            
        Returns:
            Timezone identifier like ``Europe/Berlin``, or None
        """
        coordinate = Coordinate(latitude, longitude)
        
        timezone = match_override(coordinate, self.overrides)
        if timezone is not None:
            return timezone
        
        timezone = self._simple_uncorrected(coordinate)
        if timezone is not None:
            return timezone
        
        return spiral_search(coordinate, self._simple_uncorrected, self.spiral_deltas)
    
    def _simple_uncorrected(self, coordinate: Coordinate) -> Optional[str]:
        return self.escalator.resolve(coordinate, extract_timezone)
    
    def lookup_many(self, coordinates: Iterable[Tuple[float, float]]) -> List[Optional[LookupResult]]:
        """Run ``lookup`` for each (latitude, longitude) pair, in input order."""
        return [self.lookup(latitude, longitude) for latitude, longitude in coordinates]
    
    def simple_many(self, coordinates: Iterable[Tuple[float, float]]) -> List[Optional[str]]:
        """Run ``simple`` for each (latitude, longitude) pair, in input order."""
        return [self.simple(latitude, longitude) for latitude, longitude in coordinates]
    
    def close(self):
        """Close both databases. Further calls are no-ops."""
        if self._closed:
            return
        self._closed = True
        try:
            self.fine.close()
        finally:
            self.coarse.close()
        log_structured("debug", "Timezone resolver closed")
    
    def __enter__(self):
        return self
    
    def __exit__(self, *args):
        self.close()
    
    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return f"TimeZoneResolver(coarse={self.coarse!r}, fine={self.fine!r}, {state})"


def _open_database(path: PathLike, resolution: float, role: str) -> GeoDataFrameDatabase:
    try:
        return GeoDataFrameDatabase.open(path, resolution, name=role)
    except DatabaseOpenError as e:
        raise e.with_role(role) from e
