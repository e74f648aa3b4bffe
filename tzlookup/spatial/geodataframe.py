"""Spatial database backed by a vector file loaded into a GeoDataFrame."""
import math
import threading
from pathlib import Path
from typing import List, Optional, Tuple, Union

import geopandas as gpd
import pandas as pd
from pyproj import CRS
from shapely.geometry import Point

from tzlookup.core.exceptions import DatabaseClosedError, DatabaseNotFoundError, DatabaseOpenError
from tzlookup.spatial.base import QueryResult, SpatialDatabase
from tzlookup.utils.logging import log_structured

POLYGON_TYPES = ("Polygon", "MultiPolygon")

# Nominal database resolutions in degrees
COARSE_RESOLUTION = 0.0055  # ~0.5km
FINE_RESOLUTION = 0.00017  # ~20m

# Polygons are stored and queried in WGS84
DATABASE_CRS = "EPSG:4326"


class GeoDataFrameDatabase(SpatialDatabase):
    """
    Polygon database read from any file geopandas can open.
    
    Each polygon's attribute columns become the field list of a query
    result, in column order. Null attributes are left out.
    """
    
    def __init__(
        self,
        gdf: gpd.GeoDataFrame,
        path: Union[str, Path],
        resolution: float,
        name: Optional[str] = None
    ):
        """
        Initialize from an already loaded GeoDataFrame.
        
        Args:
            gdf: Polygons in EPSG:4326
            path: Source file location
            resolution: Nominal resolution in degrees
            name: Display name used in logs
        """
        super().__init__(path, resolution, name)
        self.gdf = gdf.reset_index(drop=True)
        self.field_names: List[str] = [
            column for column in self.gdf.columns
            if column != self.gdf.geometry.name
        ]
        # Build the index up front so queries never mutate shared state
        self.sindex = self.gdf.sindex
        self._lock = threading.Lock()
    
    @classmethod
    def open(
        cls,
        path: Union[str, Path],
        resolution: float,
        name: Optional[str] = None
    ) -> "GeoDataFrameDatabase":
        """
        Open a polygon file.
        
        Args:
            path: GeoJSON, GeoPackage, Shapefile or FlatGeobuf path
            resolution: Nominal resolution in degrees
            name: Display name used in logs
            
        Returns:
            Open database
            
        Raises:
            DatabaseNotFoundError: If the file does not exist
            DatabaseOpenError: If the file cannot be read or holds no polygons
        """
        path = Path(path)
        if not path.is_file():
            raise DatabaseNotFoundError(path)
        
        try:
            gdf = gpd.read_file(path)
        except Exception as e:
            raise DatabaseOpenError(path, reason=str(e)) from e
        
        gdf = prepare_polygons(gdf, path)
        database = cls(gdf, path, resolution, name)
        log_structured(
            "debug",
            "Spatial database opened",
            database=database.name,
            path=str(path),
            polygons=len(gdf),
            resolution=database.resolution
        )
        return database
    
    def _query(self, latitude: float, longitude: float) -> Optional[QueryResult]:
        if not (math.isfinite(latitude) and math.isfinite(longitude)):
            return None
        
        point = Point(longitude, latitude)
        with self._lock:
            gdf, sindex = self.gdf, self.sindex
            if sindex is None:
                raise DatabaseClosedError(f"Database {self.name} is closed")
            candidates = sindex.query(point, predicate="intersects")
        if len(candidates) == 0:
            return None
        
        # First polygon in file order wins
        position = int(min(candidates))
        row = gdf.iloc[position]
        safety = gdf.geometry.iloc[position].boundary.distance(point)
        return QueryResult(self._row_fields(row), safety)
    
    def _row_fields(self, row: pd.Series) -> List[Tuple[str, str]]:
        fields = []
        for column in self.field_names:
            value = row[column]
            if value is None or (pd.api.types.is_scalar(value) and pd.isna(value)):
                continue
            fields.append((str(column), str(value)))
        return fields
    
    def _close(self):
        with self._lock:
            self.gdf = self.gdf.iloc[0:0]
            self.sindex = None
        log_structured("debug", "Spatial database closed", database=self.name)


def prepare_polygons(gdf: gpd.GeoDataFrame, path: Path) -> gpd.GeoDataFrame:
    """
    Normalize a loaded layer to non-empty WGS84 polygons.
    
    Args:
        gdf: Layer as read from disk
        path: Source path, for error messages
        
    Returns:
        GeoDataFrame with only Polygon/MultiPolygon rows in EPSG:4326
    """
    if gdf.empty:
        raise DatabaseOpenError(path, reason="no features")
    
    if gdf.crs is None:
        gdf = gdf.set_crs(DATABASE_CRS)
    elif not CRS.from_user_input(gdf.crs).equals(CRS.from_user_input(DATABASE_CRS)):
        gdf = gdf.to_crs(DATABASE_CRS)
    
    mask = gdf.geometry.notna() & ~gdf.geometry.is_empty & gdf.geometry.geom_type.isin(POLYGON_TYPES)
    gdf = gdf[mask]
    if gdf.empty:
        raise DatabaseOpenError(path, reason="no polygon features")
    
    return gdf
