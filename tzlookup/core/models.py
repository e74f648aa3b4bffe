"""Data models for timezone lookups."""
import math
from dataclasses import dataclass
from typing import Optional, Dict, Any

import numpy as np


def to_single(value: float) -> float:
    """Round a value to single precision, returned as a Python float.
    
    Magnitudes beyond float32 range become infinite.
    """
    with np.errstate(over="ignore"):
        return float(np.float32(value))


@dataclass(frozen=True)
class Coordinate:
    """A WGS84 point. Both components are held in single precision."""
    latitude: float
    longitude: float
    
    def __post_init__(self):
        object.__setattr__(self, "latitude", to_single(self.latitude))
        object.__setattr__(self, "longitude", to_single(self.longitude))
    
    def offset(self, d_latitude: float, d_longitude: float) -> "Coordinate":
        """Return the coordinate shifted by the given deltas, in single precision."""
        with np.errstate(over="ignore"):
            latitude = np.float32(self.latitude) + np.float32(d_latitude)
            longitude = np.float32(self.longitude) + np.float32(d_longitude)
        return Coordinate(float(latitude), float(longitude))
    
    def is_finite(self) -> bool:
        return math.isfinite(self.latitude) and math.isfinite(self.longitude)


@dataclass(frozen=True)
class ZoneFields:
    """Typed fields extracted from a spatial database query result."""
    timezone: str
    country_name: Optional[str] = None
    country_alpha2: Optional[str] = None


@dataclass(frozen=True)
class LookupResult:
    """Result of a full timezone lookup."""
    timezone: str
    country_name: Optional[str] = None
    country_alpha2: Optional[str] = None
    
    @classmethod
    def from_fields(cls, fields: ZoneFields) -> "LookupResult":
        return cls(
            timezone=fields.timezone,
            country_name=fields.country_name,
            country_alpha2=fields.country_alpha2,
        )
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "timezone": self.timezone,
            "country_name": self.country_name,
            "country_alpha2": self.country_alpha2,
        }
