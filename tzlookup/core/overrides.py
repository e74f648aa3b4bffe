"""Fixed answers for areas the polygon data does not resolve."""
from dataclasses import dataclass
from typing import Optional, Sequence

from tzlookup.core.models import Coordinate, to_single


@dataclass(frozen=True)
class BoxOverride:
    """A latitude/longitude box with a hardcoded timezone. Edges are inclusive."""
    name: str
    min_latitude: float
    max_latitude: float
    min_longitude: float
    max_longitude: float
    timezone: str
    
    def contains(self, coordinate: Coordinate) -> bool:
        return (
            to_single(self.min_latitude) <= coordinate.latitude <= to_single(self.max_latitude)
            and to_single(self.min_longitude) <= coordinate.longitude <= to_single(self.max_longitude)
        )


OVERRIDES = (
    # Astypalaia resolves no timezone, likely an invalid polygon
    BoxOverride(
        name="Astypalaia",
        min_latitude=36.2443,
        max_latitude=36.7389,
        min_longitude=26.0019,
        max_longitude=26.7957,
        timezone="Europe/Athens",
    ),
    BoxOverride(
        name="Curacao",
        min_latitude=11.865393,
        max_latitude=12.474443,
        min_longitude=-69.312710,
        max_longitude=-68.613387,
        timezone="America/Curacao",
    ),
)


def match_override(
    coordinate: Coordinate,
    overrides: Sequence[BoxOverride] = OVERRIDES
) -> Optional[str]:
    """Return the timezone of the first override box containing the coordinate."""
    for override in overrides:
        if override.contains(coordinate):
            return override.timezone
    return None
