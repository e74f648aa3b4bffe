"""Retry search around coordinates that fall into gaps of the polygon data."""
from typing import Callable, Iterator, Optional, Sequence, Tuple, TypeVar

from tzlookup.core.models import Coordinate
from tzlookup.utils.logging import log_structured

T = TypeVar("T")

# 0.1 through 2.35 degrees in steps of 0.25
SPIRAL_DELTAS: Tuple[float, ...] = tuple(round(0.1 + 0.25 * step, 2) for step in range(10))

# (latitude, longitude) multipliers, probed in this order for every delta
SPIRAL_DIRECTIONS: Tuple[Tuple[int, int], ...] = (
    (1, 0),
    (-1, 0),
    (0, 1),
    (0, -1),
    (1, 1),
    (-1, 1),
    (1, -1),
    (-1, -1),
)


def spiral_offsets(deltas: Sequence[float] = SPIRAL_DELTAS) -> Iterator[Tuple[float, float]]:
    """Yield (latitude, longitude) offsets in probe order."""
    for delta in deltas:
        for lat_sign, lon_sign in SPIRAL_DIRECTIONS:
            yield lat_sign * delta, lon_sign * delta


def spiral_search(
    coordinate: Coordinate,
    probe: Callable[[Coordinate], Optional[T]],
    deltas: Sequence[float] = SPIRAL_DELTAS
) -> Optional[T]:
    """
    Probe offset coordinates in a widening ring until one resolves.
    
    Args:
        coordinate: Point that did not resolve
        probe: Lookup applied to each offset coordinate
        deltas: Ring distances in degrees
        
    Returns:
        First non-None probe result, or None once all offsets fail
    """
    probes = 0
    for d_latitude, d_longitude in spiral_offsets(deltas):
        probes += 1
        value = probe(coordinate.offset(d_latitude, d_longitude))
        if value is not None:
            log_structured(
                "debug",
                "Spiral search resolved",
                latitude=coordinate.latitude,
                longitude=coordinate.longitude,
                d_latitude=d_latitude,
                d_longitude=d_longitude,
                probes=probes
            )
            return value
    
    log_structured(
        "debug",
        "Spiral search exhausted",
        latitude=coordinate.latitude,
        longitude=coordinate.longitude,
        probes=probes
    )
    return None
