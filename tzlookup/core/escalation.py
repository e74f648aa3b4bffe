"""Coarse-to-fine database query escalation."""
from typing import Callable, Optional, Sequence, Tuple, TypeVar

from tzlookup.core.models import Coordinate
from tzlookup.spatial.base import SpatialDatabase
from tzlookup.utils.logging import log_structured

T = TypeVar("T")

Extractor = Callable[[Sequence[Tuple[str, str]]], Optional[T]]


def escalation_threshold(coarse_resolution: float) -> float:
    """Safety margin above which a coarse result is trusted: twice its resolution."""
    return 2 * coarse_resolution


class ResolutionEscalator:
    """
    Query the coarse database first and fall back to the fine one near borders.
    
    The coarse result is kept when the point lies at least ``threshold``
    degrees inside its polygon. Otherwise it is released and the fine
    database is asked instead, whatever it answers. A coarse miss is final.
    """
    
    def __init__(
        self,
        coarse: SpatialDatabase,
        fine: SpatialDatabase,
        threshold: Optional[float] = None
    ):
        """
        Args:
            coarse: Low resolution database
            fine: High resolution database
            threshold: Safety margin in degrees (default: twice the coarse resolution)
        """
        self.coarse = coarse
        self.fine = fine
        self.threshold = threshold if threshold is not None else escalation_threshold(coarse.resolution)
    
    def resolve(self, coordinate: Coordinate, extract: Extractor) -> Optional[T]:
        """
        Run the best available query for a coordinate and extract from it.
        
        ``extract`` runs while the winning result is still held; every
        result acquired here is released before returning.
        
        Args:
            coordinate: Point to resolve
            extract: Function over the result's (name, value) pairs
            
        Returns:
            Whatever ``extract`` returns, or None on a database miss
        """
        if not coordinate.is_finite():
            return None

        with self.coarse.lookup(coordinate.latitude, coordinate.longitude) as result:
            if result is None:
                return None
            if result.safety >= self.threshold:
                return extract(result.fields)
            coarse_safety = result.safety
        
        log_structured(
            "debug",
            "Escalating to fine database",
            latitude=coordinate.latitude,
            longitude=coordinate.longitude,
            safety=coarse_safety,
            threshold=self.threshold
        )
        with self.fine.lookup(coordinate.latitude, coordinate.longitude) as result:
            if result is None:
                return None
            return extract(result.fields)
