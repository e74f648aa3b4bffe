"""Base class for spatial databases queried by the resolver."""
from abc import ABC, abstractmethod
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Sequence, Tuple, Union

from tzlookup.core.exceptions import DatabaseClosedError, ResultReleasedError

FieldPairs = Sequence[Tuple[str, str]]


class QueryResult:
    """
    Fields of the polygon containing a queried point.
    
    Results are transient: the owner reads ``fields`` and then releases the
    result. Reading the fields after release raises ``ResultReleasedError``.
    """
    
    __slots__ = ("_fields", "safety", "released")
    
    def __init__(self, fields: FieldPairs, safety: float):
        """
        Args:
            fields: Ordered (name, value) pairs
            safety: Distance in degrees from the point to the nearest polygon boundary
        """
        self._fields = tuple(fields)
        self.safety = float(safety)
        self.released = False
    
    @property
    def fields(self) -> Tuple[Tuple[str, str], ...]:
        if self.released:
            raise ResultReleasedError("Query result fields read after release")
        return self._fields
    
    def release(self):
        self._fields = ()
        self.released = True
    
    def __repr__(self) -> str:
        state = "released" if self.released else f"{len(self._fields)} fields"
        return f"QueryResult({state}, safety={self.safety:.6f})"


class SpatialDatabase(ABC):
    """Read-only polygon store mapping coordinates to named fields."""
    
    def __init__(self, path: Union[str, Path], resolution: float, name: Optional[str] = None):
        """
        Args:
            path: Location of the backing file
            resolution: Nominal resolution in degrees
            name: Display name used in logs
        """
        self.path = Path(path)
        self.resolution = float(resolution)
        self.name = name or self.path.stem
        self.closed = False
    
    @abstractmethod
    def _query(self, latitude: float, longitude: float) -> Optional[QueryResult]:
        """Return the result for a point on an open database, or None on a miss."""
        pass
    
    def query(self, latitude: float, longitude: float) -> Optional[QueryResult]:
        """
        Find the polygon containing a point.
        
        Args:
            latitude: Latitude in degrees
            longitude: Longitude in degrees
            
        Returns:
            QueryResult that the caller must release, or None
        """
        if self.closed:
            raise DatabaseClosedError(f"Database {self.name} is closed")
        return self._query(latitude, longitude)
    
    def release(self, result: QueryResult):
        """Free a query result."""
        result.release()
    
    @contextmanager
    def lookup(self, latitude: float, longitude: float) -> Iterator[Optional[QueryResult]]:
        """Query a point and release the result when the block exits."""
        result = self.query(latitude, longitude)
        try:
            yield result
        finally:
            if result is not None:
                self.release(result)
    
    def _close(self):
        """Release backend resources. Called at most once."""
        pass
    
    def close(self):
        """Close the database. Further calls are no-ops."""
        if self.closed:
            return
        self.closed = True
        self._close()
    
    def __enter__(self):
        return self
    
    def __exit__(self, *args):
        self.close()
    
    def __repr__(self) -> str:
        state = "closed" if self.closed else "open"
        return f"{type(self).__name__}({str(self.path)!r}, {state})"
