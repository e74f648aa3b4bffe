"""Offline timezone and country lookup for geographic coordinates.

Resolves a latitude/longitude pair to an IANA timezone identifier using a
coarse and a fine polygon database, without network access.
"""

from tzlookup.core.exceptions import (
    DatabaseClosedError,
    DatabaseNotFoundError,
    DatabaseOpenError,
    ResultReleasedError,
    TimeZoneLookupError,
)
from tzlookup.core.models import Coordinate, LookupResult
from tzlookup.core.resolver import TimeZoneResolver

__all__ = [
    "TimeZoneResolver",
    "LookupResult",
    "Coordinate",
    "TimeZoneLookupError",
    "DatabaseOpenError",
    "DatabaseNotFoundError",
    "DatabaseClosedError",
    "ResultReleasedError",
]
