"""Errors raised by the timezone resolver.

A lookup that finds nothing is not an error and returns ``None``; only
database lifecycle problems raise.
"""
from pathlib import Path
from typing import Optional, Union


class TimeZoneLookupError(Exception):
    """Base class for all resolver errors."""


class DatabaseOpenError(TimeZoneLookupError):
    """A spatial database could not be opened."""
    
    def __init__(self, path: Union[str, Path], role: Optional[str] = None, reason: str = ""):
        self.path = Path(path)
        self.role = role
        self.reason = reason
        label = f"{role} database" if role else "database"
        message = f"Could not open {label} at {self.path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
    
    def with_role(self, role: str) -> "DatabaseOpenError":
        """Return a copy of this error tagged with the database role."""
        return type(self)(self.path, role=role, reason=self.reason)


class DatabaseNotFoundError(DatabaseOpenError):
    """The database file does not exist."""
    
    def __init__(self, path: Union[str, Path], role: Optional[str] = None, reason: str = "file not found"):
        super().__init__(path, role=role, reason=reason)


class DatabaseClosedError(TimeZoneLookupError):
    """A query was issued against a closed database."""


class ResultReleasedError(TimeZoneLookupError):
    """The fields of a query result were read after it was released."""
