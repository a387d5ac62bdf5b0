"""
Persistence failure classifications.

Storage failures never stop the engine: they are raised by store
implementations, caught where the engine reads or writes records, and
logged. The in-memory session stays authoritative.
"""

from typing import Optional, Dict, Any

from .kinds import ErrorKind


class PersistenceError(Exception):
    """Base class for key-value store failures."""

    kind: Optional[ErrorKind] = None

    def __init__(self, message: str, operation: Optional[str] = None,
                 target: Optional[str] = None, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.operation = operation
        self.target = target
        self.context = context or {}
        self.recoverable = True


class StorageReadFailure(PersistenceError):
    """A record could not be read or parsed."""

    kind = ErrorKind.STORAGE_READ_FAILURE


class StorageWriteFailure(PersistenceError):
    """A record could not be written or removed."""

    kind = ErrorKind.STORAGE_WRITE_FAILURE
