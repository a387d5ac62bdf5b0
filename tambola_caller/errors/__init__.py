"""
Error classification for the session engine.

Precondition outcomes are expressed as ErrorKind values; persistence
failures use a small exception hierarchy so stores can report I/O and
parse errors to the code that logs them.
"""

from .kinds import ErrorKind
from .storage import (
    PersistenceError,
    StorageReadFailure,
    StorageWriteFailure,
)

__all__ = [
    "ErrorKind",
    # Persistence failures
    "PersistenceError",
    "StorageReadFailure",
    "StorageWriteFailure",
]
