"""
Error kinds reported by the session engine.

Precondition violations are returned to callers as values carrying one of
these kinds; storage kinds tag logged persistence failures.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Taxonomy of outcomes that stop a command from taking effect."""
    SESSION_COMPLETE = "session_complete"      # Draw with an empty available set
    PAUSED = "paused"                          # Draw while paused
    NOT_READY = "not_ready"                    # Command before hydrate finished
    AUTO_MODE = "auto_mode"                    # Manual draw while the timer owns draws
    STORAGE_READ_FAILURE = "storage_read_failure"
    STORAGE_WRITE_FAILURE = "storage_write_failure"
