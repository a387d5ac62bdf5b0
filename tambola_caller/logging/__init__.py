"""
Logging configuration and utilities for the Tambola caller.
"""
from .config import configure_logging, get_logger, get_session_logger, log_session_transition

__all__ = ["configure_logging", "get_logger", "get_session_logger", "log_session_transition"]
