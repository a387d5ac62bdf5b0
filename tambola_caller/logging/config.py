"""
Centralized logging configuration for the Tambola caller.

This module provides standardized logging configuration using structlog
for all components. Engine, persistence and timer code should obtain
their loggers here so output stays consistently structured.
"""
import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import FilteringBoundLogger


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True
) -> None:
    """
    Configure structlog for the entire application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, output JSON format; otherwise human-readable
        include_timestamp: Include timestamp in log output
    """
    log_level = getattr(logging, level.upper())

    logging.basicConfig(
        level=log_level,
        stream=sys.stdout,
        format="%(message)s"  # structlog will handle formatting
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance
    """
    return structlog.get_logger(name)


def get_session_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger bound for session engine audit output.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger carrying the session engine subsystem context
    """
    logger = get_logger(name)

    return logger.bind(
        subsystem="session_engine",
        audit_trail=True
    )


def log_session_transition(
    logger: FilteringBoundLogger,
    from_mode: str,
    to_mode: str,
    trigger: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a session mode transition with standardized format.

    Args:
        logger: Structlog logger instance
        from_mode: Mode before the command
        to_mode: Mode after the command
        trigger: Command or timer event that caused the change
        context: Additional context data
    """
    bound_logger = logger.bind(
        from_mode=from_mode,
        to_mode=to_mode,
        trigger=trigger,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.info("session_transition")
