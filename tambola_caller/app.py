"""
Application bootstrap.

Loads configuration, configures logging and returns a hydrated engine.
The caller owns the returned engine for the lifetime of the process and
passes it to whatever renders the session.
"""

from pathlib import Path
from typing import Any, Optional

from .config.loader import ConfigLoader
from .engine import SessionEngine
from .logging.config import configure_logging


async def create_engine(
    config_dir: Optional[Path] = None,
    overrides: Optional[dict[str, Any]] = None,
    **engine_kwargs: Any,
) -> SessionEngine:
    """
    Build a ready-to-use engine from configuration.

    Args:
        config_dir: Directory holding caller.yaml (defaults to ./config)
        overrides: Highest-precedence configuration values
        **engine_kwargs: Passed through to SessionEngine (rng, time_scale)

    Raises:
        ValueError: If the merged configuration is invalid
    """
    config = ConfigLoader.create(config_dir).load_config(overrides)

    configure_logging(level=config.logging.level, format_json=config.logging.format_json)

    engine = SessionEngine.from_config(config, **engine_kwargs)
    await engine.hydrate()
    return engine
