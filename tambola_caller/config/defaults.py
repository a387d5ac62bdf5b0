"""Default configuration parameters for the Tambola caller."""

from dataclasses import dataclass


@dataclass(frozen=True)
class EngineParams:
    """Session engine parameters."""
    pool_size: int = 100                     # Numbers are drawn from 1..pool_size

    # Auto-draw interval bounds (seconds)
    default_auto_interval: int = 2
    min_auto_interval: int = 1
    max_auto_interval: int = 10


@dataclass(frozen=True)
class StorageParams:
    """Persistent store parameters."""
    directory: str = "~/.tambola_caller"
    session_key: str = "session"
    settings_key: str = "settings"


@dataclass(frozen=True)
class LoggingParams:
    """Logging output parameters."""
    level: str = "INFO"
    format_json: bool = False


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    engine: EngineParams
    storage: StorageParams
    logging: LoggingParams


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        engine=EngineParams(),
        storage=StorageParams(),
        logging=LoggingParams(),
    )
