"""Configuration validation utilities."""

from dataclasses import dataclass
from typing import Any

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Hard limits for any configured auto-draw interval bound (seconds)
INTERVAL_FLOOR = 1
INTERVAL_CEILING = 10


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_engine_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate session engine parameters."""
        errors = []

        if "pool_size" in params:
            value = params["pool_size"]
            if not _is_int(value) or value <= 0:
                errors.append(ValidationError(
                    field="pool_size",
                    message="Must be a positive integer",
                    value=value
                ))

        bounds = {}
        for name in ("min_auto_interval", "default_auto_interval", "max_auto_interval"):
            if name in params:
                value = params[name]
                if not _is_int(value) or not INTERVAL_FLOOR <= value <= INTERVAL_CEILING:
                    errors.append(ValidationError(
                        field=name,
                        message=f"Must be an integer between {INTERVAL_FLOOR} and {INTERVAL_CEILING}",
                        value=value
                    ))
                else:
                    bounds[name] = value

        # Ordering is only checked when all three bounds are usable
        if len(bounds) == 3:
            low = bounds["min_auto_interval"]
            default = bounds["default_auto_interval"]
            high = bounds["max_auto_interval"]
            if not low <= default <= high:
                errors.append(ValidationError(
                    field="default_auto_interval",
                    message="Must satisfy min_auto_interval <= default_auto_interval <= max_auto_interval",
                    value=(low, default, high)
                ))

        return errors

    @staticmethod
    def validate_storage_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate persistent store parameters."""
        errors = []

        for name in ("directory", "session_key", "settings_key"):
            if name in params:
                value = params[name]
                if not isinstance(value, str) or not value.strip():
                    errors.append(ValidationError(
                        field=name,
                        message="Must be a non-empty string",
                        value=value
                    ))

        if params.get("session_key") is not None and params.get("session_key") == params.get("settings_key"):
            errors.append(ValidationError(
                field="settings_key",
                message="Must differ from session_key",
                value=params["settings_key"]
            ))

        return errors

    @staticmethod
    def validate_logging_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate logging parameters."""
        errors = []

        if "level" in params:
            value = params["level"]
            if not isinstance(value, str) or value.upper() not in LOG_LEVELS:
                errors.append(ValidationError(
                    field="level",
                    message=f"Must be one of {', '.join(LOG_LEVELS)}",
                    value=value
                ))

        if "format_json" in params:
            value = params["format_json"]
            if not isinstance(value, bool):
                errors.append(ValidationError(
                    field="format_json",
                    message="Must be a boolean",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []
        sections = {
            "engine": ConfigValidator.validate_engine_params,
            "storage": ConfigValidator.validate_storage_params,
            "logging": ConfigValidator.validate_logging_params,
        }

        for section, validate in sections.items():
            if section not in config:
                continue
            if not isinstance(config[section], dict):
                errors.append(ValidationError(
                    field=section,
                    message="Must be a mapping",
                    value=config[section]
                ))
                continue
            errors.extend(validate(config[section]))

        return errors
