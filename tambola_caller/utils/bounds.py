"""
Bounds helpers for draw settings.

The auto-draw interval is clamped in one place for every entry point: the
settings setter, hydration of a stored settings record and configuration.
"""

import math
from typing import Any, Optional


def is_number(value: Any) -> bool:
    """True for finite real numbers, excluding bools."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def clamp(value: int, low: int, high: int) -> int:
    """Clamp an integer into the inclusive range [low, high]."""
    return max(low, min(high, value))


def clamp_interval(value: Any, low: int, high: int, default: Optional[int] = None) -> int:
    """
    Normalize an auto-draw interval.

    Args:
        value: Requested interval in seconds; any real number is accepted
        low: Smallest allowed interval
        high: Largest allowed interval
        default: Returned when value is not a usable number

    Returns:
        The value rounded to whole seconds and clamped into [low, high]

    Raises:
        ValueError: If value is not a number and no default was given
    """
    if not is_number(value):
        if default is None:
            raise ValueError(f"Interval must be a number, got {value!r}")
        return clamp(default, low, high)

    return clamp(int(round(value)), low, high)
