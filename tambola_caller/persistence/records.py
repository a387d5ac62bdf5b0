"""
JSON codecs for the persisted session and settings records.

Session record:  {"currentNumber": int|null, "generatedNumbers": [int], "isPaused": bool}
Settings record: {"isAutoMode": bool, "autoSpeed": int}

Parsing is lenient. Every field falls back to its default on its own when
it is missing or malformed, and a record that is not a JSON object at all
yields defaults plus a StorageReadFailure describing why.
"""

import json
from dataclasses import dataclass
from typing import Any, Optional

from ..config.defaults import EngineParams
from ..errors import StorageReadFailure
from ..utils.bounds import clamp_interval


@dataclass(frozen=True)
class SessionRecord:
    """Decoded session record."""
    current: Optional[int] = None
    drawn: tuple[int, ...] = ()
    paused: bool = True


@dataclass(frozen=True)
class SettingsRecord:
    """Decoded settings record."""
    auto_mode: bool = False
    auto_interval_seconds: int = 2


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _load_object(raw: str, key: str) -> dict[str, Any]:
    try:
        payload = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise StorageReadFailure(
            f"Malformed JSON in {key!r} record: {e}", operation="parse", target=key
        ) from e

    if not isinstance(payload, dict):
        raise StorageReadFailure(
            f"Record {key!r} is not a JSON object",
            operation="parse",
            target=key,
            context={"type": type(payload).__name__},
        )

    return payload


def encode_session(current: Optional[int], drawn: tuple[int, ...], paused: bool) -> str:
    return json.dumps({
        "currentNumber": current,
        "generatedNumbers": list(drawn),
        "isPaused": paused,
    })


def decode_session(raw: str, params: Optional[EngineParams] = None, key: str = "session") -> SessionRecord:
    """
    Decode a session record.

    Drawn numbers outside 1..pool_size or repeated are dropped (first
    occurrence wins). The current number is always taken as the last drawn
    one so the record never contradicts its own history.

    Raises:
        StorageReadFailure: If raw is not a JSON object
    """
    params = params or EngineParams()
    payload = _load_object(raw, key)

    drawn: list[int] = []
    seen: set[int] = set()
    generated = payload.get("generatedNumbers")
    if isinstance(generated, list):
        for value in generated:
            if _is_int(value) and 1 <= value <= params.pool_size and value not in seen:
                seen.add(value)
                drawn.append(value)

    paused = payload.get("isPaused")
    if not isinstance(paused, bool):
        paused = SessionRecord.paused

    return SessionRecord(
        current=drawn[-1] if drawn else None,
        drawn=tuple(drawn),
        paused=paused,
    )


def encode_settings(auto_mode: bool, auto_interval_seconds: int) -> str:
    return json.dumps({
        "isAutoMode": auto_mode,
        "autoSpeed": auto_interval_seconds,
    })


def decode_settings(raw: str, params: Optional[EngineParams] = None, key: str = "settings") -> SettingsRecord:
    """
    Decode a settings record, clamping autoSpeed like the live setter does.

    Raises:
        StorageReadFailure: If raw is not a JSON object
    """
    params = params or EngineParams()
    payload = _load_object(raw, key)

    auto_mode = payload.get("isAutoMode")
    if not isinstance(auto_mode, bool):
        auto_mode = SettingsRecord.auto_mode

    interval = clamp_interval(
        payload.get("autoSpeed"),
        params.min_auto_interval,
        params.max_auto_interval,
        default=params.default_auto_interval,
    )

    return SettingsRecord(auto_mode=auto_mode, auto_interval_seconds=interval)
