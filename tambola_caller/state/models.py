"""
Session state data models.

This module defines the immutable snapshot of a draw session, the derived
view handed to UI subscribers, and the result of a draw request.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Optional

from ..errors import ErrorKind


class SessionMode(str, Enum):
    """Conceptual engine modes derived from paused, auto_mode and completion."""
    IDLE_MANUAL = "idle_manual"
    AUTO_ARMED = "auto_armed"
    AUTO_PAUSED = "auto_paused"
    COMPLETE = "complete"


@dataclass(frozen=True)
class SessionState:
    """Snapshot of one draw session and its auto-draw settings."""

    pool_size: int = 100
    drawn: tuple[int, ...] = ()                  # Draw order, no duplicates
    current: Optional[int] = None                # Always drawn[-1] when set
    paused: bool = True

    # Settings record
    auto_mode: bool = False
    auto_interval_seconds: int = 2

    @property
    def available(self) -> list[int]:
        """Numbers in 1..pool_size not drawn yet, ascending."""
        drawn = set(self.drawn)
        return [n for n in range(1, self.pool_size + 1) if n not in drawn]

    @property
    def remaining_count(self) -> int:
        return self.pool_size - len(self.drawn)

    @property
    def is_complete(self) -> bool:
        return self.remaining_count == 0

    @property
    def mode(self) -> SessionMode:
        if self.is_complete:
            return SessionMode.COMPLETE
        if not self.auto_mode:
            return SessionMode.IDLE_MANUAL
        if self.paused:
            return SessionMode.AUTO_PAUSED
        return SessionMode.AUTO_ARMED

    @property
    def timer_should_run(self) -> bool:
        """True exactly when the auto-draw timer must be armed."""
        return self.mode == SessionMode.AUTO_ARMED

    def with_draw(self, number: int) -> 'SessionState':
        """Append a drawn number and make it current."""
        return replace(self, drawn=self.drawn + (number,), current=number)

    def with_paused(self, paused: bool) -> 'SessionState':
        return replace(self, paused=paused)

    def with_auto_mode(self, enabled: bool) -> 'SessionState':
        return replace(self, auto_mode=enabled)

    def with_auto_interval(self, seconds: int) -> 'SessionState':
        return replace(self, auto_interval_seconds=seconds)

    def with_cleared_session(self) -> 'SessionState':
        """Fresh session record values; settings are kept."""
        return replace(self, drawn=(), current=None, paused=True)


@dataclass(frozen=True)
class SessionView:
    """Render-ready view of the session delivered to subscribers."""

    current: Optional[int]
    drawn_count: int
    remaining_count: int
    is_complete: bool
    is_paused: bool
    is_auto_mode: bool
    auto_interval_seconds: int

    @classmethod
    def from_state(cls, state: SessionState) -> 'SessionView':
        return cls(
            current=state.current,
            drawn_count=len(state.drawn),
            remaining_count=state.remaining_count,
            is_complete=state.is_complete,
            is_paused=state.paused,
            is_auto_mode=state.auto_mode,
            auto_interval_seconds=state.auto_interval_seconds,
        )

    def to_dict(self) -> dict[str, Any]:
        """View keyed the way UI clients read it."""
        return {
            "current": self.current,
            "drawnCount": self.drawn_count,
            "remainingCount": self.remaining_count,
            "isComplete": self.is_complete,
            "isPaused": self.is_paused,
            "isAutoMode": self.is_auto_mode,
            "autoIntervalSeconds": self.auto_interval_seconds,
        }


@dataclass(frozen=True)
class DrawResult:
    """Outcome of a draw request."""

    ok: bool
    number: Optional[int] = None
    error: Optional[ErrorKind] = None

    @classmethod
    def success(cls, number: int) -> 'DrawResult':
        return cls(ok=True, number=number)

    @classmethod
    def rejected(cls, error: ErrorKind) -> 'DrawResult':
        return cls(ok=False, error=error)
