"""
Core draw session state machine.

Pure transition functions over SessionState. They never touch timers,
storage or subscribers; SessionEngine applies their results and handles
those side effects.
"""

import random
from typing import Optional

from ..config.defaults import EngineParams
from ..errors import ErrorKind
from ..utils.bounds import clamp_interval
from .models import DrawResult, SessionState


def fresh_state(params: Optional[EngineParams] = None) -> SessionState:
    """Session defaults: nothing drawn, paused, manual mode."""
    params = params or EngineParams()
    return SessionState(
        pool_size=params.pool_size,
        auto_interval_seconds=clamp_interval(
            params.default_auto_interval,
            params.min_auto_interval,
            params.max_auto_interval,
        ),
    )


def check_draw(state: SessionState) -> Optional[ErrorKind]:
    """Return the reason a draw is not allowed, or None when it is."""
    if state.is_complete:
        return ErrorKind.SESSION_COMPLETE
    if state.paused:
        return ErrorKind.PAUSED
    return None


def draw_number(state: SessionState, rng: random.Random) -> tuple[SessionState, DrawResult]:
    """
    Draw one number uniformly at random from the available set.

    Args:
        state: Current session snapshot
        rng: Non-cryptographic generator; each available number has
            probability 1/len(available)

    Returns:
        (new_state, result); on rejection new_state is state itself
    """
    error = check_draw(state)
    if error is not None:
        return state, DrawResult.rejected(error)

    number = rng.choice(state.available)
    return state.with_draw(number), DrawResult.success(number)


def toggle_pause(state: SessionState) -> SessionState:
    return state.with_paused(not state.paused)


def reset_session(state: SessionState) -> SessionState:
    return state.with_cleared_session()


def set_auto_mode(state: SessionState, enabled: bool) -> SessionState:
    """Switch auto mode; turning it on from off lands paused so draws wait for resume."""
    new_state = state.with_auto_mode(bool(enabled))
    if enabled and not state.auto_mode:
        new_state = new_state.with_paused(True)
    return new_state


def set_auto_interval(state: SessionState, seconds: float, params: Optional[EngineParams] = None) -> SessionState:
    """Store the interval rounded and clamped into the configured bounds."""
    params = params or EngineParams()
    interval = clamp_interval(seconds, params.min_auto_interval, params.max_auto_interval)
    return state.with_auto_interval(interval)
