"""
Draw session engine coordinator.

Owns the single SessionState of a caller, applies the state machine's
transitions, keeps the auto-draw timer in step with the current mode,
notifies subscribers and dispatches persistence of both records.
"""

import asyncio
import random
from dataclasses import replace
from typing import Any, Callable, Optional

import structlog

from .config.defaults import DefaultConfig, EngineParams, StorageParams
from .errors import ErrorKind, StorageReadFailure
from .logging.config import get_session_logger, log_session_transition
from .persistence.records import (
    decode_session,
    decode_settings,
    encode_session,
    encode_settings,
)
from .persistence.store import JsonFileStore, KeyValueStore
from .persistence.writer import RecordWriter
from .state import machine
from .state.models import DrawResult, SessionState, SessionView
from .state.timer import AutoDrawTimer

logger = structlog.get_logger(__name__)
session_logger = get_session_logger(__name__)

Listener = Callable[[SessionView], Any]


class SessionEngine:
    """
    Main coordinator for a Tambola draw session.

    Lifecycle: construct, await hydrate(), then issue commands from the
    event loop thread. Commands never block on storage; records are written
    in the background in the order the state changed.

    Mode handling:
    Idle/Manual → draw() on request
    Auto-Paused → toggle_pause() → Auto-Armed → timer draws → Complete
    """

    def __init__(
        self,
        store: KeyValueStore,
        params: Optional[EngineParams] = None,
        storage: Optional[StorageParams] = None,
        rng: Optional[random.Random] = None,
        time_scale: float = 1.0,
    ) -> None:
        """
        Initialize the session engine.

        Args:
            store: Persistent store for the session and settings records
            params: Pool size and auto-interval bounds
            storage: Record keys
            rng: Generator used for draws; defaults to a platform-seeded Random
            time_scale: Multiplier applied to timer intervals
        """
        self.logger = logger
        self.session_logger = session_logger

        self.params = params or EngineParams()
        self.storage = storage or StorageParams()
        self.store = store
        self.rng = rng or random.Random()

        self._state = machine.fresh_state(self.params)
        self._ready = False
        self._hydrate_task: Optional[asyncio.Task] = None
        self._listeners: list[Listener] = []

        self.timer = AutoDrawTimer(time_scale=time_scale)
        self.session_writer = RecordWriter(store, self.storage.session_key)
        self.settings_writer = RecordWriter(store, self.storage.settings_key)

    @classmethod
    def from_config(cls, config: DefaultConfig, **kwargs: Any) -> "SessionEngine":
        """Build an engine backed by the JSON file store named in config."""
        return cls(
            store=JsonFileStore(config.storage.directory),
            params=config.engine,
            storage=config.storage,
            **kwargs,
        )

    @property
    def ready(self) -> bool:
        return self._ready

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def view(self) -> SessionView:
        return SessionView.from_state(self._state)

    async def hydrate(self) -> SessionView:
        """
        Load both records and mark the engine ready.

        Each record falls back to its defaults independently when it is
        absent, unreadable or malformed. Overlapping calls await the same
        load; calling hydrate once ready is a no-op.
        """
        if self._ready:
            return self.view
        if self._hydrate_task is None or self._hydrate_task.done():
            self._hydrate_task = asyncio.get_running_loop().create_task(self._hydrate())
        return await asyncio.shield(self._hydrate_task)

    async def _hydrate(self) -> SessionView:
        state = machine.fresh_state(self.params)

        settings_raw = await self._read_record(self.storage.settings_key)
        if settings_raw is not None:
            try:
                settings = decode_settings(settings_raw, self.params, key=self.storage.settings_key)
            except StorageReadFailure as e:
                self._log_read_failure(self.storage.settings_key, e)
            else:
                state = replace(
                    state,
                    auto_mode=settings.auto_mode,
                    auto_interval_seconds=settings.auto_interval_seconds,
                )

        session_raw = await self._read_record(self.storage.session_key)
        if session_raw is not None:
            try:
                session = decode_session(session_raw, self.params, key=self.storage.session_key)
            except StorageReadFailure as e:
                self._log_read_failure(self.storage.session_key, e)
            else:
                state = replace(
                    state,
                    drawn=session.drawn,
                    current=session.current,
                    paused=session.paused,
                )

        self._state = state
        self._ready = True

        self.logger.info(
            "Session engine hydrated",
            drawn_count=len(state.drawn),
            paused=state.paused,
            auto_mode=state.auto_mode,
            auto_interval_seconds=state.auto_interval_seconds,
            mode=state.mode.value,
        )

        self._sync_timer()
        self._notify()
        return self.view

    def draw(self, trigger: str = "draw") -> DrawResult:
        """
        Draw the next number if the session is ready, unpaused and not complete.

        Returns:
            DrawResult with the number, or with the ErrorKind that blocked it
        """
        if not self._check_ready(trigger):
            return DrawResult.rejected(ErrorKind.NOT_READY)

        new_state, result = machine.draw_number(self._state, self.rng)
        if not result.ok:
            self.logger.debug("Draw rejected", trigger=trigger, reason=result.error.value)
            return result

        self.logger.info(
            "Number drawn",
            trigger=trigger,
            number=result.number,
            drawn_count=len(new_state.drawn),
            remaining=new_state.remaining_count,
        )
        self._commit(new_state, trigger, session=True)
        return result

    def manual_draw(self) -> DrawResult:
        """Primary UI draw action; rejected while the auto timer owns draws."""
        if not self._check_ready("manual_draw"):
            return DrawResult.rejected(ErrorKind.NOT_READY)

        if self._state.auto_mode:
            self.logger.debug("Manual draw rejected in auto mode")
            return DrawResult.rejected(ErrorKind.AUTO_MODE)

        return self.draw(trigger="manual_draw")

    def toggle_pause(self) -> bool:
        """Flip the paused flag and return its new value."""
        if not self._check_ready("toggle_pause"):
            return self._state.paused

        self._commit(machine.toggle_pause(self._state), "toggle_pause", session=True)
        return self._state.paused

    def reset(self) -> None:
        """Clear drawn numbers and pause; auto settings are kept."""
        if not self._check_ready("reset"):
            return

        self._commit(machine.reset_session(self._state), "reset")
        self.session_writer.submit_remove()

    def set_auto_mode(self, enabled: bool) -> None:
        if not self._check_ready("set_auto_mode"):
            return

        self._commit(
            machine.set_auto_mode(self._state, enabled),
            "set_auto_mode",
            session=True,
            settings=True,
        )

    def set_auto_interval(self, seconds: float) -> int:
        """
        Set the auto-draw interval, clamped to the configured bounds.

        An armed timer is re-armed immediately with the new interval.

        Returns:
            The interval actually stored
        """
        if not self._check_ready("set_auto_interval"):
            return self._state.auto_interval_seconds

        self._commit(
            machine.set_auto_interval(self._state, seconds, self.params),
            "set_auto_interval",
            settings=True,
        )
        return self._state.auto_interval_seconds

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener for SessionView snapshots.

        Returns:
            Callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def history(self) -> list[tuple[int, int]]:
        """Drawn numbers newest first as (draw_order, number) pairs."""
        drawn = self._state.drawn
        return [(len(drawn) - i, number) for i, number in enumerate(reversed(drawn))]

    def board(self) -> list[tuple[int, bool]]:
        """Every pool number with whether it has been drawn."""
        drawn = set(self._state.drawn)
        return [(n, n in drawn) for n in range(1, self._state.pool_size + 1)]

    async def close(self) -> None:
        """Stop the timer and wait for pending record writes."""
        self.timer.disarm()
        await self.session_writer.flush()
        await self.settings_writer.flush()
        self.logger.info("Session engine closed")

    def _check_ready(self, command: str) -> bool:
        if self._ready:
            return True
        self.logger.warning("Command dropped before hydrate completed", command=command)
        return False

    def _commit(
        self,
        new_state: SessionState,
        trigger: str,
        session: bool = False,
        settings: bool = False,
    ) -> None:
        """Install new_state, then persist, align the timer and notify."""
        old_state = self._state
        self._state = new_state

        if old_state.mode != new_state.mode:
            log_session_transition(
                self.session_logger,
                from_mode=old_state.mode.value,
                to_mode=new_state.mode.value,
                trigger=trigger,
                context={
                    "drawn_count": len(new_state.drawn),
                    "auto_interval_seconds": new_state.auto_interval_seconds,
                },
            )

        if session:
            self.session_writer.submit(
                encode_session(new_state.current, new_state.drawn, new_state.paused)
            )
        if settings:
            self.settings_writer.submit(
                encode_settings(new_state.auto_mode, new_state.auto_interval_seconds)
            )

        self._sync_timer()
        self._notify()

    def _sync_timer(self) -> None:
        """Arm the timer exactly when the state is Auto-Armed, at the current interval."""
        state = self._state
        if not state.timer_should_run:
            self.timer.disarm()
            return

        if self.timer.interval != state.auto_interval_seconds:
            self.timer.arm(state.auto_interval_seconds, self._on_timer_tick)

    def _on_timer_tick(self) -> bool:
        self.draw(trigger="auto_timer")
        return self._state.timer_should_run

    def _notify(self) -> None:
        view = self.view
        for listener in list(self._listeners):
            try:
                listener(view)
            except Exception:
                self.logger.exception("Session listener failed", listener=repr(listener))

    async def _read_record(self, key: str) -> Optional[str]:
        try:
            return await self.store.get(key)
        except Exception as e:
            self._log_read_failure(key, e)
            return None

    def _log_read_failure(self, key: str, error: Exception) -> None:
        self.logger.warning(
            "Record could not be loaded, using defaults",
            record=key,
            error_kind=ErrorKind.STORAGE_READ_FAILURE.value,
            error=str(error),
        )
