"""
Cancellable periodic timer for auto-draw mode.

One AutoDrawTimer belongs to one engine and holds at most one live task.
Arming always cancels the previous task first, and every tick checks that
it still belongs to the live generation, so no callback runs after
disarm() has returned.
"""

import asyncio
from typing import Callable, Optional

import structlog

logger = structlog.get_logger(__name__)


class AutoDrawTimer:
    """Runs a callback every interval until disarmed or the callback returns False."""

    def __init__(self, time_scale: float = 1.0):
        self.logger = logger
        self.time_scale = time_scale
        self._task: Optional[asyncio.Task] = None
        self._generation = 0
        self._interval: Optional[int] = None

    @property
    def is_armed(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def interval(self) -> Optional[int]:
        """Interval of the live task, None when disarmed."""
        return self._interval if self.is_armed else None

    def arm(self, interval_seconds: int, on_tick: Callable[[], bool]) -> None:
        """
        Start ticking every interval_seconds, replacing any running task.

        Must be called from inside a running event loop.

        Args:
            interval_seconds: Seconds between ticks
            on_tick: Called once per tick; returning False stops the timer
        """
        self.disarm()

        self._generation += 1
        self._interval = interval_seconds
        self._task = asyncio.get_running_loop().create_task(
            self._run(self._generation, interval_seconds, on_tick)
        )
        self.logger.debug("Auto-draw timer armed", interval_seconds=interval_seconds)

    def disarm(self) -> None:
        """Cancel the live task, if any. Safe to call repeatedly."""
        self._generation += 1
        task, self._task = self._task, None
        self._interval = None

        if task is not None and not task.done():
            task.cancel()
            self.logger.debug("Auto-draw timer disarmed")

    async def _run(self, generation: int, interval_seconds: int, on_tick: Callable[[], bool]) -> None:
        delay = interval_seconds * self.time_scale
        while True:
            await asyncio.sleep(delay)

            if generation != self._generation:
                return

            if not on_tick():
                # on_tick may have re-armed or disarmed already
                if generation == self._generation:
                    self._task = None
                    self._interval = None
                return
