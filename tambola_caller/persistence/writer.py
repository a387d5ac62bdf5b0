"""Ordered, non-blocking writer for a single persisted record."""

import asyncio
from typing import Optional

import structlog

from ..errors import ErrorKind
from .store import KeyValueStore

_REMOVE = object()
_EMPTY = object()


class RecordWriter:
    """
    Serializes writes of one record key.

    submit() and submit_remove() return immediately. Operations are applied
    one at a time in submission order by a single drain task; an operation
    that has not started yet is replaced by a newer one, so at most one
    write is in flight and one is waiting. Failures are logged and counted,
    never raised to the submitter.
    """

    def __init__(self, store: KeyValueStore, key: str):
        self.store = store
        self.key = key
        self.logger = structlog.get_logger(__name__).bind(record=key)
        self._queued: object = _EMPTY
        self._task: Optional[asyncio.Task] = None
        self.write_count = 0
        self.failure_count = 0

    @property
    def is_idle(self) -> bool:
        return self._queued is _EMPTY and (self._task is None or self._task.done())

    def submit(self, payload: str) -> None:
        """Queue payload as the next value of the record."""
        self._enqueue(payload)

    def submit_remove(self) -> None:
        """Queue removal of the record."""
        self._enqueue(_REMOVE)

    async def flush(self) -> None:
        """Wait until every submitted operation has been attempted."""
        while self._task is not None and not self._task.done():
            await asyncio.shield(self._task)

    def _enqueue(self, operation: object) -> None:
        if self._queued is not _EMPTY:
            self.logger.debug("Superseding queued record operation")
        self._queued = operation

        if self._task is None or self._task.done():
            self._task = asyncio.get_running_loop().create_task(self._drain())

    async def _drain(self) -> None:
        while self._queued is not _EMPTY:
            operation, self._queued = self._queued, _EMPTY
            await self._apply(operation)

    async def _apply(self, operation: object) -> bool:
        action = "remove" if operation is _REMOVE else "set"
        try:
            if operation is _REMOVE:
                await self.store.remove(self.key)
            else:
                await self.store.set(self.key, operation)  # type: ignore[arg-type]
        except Exception as e:
            kind = getattr(e, "kind", None) or ErrorKind.STORAGE_WRITE_FAILURE
            self.failure_count += 1
            self.logger.warning(
                "Record persistence failed",
                action=action,
                error_kind=kind.value,
                error=str(e),
            )
            return False

        self.write_count += 1
        self.logger.debug("Record persisted", action=action)
        return True
