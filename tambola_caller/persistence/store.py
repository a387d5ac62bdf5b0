"""Key-value persistence layer for session and settings records."""

import asyncio
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, Optional, TypeVar

import structlog

from ..errors import StorageReadFailure, StorageWriteFailure

T = TypeVar("T")


class KeyValueStore(ABC):
    """
    Asynchronous string key-value store.

    Each call is a single attempt. Read errors raise StorageReadFailure and
    write or remove errors raise StorageWriteFailure; callers decide how to
    log and recover.
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None when the key is absent."""

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""

    @abstractmethod
    async def remove(self, key: str) -> None:
        """Delete key. Removing an absent key succeeds."""


class MemoryStore(KeyValueStore):
    """Dict-backed store; failures can be switched on to exercise recovery paths."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self.data: dict[str, str] = dict(initial or {})
        self.fail_reads = False
        self.fail_writes = False
        self.operations: list[tuple[str, str]] = []

    async def get(self, key: str) -> Optional[str]:
        self.operations.append(("get", key))
        if self.fail_reads:
            raise StorageReadFailure(f"Read of {key!r} failed", operation="get", target=key)
        return self.data.get(key)

    async def set(self, key: str, value: str) -> None:
        self.operations.append(("set", key))
        if self.fail_writes:
            raise StorageWriteFailure(f"Write of {key!r} failed", operation="set", target=key)
        self.data[key] = value

    async def remove(self, key: str) -> None:
        self.operations.append(("remove", key))
        if self.fail_writes:
            raise StorageWriteFailure(f"Remove of {key!r} failed", operation="remove", target=key)
        self.data.pop(key, None)


class JsonFileStore(KeyValueStore):
    """File-backed store keeping one <key>.json file per record."""

    def __init__(self, directory: str = "~/.tambola_caller"):
        self.directory = Path(directory).expanduser()
        self.logger = structlog.get_logger(__name__)

    def path_for(self, key: str) -> Path:
        """Resolve the file holding key."""
        if not key or "/" in key or "\\" in key or key.startswith("."):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.directory / f"{key}.json"

    async def get(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        try:
            return await self._run(self._read, path)
        except (OSError, UnicodeDecodeError) as e:
            raise StorageReadFailure(
                f"Failed to read {path}: {e}", operation="get", target=str(path)
            ) from e

    async def set(self, key: str, value: str) -> None:
        path = self.path_for(key)
        try:
            await self._run(self._write, path, value)
        except OSError as e:
            raise StorageWriteFailure(
                f"Failed to write {path}: {e}", operation="set", target=str(path)
            ) from e

    async def remove(self, key: str) -> None:
        path = self.path_for(key)
        try:
            await self._run(self._remove, path)
        except OSError as e:
            raise StorageWriteFailure(
                f"Failed to remove {path}: {e}", operation="remove", target=str(path)
            ) from e

    async def _run(self, func: Callable[..., T], *args) -> T:
        """Run blocking file I/O in the loop's default executor."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, func, *args)

    def _read(self, path: Path) -> Optional[str]:
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    def _write(self, path: Path, value: str) -> None:
        """Write via a temp file and os.replace so readers never see a torn record."""
        path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.stem}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, path)
        except OSError:
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
            raise

        self.logger.debug("Record written", path=str(path), size=len(value))

    def _remove(self, path: Path) -> None:
        try:
            path.unlink()
        except FileNotFoundError:
            return
        self.logger.debug("Record removed", path=str(path))
