import asyncio
import json
import logging
import os
import threading
from pathlib import Path

from payonerupee.counter._base import CounterStore
from payonerupee.errors import StorageError

logger = logging.getLogger(__name__)

_READ_ERRORS = (OSError, ValueError, KeyError, TypeError)


class FileCounterStore(CounterStore):
    """Counter kept in a small JSON document, ``{"count": N}``.

    A file has no atomic update, so every read-modify-write runs in one
    worker thread under a thread lock. An increment abandoned by a timeout
    still finishes before the next one reads the file. Only safe with a
    single worker process.
    """

    def __init__(self, *, path: str, timeout: float = 5.0) -> None:
        super().__init__(timeout=timeout)
        self.path = Path(path)
        self._lock = threading.Lock()

    def _read(self) -> int:
        data = json.loads(self.path.read_text(encoding="utf-8"))
        count = data["count"]
        if not isinstance(count, int) or isinstance(count, bool) or count < 0:
            raise ValueError(f"bad count value {count!r}")
        return count

    def _write(self, count: int) -> None:
        tmp = self.path.with_name(self.path.name + ".tmp")
        tmp.write_text(json.dumps({"count": count}, indent=2),
                       encoding="utf-8")
        os.replace(tmp, self.path)

    def _create_if_missing(self) -> bool:
        with self._lock:
            if self.path.exists():
                self._read()
                return False
            self._write(0)
            return True

    def _bump(self) -> int:
        with self._lock:
            count = self._read() + 1
            self._write(count)
            return count

    async def _init(self) -> None:
        try:
            created = await asyncio.to_thread(self._create_if_missing)
        except _READ_ERRORS as e:
            logger.exception("counter file %s is unreadable", self.path)
            raise StorageError() from e
        if created:
            logger.info("created counter file %s", self.path)

    async def _increment_and_get(self) -> int:
        try:
            return await asyncio.to_thread(self._bump)
        except _READ_ERRORS as e:
            logger.exception("counter file %s increment failed", self.path)
            raise StorageError() from e

    async def _get(self) -> int:
        try:
            return await asyncio.to_thread(self._read)
        except _READ_ERRORS as e:
            logger.exception("counter file %s read failed", self.path)
            raise StorageError() from e
