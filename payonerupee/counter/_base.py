import asyncio
import logging
from abc import ABC, abstractmethod

from payonerupee.errors import StorageError

logger = logging.getLogger(__name__)


class CounterStore(ABC):
    """A single persisted counter.

    ``init``, ``increment_and_get`` and ``get`` are bounded by ``timeout``
    seconds; any fault, including a timeout or a raw driver error, surfaces
    as :class:`StorageError`.
    """

    def __init__(self, *, timeout: float = 5.0) -> None:
        self.timeout = timeout

    @abstractmethod
    async def _init(self) -> None:
        """Create the singleton counter if it does not exist yet."""

    @abstractmethod
    async def _increment_and_get(self) -> int: ...

    @abstractmethod
    async def _get(self) -> int: ...

    async def close(self) -> None:
        pass

    async def init(self) -> None:
        await self._bounded(self._init(), "init")

    async def increment_and_get(self) -> int:
        return await self._bounded(self._increment_and_get(), "increment")

    async def get(self) -> int:
        return await self._bounded(self._get(), "read")

    async def _bounded(self, coro, op: str):
        try:
            return await asyncio.wait_for(coro, timeout=self.timeout)
        except StorageError:
            raise
        except asyncio.TimeoutError:
            logger.error("counter %s timed out after %.1fs", op, self.timeout)
            raise StorageError()
        except Exception as e:
            logger.exception("counter %s failed", op)
            raise StorageError() from e
