import logging

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from payonerupee.counter._base import CounterStore
from payonerupee.database import Base, make_async_engine
from payonerupee.errors import StorageError
from payonerupee.models import COUNTER_ROW_ID, Counter

logger = logging.getLogger(__name__)

# asyncpg raises raw OSError subclasses when the server is unreachable
_STORAGE_ERRORS = (SQLAlchemyError, OSError)


class SqlCounterStore(CounterStore):
    """Counter kept in one row of the ``counter`` table.

    Increments are a single ``UPDATE ... RETURNING`` so concurrent requests
    are serialised by the database, not by this process.
    """

    def __init__(self, *, database_url: str, ssl: bool = False,
                 pool_size: int = 5, max_overflow: int = 5,
                 pool_timeout: int = 30, timeout: float = 5.0) -> None:
        super().__init__(timeout=timeout)
        self.engine, self.SessionAsync = make_async_engine(
            database_url,
            ssl=ssl,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_timeout=pool_timeout,
        )

    async def _init(self) -> None:
        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)

            async with self.SessionAsync() as db:
                async with db.begin():
                    row = await db.get(Counter, COUNTER_ROW_ID)
                    if row is None:
                        db.add(Counter(id=COUNTER_ROW_ID, count=0))
                        logger.info("created counter row")
        except IntegrityError:
            # another worker inserted the row between our read and write
            logger.info("counter row already created by another worker")
        except _STORAGE_ERRORS as e:
            logger.exception("counter initialisation failed")
            raise StorageError() from e

    async def _increment_and_get(self) -> int:
        stmt = (
            update(Counter)
            .where(Counter.id == COUNTER_ROW_ID)
            .values(count=Counter.count + 1)
            .returning(Counter.count)
        )
        try:
            async with self.engine.begin() as conn:
                result = await conn.execute(stmt)
                count = result.scalar_one_or_none()
        except _STORAGE_ERRORS as e:
            logger.exception("counter increment failed")
            raise StorageError() from e

        if count is None:
            logger.error("counter row %s is missing", COUNTER_ROW_ID)
            raise StorageError()
        return count

    async def _get(self) -> int:
        stmt = select(Counter.count).where(Counter.id == COUNTER_ROW_ID)
        try:
            async with self.engine.connect() as conn:
                result = await conn.execute(stmt)
                count = result.scalar_one_or_none()
        except _STORAGE_ERRORS as e:
            logger.exception("counter read failed")
            raise StorageError() from e

        if count is None:
            logger.error("counter row %s is missing", COUNTER_ROW_ID)
            raise StorageError()
        return count

    async def close(self) -> None:
        await self.engine.dispose()
