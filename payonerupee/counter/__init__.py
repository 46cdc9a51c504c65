from payonerupee.config import Settings
from payonerupee.counter._base import CounterStore
from payonerupee.counter._file import FileCounterStore
from payonerupee.counter._sql import SqlCounterStore


# Factory keeps main.py backend-agnostic:
def new_store(settings: Settings) -> CounterStore:
    if settings.counter_backend == "file":
        return FileCounterStore(path=settings.counter_file,
                                timeout=settings.storage_timeout)
    return SqlCounterStore(database_url=settings.database_url,
                           ssl=settings.database_ssl,
                           pool_size=settings.db_pool_size,
                           max_overflow=settings.db_max_overflow,
                           pool_timeout=settings.db_pool_timeout,
                           timeout=settings.storage_timeout)


__all__ = ["CounterStore", "FileCounterStore", "SqlCounterStore", "new_store"]
