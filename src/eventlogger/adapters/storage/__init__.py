"""Storage adapters implementing core ports."""

from eventlogger.adapters.storage.in_memory import (
    InMemoryEventStorage,
    InMemoryTtlCache,
)
from eventlogger.adapters.storage.sqlite import SQLiteEventStorage, SQLiteTtlCache

__all__ = [
    "InMemoryEventStorage",
    "InMemoryTtlCache",
    "SQLiteEventStorage",
    "SQLiteTtlCache",
]
