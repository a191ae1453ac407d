"""SQLite storage adapters for pending events and the TTL reference time."""

import logging

from eventlogger.adapters.storage.sqlite_base import SQLiteStorageBase
from eventlogger.core.encoding.json import decode_event, encode_event
from eventlogger.core.models import Event

logger = logging.getLogger(__name__)

_EVENTS_SCHEMA = """
CREATE TABLE IF NOT EXISTS events (
    fingerprint TEXT PRIMARY KEY,
    payload TEXT NOT NULL
);
"""

_UPSERT_EVENT = """
INSERT INTO events (fingerprint, payload) VALUES (?, ?)
ON CONFLICT(fingerprint) DO UPDATE SET payload = excluded.payload
"""

_SELECT_EVENT = """
SELECT payload FROM events WHERE fingerprint = ?
"""

_SELECT_EVENTS = """
SELECT fingerprint, payload FROM events
"""

_COUNT_EVENTS = """
SELECT COUNT(*) FROM events
"""

_DELETE_EVENTS = """
DELETE FROM events
"""

_TTL_SCHEMA = """
CREATE TABLE IF NOT EXISTS ttl_reference (
    id INTEGER PRIMARY KEY CHECK (id = 1),
    reference_time REAL NOT NULL
);
"""

_UPSERT_TTL = """
INSERT INTO ttl_reference (id, reference_time) VALUES (1, ?)
ON CONFLICT(id) DO UPDATE SET reference_time = excluded.reference_time
"""

_SELECT_TTL = """
SELECT reference_time FROM ttl_reference WHERE id = 1
"""


def _decode_row(fingerprint: str, payload: str) -> Event | None:
    """Decode a stored payload, skipping rows that no longer parse."""
    try:
        return decode_event(payload)
    except (ValueError, KeyError, TypeError):
        logger.warning("Skipping unreadable stored event %s", fingerprint)
        return None


class SQLiteEventStorage(SQLiteStorageBase):
    """SQLite implementation of EventStoragePort.

    Stores each event as a JSON payload keyed by fingerprint, using
    aiosqlite for non-blocking async operations. Pending events survive a
    process restart when a file path is used.
    """

    def __init__(self, db_path: str) -> None:
        super().__init__(db_path, _EVENTS_SCHEMA)

    async def insert_or_update(self, key: str, event: Event) -> None:
        """Store the event under key, replacing any previous value."""
        async with self.async_connection() as db:
            await db.execute(_UPSERT_EVENT, (key, encode_event(event)))
            await db.commit()

    async def retrieve(self, key: str) -> Event | None:
        """Return the event stored under key, or None."""
        async with self.async_connection() as db:
            async with db.execute(_SELECT_EVENT, (key,)) as cursor:
                row = await cursor.fetchone()
        if row is None:
            return None
        return _decode_row(key, row[0])

    async def delete_all(self) -> None:
        """Remove every stored event."""
        async with self.async_connection() as db:
            await db.execute(_DELETE_EVENTS)
            await db.commit()

    async def count(self) -> int:
        """Return the number of stored events."""
        async with self.async_connection() as db:
            async with db.execute(_COUNT_EVENTS) as cursor:
                row = await cursor.fetchone()
                return row[0] if row else 0

    async def get_all_events(self) -> dict[str, Event]:
        """Return all stored events keyed by fingerprint."""
        events: dict[str, Event] = {}
        async with self.async_connection() as db:
            async with db.execute(_SELECT_EVENTS) as cursor:
                async for row in cursor:
                    event = _decode_row(row[0], row[1])
                    if event is not None:
                        events[row[0]] = event
        return events


class SQLiteTtlCache(SQLiteStorageBase):
    """SQLite implementation of TtlCachePort.

    Keeps the reference time in a single-row table so the flush schedule
    survives a process restart.
    """

    def __init__(self, db_path: str) -> None:
        super().__init__(db_path, _TTL_SCHEMA)

    async def get_reference_time(self) -> float | None:
        async with self.async_connection() as db:
            async with db.execute(_SELECT_TTL) as cursor:
                row = await cursor.fetchone()
        return float(row[0]) if row else None

    async def set_reference_time(self, timestamp: float) -> None:
        async with self.async_connection() as db:
            await db.execute(_UPSERT_TTL, (timestamp,))
            await db.commit()
