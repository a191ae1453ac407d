"""In-memory storage adapters for pending events and the TTL reference time."""

from eventlogger.core.models import Event


class InMemoryEventStorage:
    """In-memory implementation of EventStoragePort.

    Stores events in a dict keyed by fingerprint. Suitable for testing and
    applications where pending events need not survive a restart.
    """

    def __init__(self) -> None:
        self._events: dict[str, Event] = {}

    async def insert_or_update(self, key: str, event: Event) -> None:
        """Store the event under key, replacing any previous value."""
        self._events[key] = event

    async def retrieve(self, key: str) -> Event | None:
        """Return the event stored under key, or None."""
        return self._events.get(key)

    async def delete_all(self) -> None:
        """Remove every stored event."""
        self._events.clear()

    async def count(self) -> int:
        """Return the number of stored events."""
        return len(self._events)

    async def get_all_events(self) -> dict[str, Event]:
        """Return a snapshot of all stored events."""
        return dict(self._events)


class InMemoryTtlCache:
    """In-memory implementation of TtlCachePort."""

    def __init__(self, reference_time: float | None = None) -> None:
        self._reference_time = reference_time

    async def get_reference_time(self) -> float | None:
        return self._reference_time

    async def set_reference_time(self, timestamp: float) -> None:
        self._reference_time = timestamp
