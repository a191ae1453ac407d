"""Port interfaces for the dispatch engine's collaborators.

These protocols define the contracts that storage, cache and sender adapters
must implement. The core domain depends only on these interfaces, not
concrete implementations.
"""

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from eventlogger.core.config import ApiConfiguration
from eventlogger.core.models import Event


@runtime_checkable
class EventStoragePort(Protocol):
    """Port for pending event storage.

    Adapters implementing this protocol hold a fingerprint -> Event mapping.
    Examples: InMemoryEventStorage, SQLiteEventStorage.
    """

    async def insert_or_update(self, key: str, event: Event) -> None:
        """Store the event under key, replacing any previous value."""
        ...

    async def retrieve(self, key: str) -> Event | None:
        """Return the event stored under key, or None."""
        ...

    async def delete_all(self) -> None:
        """Remove every stored event."""
        ...

    async def count(self) -> int:
        """Return the number of stored events."""
        ...

    async def get_all_events(self) -> dict[str, Event]:
        """Return a snapshot of all stored events keyed by fingerprint."""
        ...


@runtime_checkable
class EventSenderPort(Protocol):
    """Port for delivering events to the collection service.

    Implementations report the outcome as a boolean and must not raise for
    transport failures.
    Examples: HttpEventSender.
    """

    def configure(self, configuration: ApiConfiguration) -> None:
        """Set the default credentials and endpoint."""
        ...

    async def send_event(
        self, event: Event, configuration: ApiConfiguration | None = None
    ) -> bool:
        """Send a single event. Returns True on success."""
        ...

    async def send_events(
        self, events: Sequence[Event], configuration: ApiConfiguration | None = None
    ) -> bool:
        """Send a batch of events atomically. Returns True on success."""
        ...


@runtime_checkable
class TtlCachePort(Protocol):
    """Port for the TTL reference time of the last bulk flush.

    Examples: InMemoryTtlCache, SQLiteTtlCache.
    """

    async def get_reference_time(self) -> float | None:
        """Return the reference timestamp, or None if never set."""
        ...

    async def set_reference_time(self, timestamp: float) -> None:
        """Replace the reference timestamp."""
        ...
