"""Dispatch engine: deduplication, occurrence accounting and batch flushes."""

import asyncio
import dataclasses
import logging
import time
from collections.abc import Callable

from eventlogger.core.config import ApiConfiguration, DispatchSettings
from eventlogger.core.environment import AppEnvironment
from eventlogger.core.events import create_event, demote_event, merge_event
from eventlogger.core.fingerprint import is_event_valid
from eventlogger.core.models import Event, EventType
from eventlogger.core.ports import EventSenderPort, EventStoragePort, TtlCachePort

logger = logging.getLogger(__name__)


class DispatchEngine:
    """Routes reported events to the store and the sender.

    Critical events are sent immediately and kept in the store as warnings.
    Warnings are deferred and sent in one batch when the TTL expires or the
    store reaches ``settings.max_event_count`` entries.

    Every operation touching the store or the TTL reference time runs under
    one asyncio lock, including the sender call that decides the store
    mutation.

    Args:
        storage: Pending event store.
        sender: Transport to the collection service.
        cache: Holder of the TTL reference time.
        settings: Flush policy. Defaults to DispatchSettings().
        environment: App/device metadata stamped on new events.
            Defaults to AppEnvironment.detect().
        clock: Returns the current unix time.
    """

    def __init__(
        self,
        storage: EventStoragePort,
        sender: EventSenderPort,
        cache: TtlCachePort,
        settings: DispatchSettings | None = None,
        environment: AppEnvironment | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._storage = storage
        self._sender = sender
        self._cache = cache
        self._settings = settings or DispatchSettings()
        self._environment = environment or AppEnvironment.detect()
        self._clock = clock
        self._configuration: ApiConfiguration | None = None
        self._lock: asyncio.Lock | None = None

    def _get_lock(self) -> asyncio.Lock:
        """Get or create the engine lock (lazy to avoid event loop issues)."""
        if self._lock is None:
            self._lock = asyncio.Lock()
        return self._lock

    @property
    def settings(self) -> DispatchSettings:
        return self._settings

    @property
    def is_configured(self) -> bool:
        """True once an API configuration has been accepted."""
        return self._configuration is not None

    def configure(self, api_configuration: ApiConfiguration | None) -> bool:
        """Propagate the API configuration to the sender.

        Returns:
            False (and nothing propagated) when api_configuration is None.
        """
        if api_configuration is None:
            logger.debug("No API configuration given, event logging disabled")
            return False
        self._sender.configure(api_configuration)
        self._configuration = api_configuration
        logger.info("Event dispatch configured for %s", api_configuration.api_url)
        return True

    def is_event_valid(
        self, source_name: str, source_version: str, error_code: str, error_message: str
    ) -> bool:
        """Return False if any of the required identity strings is empty."""
        return is_event_valid(source_name, source_version, error_code, error_message)

    async def log_critical(
        self,
        source_name: str,
        source_version: str,
        error_code: str,
        error_message: str,
        info: dict[str, str] | None = None,
    ) -> None:
        """Record a critical event; it is sent immediately."""
        await self._log(
            EventType.CRITICAL,
            source_name,
            source_version,
            error_code,
            error_message,
            info,
        )

    async def log_warning(
        self,
        source_name: str,
        source_version: str,
        error_code: str,
        error_message: str,
        info: dict[str, str] | None = None,
    ) -> None:
        """Record a warning event; it waits for the next batch flush."""
        await self._log(
            EventType.WARNING,
            source_name,
            source_version,
            error_code,
            error_message,
            info,
        )

    async def _log(
        self,
        event_type: EventType,
        source_name: str,
        source_version: str,
        error_code: str,
        error_message: str,
        info: dict[str, str] | None,
    ) -> None:
        if not self.is_configured:
            logger.debug("Not configured, dropping %s event", event_type.value)
            return
        if not is_event_valid(source_name, source_version, error_code, error_message):
            logger.debug("Dropping invalid %s event", event_type.value)
            return
        event = create_event(
            event_type,
            source_name,
            source_version,
            error_code,
            error_message,
            info,
            environment=self._environment,
            now=self._clock(),
            event_version=self._settings.event_version,
        )
        await self.send_event_if_needed(
            event_type,
            event.fingerprint,
            event,
            is_critical=event_type is EventType.CRITICAL,
        )

    async def send_event_if_needed(
        self,
        event_type: EventType,
        fingerprint: str,
        event: Event,
        is_critical: bool,
        max_event_count: int | None = None,
    ) -> None:
        """Merge or insert the event, then send it now or defer it.

        Args:
            event_type: Type of the incoming observation.
            fingerprint: Store key of the event.
            event: The incoming observation.
            is_critical: Send this event immediately.
            max_event_count: Store size that triggers a flush.
                Defaults to settings.max_event_count.

        Raises:
            ValueError: If max_event_count is less than 1.
        """
        if max_event_count is None:
            limit = self._settings.max_event_count
        elif max_event_count < 1:
            raise ValueError("max_event_count must be >= 1")
        else:
            limit = max_event_count
        incoming = event
        if event.event_type is not event_type:
            incoming = dataclasses.replace(event, event_type=event_type)
        async with self._get_lock():
            existing = await self._storage.retrieve(fingerprint)
            if existing is not None:
                stored = merge_event(existing, incoming)
            else:
                stored = incoming
            await self._storage.insert_or_update(fingerprint, stored)

            if is_critical:
                await self._send_single(stored)
                await self._storage.insert_or_update(fingerprint, demote_event(stored))

            if await self._storage.count() >= limit:
                logger.info("Event store reached %d entries, flushing", limit)
                await self._flush(delete_old_events_on_failure=True)

    async def send_all_events_in_storage(
        self, delete_old_events_on_failure: bool = False
    ) -> bool:
        """Send every stored event as one batch.

        On success the store is cleared. On failure it is cleared only when
        delete_old_events_on_failure is True. The TTL reference time is reset
        after any send attempt. An empty store is left untouched, and so is
        the whole state while the engine is not configured.

        Returns:
            True if the batch was delivered.
        """
        if not self.is_configured:
            logger.debug("Not configured, skipping flush")
            return False
        async with self._get_lock():
            return await self._flush(delete_old_events_on_failure)

    async def is_ttl_expired(self) -> bool:
        """Return True when the last flush is at least one TTL period old.

        A reference time that was never set counts as expired.
        """
        reference = await self._cache.get_reference_time()
        if reference is None:
            return True
        return self._clock() - reference >= self._settings.ttl_expiry_seconds

    async def flush_if_ttl_expired(self) -> bool:
        """Flush stored events, keeping them on failure, if the TTL has expired.

        The TTL check and the flush run under the same lock, so events
        logged after this call was scheduled are not part of the check.

        Returns:
            True if a batch was delivered.
        """
        if not self.is_configured:
            return False
        async with self._get_lock():
            if not await self.is_ttl_expired():
                return False
            return await self._flush(delete_old_events_on_failure=False)

    async def _flush(self, delete_old_events_on_failure: bool) -> bool:
        """Flush without lock (caller must hold lock)."""
        events = await self._storage.get_all_events()
        if not events:
            return False

        sent = await self._send_batch(list(events.values()))
        if sent:
            logger.info("Sent %d stored events", len(events))
            await self._storage.delete_all()
        elif delete_old_events_on_failure:
            logger.warning("Failed to send %d events, discarding them", len(events))
            await self._storage.delete_all()
        else:
            logger.warning("Failed to send %d stored events, keeping them", len(events))
        await self._cache.set_reference_time(self._clock())
        return sent

    async def _send_single(self, event: Event) -> bool:
        try:
            sent = await self._sender.send_event(event, self._configuration)
        except Exception:
            logger.exception("Event sender raised while sending a critical event")
            return False
        if not sent:
            logger.warning("Failed to send critical event %s", event.fingerprint)
        return sent

    async def _send_batch(self, events: list[Event]) -> bool:
        try:
            return await self._sender.send_events(events, self._configuration)
        except Exception:
            logger.exception("Event sender raised while sending a batch")
            return False
