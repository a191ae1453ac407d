"""Thread-safe facade that host applications use to report events.

Example:
    ```python
    from eventlogger import EventLogger

    event_logger = EventLogger()
    event_logger.configure(api_key="key", api_url="https://collector/api/events")
    event_logger.send_critical_event("IAM", "7.2.0", "500", "Network Error")
    ```
"""

import asyncio
import logging
import threading
import time
from collections.abc import Callable, Coroutine
from concurrent.futures import Future
from typing import Any, TypeVar

from eventlogger.adapters.sender.http import HttpEventSender
from eventlogger.adapters.storage.in_memory import (
    InMemoryEventStorage,
    InMemoryTtlCache,
)
from eventlogger.core.config import ApiConfiguration, DispatchSettings
from eventlogger.core.engine import DispatchEngine
from eventlogger.core.environment import AppEnvironment
from eventlogger.core.ports import EventSenderPort, EventStoragePort, TtlCachePort

logger = logging.getLogger(__name__)

T = TypeVar("T")

MSG_ALREADY_CONFIGURED = "EventLogger is already configured"
MSG_INVALID_PARAMETERS = (
    "EventLogger cannot be configured due to invalid api parameters"
)
MSG_CONFIGURED = "EventLogger is configured"


def _log_failure(future: Future[Any]) -> None:
    """Done-callback that reports errors of fire-and-forget work."""
    if future.cancelled():
        return
    exc = future.exception()
    if exc is not None:
        logger.error("Event logger task failed", exc_info=exc)


class EventLogger:
    """Owns one DispatchEngine and the event loop it runs on.

    Calls may come from any thread. Each call is scheduled on a private
    event loop running in a daemon thread, so all engine work is
    serialized. Reporting methods never raise and return a Future the
    caller may ignore.

    Args:
        storage: Pending event store. Defaults to InMemoryEventStorage().
        sender: Transport to the collection service. Defaults to HttpEventSender().
        cache: TTL reference time holder. Defaults to InMemoryTtlCache().
        settings: Flush policy.
        environment: App/device metadata stamped on events.
        clock: Returns the current unix time.
    """

    def __init__(
        self,
        storage: EventStoragePort | None = None,
        sender: EventSenderPort | None = None,
        cache: TtlCachePort | None = None,
        settings: DispatchSettings | None = None,
        environment: AppEnvironment | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._storage = storage if storage is not None else InMemoryEventStorage()
        self._sender = sender if sender is not None else HttpEventSender()
        self._cache = cache if cache is not None else InMemoryTtlCache()
        self._engine = DispatchEngine(
            self._storage,
            self._sender,
            self._cache,
            settings=settings,
            environment=environment,
            clock=clock,
        )
        self._configure_lock = threading.Lock()
        self._closed = False
        self._loop = asyncio.new_event_loop()
        self._thread = threading.Thread(
            target=self._run_loop, name="eventlogger-dispatch", daemon=True
        )
        self._thread.start()

    def _run_loop(self) -> None:
        asyncio.set_event_loop(self._loop)
        self._loop.run_forever()

    @property
    def engine(self) -> DispatchEngine:
        return self._engine

    @property
    def is_configured(self) -> bool:
        return self._engine.is_configured

    def _submit(self, coro: Coroutine[Any, Any, T]) -> Future[T] | None:
        if self._closed:
            coro.close()
            logger.debug("EventLogger is closed, ignoring call")
            return None
        future = asyncio.run_coroutine_threadsafe(coro, self._loop)
        future.add_done_callback(_log_failure)
        return future

    def configure(
        self,
        api_key: str | None,
        api_url: str | None,
        on_completion: Callable[[bool, str], None] | None = None,
    ) -> bool:
        """Configure the logger with the collection service credentials.

        When the TTL has expired, events stored by an earlier run are
        flushed in the background.

        Args:
            api_key: API key of the collection service.
            api_url: Endpoint of the collection service.
            on_completion: Called with (success, message).

        Returns:
            True if the logger is configured after the call.
        """
        with self._configure_lock:
            if self._engine.is_configured:
                logger.debug(MSG_ALREADY_CONFIGURED)
                success, message = True, MSG_ALREADY_CONFIGURED
            elif not api_key or not api_url:
                success, message = False, MSG_INVALID_PARAMETERS
            else:
                configuration = ApiConfiguration(api_key=api_key, api_url=api_url)
                self._engine.configure(configuration)
                self._submit(self._engine.flush_if_ttl_expired())
                success, message = True, MSG_CONFIGURED

        if on_completion is not None:
            on_completion(success, message)
        return success

    def send_critical_event(
        self,
        source_name: str,
        source_version: str,
        error_code: str,
        error_message: str,
        info: dict[str, str] | None = None,
    ) -> Future[None] | None:
        """Report a high priority event; it is sent immediately.

        Args:
            source_name: Source of the event, e.g. app or SDK name.
            source_version: Version of the source, e.g. 1.0.0.
            error_code: Custom error code or HTTP status code.
            error_message: Description of the error.
            info: Optional custom information.

        Returns:
            Future completing when the event is processed, or None when
            the logger is not configured.
        """
        if not self._engine.is_configured:
            return None
        return self._submit(
            self._engine.log_critical(
                source_name, source_version, error_code, error_message, info
            )
        )

    def send_warning_event(
        self,
        source_name: str,
        source_version: str,
        error_code: str,
        error_message: str,
        info: dict[str, str] | None = None,
    ) -> Future[None] | None:
        """Report a low priority event; it is sent with the next batch.

        Takes the same arguments and returns the same as send_critical_event.
        """
        if not self._engine.is_configured:
            return None
        return self._submit(
            self._engine.log_warning(
                source_name, source_version, error_code, error_message, info
            )
        )

    def flush(self, delete_old_events_on_failure: bool = False) -> Future[bool] | None:
        """Send all stored events now.

        Returns:
            Future with the send outcome, or None when the logger is not
            configured.
        """
        if not self._engine.is_configured:
            return None
        return self._submit(
            self._engine.send_all_events_in_storage(delete_old_events_on_failure)
        )

    def on_foreground(self) -> Future[bool] | None:
        """Flush stored events if the TTL has expired.

        Hosts call this when the application becomes active again.
        """
        if not self._engine.is_configured:
            return None
        return self._submit(self._engine.flush_if_ttl_expired())

    async def _close_adapters(self) -> None:
        pending = [t for t in asyncio.all_tasks() if t is not asyncio.current_task()]
        await asyncio.gather(*pending, return_exceptions=True)
        for adapter in (self._storage, self._cache):
            close = getattr(adapter, "close", None)
            if close is not None:
                await close()

    def close(self, timeout: float | None = None) -> None:
        """Finish scheduled work and stop the dispatch thread."""
        if self._closed:
            return
        closing = self._submit(self._close_adapters())
        self._closed = True
        if closing is not None:
            try:
                closing.result(timeout)
            except Exception:
                logger.exception("Failed to close event logger adapters")
        self._loop.call_soon_threadsafe(self._loop.stop)
        self._thread.join(timeout)
        if not self._thread.is_alive():
            self._loop.close()

    def __enter__(self) -> "EventLogger":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
