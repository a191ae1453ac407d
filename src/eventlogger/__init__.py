"""Client-side error event telemetry with deduplication and batch dispatch."""

from eventlogger.adapters.logging import EventLoggerHandler
from eventlogger.adapters.sender.http import HttpEventSender
from eventlogger.adapters.storage.in_memory import (
    InMemoryEventStorage,
    InMemoryTtlCache,
)
from eventlogger.adapters.storage.sqlite import SQLiteEventStorage, SQLiteTtlCache
from eventlogger.core.config import ApiConfiguration, DispatchSettings
from eventlogger.core.engine import DispatchEngine
from eventlogger.core.environment import AppEnvironment
from eventlogger.core.events import create_event, demote_event, merge_event
from eventlogger.core.fingerprint import fingerprint, is_event_valid
from eventlogger.core.models import Event, EventType
from eventlogger.core.ports import EventSenderPort, EventStoragePort, TtlCachePort
from eventlogger.logger import EventLogger

__all__ = [
    "ApiConfiguration",
    "AppEnvironment",
    "DispatchEngine",
    "DispatchSettings",
    "Event",
    "EventLogger",
    "EventLoggerHandler",
    "EventSenderPort",
    "EventStoragePort",
    "EventType",
    "HttpEventSender",
    "InMemoryEventStorage",
    "InMemoryTtlCache",
    "SQLiteEventStorage",
    "SQLiteTtlCache",
    "TtlCachePort",
    "create_event",
    "demote_event",
    "fingerprint",
    "is_event_valid",
    "merge_event",
]
