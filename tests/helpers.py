"""Test doubles shared by unit, integration and feature tests."""

import asyncio
import threading
from collections.abc import Coroutine, Sequence
from dataclasses import dataclass, field
from typing import Any, TypeVar

from eventlogger.core.config import ApiConfiguration
from eventlogger.core.models import Event

NOW = 1_700_000_000.0

T = TypeVar("T")


@dataclass
class FakeClock:
    """Settable replacement for time.time."""

    now: float = NOW

    def __call__(self) -> float:
        return self.now


@dataclass
class FakeSender:
    """EventSenderPort double recording every call."""

    succeed: bool = True
    raises: Exception | None = None
    configured_with: ApiConfiguration | None = None
    single_calls: list[Event] = field(default_factory=list)
    batch_calls: list[list[Event]] = field(default_factory=list)
    batch_sent: threading.Event = field(default_factory=threading.Event)

    @property
    def did_configure(self) -> bool:
        return self.configured_with is not None

    def configure(self, configuration: ApiConfiguration) -> None:
        self.configured_with = configuration

    async def send_event(
        self, event: Event, configuration: ApiConfiguration | None = None
    ) -> bool:
        self.single_calls.append(event)
        if self.raises is not None:
            raise self.raises
        return self.succeed

    async def send_events(
        self, events: Sequence[Event], configuration: ApiConfiguration | None = None
    ) -> bool:
        self.batch_calls.append(list(events))
        self.batch_sent.set()
        if self.raises is not None:
            raise self.raises
        return self.succeed


def run_async(coro: Coroutine[Any, Any, T]) -> T:
    """Run a coroutine in a new event loop (for sync test helpers)."""
    return asyncio.run(coro)
