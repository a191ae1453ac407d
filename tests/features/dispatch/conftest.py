"""BDD step definitions for dispatch features."""

import asyncio
from collections.abc import Coroutine, Iterator
from dataclasses import dataclass, field
from typing import Any

import pytest
from pytest_bdd import given, parsers, then, when
from tests.helpers import FakeClock, FakeSender

from eventlogger.adapters.storage.in_memory import (
    InMemoryEventStorage,
    InMemoryTtlCache,
)
from eventlogger.core.config import ApiConfiguration, DispatchSettings
from eventlogger.core.engine import DispatchEngine
from eventlogger.core.environment import AppEnvironment
from eventlogger.core.events import create_event
from eventlogger.core.models import EventType

_EVENT_ARGS = (
    r'"(?P<source>[^"]*)" "(?P<version>[^"]*)" '
    r'"(?P<code>[^"]*)" "(?P<message>[^"]*)"'
)


@dataclass
class DispatchScenarioContext:
    """Shared state between steps in a dispatch scenario."""

    loop: asyncio.AbstractEventLoop = field(default_factory=asyncio.new_event_loop)
    storage: InMemoryEventStorage = field(default_factory=InMemoryEventStorage)
    cache: InMemoryTtlCache = field(default_factory=InMemoryTtlCache)
    sender: FakeSender = field(default_factory=FakeSender)
    clock: FakeClock = field(default_factory=FakeClock)
    environment: AppEnvironment = field(
        default_factory=lambda: AppEnvironment(app_version="1.0.0")
    )
    engine: DispatchEngine | None = None

    def run(self, coro: Coroutine[Any, Any, Any]) -> Any:
        return self.loop.run_until_complete(coro)


@pytest.fixture
def ctx() -> Iterator[DispatchScenarioContext]:
    """Fresh scenario context for each test."""
    context = DispatchScenarioContext()
    yield context
    context.loop.close()


def _engine(ctx: DispatchScenarioContext) -> DispatchEngine:
    assert ctx.engine is not None
    return ctx.engine


# === Given ===


@given(
    parsers.parse("a configured dispatch engine with a max event count of {count:d}")
)
def given_configured_engine(ctx: DispatchScenarioContext, count: int) -> None:
    ctx.engine = DispatchEngine(
        ctx.storage,
        ctx.sender,
        ctx.cache,
        settings=DispatchSettings(max_event_count=count),
        environment=ctx.environment,
        clock=ctx.clock,
    )
    configuration = ApiConfiguration(api_key="key", api_url="https://collector.test")
    ctx.engine.configure(configuration)


@given("the sender fails")
def given_sender_fails(ctx: DispatchScenarioContext) -> None:
    ctx.sender.succeed = False


@given(parsers.parse("{count:d} warning events are stored"))
def given_stored_warnings(ctx: DispatchScenarioContext, count: int) -> None:
    for i in range(count):
        event = create_event(
            EventType.WARNING,
            "IAM",
            "7.2.0",
            str(i),
            "Stored",
            environment=ctx.environment,
            now=ctx.clock(),
        )
        ctx.run(ctx.storage.insert_or_update(event.fingerprint, event))


# === When ===


@when(parsers.re(rf"a critical event {_EVENT_ARGS} is logged"))
def when_critical_logged(
    ctx: DispatchScenarioContext, source: str, version: str, code: str, message: str
) -> None:
    ctx.run(_engine(ctx).log_critical(source, version, code, message))


@when(parsers.re(rf"a warning event {_EVENT_ARGS} is logged"))
def when_warning_logged(
    ctx: DispatchScenarioContext, source: str, version: str, code: str, message: str
) -> None:
    ctx.run(_engine(ctx).log_warning(source, version, code, message))


@when(parsers.parse("{count:d} distinct warning events are logged"))
def when_distinct_warnings_logged(ctx: DispatchScenarioContext, count: int) -> None:
    for i in range(count):
        ctx.run(_engine(ctx).log_warning("IAM", "7.2.0", f"E{i}", "Failure"))


@when("all stored events are sent keeping them on failure")
def when_flush_keep(ctx: DispatchScenarioContext) -> None:
    ctx.run(_engine(ctx).send_all_events_in_storage(delete_old_events_on_failure=False))


@when("all stored events are sent discarding them on failure")
def when_flush_discard(ctx: DispatchScenarioContext) -> None:
    ctx.run(_engine(ctx).send_all_events_in_storage(delete_old_events_on_failure=True))


# === Then ===


@then(parsers.re(r"the store holds (?P<count>\d+) events?"))
def then_store_holds(ctx: DispatchScenarioContext, count: str) -> None:
    assert ctx.run(ctx.storage.count()) == int(count)


@then(
    parsers.parse(
        'the stored event has occurrence count {count:d} and type "{event_type}"'
    )
)
def then_stored_event(
    ctx: DispatchScenarioContext, count: int, event_type: str
) -> None:
    (stored,) = ctx.run(ctx.storage.get_all_events()).values()
    assert stored.occurrence_count == count
    assert stored.event_type.value == event_type


@then(parsers.parse("the sender received {count:d} single events"))
def then_single_events(ctx: DispatchScenarioContext, count: int) -> None:
    assert len(ctx.sender.single_calls) == count


@then(parsers.parse("the sender received {batches:d} batch of {size:d} events"))
def then_batches(ctx: DispatchScenarioContext, batches: int, size: int) -> None:
    assert len(ctx.sender.batch_calls) == batches
    assert all(len(batch) == size for batch in ctx.sender.batch_calls)


@then("the sender received no batch")
def then_no_batch(ctx: DispatchScenarioContext) -> None:
    assert ctx.sender.batch_calls == []
