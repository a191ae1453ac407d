"""Shared test fixtures for all test modules."""

from pathlib import Path

import pytest
from tests.helpers import NOW, FakeClock, FakeSender

from eventlogger.adapters.storage.in_memory import (
    InMemoryEventStorage,
    InMemoryTtlCache,
)
from eventlogger.core.config import ApiConfiguration, DispatchSettings
from eventlogger.core.engine import DispatchEngine
from eventlogger.core.environment import AppEnvironment
from eventlogger.core.events import create_event
from eventlogger.core.models import Event, EventType


@pytest.fixture
def event_db_path(tmp_path: Path) -> str:
    """Provide a temporary database path for event storage tests."""
    return str(tmp_path / "events.db")


@pytest.fixture
def environment() -> AppEnvironment:
    """Fixed app/device metadata."""
    return AppEnvironment(
        app_id="com.example.app",
        app_name="Example",
        app_version="1.2.3",
        os_version="6.1",
        device_model="x86_64",
        device_brand="Linux",
        device_name="devbox",
        platform="CPython 3.12.0",
    )


@pytest.fixture
def make_event(environment: AppEnvironment):
    """Factory fixture for creating events with overridable fields."""

    def _make(
        event_type: EventType = EventType.CRITICAL,
        source_name: str = "IAM",
        source_version: str = "7.2.0",
        error_code: str = "500",
        error_message: str = "Network Error",
        info: dict[str, str] | None = None,
        now: float = NOW,
    ) -> Event:
        return create_event(
            event_type,
            source_name,
            source_version,
            error_code,
            error_message,
            info,
            environment=environment,
            now=now,
        )

    return _make


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def sender() -> FakeSender:
    return FakeSender()


@pytest.fixture
def storage() -> InMemoryEventStorage:
    return InMemoryEventStorage()


@pytest.fixture
def cache() -> InMemoryTtlCache:
    return InMemoryTtlCache()


@pytest.fixture
def api_configuration() -> ApiConfiguration:
    return ApiConfiguration(api_key="test-key", api_url="https://collector.test/events")


@pytest.fixture
def settings() -> DispatchSettings:
    return DispatchSettings(ttl_expiry_seconds=3600, max_event_count=5)


@pytest.fixture
def engine(
    storage: InMemoryEventStorage,
    sender: FakeSender,
    cache: InMemoryTtlCache,
    settings: DispatchSettings,
    environment: AppEnvironment,
    clock: FakeClock,
    api_configuration: ApiConfiguration,
) -> DispatchEngine:
    """Configured engine over in-memory adapters and a fake sender."""
    engine = DispatchEngine(
        storage,
        sender,
        cache,
        settings=settings,
        environment=environment,
        clock=clock,
    )
    engine.configure(api_configuration)
    return engine
