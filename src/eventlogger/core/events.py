"""Factory and pure update functions for Event values."""

import dataclasses

from eventlogger.core.environment import AppEnvironment
from eventlogger.core.models import Event, EventType


def create_event(
    event_type: EventType,
    source_name: str,
    source_version: str,
    error_code: str,
    error_message: str,
    info: dict[str, str] | None = None,
    *,
    environment: AppEnvironment,
    now: float,
    event_version: str = "1.0",
) -> Event:
    """Create a first-occurrence event.

    Args:
        event_type: Severity of the event.
        source_name: Component that reported the error.
        source_version: Version of the reporting component.
        error_code: Error code of the event.
        error_message: Description of the error.
        info: Optional free-form string attributes.
        environment: App and device metadata.
        now: Unix timestamp recorded as the first occurrence.
        event_version: Schema version of the payload.

    Returns:
        Event with occurrence_count 1.
    """
    return Event(
        event_type=event_type,
        app_id=environment.app_id,
        app_name=environment.app_name,
        app_version=environment.app_version,
        os_version=environment.os_version,
        device_model=environment.device_model,
        device_brand=environment.device_brand,
        device_name=environment.device_name,
        platform=environment.platform,
        source_name=source_name,
        source_version=source_version,
        error_code=error_code,
        error_message=error_message,
        first_occurrence_on=now,
        event_version=event_version,
        occurrence_count=1,
        info=dict(info) if info is not None else None,
    )


def merge_event(existing: Event, incoming: Event) -> Event:
    """Fold a repeat observation into the stored event.

    The stored identity and first occurrence time are kept. The count is
    incremented and the type follows the incoming observation. Incoming
    info replaces the stored info only when present.
    """
    return dataclasses.replace(
        existing,
        event_type=incoming.event_type,
        occurrence_count=existing.occurrence_count + 1,
        info=incoming.info if incoming.info is not None else existing.info,
    )


def demote_event(event: Event) -> Event:
    """Return a copy of the event downgraded to a warning."""
    return dataclasses.replace(event, event_type=EventType.WARNING)
