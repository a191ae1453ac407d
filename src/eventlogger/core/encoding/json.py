"""JSON encoding of events for transport and persistence."""

import json
from collections.abc import Iterable
from typing import Any

from eventlogger.core.models import Event, EventType

# Python attribute name -> wire field name
_FIELDS = {
    "event_type": "eventType",
    "app_id": "appId",
    "app_name": "appName",
    "app_version": "appVersion",
    "os_version": "osVersion",
    "device_model": "deviceModel",
    "device_brand": "deviceBrand",
    "device_name": "deviceName",
    "source_name": "sourceName",
    "source_version": "sourceVersion",
    "error_code": "errorCode",
    "error_message": "errorMessage",
    "platform": "platform",
    "event_version": "eventVersion",
    "occurrence_count": "occurrenceCount",
    "first_occurrence_on": "firstOccurrenceOn",
}


def event_to_dict(event: Event) -> dict[str, Any]:
    """Convert an event to a JSON-compatible dict with wire field names.

    The info field is omitted when the event carries none.
    """
    obj: dict[str, Any] = {
        wire: getattr(event, attr) for attr, wire in _FIELDS.items()
    }
    obj["eventType"] = event.event_type.value
    if event.info is not None:
        obj["info"] = dict(event.info)
    return obj


def event_from_dict(obj: dict[str, Any]) -> Event:
    """Build an event from a dict produced by event_to_dict.

    Raises:
        KeyError: If a required field is missing.
        ValueError: If eventType is not a known event type.
    """
    kwargs: dict[str, Any] = {attr: obj[wire] for attr, wire in _FIELDS.items()}
    kwargs["event_type"] = EventType(obj["eventType"])
    kwargs["occurrence_count"] = int(obj["occurrenceCount"])
    kwargs["first_occurrence_on"] = float(obj["firstOccurrenceOn"])
    info = obj.get("info")
    if info is not None:
        info = {str(k): str(v) for k, v in info.items()}
    kwargs["info"] = info
    return Event(**kwargs)


def encode_event(event: Event) -> str:
    """Encode a single event to a JSON object string."""
    return json.dumps(event_to_dict(event))


def encode_events(events: Iterable[Event]) -> str:
    """Encode events to a JSON array string.

    Args:
        events: An iterable of Event objects.

    Returns:
        JSON array with one object per event. "[]" if no events.
    """
    return json.dumps([event_to_dict(event) for event in events])


def decode_event(data: str) -> Event:
    """Decode a JSON object string produced by encode_event."""
    return event_from_dict(json.loads(data))
