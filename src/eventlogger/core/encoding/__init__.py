"""Encoders for event payloads."""

from eventlogger.core.encoding.json import (
    decode_event,
    encode_event,
    encode_events,
    event_from_dict,
    event_to_dict,
)

__all__ = [
    "decode_event",
    "encode_event",
    "encode_events",
    "event_from_dict",
    "event_to_dict",
]
