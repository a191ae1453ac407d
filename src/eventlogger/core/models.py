"""Core domain models for telemetry events."""

from dataclasses import dataclass
from enum import Enum

from eventlogger.core.fingerprint import fingerprint


class EventType(str, Enum):
    """Severity of a reported event."""

    CRITICAL = "critical"
    WARNING = "warning"


@dataclass(frozen=True)
class Event:
    """A class of equivalent error occurrences.

    Attributes:
        event_type: Severity (critical or warning).
        app_id: Identifier of the host application.
        app_name: Human readable name of the host application.
        app_version: Version of the host application.
        os_version: Operating system release.
        device_model: Hardware model (e.g., x86_64).
        device_brand: Operating system family (e.g., Linux).
        device_name: Host name of the device.
        platform: Runtime platform string.
        source_name: Component that reported the error (app or SDK name).
        source_version: Version of the reporting component.
        error_code: Custom or HTTP error code.
        error_message: Description of the error.
        event_version: Schema version of the event payload.
        occurrence_count: How many times the event was observed.
        first_occurrence_on: Unix timestamp of the first observation.
        info: Optional free-form string attributes.
    """

    event_type: EventType
    app_id: str
    app_name: str
    app_version: str
    os_version: str
    device_model: str
    device_brand: str
    device_name: str
    platform: str
    source_name: str
    source_version: str
    error_code: str
    error_message: str
    first_occurrence_on: float
    event_version: str = "1.0"
    occurrence_count: int = 1
    info: dict[str, str] | None = None

    @property
    def fingerprint(self) -> str:
        """Deduplication key derived from this event's own fields."""
        return fingerprint(
            self.event_type.value,
            self.app_version,
            self.source_name,
            self.error_code,
            self.error_message,
        )
