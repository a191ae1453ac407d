"""Fingerprint and validation helpers for incoming events."""

_SEPARATOR = "_"


def fingerprint(
    event_type: str,
    app_version: str,
    source_name: str,
    error_code: str,
    error_message: str,
) -> str:
    """Build the normalized deduplication key for an event.

    Args:
        event_type: Event type value ("critical" or "warning").
        app_version: Version of the host application.
        source_name: Component that reported the error.
        error_code: Error code of the event.
        error_message: Description of the error.

    Returns:
        The parts joined with "_", spaces replaced by "_", lowercased.
    """
    key = _SEPARATOR.join(
        [event_type, app_version, source_name, error_code, error_message]
    )
    return key.replace(" ", "_").lower()


def is_event_valid(
    source_name: str, source_version: str, error_code: str, error_message: str
) -> bool:
    """Return False if any of the required identity strings is empty."""
    return all((source_name, source_version, error_code, error_message))
