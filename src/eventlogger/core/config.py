"""Configuration objects for the dispatch engine."""

import os
from collections.abc import Mapping
from dataclasses import dataclass

API_KEY_ENV = "EVENT_LOGGER_API_KEY"
API_URL_ENV = "EVENT_LOGGER_API_URL"

DEFAULT_TTL_EXPIRY_SECONDS = 12 * 60 * 60
DEFAULT_MAX_EVENT_COUNT = 50


@dataclass(frozen=True)
class ApiConfiguration:
    """Credentials and endpoint of the collection service.

    Attributes:
        api_key: Key sent with every request.
        api_url: Endpoint that receives event batches.
    """

    api_key: str
    api_url: str

    def __post_init__(self) -> None:
        if not self.api_key:
            raise ValueError("api_key must be a non-empty string")
        if not self.api_url:
            raise ValueError("api_url must be a non-empty string")

    @classmethod
    def from_env(
        cls, environ: Mapping[str, str] | None = None
    ) -> "ApiConfiguration | None":
        """Read the configuration from environment variables.

        Returns:
            ApiConfiguration, or None when either variable is missing or empty.
        """
        env = os.environ if environ is None else environ
        api_key = env.get(API_KEY_ENV)
        api_url = env.get(API_URL_ENV)
        if not api_key or not api_url:
            return None
        return cls(api_key=api_key, api_url=api_url)


@dataclass(frozen=True)
class DispatchSettings:
    """Flush policy of the dispatch engine.

    Attributes:
        ttl_expiry_seconds: Age of the TTL reference time after which stored
            warnings should be flushed.
        max_event_count: Number of stored entries that triggers a flush.
        event_version: Schema version stamped on new events.
    """

    ttl_expiry_seconds: float = DEFAULT_TTL_EXPIRY_SECONDS
    max_event_count: int = DEFAULT_MAX_EVENT_COUNT
    event_version: str = "1.0"

    def __post_init__(self) -> None:
        if self.ttl_expiry_seconds < 0:
            raise ValueError("ttl_expiry_seconds must be >= 0")
        if self.max_event_count < 1:
            raise ValueError("max_event_count must be >= 1")
