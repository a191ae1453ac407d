"""HTTP sender adapter delivering event batches with httpx."""

import logging
from collections.abc import Sequence

import httpx

from eventlogger.core.config import ApiConfiguration
from eventlogger.core.encoding.json import event_to_dict
from eventlogger.core.models import Event

logger = logging.getLogger(__name__)

API_KEY_HEADER = "x-client-apikey"
DEFAULT_TIMEOUT_SECONDS = 10.0


class HttpEventSender:
    """HTTP implementation of EventSenderPort.

    POSTs a JSON array of events to the configured ``api_url`` with the API
    key in the ``x-client-apikey`` header. Any 2xx response counts as
    delivered. Transport errors and other status codes are logged and
    reported as failure.

    Args:
        timeout: Request timeout in seconds.
        transport: Optional httpx transport (e.g., httpx.MockTransport).
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._timeout = timeout
        self._transport = transport
        self._configuration: ApiConfiguration | None = None

    @property
    def configuration(self) -> ApiConfiguration | None:
        return self._configuration

    def configure(self, configuration: ApiConfiguration) -> None:
        """Set the default credentials and endpoint."""
        self._configuration = configuration

    async def send_event(
        self, event: Event, configuration: ApiConfiguration | None = None
    ) -> bool:
        """Send a single event as a one-element batch."""
        return await self.send_events([event], configuration)

    async def send_events(
        self, events: Sequence[Event], configuration: ApiConfiguration | None = None
    ) -> bool:
        """POST the events as one JSON array.

        Returns:
            True on a 2xx response, False otherwise.
        """
        config = configuration or self._configuration
        if config is None:
            logger.warning("Sender not configured, %d events not sent", len(events))
            return False

        body = [event_to_dict(event) for event in events]
        headers = {API_KEY_HEADER: config.api_key}
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.post(config.api_url, json=body, headers=headers)
        except httpx.HTTPError as exc:
            logger.warning(
                "Failed to send %d events to %s: %s", len(events), config.api_url, exc
            )
            return False

        if not response.is_success:
            logger.warning(
                "Event endpoint %s answered %d for %d events",
                config.api_url,
                response.status_code,
                len(events),
            )
            return False
        return True
