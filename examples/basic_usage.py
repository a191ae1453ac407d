"""Example: report errors from a script and persist pending events.

Run with:
    export EVENT_LOGGER_API_KEY=... EVENT_LOGGER_API_URL=https://...
    python examples/basic_usage.py

Behaviour:
    - Critical events are POSTed immediately and kept as warnings.
    - Warning events are stored in events.db and sent in one batch once
      50 distinct events accumulate or 12 hours pass.
"""

import logging

from eventlogger import (
    ApiConfiguration,
    AppEnvironment,
    EventLogger,
    SQLiteEventStorage,
    SQLiteTtlCache,
)

logging.basicConfig(level=logging.INFO)

config = ApiConfiguration.from_env()

event_logger = EventLogger(
    storage=SQLiteEventStorage("events.db"),
    cache=SQLiteTtlCache("events.db"),
    environment=AppEnvironment.detect(app_name="basic-usage", app_version="1.0.0"),
)

with event_logger:
    event_logger.configure(
        config.api_key if config else None,
        config.api_url if config else None,
        on_completion=lambda ok, message: print(f"configured={ok}: {message}"),
    )
    event_logger.send_warning_event("Billing", "2.4.1", "404", "Invoice not found")
    event_logger.send_critical_event(
        "Billing", "2.4.1", "500", "Payment gateway unreachable", {"gateway": "primary"}
    )
