"""Example: turn standard library log records into telemetry events.

Run with:
    python examples/logging_bridge.py

Every record at WARNING or above logged through the root logger becomes an
event: CRITICAL records are sent immediately, the rest are batched.
"""

import logging

from eventlogger import EventLogger, EventLoggerHandler

event_logger = EventLogger()
event_logger.configure("demo-key", "https://collector.example.com/api/events")

logging.getLogger().addHandler(EventLoggerHandler(event_logger, source_version="0.3.0"))
log = logging.getLogger("shop.checkout")

log.warning(
    "Cart total mismatch", extra={"error_code": "CART_MISMATCH", "cart_id": "c-17"}
)
try:
    {}["price"]
except KeyError:
    log.exception("Price lookup failed")
log.critical("Order database unavailable", extra={"error_code": "DB_DOWN"})

event_logger.close()
