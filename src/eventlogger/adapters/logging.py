"""Python logging handler adapter for eventlogger.

This adapter bridges Python's standard library logging module to an
EventLogger, so WARNING and above records become telemetry events.
"""

import logging
import traceback

from eventlogger.logger import EventLogger

# Standard LogRecord attributes that should not be treated as extra fields
_STANDARD_LOGRECORD_ATTRS = frozenset(
    {
        "args",
        "asctime",
        "created",
        "exc_info",
        "exc_text",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "message",
        "module",
        "msecs",
        "msg",
        "name",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "taskName",
        "thread",
        "threadName",
        "error_code",
    }
)

# Records from these loggers are never forwarded
_INTERNAL_LOGGER_PREFIX = "eventlogger"


class EventLoggerHandler(logging.Handler):
    """Logging handler that reports log records as telemetry events.

    CRITICAL records become critical events, everything else at WARNING or
    above becomes a warning event. The error code comes from
    ``extra={"error_code": ...}``, else the exception type, else the level
    name.

    Example:
        ```python
        from eventlogger import EventLogger, EventLoggerHandler

        event_logger = EventLogger()
        event_logger.configure(api_key, api_url)
        logging.getLogger().addHandler(EventLoggerHandler(event_logger, "2.1.0"))
        ```
    """

    def __init__(
        self,
        event_logger: EventLogger,
        source_version: str,
        source_name: str | None = None,
        level: int = logging.WARNING,
    ) -> None:
        """Initialize the handler.

        Args:
            event_logger: Configured EventLogger receiving the events.
            source_version: Version reported for every event.
            source_name: Fixed source name. Defaults to the record's logger name.
            level: Minimum level forwarded. Defaults to WARNING.
        """
        super().__init__(level=max(level, logging.WARNING))
        self._event_logger = event_logger
        self._source_version = source_version
        self._source_name = source_name

    def emit(self, record: logging.LogRecord) -> None:
        """Forward a log record to the event logger.

        Args:
            record: The log record to emit.
        """
        if record.name.split(".")[0] == _INTERNAL_LOGGER_PREFIX:
            return

        try:
            info: dict[str, str] = {
                "logger": record.name,
                "module": record.module,
                "funcName": record.funcName or "",
                "lineno": str(record.lineno),
            }

            # Add any extra attributes passed via logging call
            for key, value in record.__dict__.items():
                if key not in _STANDARD_LOGRECORD_ATTRS and isinstance(
                    value, (str, int, float, bool)
                ):
                    info[key] = str(value)

            error_code = getattr(record, "error_code", None)
            if record.exc_info:
                exc_type, exc_value, exc_tb = record.exc_info
                if exc_type is not None:
                    info["exc_type"] = exc_type.__name__
                    error_code = error_code or exc_type.__name__
                if exc_value is not None:
                    info["exc_message"] = str(exc_value)
                if exc_tb is not None:
                    info["exc_traceback"] = "".join(
                        traceback.format_exception(exc_type, exc_value, exc_tb)
                    )

            source_name = self._source_name or record.name
            message = record.getMessage()
            code = str(error_code or record.levelname)
            if record.levelno >= logging.CRITICAL:
                self._event_logger.send_critical_event(
                    source_name, self._source_version, code, message, info
                )
            else:
                self._event_logger.send_warning_event(
                    source_name, self._source_version, code, message, info
                )
        except Exception:
            self.handleError(record)
