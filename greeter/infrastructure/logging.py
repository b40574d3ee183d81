"""
Logging configuration for the greeter functions.

Structured JSON output to stdout (picked up by CloudWatch), with the
service name and the invocation's request id attached to every entry.
"""

import logging
import sys
import time
from contextvars import ContextVar

import structlog

# Context variable for invocation correlation
correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def configure_logging(service_name: str, level: str = "INFO") -> None:
    """
    Configure structured logging for a service.

    Args:
        service_name: Name of the service for log context
        level: Minimum stdlib level name, e.g. "INFO" or "DEBUG"
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )
    # basicConfig is a no-op when the runtime already installed a root handler
    logging.getLogger().setLevel(log_level)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            _add_service_name(service_name),
            _add_correlation_id,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
    )


def _add_service_name(service_name: str):
    """Processor to add service name to all logs."""

    def processor(logger, method_name, event_dict):
        event_dict["service"] = service_name
        return event_dict

    return processor


def _add_correlation_id(logger, method_name, event_dict):
    """Processor to add correlation ID if present."""
    cid = correlation_id.get()
    if cid:
        event_dict["correlation_id"] = cid
    return event_dict


def set_correlation_id(cid: str) -> None:
    """Set correlation ID for the current invocation (the runtime request id)."""
    correlation_id.set(cid)


def bind_invocation_context(request_id: str, alias: str, function_name: str = "") -> None:
    """
    Attach invocation metadata to every log entry until the next invocation.

    Warm containers reuse the process, so context left over from the previous
    request is cleared first.
    """
    set_correlation_id(request_id)
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(alias=alias)
    if function_name:
        structlog.contextvars.bind_contextvars(function_name=function_name)


class Timer:
    """
    Context manager for timing operations.

    Usage:
        with Timer() as t:
            outcome = run(handler, event, context, extensions)
        logger.info("Invocation completed", duration_ms=t.duration_ms)
    """

    def __init__(self):
        self._start: float = 0
        self._end: float = 0

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        return self

    def __exit__(self, *args) -> None:
        self._end = time.perf_counter()

    @property
    def duration_ms(self) -> float:
        """Duration in milliseconds, rounded to 2 decimal places."""
        return round((self._end - self._start) * 1000, 2)
