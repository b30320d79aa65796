"""Per-thread booking fields attached to every log record.

Requests are served on worker threads, so fields set while pricing one
booking never reach records emitted for another.
"""

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

_state = threading.local()


def _fields() -> dict[str, Any]:
    fields: dict[str, Any] | None = getattr(_state, "fields", None)
    if fields is None:
        fields = _state.fields = {}
    return fields


class LogContext:
    """The current thread's log fields."""

    @staticmethod
    def set(**fields: Any) -> None:
        _fields().update(fields)

    @staticmethod
    def get() -> dict[str, Any]:
        return _fields()

    @staticmethod
    def replace(fields: dict[str, Any]) -> None:
        _state.fields = dict(fields)

    @staticmethod
    def clear() -> None:
        _state.fields = {}


class ContextFilter(logging.Filter):
    """Copies the thread's fields onto records; values passed via ``extra`` win."""

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in _fields().items():
            record.__dict__.setdefault(key, value)
        return True


@contextmanager
def log_context(**fields: Any) -> Iterator[None]:
    """Add fields for the duration of the block, restoring the outer ones on exit."""
    previous = dict(_fields())
    LogContext.set(**fields)
    try:
        yield
    finally:
        LogContext.replace(previous)


@contextmanager
def log_booking_context(booking_id: str, **fields: Any) -> Iterator[None]:
    """Scope booking fields (category, vehicle_class, driver_id...) to a calculation.

    The correlation id defaults to the booking id; fields given as None are
    left out.
    """
    correlation_id = fields.pop("correlation_id", booking_id)
    present = {k: v for k, v in fields.items() if v is not None}
    with log_context(booking_id=booking_id, correlation_id=correlation_id, **present):
        yield
