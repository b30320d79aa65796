"""Log formatters for JSON and human-readable output."""

import json
import logging
from datetime import UTC, datetime

# Booking fields copied onto JSON records when present
CONTEXT_FIELDS = (
    "booking_id",
    "category",
    "vehicle_class",
    "driver_id",
    "customer_id",
    "correlation_id",
)


class JSONFormatter(logging.Formatter):
    """One JSON object per record for log shipping."""

    def __init__(self, environment: str = "development"):
        super().__init__()
        self.environment = environment

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "source": f"{record.module}:{record.lineno}",
            "message": record.getMessage(),
            "env": self.environment,
        }
        log_data.update(
            {field: getattr(record, field) for field in CONTEXT_FIELDS if hasattr(record, field)}
        )

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Context values may be enums or datetimes
        return json.dumps(log_data, default=str)


class DevFormatter(logging.Formatter):
    """Single line per record, tagged with the booking's category and vehicle class."""

    def __init__(self) -> None:
        super().__init__(
            fmt="%(asctime)s [%(levelname)8s] %(name)s [%(correlation_id)s]: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def formatMessage(self, record: logging.LogRecord) -> str:
        line = super().formatMessage(record)
        tags = [
            str(getattr(record, field))
            for field in ("category", "vehicle_class")
            if hasattr(record, field)
        ]
        return f"{line} ({'/'.join(tags)})" if tags else line
