"""Root logger configuration for the fare service."""

import logging
import sys
from typing import TextIO

from fare_logging.context import ContextFilter
from fare_logging.filters import DefaultCorrelationFilter, PIIFilter
from fare_logging.formatters import DevFormatter, JSONFormatter
from settings import LoggingSettings

# Per-statement and per-request chatter stays at WARNING
NOISY_LOGGERS = ("sqlalchemy.engine", "uvicorn.access")


def build_handler(
    json_output: bool = False,
    environment: str = "development",
    stream: TextIO | None = None,
) -> logging.Handler:
    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(JSONFormatter(environment) if json_output else DevFormatter())
    # Context first so the correlation default can use the booking id
    handler.addFilter(ContextFilter())
    handler.addFilter(DefaultCorrelationFilter())
    handler.addFilter(PIIFilter())
    return handler


def setup_logging(
    level: str = "INFO",
    json_output: bool = False,
    environment: str = "development",
) -> None:
    """Replace the root logger's handlers with one stdout handler."""
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(build_handler(json_output, environment))
    root_logger.setLevel(level.upper())

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def setup_logging_from_settings(settings: LoggingSettings) -> None:
    setup_logging(
        level=settings.level,
        json_output=settings.format == "json",
        environment=settings.environment,
    )
