from fare_logging.context import ContextFilter, LogContext, log_booking_context, log_context
from fare_logging.filters import DefaultCorrelationFilter, PIIFilter, mask_pii
from fare_logging.formatters import DevFormatter, JSONFormatter
from fare_logging.setup import build_handler, setup_logging, setup_logging_from_settings

__all__ = [
    "ContextFilter",
    "DefaultCorrelationFilter",
    "DevFormatter",
    "JSONFormatter",
    "LogContext",
    "PIIFilter",
    "build_handler",
    "log_booking_context",
    "log_context",
    "mask_pii",
    "setup_logging",
    "setup_logging_from_settings",
]
