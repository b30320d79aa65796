"""Masking of customer and driver identifiers, plus correlation defaults."""

import logging
import re

_MASKS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"[\w.+-]+@[\w-]+\.[\w.-]+"), "[EMAIL]"),
    # Indian registration plates such as "TN 70 AB 1234" or "KA01MJ2022"
    (re.compile(r"\b[A-Z]{2}[-\s]?\d{1,2}[-\s]?[A-Z]{1,3}[-\s]?\d{4}\b"), "[PLATE]"),
    # Ten-digit mobile numbers with an optional +91 prefix
    (re.compile(r"(?:\+91[-\s]?)?\b\d{3}[-.\s]?\d{3}[-.\s]?\d{4}\b"), "[PHONE]"),
)


def mask_pii(text: str) -> str:
    for pattern, replacement in _MASKS:
        text = pattern.sub(replacement, text)
    return text


class PIIFilter(logging.Filter):
    """Masks emails, phone numbers and vehicle plates in the rendered message.

    Arguments are merged into the message before masking, so values passed
    through ``%s`` placeholders are masked too.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        try:
            message = record.getMessage()
        except (TypeError, ValueError):
            # Mismatched arguments are reported by the handler when it formats
            return True
        masked = mask_pii(message)
        if masked != message:
            record.msg = masked
            record.args = None
        return True


class DefaultCorrelationFilter(logging.Filter):
    """Falls back to the record's booking id, then to "-"."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "correlation_id"):
            record.correlation_id = getattr(record, "booking_id", "-")
        return True
