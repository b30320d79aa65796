"""Error hierarchy for fare calculation and trip completion.

Transient errors may succeed when the request is repeated; permanent
errors will not until the input or the rate configuration changes. Each
class carries the HTTP status the API answers with.
"""

from typing import Any, ClassVar


class FareEngineError(Exception):
    """Base exception for all fare engine errors."""

    http_status: ClassVar[int] = 500

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class TransientError(FareEngineError):
    """Errors that may succeed on retry."""

    http_status = 503


class PersistenceError(TransientError):
    """Reading or writing bookings and completions failed."""


class PermanentError(FareEngineError):
    """Errors that will not succeed on retry."""


class ValidationError(PermanentError):
    """Trip facts or a stored booking are unusable for pricing."""

    http_status = 400


class NotFoundError(PermanentError):
    """Unknown booking or completion."""

    http_status = 404


class ConfigurationError(PermanentError):
    """Rate configuration cannot price the trip; nothing is persisted."""

    http_status = 422


class ConfigurationNotFoundError(ConfigurationError):
    """No active rate row exists for the requested lookup key."""


class AmbiguousConfigurationError(ConfigurationError):
    """More than one active rate row matched a lookup that expects exactly one."""


class InvalidConfigurationError(ConfigurationError):
    """A stored rate row failed schema validation."""
