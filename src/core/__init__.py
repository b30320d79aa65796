"""Core utilities shared across the fare engine."""

from core.exceptions import (
    AmbiguousConfigurationError,
    ConfigurationError,
    ConfigurationNotFoundError,
    FareEngineError,
    InvalidConfigurationError,
    NotFoundError,
    PermanentError,
    PersistenceError,
    TransientError,
    ValidationError,
)

__all__ = [
    "AmbiguousConfigurationError",
    "ConfigurationError",
    "ConfigurationNotFoundError",
    "FareEngineError",
    "InvalidConfigurationError",
    "NotFoundError",
    "PermanentError",
    "PersistenceError",
    "TransientError",
    "ValidationError",
]
