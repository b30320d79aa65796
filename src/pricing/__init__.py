"""Fare calculation for every booking category."""

from pricing.config import PLATFORM_FEE_FALLBACKS, PricingConfig
from pricing.engine import FareEngine
from pricing.models import (
    DiagnosticEvent,
    DiagnosticKind,
    Diagnostics,
    FareBreakdown,
    FareDetails,
    FareResult,
)

__all__ = [
    "PLATFORM_FEE_FALLBACKS",
    "DiagnosticEvent",
    "DiagnosticKind",
    "Diagnostics",
    "FareBreakdown",
    "FareDetails",
    "FareEngine",
    "FareResult",
    "PricingConfig",
]
