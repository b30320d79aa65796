"""Tax, rounding and value coercion shared by every calculator.

GST is split in two tiers: the charges rate applies to the sum of every
non-platform-fee component and the platform-fee rate applies to the
platform fee alone. The total is the sum of all components rounded
half-up to the nearest whole currency unit; individual components are
left unrounded.
"""

import logging
import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from booking import BookingCategory
from core.exceptions import ValidationError
from pricing.config import PLATFORM_FEE_FALLBACKS, PricingConfig
from pricing.models import (
    CHARGE_COMPONENTS,
    DiagnosticKind,
    Diagnostics,
    FareBreakdown,
    FareDetails,
)

logger = logging.getLogger(__name__)


def round_half_up(amount: float) -> float:
    """Round to the nearest whole unit, halves away from zero."""
    return float(Decimal(repr(amount)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _parse_number(raw: Any) -> float | None:
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int | float):
        return float(raw)
    try:
        return float(str(raw).strip())
    except ValueError:
        return None


def coerce_measurement(value: Any, field: str, diagnostics: Diagnostics) -> float:
    """Return a finite, non-negative measurement, substituting 0 otherwise."""
    parsed = _parse_number(value)
    if parsed is not None and math.isfinite(parsed) and parsed >= 0:
        return parsed

    logger.warning(f"Coerced invalid measurement {field}={value!r} to 0")
    diagnostics.record(
        DiagnosticKind.COERCION,
        field,
        "measurement was missing, non-finite or negative",
        raw_value=value,
        applied_value=0.0,
    )
    return 0.0


def coerce_component(value: float, field: str, diagnostics: Diagnostics) -> float:
    """Guard an intermediate result before it reaches the total.

    A non-finite component means the trip facts overflowed the arithmetic,
    so the fare is rejected rather than silently undercharged. Negative
    components are coerced to 0.
    """
    if not math.isfinite(value):
        raise ValidationError(
            f"Fare component {field} is not finite",
            details={"field": field, "value": repr(value)},
        )
    if value >= 0:
        return value

    logger.warning(f"Coerced negative component {field}={value!r} to 0")
    diagnostics.record(
        DiagnosticKind.COERCION,
        field,
        "computed component was negative",
        raw_value=value,
        applied_value=0.0,
    )
    return 0.0


def resolve_platform_fee(
    raw: Any, category: BookingCategory, diagnostics: Diagnostics
) -> float:
    """Parse a stored platform fee, falling back to the category default."""
    fallback = PLATFORM_FEE_FALLBACKS[category]
    parsed = _parse_number(raw)

    if parsed is not None and math.isfinite(parsed) and parsed >= 0:
        return parsed

    reason = "missing" if raw is None else "malformed"
    logger.warning(
        f"Platform fee {reason} for {category.value} ({raw!r}); using fallback {fallback}"
    )
    diagnostics.record(
        DiagnosticKind.FALLBACK,
        "platform_fee",
        f"platform fee {reason}, category fallback applied",
        raw_value=raw,
        applied_value=fallback,
    )
    return fallback


def finalize_breakdown(
    category: BookingCategory,
    vehicle_class: str,
    charges: dict[str, float],
    platform_fee: float,
    details: dict[str, Any],
    config: PricingConfig,
    diagnostics: Diagnostics,
) -> FareBreakdown:
    """Apply GST to the itemized charges and produce the rounded total.

    Args:
        charges: Non-platform-fee components keyed by breakdown field name.
            Components not supplied are reported as zero.
        platform_fee: Already-resolved flat platform fee.
        details: Provenance fields for ``FareDetails``.
    """
    unknown = set(charges) - set(CHARGE_COMPONENTS)
    if unknown:
        raise ValueError(f"Unknown fare components: {sorted(unknown)}")

    safe_charges = {
        name: coerce_component(charges.get(name, 0.0), name, diagnostics)
        for name in CHARGE_COMPONENTS
    }
    platform_fee = coerce_component(platform_fee, "platform_fee", diagnostics)

    charges_subtotal = sum(safe_charges.values())
    gst_on_charges = charges_subtotal * config.gst_rate_charges
    gst_on_platform_fee = platform_fee * config.gst_rate_platform_fee

    total_raw = charges_subtotal + platform_fee + gst_on_charges + gst_on_platform_fee
    if not math.isfinite(total_raw):
        raise ValidationError(
            "Fare total is not finite", details={"category": category.value}
        )
    total_fare = round_half_up(total_raw)

    logger.debug(
        f"Finalized {category.value} fare: charges={charges_subtotal:.2f} "
        f"platform_fee={platform_fee:.2f} gst={gst_on_charges:.2f}+{gst_on_platform_fee:.2f} "
        f"total={total_fare:.0f}"
    )

    return FareBreakdown(
        booking_category=category,
        vehicle_class=vehicle_class,
        **safe_charges,
        platform_fee=platform_fee,
        gst_on_charges=gst_on_charges,
        gst_on_platform_fee=gst_on_platform_fee,
        total_fare=total_fare,
        details=FareDetails(
            platform_fee_flat=platform_fee,
            gst_rate_charges=config.gst_rate_charges,
            gst_rate_platform=config.gst_rate_platform_fee,
            **details,
        ),
    )
