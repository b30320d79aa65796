"""Metered pricing for regular point-to-point rides."""

import logging
from dataclasses import dataclass

from booking import BookingCategory, RegularTrip
from geo.zones import Zone
from pricing.base import FareCalculator, RateSource
from pricing.deadhead import calculate_deadhead
from pricing.finalize import coerce_measurement, finalize_breakdown, resolve_platform_fee
from pricing.models import Diagnostics, FareBreakdown, FareMatrixRate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegularRates:
    rate: FareMatrixRate
    zones: list[Zone]


class RegularFareCalculator(FareCalculator[RegularTrip, RegularRates]):
    category = BookingCategory.REGULAR

    def load_rates(self, trip: RegularTrip, source: RateSource) -> RegularRates:
        return RegularRates(
            rate=source.get_rate(BookingCategory.REGULAR, trip.vehicle_class),
            zones=source.get_active_zones(),
        )

    def compute(
        self, trip: RegularTrip, rates: RegularRates, diagnostics: Diagnostics
    ) -> FareBreakdown:
        rate = rates.rate
        distance_km = coerce_measurement(
            trip.actual_distance_km, "actual_distance_km", diagnostics
        )
        duration_min = coerce_measurement(
            trip.actual_duration_minutes, "actual_duration_minutes", diagnostics
        )

        extra_km = max(0.0, distance_km - self.config.regular_included_km)
        distance_fare = extra_km * rate.per_km_rate

        deadhead = calculate_deadhead(
            trip.dropoff,
            rate.per_km_rate,
            rates.zones,
            distance_km,
            self.config,
            diagnostics,
        )

        subtotal_before_surge = rate.base_fare + distance_fare + deadhead.charge
        surge_charges = subtotal_before_surge * (rate.surge_multiplier - 1)

        platform_fee = resolve_platform_fee(rate.platform_fee, self.category, diagnostics)

        logger.debug(
            f"Regular fare for {trip.vehicle_class}: base={rate.base_fare} "
            f"extra_km={extra_km:.2f} distance_fare={distance_fare:.2f} "
            f"deadhead={deadhead.charge:.2f} surge={surge_charges:.2f}"
        )

        return finalize_breakdown(
            self.category,
            trip.vehicle_class,
            charges={
                "base_fare": rate.base_fare,
                "distance_fare": distance_fare,
                "deadhead_charges": deadhead.charge,
                "surge_charges": surge_charges,
            },
            platform_fee=platform_fee,
            details={
                "actual_distance_km": distance_km,
                "actual_duration_minutes": duration_min,
                "base_km_included": self.config.regular_included_km,
                "extra_km": extra_km,
                "per_km_rate": rate.per_km_rate,
                "surge_multiplier": rate.surge_multiplier,
                "zone_detected": deadhead.zone_label,
                "is_inner_zone": deadhead.is_inner_zone,
                "minimum_fare": rate.minimum_fare,
            },
            config=self.config,
            diagnostics=diagnostics,
        )
