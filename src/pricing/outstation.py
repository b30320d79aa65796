"""Multi-day outstation pricing.

One-way trips are billed for the empty return leg by doubling the GPS
distance. Round trips already carry both legs in the GPS distance; short
same-day round trips are priced by slab, longer ones by a per-day
kilometer allowance. A per-day driver allowance is added in every case.
"""

import logging
import math
from dataclasses import dataclass
from typing import Any, NamedTuple

from booking import BookingCategory, OutstationTrip, TripDirection
from pricing.base import FareCalculator, RateSource, optional_platform_fee
from pricing.finalize import coerce_measurement, finalize_breakdown, resolve_platform_fee
from pricing.models import (
    DiagnosticKind,
    Diagnostics,
    FareBreakdown,
    OutstationRate,
    OutstationSlabPackage,
    SlabBand,
)

logger = logging.getLogger(__name__)

MINUTES_PER_DAY = 24 * 60


@dataclass(frozen=True)
class OutstationRates:
    rate: OutstationRate
    slab_package: OutstationSlabPackage | None = None
    platform_fee: Any = None


class SlabPrice(NamedTuple):
    band: SlabBand
    extra_km: float
    extra_km_charges: float


def count_days(duration_min: float) -> int:
    return max(1, math.ceil(duration_min / MINUTES_PER_DAY))


def select_slab(package: OutstationSlabPackage, distance_km: float) -> SlabPrice:
    """First band covering ``distance_km``, else the top band plus extra km."""
    bands = package.bands()
    band = next((b for b in bands if distance_km <= b.max_round_trip_km), bands[-1])
    extra_km = max(0.0, distance_km - band.max_round_trip_km)
    return SlabPrice(band, extra_km, extra_km * package.extra_km_rate)


class OutstationFareCalculator(FareCalculator[OutstationTrip, OutstationRates]):
    category = BookingCategory.OUTSTATION

    def load_rates(self, trip: OutstationTrip, source: RateSource) -> OutstationRates:
        return OutstationRates(
            rate=source.get_outstation_rate(trip.vehicle_class),
            slab_package=source.get_slab_package(trip.vehicle_class),
            platform_fee=optional_platform_fee(source, self.category, trip.vehicle_class),
        )

    def compute(
        self, trip: OutstationTrip, rates: OutstationRates, diagnostics: Diagnostics
    ) -> FareBreakdown:
        rate = rates.rate
        distance_km = coerce_measurement(
            trip.actual_distance_km, "actual_distance_km", diagnostics
        )
        duration_min = coerce_measurement(
            trip.actual_duration_minutes, "actual_duration_minutes", diagnostics
        )
        days = count_days(duration_min)
        driver_allowance = days * rate.driver_allowance_per_day

        details: dict[str, Any] = {
            "actual_distance_km": distance_km,
            "actual_duration_minutes": duration_min,
            "days_calculated": days,
            "trip_direction": trip.direction.value,
            "total_km_travelled": distance_km,
        }

        if trip.direction == TripDirection.ONE_WAY:
            billing_km = distance_km * 2
            use_slab = True
        else:
            billing_km = distance_km
            use_slab = (
                days == 1 and distance_km <= self.config.outstation_slab_max_round_trip_km
            )
        details["billing_distance_km"] = billing_km

        if use_slab and rates.slab_package is None:
            logger.warning(
                f"No slab package for {trip.vehicle_class}; falling back to per-km pricing"
            )
            diagnostics.record(
                DiagnosticKind.SLAB_UNAVAILABLE,
                "base_fare",
                "slab package not configured, per-km pricing applied",
            )
            use_slab = False

        if use_slab:
            slab = select_slab(rates.slab_package, billing_km)
            logger.debug(
                f"Outstation slab {slab.band.one_way_km} km "
                f"(covers {slab.band.max_round_trip_km} km) for {billing_km:.2f} km"
            )
            charges = {
                "base_fare": slab.band.fare,
                "extra_km_charges": slab.extra_km_charges,
                "driver_allowance": driver_allowance,
            }
            details.update(
                pricing_method="slab",
                per_km_rate=rates.slab_package.extra_km_rate,
                slab_fare=slab.band.fare,
                base_km_included=slab.band.max_round_trip_km,
                extra_km=slab.extra_km,
                within_allowance=slab.extra_km == 0,
                package_name=(
                    f"{slab.band.one_way_km}km Slab "
                    f"(covers up to {slab.band.max_round_trip_km}km round trip)"
                ),
            )
        elif trip.direction == TripDirection.ONE_WAY:
            charges = {
                "base_fare": rate.base_fare,
                "distance_fare": billing_km * rate.per_km_rate,
                "driver_allowance": driver_allowance,
            }
            details.update(pricing_method="per_km", per_km_rate=rate.per_km_rate)
        else:
            km_allowance = rate.daily_km_limit * days
            within_allowance = billing_km <= km_allowance
            # Under-use still pays the full allowance; overage bills actual distance
            billed_km = km_allowance if within_allowance else billing_km
            charges = {
                "base_fare": rate.base_fare,
                "distance_fare": billed_km * rate.per_km_rate,
                "driver_allowance": driver_allowance,
            }
            details.update(
                pricing_method="per_km",
                per_km_rate=rate.per_km_rate,
                daily_km_limit=rate.daily_km_limit,
                km_allowance=km_allowance,
                within_allowance=within_allowance,
            )

        platform_fee = resolve_platform_fee(rates.platform_fee, self.category, diagnostics)

        return finalize_breakdown(
            self.category,
            trip.vehicle_class,
            charges=charges,
            platform_fee=platform_fee,
            details=details,
            config=self.config,
            diagnostics=diagnostics,
        )
