"""Hourly rental pricing with cost-minimizing package selection.

Rentals are billed for the vehicle's journey back to the depot as well as
the measured trip, and are priced against whichever active package gives
the customer the lowest total for their actual usage. The booked package
is informational only.
"""

import logging
from dataclasses import dataclass
from typing import Any, NamedTuple

from booking import BookingCategory, RentalTrip
from core.exceptions import ConfigurationNotFoundError
from geo.distance import distance_between
from pricing.base import FareCalculator, RateSource, optional_platform_fee
from pricing.finalize import coerce_measurement, finalize_breakdown, resolve_platform_fee
from pricing.models import Diagnostics, FareBreakdown, RentalPackage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RentalRates:
    packages: list[RentalPackage]
    platform_fee: Any = None


class PackageCost(NamedTuple):
    package: RentalPackage
    extra_km: float
    extra_km_charges: float
    extra_minutes: float
    extra_time_charges: float

    @property
    def total(self) -> float:
        return self.package.base_fare + self.extra_km_charges + self.extra_time_charges


def price_package(
    package: RentalPackage, billable_distance_km: float, duration_min: float
) -> PackageCost:
    extra_km = max(0.0, billable_distance_km - package.km_included)
    extra_minutes = max(0.0, duration_min - package.duration_hours * 60)
    return PackageCost(
        package=package,
        extra_km=extra_km,
        extra_km_charges=extra_km * package.extra_km_rate,
        extra_minutes=extra_minutes,
        extra_time_charges=extra_minutes * package.extra_minute_rate,
    )


def select_cheapest_package(
    packages: list[RentalPackage], billable_distance_km: float, duration_min: float
) -> PackageCost:
    """Pick the package with the lowest total; ties keep the earlier package."""
    if not packages:
        raise ValueError("At least one rental package is required")
    costs = [price_package(p, billable_distance_km, duration_min) for p in packages]
    return min(costs, key=lambda c: c.total)


class RentalFareCalculator(FareCalculator[RentalTrip, RentalRates]):
    category = BookingCategory.RENTAL

    def load_rates(self, trip: RentalTrip, source: RateSource) -> RentalRates:
        packages = source.get_rental_packages(trip.vehicle_class)
        if not packages:
            raise ConfigurationNotFoundError(
                "Rental fare configuration not found",
                details={"vehicle_class": trip.vehicle_class},
            )
        return RentalRates(
            packages=packages,
            platform_fee=optional_platform_fee(source, self.category, trip.vehicle_class),
        )

    def compute(
        self, trip: RentalTrip, rates: RentalRates, diagnostics: Diagnostics
    ) -> FareBreakdown:
        distance_km = coerce_measurement(
            trip.actual_distance_km, "actual_distance_km", diagnostics
        )
        duration_min = coerce_measurement(
            trip.actual_duration_minutes, "actual_duration_minutes", diagnostics
        )

        return_km = distance_between(trip.dropoff, self.config.depot)
        billable_km = distance_km + return_km

        selected = select_cheapest_package(rates.packages, billable_km, duration_min)
        package = selected.package

        if package.duration_hours != trip.package_hours:
            logger.info(
                f"Rental priced as '{package.package_name}' "
                f"({package.duration_hours:g} h) instead of booked {trip.package_hours} h package"
            )

        within_allowance = selected.extra_km_charges == 0 and selected.extra_time_charges == 0
        platform_fee = resolve_platform_fee(rates.platform_fee, self.category, diagnostics)

        return finalize_breakdown(
            self.category,
            trip.vehicle_class,
            charges={
                "base_fare": package.base_fare,
                "extra_km_charges": selected.extra_km_charges,
                "time_fare": selected.extra_time_charges,
            },
            platform_fee=platform_fee,
            details={
                "actual_distance_km": distance_km,
                "actual_duration_minutes": duration_min,
                "base_km_included": package.km_included,
                "extra_km": selected.extra_km,
                "extra_minutes": selected.extra_minutes,
                "per_km_rate": package.extra_km_rate,
                "per_minute_rate": package.extra_minute_rate,
                "within_allowance": within_allowance,
                "package_name": package.package_name,
                "booked_package_hours": trip.package_hours,
                "distance_to_depot_km": return_km,
                "total_distance_with_return_km": billable_km,
            },
            config=self.config,
            diagnostics=diagnostics,
        )
