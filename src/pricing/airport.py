"""Fixed-corridor airport transfers."""

import logging
from dataclasses import dataclass
from typing import Any

from booking import AirportTrip, BookingCategory
from geo.distance import distance_between
from pricing.base import FareCalculator, RateSource, optional_platform_fee
from pricing.finalize import coerce_measurement, finalize_breakdown, resolve_platform_fee
from pricing.models import AirportRate, Diagnostics, FareBreakdown

logger = logging.getLogger(__name__)

CITY_TO_AIRPORT = "cityCenter-to-airport"
AIRPORT_TO_CITY = "airport-to-cityCenter"


@dataclass(frozen=True)
class AirportRates:
    rate: AirportRate
    platform_fee: Any = None


class AirportFareCalculator(FareCalculator[AirportTrip, AirportRates]):
    category = BookingCategory.AIRPORT

    def load_rates(self, trip: AirportTrip, source: RateSource) -> AirportRates:
        return AirportRates(
            rate=source.get_airport_rate(trip.vehicle_class),
            platform_fee=optional_platform_fee(source, self.category, trip.vehicle_class),
        )

    def direction(self, trip: AirportTrip) -> str:
        """The endpoint closer to the city center is the origin."""
        center = self.config.city_center
        pickup_to_center = distance_between(trip.pickup, center)
        dropoff_to_center = distance_between(trip.dropoff, center)
        return CITY_TO_AIRPORT if pickup_to_center < dropoff_to_center else AIRPORT_TO_CITY

    def compute(
        self, trip: AirportTrip, rates: AirportRates, diagnostics: Diagnostics
    ) -> FareBreakdown:
        rate = rates.rate
        gps_distance_km = coerce_measurement(
            trip.actual_distance_km, "actual_distance_km", diagnostics
        )
        duration_min = coerce_measurement(
            trip.actual_duration_minutes, "actual_duration_minutes", diagnostics
        )

        direction = self.direction(trip)
        fixed_fare = (
            rate.city_to_airport_fare
            if direction == CITY_TO_AIRPORT
            else rate.airport_to_city_fare
        )
        implied_per_km = fixed_fare / self.config.airport_reference_distance_km

        if gps_distance_km > 0:
            distance_fare = gps_distance_km * implied_per_km
            reported_distance_km = gps_distance_km
        else:
            distance_fare = fixed_fare
            reported_distance_km = distance_between(trip.pickup, trip.dropoff)

        logger.debug(
            f"Airport fare {direction}: fixed={fixed_fare} gps_km={gps_distance_km:.2f} "
            f"distance_fare={distance_fare:.2f}"
        )

        platform_fee = resolve_platform_fee(rates.platform_fee, self.category, diagnostics)

        return finalize_breakdown(
            self.category,
            trip.vehicle_class,
            charges={"distance_fare": distance_fare},
            platform_fee=platform_fee,
            details={
                "actual_distance_km": reported_distance_km,
                "actual_duration_minutes": duration_min,
                "per_km_rate": implied_per_km,
                "direction": direction,
                "pricing_method": "gps_prorated" if gps_distance_km > 0 else "fixed",
            },
            config=self.config,
            diagnostics=diagnostics,
        )
