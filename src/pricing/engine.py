"""Category dispatch for fare calculation."""

import logging

from booking import BookingCategory
from booking import TripFacts as TripFactsT
from core.exceptions import ValidationError
from pricing.airport import AirportFareCalculator
from pricing.base import FareCalculator, RateSource
from pricing.config import PricingConfig
from pricing.models import FareResult
from pricing.outstation import OutstationFareCalculator
from pricing.regular import RegularFareCalculator
from pricing.rental import RentalFareCalculator

logger = logging.getLogger(__name__)


class FareEngine:
    """Routes trip facts to the calculator registered for their category.

    Stateless between calls: concurrent calculations for different trips
    share nothing but the read-only rate source.
    """

    def __init__(self, source: RateSource, config: PricingConfig | None = None) -> None:
        self.source = source
        self.config = config or PricingConfig()
        self._calculators: dict[BookingCategory, FareCalculator] = {
            calc.category: calc
            for calc in (
                RegularFareCalculator(self.config),
                RentalFareCalculator(self.config),
                OutstationFareCalculator(self.config),
                AirportFareCalculator(self.config),
            )
        }

    def calculator_for(self, category: BookingCategory) -> FareCalculator:
        try:
            return self._calculators[category]
        except KeyError:
            raise ValidationError(
                f"Invalid booking category: {category}", details={"category": str(category)}
            ) from None

    def calculate(self, trip: TripFactsT) -> FareResult:
        calculator = self.calculator_for(trip.category)
        logger.info(
            f"Calculating {trip.category.value} fare for {trip.vehicle_class}: "
            f"{trip.actual_distance_km} km, {trip.actual_duration_minutes} min"
        )
        result = calculator.calculate(trip, self.source)

        if result.diagnostics.has_data_quality_issues:
            logger.warning(
                f"Fare computed with {len(result.diagnostics.events)} data-quality event(s): "
                + ", ".join(f"{e.kind.value}:{e.field}" for e in result.diagnostics.events)
            )
        logger.info(
            f"{trip.category.value} fare total {result.breakdown.total_fare:.0f} "
            f"for {trip.vehicle_class}"
        )
        return result
