"""Calculator capability and the rate lookup it depends on."""

from abc import ABC, abstractmethod
from typing import Any, ClassVar, Generic, Protocol, TypeVar

from booking import BookingCategory
from geo.zones import Zone
from pricing.config import PricingConfig
from pricing.models import (
    AirportRate,
    Diagnostics,
    FareBreakdown,
    FareMatrixRate,
    FareResult,
    OutstationRate,
    OutstationSlabPackage,
    RentalPackage,
)


class RateSource(Protocol):
    """Read-only access to rate cards and zones.

    Lookups that expect exactly one active row raise
    ``ConfigurationNotFoundError`` when none exists and
    ``AmbiguousConfigurationError`` when several do.
    """

    def get_rate(self, category: BookingCategory, vehicle_class: str) -> FareMatrixRate: ...

    def find_rate(
        self, category: BookingCategory, vehicle_class: str
    ) -> FareMatrixRate | None: ...

    def get_rental_packages(self, vehicle_class: str) -> list[RentalPackage]: ...

    def get_outstation_rate(self, vehicle_class: str) -> OutstationRate: ...

    def get_slab_package(self, vehicle_class: str) -> OutstationSlabPackage | None: ...

    def get_airport_rate(self, vehicle_class: str) -> AirportRate: ...

    def get_active_zones(self) -> list[Zone]: ...


TripT = TypeVar("TripT")
RatesT = TypeVar("RatesT")


class FareCalculator(ABC, Generic[TripT, RatesT]):
    """Prices one booking category.

    ``load_rates`` performs every lookup up front; ``compute`` is a pure
    function of the trip facts and the loaded rates, so identical inputs
    always yield an identical breakdown.
    """

    category: ClassVar[BookingCategory]

    def __init__(self, config: PricingConfig) -> None:
        self.config = config

    @abstractmethod
    def load_rates(self, trip: TripT, source: RateSource) -> RatesT: ...

    @abstractmethod
    def compute(self, trip: TripT, rates: RatesT, diagnostics: Diagnostics) -> FareBreakdown: ...

    def calculate(self, trip: TripT, source: RateSource) -> FareResult:
        rates = self.load_rates(trip, source)
        diagnostics = Diagnostics()
        breakdown = self.compute(trip, rates, diagnostics)
        return FareResult(breakdown=breakdown, diagnostics=diagnostics)


def optional_platform_fee(
    source: RateSource, category: BookingCategory, vehicle_class: str
) -> Any:
    """Raw platform fee from the category's fare-matrix row, if one exists."""
    row = source.find_rate(category, vehicle_class)
    return row.platform_fee if row is not None else None
