"""Rate-card builders and an in-memory rate source for pricing tests."""

from dataclasses import dataclass, field

from booking import BookingCategory, Coordinate
from core.exceptions import ConfigurationNotFoundError
from geo.zones import Zone
from pricing.models import (
    SLAB_DISTANCES_KM,
    AirportRate,
    FareMatrixRate,
    OutstationRate,
    OutstationSlabPackage,
    RentalPackage,
)

DEPOT = Coordinate(latitude=12.7401984, longitude=77.824)
KM_PER_DEGREE_LAT = 111.19492664455873


def north_of_depot(km: float) -> Coordinate:
    """Point due north of the depot at the given great-circle distance."""
    return Coordinate(latitude=DEPOT.latitude + km / KM_PER_DEGREE_LAT, longitude=DEPOT.longitude)


def ring_zones(inner_radius_km: float = 10.0, outer_radius_km: float = 25.0) -> list[Zone]:
    return [
        Zone(
            name="Hosur Inner Ring",
            center_latitude=DEPOT.latitude,
            center_longitude=DEPOT.longitude,
            radius_km=inner_radius_km,
        ),
        Zone(
            name="Hosur Outer Ring",
            center_latitude=DEPOT.latitude,
            center_longitude=DEPOT.longitude,
            radius_km=outer_radius_km,
        ),
    ]


def fare_matrix_rate(
    category: BookingCategory = BookingCategory.REGULAR,
    vehicle_class: str = "sedan",
    **overrides,
) -> FareMatrixRate:
    values = {
        "booking_category": category,
        "vehicle_class": vehicle_class,
        "base_fare": 50.0,
        "per_km_rate": 15.0,
        "surge_multiplier": 1.0,
        "platform_fee": "10",
        "minimum_fare": 80.0,
    }
    values.update(overrides)
    return FareMatrixRate(**values)


def rental_packages() -> list[RentalPackage]:
    return [
        RentalPackage(
            package_name="4 hrs / 40 km",
            duration_hours=4,
            km_included=40,
            base_fare=500,
            extra_km_rate=15,
            extra_minute_rate=2,
        ),
        RentalPackage(
            package_name="6 hrs / 60 km",
            duration_hours=6,
            km_included=60,
            base_fare=650,
            extra_km_rate=12,
            extra_minute_rate=2,
        ),
    ]


def outstation_rate(vehicle_class: str = "sedan", **overrides) -> OutstationRate:
    values = {
        "vehicle_class": vehicle_class,
        "base_fare": 300.0,
        "per_km_rate": 12.0,
        "driver_allowance_per_day": 400.0,
        "daily_km_limit": 120.0,
    }
    values.update(overrides)
    return OutstationRate(**values)


def slab_fare(one_way_km: int) -> float:
    return 500.0 + one_way_km * 20.0


def slab_package(
    vehicle_class: str = "sedan", extra_km_rate: float = 14.0
) -> OutstationSlabPackage:
    return OutstationSlabPackage(
        vehicle_class=vehicle_class,
        slab_fares={km: slab_fare(km) for km in SLAB_DISTANCES_KM},
        extra_km_rate=extra_km_rate,
    )


def airport_rate(vehicle_class: str = "sedan") -> AirportRate:
    return AirportRate(
        vehicle_class=vehicle_class, city_to_airport_fare=800.0, airport_to_city_fare=900.0
    )


@dataclass
class InMemoryRateSource:
    """Dictionary-backed rate source with the same not-found semantics as the repository."""

    rates: dict[tuple[BookingCategory, str], FareMatrixRate] = field(default_factory=dict)
    rental: dict[str, list[RentalPackage]] = field(default_factory=dict)
    outstation: dict[str, OutstationRate] = field(default_factory=dict)
    slabs: dict[str, OutstationSlabPackage] = field(default_factory=dict)
    airport: dict[str, AirportRate] = field(default_factory=dict)
    zones: list[Zone] = field(default_factory=list)

    def get_rate(self, category: BookingCategory, vehicle_class: str) -> FareMatrixRate:
        rate = self.find_rate(category, vehicle_class)
        if rate is None:
            raise ConfigurationNotFoundError("Fare configuration not found for this vehicle type")
        return rate

    def find_rate(self, category: BookingCategory, vehicle_class: str) -> FareMatrixRate | None:
        return self.rates.get((category, vehicle_class))

    def get_rental_packages(self, vehicle_class: str) -> list[RentalPackage]:
        return list(self.rental.get(vehicle_class, []))

    def get_outstation_rate(self, vehicle_class: str) -> OutstationRate:
        if vehicle_class not in self.outstation:
            raise ConfigurationNotFoundError("Outstation fare configuration not found")
        return self.outstation[vehicle_class]

    def get_slab_package(self, vehicle_class: str) -> OutstationSlabPackage | None:
        return self.slabs.get(vehicle_class)

    def get_airport_rate(self, vehicle_class: str) -> AirportRate:
        if vehicle_class not in self.airport:
            raise ConfigurationNotFoundError("Airport fare configuration not found")
        return self.airport[vehicle_class]

    def get_active_zones(self) -> list[Zone]:
        return list(self.zones)


def standard_rate_source(vehicle_class: str = "sedan") -> InMemoryRateSource:
    """Complete rate configuration for one vehicle class across all categories."""
    return InMemoryRateSource(
        rates={
            (BookingCategory.REGULAR, vehicle_class): fare_matrix_rate(
                BookingCategory.REGULAR, vehicle_class
            ),
            (BookingCategory.RENTAL, vehicle_class): fare_matrix_rate(
                BookingCategory.RENTAL, vehicle_class, platform_fee="20"
            ),
            (BookingCategory.OUTSTATION, vehicle_class): fare_matrix_rate(
                BookingCategory.OUTSTATION, vehicle_class, platform_fee="10"
            ),
            (BookingCategory.AIRPORT, vehicle_class): fare_matrix_rate(
                BookingCategory.AIRPORT, vehicle_class, platform_fee="20"
            ),
        },
        rental={vehicle_class: rental_packages()},
        outstation={vehicle_class: outstation_rate(vehicle_class)},
        slabs={vehicle_class: slab_package(vehicle_class)},
        airport={vehicle_class: airport_rate(vehicle_class)},
        zones=ring_zones(),
    )
