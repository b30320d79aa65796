"""Immutable pricing constants injected into the calculators."""

from dataclasses import dataclass

from booking import BookingCategory, Coordinate
from settings import PricingSettings

# Used when a stored platform fee is missing or unparseable
PLATFORM_FEE_FALLBACKS: dict[BookingCategory, float] = {
    BookingCategory.REGULAR: 10.0,
    BookingCategory.OUTSTATION: 10.0,
    BookingCategory.RENTAL: 20.0,
    BookingCategory.AIRPORT: 20.0,
}


@dataclass(frozen=True)
class PricingConfig:
    regular_included_km: float = 3.0
    deadhead_min_movement_km: float = 0.5
    depot: Coordinate = Coordinate(latitude=12.7401984, longitude=77.824)
    city_center: Coordinate = Coordinate(latitude=12.7401984, longitude=77.824)
    airport_reference_distance_km: float = 40.0
    outstation_slab_max_round_trip_km: float = 300.0
    gst_rate_charges: float = 0.05
    gst_rate_platform_fee: float = 0.18

    @classmethod
    def from_settings(cls, settings: PricingSettings) -> "PricingConfig":
        return cls(
            regular_included_km=settings.regular_included_km,
            deadhead_min_movement_km=settings.deadhead_min_movement_km,
            depot=Coordinate(
                latitude=settings.depot_latitude, longitude=settings.depot_longitude
            ),
            city_center=Coordinate(
                latitude=settings.city_center_latitude,
                longitude=settings.city_center_longitude,
            ),
            airport_reference_distance_km=settings.airport_reference_distance_km,
            outstation_slab_max_round_trip_km=settings.outstation_slab_max_round_trip_km,
            gst_rate_charges=settings.gst_rate_charges,
            gst_rate_platform_fee=settings.gst_rate_platform_fee,
        )
