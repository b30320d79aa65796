"""Booking categories and the trip facts a fare is computed from."""

from datetime import datetime
from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, Field


class BookingCategory(str, Enum):
    """Product types, each with its own rate schema and calculator."""

    REGULAR = "regular"
    RENTAL = "rental"
    OUTSTATION = "outstation"
    AIRPORT = "airport"


class TripDirection(str, Enum):
    ONE_WAY = "one_way"
    ROUND_TRIP = "round_trip"


class Coordinate(BaseModel):
    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)

    model_config = {"frozen": True}


class _TripFactsBase(BaseModel):
    # Measured values are coerced (and flagged) by the calculators rather than
    # rejected here, so NaN/negative readings are accepted at this boundary.
    vehicle_class: str = Field(min_length=1)
    actual_distance_km: float
    actual_duration_minutes: float
    scheduled_time: datetime | None = None

    model_config = {"frozen": True}


class RegularTrip(_TripFactsBase):
    category: Literal[BookingCategory.REGULAR] = BookingCategory.REGULAR
    pickup: Coordinate
    dropoff: Coordinate


class RentalTrip(_TripFactsBase):
    category: Literal[BookingCategory.RENTAL] = BookingCategory.RENTAL
    package_hours: int = Field(default=4, ge=1)
    dropoff: Coordinate


class OutstationTrip(_TripFactsBase):
    category: Literal[BookingCategory.OUTSTATION] = BookingCategory.OUTSTATION
    direction: TripDirection = TripDirection.ROUND_TRIP


class AirportTrip(_TripFactsBase):
    category: Literal[BookingCategory.AIRPORT] = BookingCategory.AIRPORT
    pickup: Coordinate
    dropoff: Coordinate
    # GPS measurements are optional for the fixed-corridor product
    actual_distance_km: float = 0.0
    actual_duration_minutes: float = 0.0


TripFacts = Annotated[
    RegularTrip | RentalTrip | OutstationTrip | AirportTrip,
    Field(discriminator="category"),
]


class Booking(BaseModel):
    """Booking record as resolved from the booking store."""

    booking_id: str
    customer_id: str
    category: BookingCategory
    vehicle_class: str
    trip_direction: TripDirection | None = None
    # Stored booking type; free-form for regular bookings
    trip_type: str | None = None
    rental_hours: int | None = None
    scheduled_time: datetime | None = None
    pickup_address: str = ""
    destination_address: str = ""
    pickup: Coordinate | None = None
    dropoff: Coordinate | None = None


class TripMeasurement(BaseModel):
    """GPS-derived facts supplied by the driver app at trip completion."""

    actual_distance_km: float
    actual_duration_minutes: float
    pickup: Coordinate | None = None
    dropoff: Coordinate | None = None


class DriverDetails(BaseModel):
    driver_id: str
    driver_name: str = "Driver"
    driver_phone: str = ""
    driver_rating: float | None = Field(default=None, ge=0.0, le=5.0)
    vehicle_id: str | None = None
    vehicle_make: str = ""
    vehicle_model: str = ""
    vehicle_color: str = ""
    vehicle_license_plate: str = ""
