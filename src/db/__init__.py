"""Database persistence module."""

from .database import init_database
from .schema import (
    AirportFare,
    AirportTripCompletion,
    Base,
    BookingRecord,
    FareMatrix,
    OutstationFare,
    OutstationPackage,
    OutstationTripCompletion,
    RentalFare,
    RentalTripCompletion,
    TripCompletion,
    ZoneRecord,
)
from .transaction import transaction

__all__ = [
    "AirportFare",
    "AirportTripCompletion",
    "Base",
    "BookingRecord",
    "FareMatrix",
    "OutstationFare",
    "OutstationPackage",
    "OutstationTripCompletion",
    "RentalFare",
    "RentalTripCompletion",
    "TripCompletion",
    "ZoneRecord",
    "init_database",
    "transaction",
]
