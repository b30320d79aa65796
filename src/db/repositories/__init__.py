"""Repository layer for database CRUD operations."""

from .booking_repository import BookingRepository
from .completion_repository import (
    AirportCompletionRepository,
    CategoryCompletionRepository,
    CompletionRepository,
    OutstationCompletionRepository,
    RegularCompletionRepository,
    RentalCompletionRepository,
)
from .rate_repository import RateRepository

__all__ = [
    "AirportCompletionRepository",
    "BookingRepository",
    "CategoryCompletionRepository",
    "CompletionRepository",
    "OutstationCompletionRepository",
    "RateRepository",
    "RegularCompletionRepository",
    "RentalCompletionRepository",
]
