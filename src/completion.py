"""Trip completion: booking lookup, fare calculation and idempotent persistence."""

import logging
import math
from datetime import datetime
from typing import Any, NamedTuple

from pydantic import BaseModel, ConfigDict
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from booking import (
    AirportTrip,
    Booking,
    BookingCategory,
    DriverDetails,
    OutstationTrip,
    RegularTrip,
    RentalTrip,
    TripDirection,
    TripFacts,
    TripMeasurement,
)
from core.exceptions import NotFoundError, PersistenceError, ValidationError
from db.repositories import BookingRepository, CompletionRepository, RateRepository
from db.transaction import transaction
from db.utils import json_safe
from fare_logging import log_booking_context
from pricing import FareEngine, FareResult, PricingConfig

logger = logging.getLogger(__name__)


class TripCompletionRecord(BaseModel):
    """Stored completion, flattened across the four category tables."""

    model_config = ConfigDict(from_attributes=True)

    booking_id: str
    booking_category: BookingCategory
    driver_id: str
    customer_id: str
    vehicle_class: str
    driver_name: str
    driver_phone: str
    driver_rating: float | None = None
    vehicle_id: str | None = None
    vehicle_make: str = ""
    vehicle_model: str = ""
    vehicle_color: str = ""
    vehicle_license_plate: str = ""
    pickup_address: str = ""
    destination_address: str = ""
    actual_distance_km: float
    actual_duration_minutes: float
    base_fare: float
    distance_fare: float
    time_fare: float
    surge_charges: float
    deadhead_charges: float
    extra_km_charges: float
    driver_allowance: float
    platform_fee: float
    gst_on_charges: float
    gst_on_platform_fee: float
    total_fare: float
    fare_details: dict[str, Any]
    completed_at: datetime

    trip_type: str | None = None
    rental_hours: int | None = None
    actual_hours_used: int | None = None
    scheduled_time: datetime | None = None
    actual_days: int | None = None
    direction: str | None = None


class CompletionOutcome(NamedTuple):
    record: TripCompletionRecord
    created: bool


class EarningsSummary(BaseModel):
    party_id: str
    total: float
    trip_count: int


def build_trip_facts(
    booking: Booking, measurement: TripMeasurement, default_rental_hours: int = 4
) -> TripFacts:
    """Combine the booking with the driver app's measurements.

    Measured coordinates take precedence over the booked ones.
    """
    pickup = measurement.pickup or booking.pickup
    dropoff = measurement.dropoff or booking.dropoff
    common: dict[str, Any] = {
        "vehicle_class": booking.vehicle_class,
        "actual_distance_km": measurement.actual_distance_km,
        "actual_duration_minutes": measurement.actual_duration_minutes,
        "scheduled_time": booking.scheduled_time,
    }

    def require(value: Any, name: str) -> Any:
        if value is None:
            raise ValidationError(
                f"{name} coordinates required for {booking.category.value} bookings",
                details={"booking_id": booking.booking_id},
            )
        return value

    if booking.category == BookingCategory.REGULAR:
        return RegularTrip(
            pickup=require(pickup, "Pickup"), dropoff=require(dropoff, "Drop-off"), **common
        )
    if booking.category == BookingCategory.RENTAL:
        return RentalTrip(
            package_hours=booking.rental_hours or default_rental_hours,
            dropoff=require(dropoff, "Drop-off"),
            **common,
        )
    if booking.category == BookingCategory.OUTSTATION:
        return OutstationTrip(
            direction=booking.trip_direction or TripDirection.ROUND_TRIP, **common
        )
    return AirportTrip(
        pickup=require(pickup, "Pickup"), dropoff=require(dropoff, "Drop-off"), **common
    )


class TripCompletionService:
    """Prices completed trips and records them once per booking.

    Each call opens its own session, so one service instance can be shared
    across request threads.
    """

    def __init__(
        self,
        session_factory: sessionmaker[Session],
        config: PricingConfig | None = None,
        default_rental_hours: int = 4,
    ) -> None:
        self.session_factory = session_factory
        self.config = config or PricingConfig()
        self.default_rental_hours = default_rental_hours

    def quote(self, trip: TripFacts) -> FareResult:
        """Price trip facts without persisting anything."""
        with self.session_factory() as session:
            return FareEngine(RateRepository(session), self.config).calculate(trip)

    def complete(
        self, booking_id: str, measurement: TripMeasurement, driver: DriverDetails
    ) -> CompletionOutcome:
        """Compute and store the fare for a completed booking.

        A booking that already has a completion returns the stored record
        unchanged with ``created=False``.

        Raises:
            NotFoundError: Unknown booking id.
            ConfigurationError: Rates missing or invalid; nothing is written.
            PersistenceError: The database read or write failed.
        """
        with self.session_factory() as session:
            try:
                completions = CompletionRepository(session)
                existing = completions.get_by_booking(booking_id)
                if existing is not None:
                    logger.info(f"Booking {booking_id} already completed; returning stored record")
                    return CompletionOutcome(TripCompletionRecord.model_validate(existing), False)

                booking = BookingRepository(session).get(booking_id)
                if booking is None:
                    raise NotFoundError(
                        f"Booking not found: {booking_id}", details={"booking_id": booking_id}
                    )

                with log_booking_context(
                    booking_id,
                    category=booking.category.value,
                    vehicle_class=booking.vehicle_class,
                    driver_id=driver.driver_id,
                    customer_id=booking.customer_id,
                ):
                    trip = build_trip_facts(booking, measurement, self.default_rental_hours)
                    result = FareEngine(RateRepository(session), self.config).calculate(trip)
                    fields = self._completion_fields(booking, driver, result)

                    try:
                        with transaction(session):
                            record = completions.for_category(booking.category).add(**fields)
                    except IntegrityError:
                        # A concurrent completion won the unique booking_id race
                        logger.info(f"Booking {booking_id} completed concurrently")
                        existing = completions.get_by_booking(booking_id)
                        if existing is None:
                            raise
                        return CompletionOutcome(
                            TripCompletionRecord.model_validate(existing), False
                        )

                    logger.info(
                        f"Stored {booking.category.value} completion, "
                        f"total {result.breakdown.total_fare:.0f}"
                    )
                    return CompletionOutcome(TripCompletionRecord.model_validate(record), True)
            except SQLAlchemyError as e:
                raise PersistenceError(
                    f"Failed to store completion for booking {booking_id}",
                    details={"booking_id": booking_id, "error": str(e)},
                ) from e

    def _completion_fields(
        self, booking: Booking, driver: DriverDetails, result: FareResult
    ) -> dict[str, Any]:
        breakdown = result.breakdown
        details = breakdown.details
        fare_details = breakdown.details.model_dump(mode="json", exclude_none=True)
        fare_details["diagnostics"] = [
            e.model_dump(mode="json") for e in result.diagnostics.events
        ]

        fields: dict[str, Any] = {
            "booking_id": booking.booking_id,
            "customer_id": booking.customer_id,
            "vehicle_class": booking.vehicle_class,
            **driver.model_dump(),
            "pickup_address": booking.pickup_address,
            "destination_address": booking.destination_address,
            "actual_distance_km": details.actual_distance_km,
            "actual_duration_minutes": details.actual_duration_minutes,
            **breakdown.components(),
            "total_fare": breakdown.total_fare,
            "fare_details": json_safe(fare_details),
        }

        if booking.category == BookingCategory.REGULAR:
            fields["trip_type"] = booking.trip_type
        elif booking.category == BookingCategory.RENTAL:
            fields["rental_hours"] = booking.rental_hours or self.default_rental_hours
            fields["actual_hours_used"] = math.ceil(details.actual_duration_minutes / 60)
        elif booking.category == BookingCategory.OUTSTATION:
            fields["trip_type"] = details.trip_direction
            fields["scheduled_time"] = booking.scheduled_time
            fields["actual_days"] = details.days_calculated
        else:
            fields["scheduled_time"] = booking.scheduled_time
            fields["direction"] = details.direction
        return fields

    def get_completion(self, booking_id: str) -> TripCompletionRecord:
        with self.session_factory() as session:
            record = CompletionRepository(session).get_by_booking(booking_id)
            if record is None:
                raise NotFoundError(
                    f"No completion for booking {booking_id}",
                    details={"booking_id": booking_id},
                )
            return TripCompletionRecord.model_validate(record)

    def list_driver_completions(
        self, driver_id: str, category: BookingCategory | None = None
    ) -> list[TripCompletionRecord]:
        with self.session_factory() as session:
            records = CompletionRepository(session).list_by_driver(driver_id, category)
            return [TripCompletionRecord.model_validate(r) for r in records]

    def list_customer_completions(
        self, customer_id: str, category: BookingCategory | None = None
    ) -> list[TripCompletionRecord]:
        with self.session_factory() as session:
            records = CompletionRepository(session).list_by_customer(customer_id, category)
            return [TripCompletionRecord.model_validate(r) for r in records]

    def driver_earnings(self, driver_id: str) -> EarningsSummary:
        with self.session_factory() as session:
            total, count = CompletionRepository(session).driver_earnings(driver_id)
        return EarningsSummary(party_id=driver_id, total=total, trip_count=count)

    def customer_spending(self, customer_id: str) -> EarningsSummary:
        with self.session_factory() as session:
            total, count = CompletionRepository(session).customer_spending(customer_id)
        return EarningsSummary(party_id=customer_id, total=total, trip_count=count)
