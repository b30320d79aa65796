"""Booking repository returning domain bookings."""

from sqlalchemy.orm import Session

from booking import Booking, BookingCategory, Coordinate, TripDirection
from core.exceptions import ValidationError

from ..schema import BookingRecord


class BookingRepository:
    def __init__(self, session: Session):
        self.session = session

    def create(self, booking: Booking) -> None:
        trip_type = booking.trip_type
        if trip_type is None and booking.trip_direction:
            trip_type = booking.trip_direction.value
        record = BookingRecord(
            booking_id=booking.booking_id,
            customer_id=booking.customer_id,
            booking_category=booking.category.value,
            vehicle_class=booking.vehicle_class,
            trip_type=trip_type,
            rental_hours=booking.rental_hours,
            scheduled_time=booking.scheduled_time,
            pickup_address=booking.pickup_address,
            destination_address=booking.destination_address,
            pickup_latitude=booking.pickup.latitude if booking.pickup else None,
            pickup_longitude=booking.pickup.longitude if booking.pickup else None,
            destination_latitude=booking.dropoff.latitude if booking.dropoff else None,
            destination_longitude=booking.dropoff.longitude if booking.dropoff else None,
        )
        self.session.add(record)

    def get(self, booking_id: str) -> Booking | None:
        """Get booking by ID, returning domain model."""
        record = self.session.get(BookingRecord, booking_id)
        if record is None:
            return None
        return self._to_domain(record)

    def _to_domain(self, record: BookingRecord) -> Booking:
        try:
            category = BookingCategory(record.booking_category)
        except ValueError:
            raise ValidationError(
                f"Invalid booking category: {record.booking_category}",
                details={"booking_id": record.booking_id},
            ) from None

        trip_direction = None
        if record.trip_type:
            try:
                trip_direction = TripDirection(record.trip_type)
            except ValueError:
                # Regular bookings carry free-form trip types that do not affect pricing
                trip_direction = None

        pickup = None
        if record.pickup_latitude is not None and record.pickup_longitude is not None:
            pickup = Coordinate(
                latitude=record.pickup_latitude, longitude=record.pickup_longitude
            )
        dropoff = None
        if record.destination_latitude is not None and record.destination_longitude is not None:
            dropoff = Coordinate(
                latitude=record.destination_latitude, longitude=record.destination_longitude
            )

        return Booking(
            booking_id=record.booking_id,
            customer_id=record.customer_id,
            category=category,
            vehicle_class=record.vehicle_class,
            trip_direction=trip_direction,
            trip_type=record.trip_type,
            rental_hours=record.rental_hours,
            scheduled_time=record.scheduled_time,
            pickup_address=record.pickup_address,
            destination_address=record.destination_address,
            pickup=pickup,
            dropoff=dropoff,
        )
