"""SQLAlchemy ORM models for rate cards, bookings and trip completions."""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, Boolean, Float, Index, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from pricing.models import SLAB_DISTANCES_KM

from .utils import utc_now


class Base(DeclarativeBase):
    pass


class FareMatrix(Base):
    __tablename__ = "fare_matrix"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    booking_category: Mapped[str] = mapped_column(String, nullable=False)
    vehicle_class: Mapped[str] = mapped_column(String, nullable=False)
    base_fare: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    per_km_rate: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    surge_multiplier: Mapped[float | None] = mapped_column(Float, nullable=True)
    # Free-form: legacy rows hold values such as "" or "10.00"
    platform_fee: Mapped[str | None] = mapped_column(String, nullable=True)
    minimum_fare: Mapped[float | None] = mapped_column(Float, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    __table_args__ = (
        Index("idx_fare_matrix_lookup", "booking_category", "vehicle_class", "is_active"),
    )


class RentalFare(Base):
    __tablename__ = "rental_fares"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    vehicle_class: Mapped[str] = mapped_column(String, nullable=False)
    package_name: Mapped[str] = mapped_column(String, nullable=False)
    duration_hours: Mapped[float] = mapped_column(Float, nullable=False)
    km_included: Mapped[float] = mapped_column(Float, nullable=False)
    base_fare: Mapped[float] = mapped_column(Float, nullable=False)
    extra_km_rate: Mapped[float] = mapped_column(Float, nullable=False)
    extra_minute_rate: Mapped[float | None] = mapped_column(Float, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    __table_args__ = (Index("idx_rental_fares_vehicle", "vehicle_class", "is_active"),)


class OutstationFare(Base):
    __tablename__ = "outstation_fares"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    vehicle_class: Mapped[str] = mapped_column(String, nullable=False)
    base_fare: Mapped[float] = mapped_column(Float, nullable=False)
    per_km_rate: Mapped[float] = mapped_column(Float, nullable=False)
    driver_allowance_per_day: Mapped[float] = mapped_column(Float, nullable=False)
    daily_km_limit: Mapped[float] = mapped_column(Float, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    __table_args__ = (Index("idx_outstation_fares_vehicle", "vehicle_class", "is_active"),)


class OutstationPackage(Base):
    """Slab fare table; one ``slab_<N>km`` column per one-way band."""

    __tablename__ = "outstation_packages"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    vehicle_class: Mapped[str] = mapped_column(String, nullable=False)
    extra_km_rate: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    use_slab_system: Mapped[bool] = mapped_column(Boolean, default=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    slab_10km: Mapped[float | None] = mapped_column(Float, nullable=True)
    slab_20km: Mapped[float | None] = mapped_column(Float, nullable=True)
    slab_30km: Mapped[float | None] = mapped_column(Float, nullable=True)
    slab_40km: Mapped[float | None] = mapped_column(Float, nullable=True)
    slab_50km: Mapped[float | None] = mapped_column(Float, nullable=True)
    slab_60km: Mapped[float | None] = mapped_column(Float, nullable=True)
    slab_70km: Mapped[float | None] = mapped_column(Float, nullable=True)
    slab_80km: Mapped[float | None] = mapped_column(Float, nullable=True)
    slab_90km: Mapped[float | None] = mapped_column(Float, nullable=True)
    slab_100km: Mapped[float | None] = mapped_column(Float, nullable=True)
    slab_110km: Mapped[float | None] = mapped_column(Float, nullable=True)
    slab_120km: Mapped[float | None] = mapped_column(Float, nullable=True)
    slab_130km: Mapped[float | None] = mapped_column(Float, nullable=True)
    slab_140km: Mapped[float | None] = mapped_column(Float, nullable=True)
    slab_150km: Mapped[float | None] = mapped_column(Float, nullable=True)

    __table_args__ = (Index("idx_outstation_packages_vehicle", "vehicle_class", "is_active"),)

    def slab_fares(self) -> dict[int, float | None]:
        return {km: getattr(self, f"slab_{km}km") for km in SLAB_DISTANCES_KM}


class AirportFare(Base):
    __tablename__ = "airport_fares"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    vehicle_class: Mapped[str] = mapped_column(String, nullable=False)
    city_to_airport_fare: Mapped[float] = mapped_column(Float, nullable=False)
    airport_to_city_fare: Mapped[float] = mapped_column(Float, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    __table_args__ = (Index("idx_airport_fares_vehicle", "vehicle_class", "is_active"),)


class ZoneRecord(Base):
    __tablename__ = "zones"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    center_latitude: Mapped[float] = mapped_column(Float, nullable=False)
    center_longitude: Mapped[float] = mapped_column(Float, nullable=False)
    radius_km: Mapped[float] = mapped_column(Float, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)


class BookingRecord(Base):
    __tablename__ = "bookings"

    booking_id: Mapped[str] = mapped_column(String, primary_key=True)
    customer_id: Mapped[str] = mapped_column(String, nullable=False)
    booking_category: Mapped[str] = mapped_column(String, nullable=False)
    vehicle_class: Mapped[str] = mapped_column(String, nullable=False)
    trip_type: Mapped[str | None] = mapped_column(String, nullable=True)
    rental_hours: Mapped[int | None] = mapped_column(Integer, nullable=True)
    scheduled_time: Mapped[datetime | None] = mapped_column(nullable=True)
    pickup_address: Mapped[str] = mapped_column(String, default="")
    destination_address: Mapped[str] = mapped_column(String, default="")
    pickup_latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    pickup_longitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    destination_latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    destination_longitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    created_at: Mapped[datetime] = mapped_column(default=lambda: utc_now())


class CompletionColumns:
    """Columns shared by every category's completion table."""

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    booking_id: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    driver_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    customer_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    booking_category: Mapped[str] = mapped_column(String, nullable=False)
    vehicle_class: Mapped[str] = mapped_column(String, nullable=False)

    driver_name: Mapped[str] = mapped_column(String, default="Driver")
    driver_phone: Mapped[str] = mapped_column(String, default="")
    driver_rating: Mapped[float | None] = mapped_column(Float, nullable=True)
    vehicle_id: Mapped[str | None] = mapped_column(String, nullable=True)
    vehicle_make: Mapped[str] = mapped_column(String, default="")
    vehicle_model: Mapped[str] = mapped_column(String, default="")
    vehicle_color: Mapped[str] = mapped_column(String, default="")
    vehicle_license_plate: Mapped[str] = mapped_column(String, default="")

    pickup_address: Mapped[str] = mapped_column(String, default="")
    destination_address: Mapped[str] = mapped_column(String, default="")
    actual_distance_km: Mapped[float] = mapped_column(Float, nullable=False)
    actual_duration_minutes: Mapped[float] = mapped_column(Float, nullable=False)

    base_fare: Mapped[float] = mapped_column(Float, default=0.0)
    distance_fare: Mapped[float] = mapped_column(Float, default=0.0)
    time_fare: Mapped[float] = mapped_column(Float, default=0.0)
    surge_charges: Mapped[float] = mapped_column(Float, default=0.0)
    deadhead_charges: Mapped[float] = mapped_column(Float, default=0.0)
    extra_km_charges: Mapped[float] = mapped_column(Float, default=0.0)
    driver_allowance: Mapped[float] = mapped_column(Float, default=0.0)
    platform_fee: Mapped[float] = mapped_column(Float, default=0.0)
    gst_on_charges: Mapped[float] = mapped_column(Float, default=0.0)
    gst_on_platform_fee: Mapped[float] = mapped_column(Float, default=0.0)
    total_fare: Mapped[float] = mapped_column(Float, nullable=False)
    fare_details: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)

    completed_at: Mapped[datetime] = mapped_column(default=lambda: utc_now())


class TripCompletion(CompletionColumns, Base):
    __tablename__ = "trip_completions"

    trip_type: Mapped[str | None] = mapped_column(String, nullable=True)


class RentalTripCompletion(CompletionColumns, Base):
    __tablename__ = "rental_trip_completions"

    rental_hours: Mapped[int] = mapped_column(Integer, nullable=False)
    actual_hours_used: Mapped[int] = mapped_column(Integer, nullable=False)


class OutstationTripCompletion(CompletionColumns, Base):
    __tablename__ = "outstation_trip_completions"

    trip_type: Mapped[str] = mapped_column(String, nullable=False)
    scheduled_time: Mapped[datetime | None] = mapped_column(nullable=True)
    actual_days: Mapped[int] = mapped_column(Integer, nullable=False)


class AirportTripCompletion(CompletionColumns, Base):
    __tablename__ = "airport_trip_completions"

    scheduled_time: Mapped[datetime | None] = mapped_column(nullable=True)
    direction: Mapped[str] = mapped_column(String, nullable=False)


CompletionRecord = (
    TripCompletion | RentalTripCompletion | OutstationTripCompletion | AirportTripCompletion
)
