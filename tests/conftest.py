from datetime import datetime
from pathlib import Path

import pytest

from booking import Booking, BookingCategory, TripDirection
from db import (
    AirportFare,
    FareMatrix,
    OutstationFare,
    OutstationPackage,
    RentalFare,
    ZoneRecord,
    init_database,
)
from db.repositories import BookingRepository
from pricing import PricingConfig
from pricing.models import SLAB_DISTANCES_KM
from tests.factories import (
    DEPOT,
    InMemoryRateSource,
    north_of_depot,
    slab_fare,
    standard_rate_source,
)


@pytest.fixture
def temp_sqlite_db(tmp_path) -> Path:
    """Temporary SQLite database for persistence tests."""
    return tmp_path / "test_fare_engine.db"


@pytest.fixture
def session_factory(temp_sqlite_db):
    return init_database(str(temp_sqlite_db))


@pytest.fixture
def pricing_config() -> PricingConfig:
    return PricingConfig()


@pytest.fixture
def rate_source() -> InMemoryRateSource:
    """Full sedan rate configuration held in memory."""
    return standard_rate_source()


def seed_rate_tables(session, vehicle_class: str = "sedan") -> None:
    """Insert the same sedan rate configuration as ``standard_rate_source``."""
    platform_fees = {
        BookingCategory.REGULAR: "10",
        BookingCategory.RENTAL: "20",
        BookingCategory.OUTSTATION: "10",
        BookingCategory.AIRPORT: "20",
    }
    for category, fee in platform_fees.items():
        session.add(
            FareMatrix(
                booking_category=category.value,
                vehicle_class=vehicle_class,
                base_fare=50.0,
                per_km_rate=15.0,
                surge_multiplier=1.0,
                platform_fee=fee,
                minimum_fare=80.0,
            )
        )
    session.add_all(
        [
            RentalFare(
                vehicle_class=vehicle_class,
                package_name="4 hrs / 40 km",
                duration_hours=4,
                km_included=40,
                base_fare=500,
                extra_km_rate=15,
                extra_minute_rate=2,
            ),
            RentalFare(
                vehicle_class=vehicle_class,
                package_name="6 hrs / 60 km",
                duration_hours=6,
                km_included=60,
                base_fare=650,
                extra_km_rate=12,
                extra_minute_rate=2,
            ),
            OutstationFare(
                vehicle_class=vehicle_class,
                base_fare=300.0,
                per_km_rate=12.0,
                driver_allowance_per_day=400.0,
                daily_km_limit=120.0,
            ),
            OutstationPackage(
                vehicle_class=vehicle_class,
                extra_km_rate=14.0,
                **{f"slab_{km}km": slab_fare(km) for km in SLAB_DISTANCES_KM},
            ),
            AirportFare(
                vehicle_class=vehicle_class,
                city_to_airport_fare=800.0,
                airport_to_city_fare=900.0,
            ),
            ZoneRecord(
                name="Hosur Inner Ring",
                center_latitude=DEPOT.latitude,
                center_longitude=DEPOT.longitude,
                radius_km=10.0,
            ),
            ZoneRecord(
                name="Hosur Outer Ring",
                center_latitude=DEPOT.latitude,
                center_longitude=DEPOT.longitude,
                radius_km=25.0,
            ),
        ]
    )


@pytest.fixture
def seeded_session_factory(session_factory):
    """Session factory over a database holding the standard sedan rate cards."""
    with session_factory() as session:
        seed_rate_tables(session)
        session.commit()
    return session_factory


def sample_bookings(vehicle_class: str = "sedan") -> list[Booking]:
    """One booking per category, priced by the standard rate cards."""
    return [
        Booking(
            booking_id="reg-1",
            customer_id="cust-1",
            category=BookingCategory.REGULAR,
            vehicle_class=vehicle_class,
            trip_type="instant",
            pickup_address="Hosur Bus Stand",
            destination_address="Mathigiri",
            pickup=DEPOT,
            dropoff=north_of_depot(5),
        ),
        Booking(
            booking_id="rent-1",
            customer_id="cust-1",
            category=BookingCategory.RENTAL,
            vehicle_class=vehicle_class,
            rental_hours=4,
            pickup=DEPOT,
            dropoff=DEPOT,
        ),
        Booking(
            booking_id="out-1",
            customer_id="cust-2",
            category=BookingCategory.OUTSTATION,
            vehicle_class=vehicle_class,
            trip_direction=TripDirection.ONE_WAY,
            scheduled_time=datetime(2026, 3, 1, 6, 0),
        ),
        Booking(
            booking_id="air-1",
            customer_id="cust-2",
            category=BookingCategory.AIRPORT,
            vehicle_class=vehicle_class,
            pickup=DEPOT,
            dropoff=north_of_depot(38),
        ),
        Booking(
            booking_id="bike-1",
            customer_id="cust-3",
            category=BookingCategory.REGULAR,
            vehicle_class="bike",
            pickup=DEPOT,
            dropoff=north_of_depot(5),
        ),
    ]


@pytest.fixture
def booked_session_factory(seeded_session_factory):
    """Seeded rate cards plus ``sample_bookings``."""
    with seeded_session_factory() as session:
        repo = BookingRepository(session)
        for booking in sample_bookings():
            repo.create(booking)
        session.commit()
    return seeded_session_factory
