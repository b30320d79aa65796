from datetime import datetime

import pytest
from sqlalchemy.exc import IntegrityError

from booking import BookingCategory
from db import transaction
from db.repositories import CompletionRepository
from db.utils import json_safe


def completion_fields(booking_id, driver_id="d-1", customer_id="c-1", total=100.0, **extra):
    return {
        "booking_id": booking_id,
        "driver_id": driver_id,
        "customer_id": customer_id,
        "vehicle_class": "sedan",
        "actual_distance_km": 10.0,
        "actual_duration_minutes": 20.0,
        "total_fare": total,
        "fare_details": {"per_km_rate": 15.0},
        **extra,
    }


@pytest.fixture
def populated(session_factory):
    with session_factory() as session, transaction(session):
        repo = CompletionRepository(session)
        repo.for_category(BookingCategory.REGULAR).add(
            **completion_fields("b-1", total=175.0, completed_at=datetime(2026, 1, 1, 9))
        )
        repo.for_category(BookingCategory.RENTAL).add(
            **completion_fields(
                "b-2",
                total=706.0,
                rental_hours=4,
                actual_hours_used=5,
                completed_at=datetime(2026, 1, 2, 9),
            )
        )
        repo.for_category(BookingCategory.AIRPORT).add(
            **completion_fields(
                "b-3",
                customer_id="c-2",
                total=969.0,
                direction="cityCenter-to-airport",
                completed_at=datetime(2026, 1, 3, 9),
            )
        )
        repo.for_category(BookingCategory.OUTSTATION).add(
            **completion_fields(
                "b-4",
                driver_id="d-2",
                total=2007.0,
                trip_type="one_way",
                actual_days=1,
                completed_at=datetime(2026, 1, 4, 9),
            )
        )
    return session_factory


@pytest.mark.unit
class TestCompletionRepository:
    def test_get_by_booking_searches_every_table(self, populated):
        with populated() as session:
            repo = CompletionRepository(session)

            airport = repo.get_by_booking("b-3")
            outstation = repo.get_by_booking("b-4")

            assert airport.direction == "cityCenter-to-airport"
            assert airport.booking_category == "airport"
            assert outstation.actual_days == 1
            assert repo.get_by_booking("missing") is None

    def test_list_by_driver_newest_first(self, populated):
        with populated() as session:
            records = CompletionRepository(session).list_by_driver("d-1")

            assert [r.booking_id for r in records] == ["b-3", "b-2", "b-1"]

    def test_list_by_driver_category_filter(self, populated):
        with populated() as session:
            records = CompletionRepository(session).list_by_driver(
                "d-1", BookingCategory.RENTAL
            )

            assert [r.booking_id for r in records] == ["b-2"]

    def test_list_by_customer(self, populated):
        with populated() as session:
            records = CompletionRepository(session).list_by_customer("c-2")

            assert [r.booking_id for r in records] == ["b-3"]

    def test_driver_earnings_sum_total_fare(self, populated):
        with populated() as session:
            repo = CompletionRepository(session)

            assert repo.driver_earnings("d-1") == (175.0 + 706.0 + 969.0, 3)
            assert repo.driver_earnings("nobody") == (0.0, 0)

    def test_customer_spending(self, populated):
        with populated() as session:
            assert CompletionRepository(session).customer_spending("c-1") == (
                175.0 + 706.0 + 2007.0,
                3,
            )

    def test_booking_id_unique_per_table(self, populated):
        with populated() as session:
            repo = CompletionRepository(session).for_category(BookingCategory.REGULAR)

            with pytest.raises(IntegrityError), transaction(session):
                repo.add(**completion_fields("b-1"))

    def test_fare_details_round_trip_as_json(self, populated):
        with populated() as session:
            record = CompletionRepository(session).get_by_booking("b-1")

            assert record.fare_details == {"per_km_rate": 15.0}


@pytest.mark.unit
class TestJsonSafe:
    def test_replaces_non_finite_floats(self):
        value = {"a": float("nan"), "b": [1.0, float("inf")], "c": {"d": -float("inf")}, "e": "x"}

        assert json_safe(value) == {"a": None, "b": [1.0, None], "c": {"d": None}, "e": "x"}
