"""Completion repositories: one per category table plus a cross-table facade."""

from typing import Any, ClassVar, Generic, TypeVar

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from booking import BookingCategory

from ..schema import (
    AirportTripCompletion,
    Base,
    CompletionRecord,
    OutstationTripCompletion,
    RentalTripCompletion,
    TripCompletion,
)

ModelT = TypeVar("ModelT", bound=Base)


class CategoryCompletionRepository(Generic[ModelT]):
    """Generic CRUD over one category's completion table."""

    model_class: ClassVar[type[Any]]
    category: ClassVar[BookingCategory]

    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, **fields: Any) -> ModelT:
        record = self.model_class(booking_category=self.category.value, **fields)
        self.session.add(record)
        self.session.flush()
        return record

    def get_by_booking(self, booking_id: str) -> ModelT | None:
        stmt = select(self.model_class).where(self.model_class.booking_id == booking_id)
        return self.session.execute(stmt).scalars().first()

    def list_by_driver(self, driver_id: str) -> list[ModelT]:
        stmt = select(self.model_class).where(self.model_class.driver_id == driver_id)
        return list(self.session.execute(stmt).scalars().all())

    def list_by_customer(self, customer_id: str) -> list[ModelT]:
        stmt = select(self.model_class).where(self.model_class.customer_id == customer_id)
        return list(self.session.execute(stmt).scalars().all())

    def fare_totals(self, column: str, value: str) -> tuple[float, int]:
        """Sum of ``total_fare`` and row count where ``column == value``."""
        stmt = select(
            func.coalesce(func.sum(self.model_class.total_fare), 0.0),
            func.count(self.model_class.id),
        ).where(getattr(self.model_class, column) == value)
        total, count = self.session.execute(stmt).one()
        return float(total), int(count)


class RegularCompletionRepository(CategoryCompletionRepository[TripCompletion]):
    model_class = TripCompletion
    category = BookingCategory.REGULAR


class RentalCompletionRepository(CategoryCompletionRepository[RentalTripCompletion]):
    model_class = RentalTripCompletion
    category = BookingCategory.RENTAL


class OutstationCompletionRepository(CategoryCompletionRepository[OutstationTripCompletion]):
    model_class = OutstationTripCompletion
    category = BookingCategory.OUTSTATION


class AirportCompletionRepository(CategoryCompletionRepository[AirportTripCompletion]):
    model_class = AirportTripCompletion
    category = BookingCategory.AIRPORT


class CompletionRepository:
    """Queries spanning every category's completion table."""

    repository_classes: ClassVar[tuple[type[CategoryCompletionRepository[Any]], ...]] = (
        RegularCompletionRepository,
        RentalCompletionRepository,
        OutstationCompletionRepository,
        AirportCompletionRepository,
    )

    def __init__(self, session: Session) -> None:
        self.session = session
        self._by_category = {cls.category: cls(session) for cls in self.repository_classes}

    def for_category(self, category: BookingCategory) -> CategoryCompletionRepository[Any]:
        return self._by_category[category]

    def _selected(
        self, category: BookingCategory | None
    ) -> list[CategoryCompletionRepository[Any]]:
        if category is None:
            return list(self._by_category.values())
        return [self._by_category[category]]

    def get_by_booking(self, booking_id: str) -> CompletionRecord | None:
        for repo in self._by_category.values():
            record = repo.get_by_booking(booking_id)
            if record is not None:
                return record
        return None

    def list_by_driver(
        self, driver_id: str, category: BookingCategory | None = None
    ) -> list[CompletionRecord]:
        records = [r for repo in self._selected(category) for r in repo.list_by_driver(driver_id)]
        return sorted(records, key=lambda r: r.completed_at, reverse=True)

    def list_by_customer(
        self, customer_id: str, category: BookingCategory | None = None
    ) -> list[CompletionRecord]:
        records = [
            r for repo in self._selected(category) for r in repo.list_by_customer(customer_id)
        ]
        return sorted(records, key=lambda r: r.completed_at, reverse=True)

    def driver_earnings(self, driver_id: str) -> tuple[float, int]:
        return self._sum_totals("driver_id", driver_id)

    def customer_spending(self, customer_id: str) -> tuple[float, int]:
        return self._sum_totals("customer_id", customer_id)

    def _sum_totals(self, column: str, value: str) -> tuple[float, int]:
        total, count = 0.0, 0
        for repo in self._by_category.values():
            repo_total, repo_count = repo.fare_totals(column, value)
            total += repo_total
            count += repo_count
        return total, count
