"""Validated rate-card lookups backed by the SQLite rate tables."""

import logging
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import Select, select
from sqlalchemy.orm import Session

from booking import BookingCategory
from core.exceptions import (
    AmbiguousConfigurationError,
    ConfigurationNotFoundError,
    InvalidConfigurationError,
)
from geo.zones import Zone
from pricing.models import (
    AirportRate,
    FareMatrixRate,
    OutstationRate,
    OutstationSlabPackage,
    RentalPackage,
)

from ..schema import (
    AirportFare,
    FareMatrix,
    OutstationFare,
    OutstationPackage,
    RentalFare,
    ZoneRecord,
)

logger = logging.getLogger(__name__)

RateT = TypeVar("RateT", bound=BaseModel)


def _validate(model: type[RateT], data: dict[str, Any], table: str) -> RateT:
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        fields = [".".join(str(p) for p in err["loc"]) or "row" for err in e.errors()]
        raise InvalidConfigurationError(
            f"Invalid {table} row: {', '.join(fields)}",
            details={"table": table, "fields": fields, "row": data},
        ) from e


class RateRepository:
    """Read-only rate source over the active rows of the rate tables.

    Each lookup filters ``is_active``; lookups that expect a single row
    treat several active rows as a configuration error rather than
    picking one arbitrarily.
    """

    def __init__(self, session: Session):
        self.session = session

    def _at_most_one(self, stmt: Select[Any], table: str, key: dict[str, str]) -> Any:
        rows = list(self.session.execute(stmt).scalars().all())
        if len(rows) > 1:
            raise AmbiguousConfigurationError(
                f"{len(rows)} active {table} rows match {key}",
                details={"table": table, **key, "count": len(rows)},
            )
        return rows[0] if rows else None

    def find_rate(
        self, category: BookingCategory, vehicle_class: str
    ) -> FareMatrixRate | None:
        stmt = select(FareMatrix).where(
            FareMatrix.booking_category == category.value,
            FareMatrix.vehicle_class == vehicle_class,
            FareMatrix.is_active.is_(True),
        )
        row = self._at_most_one(
            stmt,
            FareMatrix.__tablename__,
            {"booking_category": category.value, "vehicle_class": vehicle_class},
        )
        if row is None:
            return None
        return _validate(
            FareMatrixRate,
            {
                "booking_category": row.booking_category,
                "vehicle_class": row.vehicle_class,
                "base_fare": row.base_fare,
                "per_km_rate": row.per_km_rate,
                "surge_multiplier": row.surge_multiplier,
                "platform_fee": row.platform_fee,
                "minimum_fare": row.minimum_fare or 0.0,
            },
            FareMatrix.__tablename__,
        )

    def get_rate(self, category: BookingCategory, vehicle_class: str) -> FareMatrixRate:
        rate = self.find_rate(category, vehicle_class)
        if rate is None:
            raise ConfigurationNotFoundError(
                "Fare configuration not found for this vehicle type",
                details={"booking_category": category.value, "vehicle_class": vehicle_class},
            )
        return rate

    def get_rental_packages(self, vehicle_class: str) -> list[RentalPackage]:
        stmt = (
            select(RentalFare)
            .where(RentalFare.vehicle_class == vehicle_class, RentalFare.is_active.is_(True))
            .order_by(RentalFare.duration_hours, RentalFare.id)
        )
        return [
            _validate(
                RentalPackage,
                {
                    "package_name": row.package_name,
                    "duration_hours": row.duration_hours,
                    "km_included": row.km_included,
                    "base_fare": row.base_fare,
                    "extra_km_rate": row.extra_km_rate,
                    "extra_minute_rate": row.extra_minute_rate,
                },
                RentalFare.__tablename__,
            )
            for row in self.session.execute(stmt).scalars()
        ]

    def get_outstation_rate(self, vehicle_class: str) -> OutstationRate:
        stmt = select(OutstationFare).where(
            OutstationFare.vehicle_class == vehicle_class,
            OutstationFare.is_active.is_(True),
        )
        row = self._at_most_one(
            stmt, OutstationFare.__tablename__, {"vehicle_class": vehicle_class}
        )
        if row is None:
            raise ConfigurationNotFoundError(
                "Outstation fare configuration not found",
                details={"vehicle_class": vehicle_class},
            )
        return _validate(
            OutstationRate,
            {
                "vehicle_class": row.vehicle_class,
                "base_fare": row.base_fare,
                "per_km_rate": row.per_km_rate,
                "driver_allowance_per_day": row.driver_allowance_per_day,
                "daily_km_limit": row.daily_km_limit,
            },
            OutstationFare.__tablename__,
        )

    def get_slab_package(self, vehicle_class: str) -> OutstationSlabPackage | None:
        stmt = select(OutstationPackage).where(
            OutstationPackage.vehicle_class == vehicle_class,
            OutstationPackage.is_active.is_(True),
            OutstationPackage.use_slab_system.is_(True),
        )
        row = self._at_most_one(
            stmt, OutstationPackage.__tablename__, {"vehicle_class": vehicle_class}
        )
        if row is None:
            return None
        return _validate(
            OutstationSlabPackage,
            {
                "vehicle_class": row.vehicle_class,
                "slab_fares": {
                    km: fare for km, fare in row.slab_fares().items() if fare is not None
                },
                "extra_km_rate": row.extra_km_rate,
            },
            OutstationPackage.__tablename__,
        )

    def get_airport_rate(self, vehicle_class: str) -> AirportRate:
        stmt = select(AirportFare).where(
            AirportFare.vehicle_class == vehicle_class,
            AirportFare.is_active.is_(True),
        )
        row = self._at_most_one(stmt, AirportFare.__tablename__, {"vehicle_class": vehicle_class})
        if row is None:
            raise ConfigurationNotFoundError(
                "Airport fare configuration not found",
                details={"vehicle_class": vehicle_class},
            )
        return _validate(
            AirportRate,
            {
                "vehicle_class": row.vehicle_class,
                "city_to_airport_fare": row.city_to_airport_fare,
                "airport_to_city_fare": row.airport_to_city_fare,
            },
            AirportFare.__tablename__,
        )

    def get_active_zones(self) -> list[Zone]:
        """Valid active zones; an invalid row is skipped so ring lookup degrades."""
        stmt = select(ZoneRecord).where(ZoneRecord.is_active.is_(True)).order_by(ZoneRecord.id)
        zones = []
        for row in self.session.execute(stmt).scalars():
            try:
                zone = _validate(
                    Zone,
                    {
                        "name": row.name,
                        "center_latitude": row.center_latitude,
                        "center_longitude": row.center_longitude,
                        "radius_km": row.radius_km,
                    },
                    ZoneRecord.__tablename__,
                )
            except InvalidConfigurationError as e:
                logger.warning(f"Skipping zone {row.name!r} (id {row.id}): {e.message}")
                continue
            zones.append(zone)
        logger.debug(f"Loaded {len(zones)} active zones")
        return zones
