"""Rate-card schemas and the itemized fare breakdown."""

from enum import Enum
from typing import Annotated, Any

from pydantic import BaseModel, Field, field_validator, model_validator

from booking import BookingCategory

Amount = Annotated[float, Field(ge=0, allow_inf_nan=False)]

# One-way coverage of each outstation slab; each slab covers twice this as a round trip
SLAB_DISTANCES_KM: tuple[int, ...] = tuple(range(10, 151, 10))

# Every currency component except the platform fee; GST at the charges rate applies to these
CHARGE_COMPONENTS: tuple[str, ...] = (
    "base_fare",
    "distance_fare",
    "time_fare",
    "surge_charges",
    "deadhead_charges",
    "extra_km_charges",
    "driver_allowance",
)


class FareMatrixRate(BaseModel):
    """Active fare-matrix row for one (category, vehicle class) pair."""

    booking_category: BookingCategory
    vehicle_class: str
    base_fare: Amount = 0.0
    per_km_rate: Amount = 0.0
    surge_multiplier: float = Field(default=1.0, ge=1.0, allow_inf_nan=False)
    # Kept raw: a malformed fee is recovered with a fallback when priced
    platform_fee: Any = None
    minimum_fare: Amount = 0.0

    model_config = {"frozen": True}

    @field_validator("surge_multiplier", mode="before")
    @classmethod
    def default_surge(cls, v: Any) -> Any:
        return 1.0 if v is None else v


class RentalPackage(BaseModel):
    package_name: str
    duration_hours: float = Field(gt=0, allow_inf_nan=False)
    km_included: Amount
    base_fare: Amount
    extra_km_rate: Amount
    extra_minute_rate: Amount = 0.0

    model_config = {"frozen": True}

    @field_validator("extra_minute_rate", mode="before")
    @classmethod
    def default_minute_rate(cls, v: Any) -> Any:
        return 0.0 if v is None else v


class OutstationRate(BaseModel):
    vehicle_class: str
    base_fare: Amount
    per_km_rate: Amount
    driver_allowance_per_day: Amount
    daily_km_limit: Amount

    model_config = {"frozen": True}


class SlabBand(BaseModel):
    one_way_km: int
    max_round_trip_km: int
    fare: Amount

    model_config = {"frozen": True}


class OutstationSlabPackage(BaseModel):
    """Fixed-fare distance bands with one shared extra-km rate."""

    vehicle_class: str
    slab_fares: dict[int, Amount]
    extra_km_rate: Amount = 0.0

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_bands(self) -> "OutstationSlabPackage":
        missing = [km for km in SLAB_DISTANCES_KM if km not in self.slab_fares]
        if missing:
            raise ValueError(f"Slab package missing fares for bands: {missing}")
        return self

    def bands(self) -> list[SlabBand]:
        return [
            SlabBand(one_way_km=km, max_round_trip_km=km * 2, fare=self.slab_fares[km])
            for km in SLAB_DISTANCES_KM
        ]


class AirportRate(BaseModel):
    vehicle_class: str
    city_to_airport_fare: Amount
    airport_to_city_fare: Amount

    model_config = {"frozen": True}


class FareDetails(BaseModel):
    """Calculation provenance stored alongside the breakdown."""

    actual_distance_km: float
    actual_duration_minutes: float
    per_km_rate: float = 0.0
    per_minute_rate: float | None = None
    base_km_included: float | None = None
    extra_km: float | None = None
    extra_minutes: float | None = None
    surge_multiplier: float | None = None
    platform_fee_flat: float | None = None
    gst_rate_charges: float | None = None
    gst_rate_platform: float | None = None
    zone_detected: str | None = None
    is_inner_zone: bool | None = None
    minimum_fare: float | None = None
    days_calculated: int | None = None
    daily_km_limit: float | None = None
    km_allowance: float | None = None
    within_allowance: bool | None = None
    package_name: str | None = None
    booked_package_hours: float | None = None
    billing_distance_km: float | None = None
    total_km_travelled: float | None = None
    distance_to_depot_km: float | None = None
    total_distance_with_return_km: float | None = None
    pricing_method: str | None = None
    slab_fare: float | None = None
    direction: str | None = None
    trip_direction: str | None = None

    model_config = {"frozen": True}


class FareBreakdown(BaseModel):
    """Itemized, tax-inclusive fare for one completed trip."""

    booking_category: BookingCategory
    vehicle_class: str
    base_fare: Amount = 0.0
    distance_fare: Amount = 0.0
    time_fare: Amount = 0.0
    surge_charges: Amount = 0.0
    deadhead_charges: Amount = 0.0
    extra_km_charges: Amount = 0.0
    driver_allowance: Amount = 0.0
    platform_fee: Amount = 0.0
    gst_on_charges: Amount = 0.0
    gst_on_platform_fee: Amount = 0.0
    total_fare: Amount = 0.0
    details: FareDetails

    model_config = {"frozen": True}

    def charges_subtotal(self) -> float:
        return sum(getattr(self, name) for name in CHARGE_COMPONENTS)

    def components(self) -> dict[str, float]:
        """Every currency component except the total."""
        values = {name: getattr(self, name) for name in CHARGE_COMPONENTS}
        values["platform_fee"] = self.platform_fee
        values["gst_on_charges"] = self.gst_on_charges
        values["gst_on_platform_fee"] = self.gst_on_platform_fee
        return values


class DiagnosticKind(str, Enum):
    COERCION = "coercion"
    FALLBACK = "fallback"
    ZONE_DATA_MISSING = "zone_data_missing"
    STATIONARY_GUARD = "stationary_guard"
    SLAB_UNAVAILABLE = "slab_unavailable"


class DiagnosticEvent(BaseModel):
    kind: DiagnosticKind
    field: str
    message: str
    raw_value: str | None = None
    applied_value: float | None = None


class Diagnostics(BaseModel):
    """Recoveries made while computing one fare."""

    events: list[DiagnosticEvent] = Field(default_factory=list)

    def record(
        self,
        kind: DiagnosticKind,
        field: str,
        message: str,
        raw_value: Any = None,
        applied_value: float | None = None,
    ) -> None:
        self.events.append(
            DiagnosticEvent(
                kind=kind,
                field=field,
                message=message,
                raw_value=None if raw_value is None else repr(raw_value),
                applied_value=applied_value,
            )
        )

    def of_kind(self, kind: DiagnosticKind) -> list[DiagnosticEvent]:
        return [e for e in self.events if e.kind == kind]

    @property
    def has_data_quality_issues(self) -> bool:
        return any(
            e.kind in (DiagnosticKind.COERCION, DiagnosticKind.FALLBACK) for e in self.events
        )


class FareResult(BaseModel):
    breakdown: FareBreakdown
    diagnostics: Diagnostics
