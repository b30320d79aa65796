"""Request and response models for the fare endpoints."""

from typing import Literal

from pydantic import BaseModel

from booking import DriverDetails, TripMeasurement


class HealthResponse(BaseModel):
    status: Literal["ok"] = "ok"


class CompletionRequest(BaseModel):
    """Measured trip facts and driver details sent by the driver app."""

    measurement: TripMeasurement
    driver: DriverDetails


class DriverEarningsResponse(BaseModel):
    driver_id: str
    total_earnings: float
    trip_count: int


class CustomerSpendingResponse(BaseModel):
    customer_id: str
    total_spending: float
    trip_count: int
