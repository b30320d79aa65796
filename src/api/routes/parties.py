"""Per-driver and per-customer completion history."""

from fastapi import APIRouter

from api.dependencies import CompletionServiceDep
from api.models.fares import CustomerSpendingResponse, DriverEarningsResponse
from booking import BookingCategory
from completion import TripCompletionRecord

router = APIRouter(tags=["history"])


@router.get("/drivers/{driver_id}/earnings", response_model=DriverEarningsResponse)
def driver_earnings(driver_id: str, service: CompletionServiceDep) -> DriverEarningsResponse:
    summary = service.driver_earnings(driver_id)
    return DriverEarningsResponse(
        driver_id=driver_id, total_earnings=summary.total, trip_count=summary.trip_count
    )


@router.get("/drivers/{driver_id}/completions", response_model=list[TripCompletionRecord])
def driver_completions(
    driver_id: str, service: CompletionServiceDep, category: BookingCategory | None = None
) -> list[TripCompletionRecord]:
    return service.list_driver_completions(driver_id, category)


@router.get("/customers/{customer_id}/spending", response_model=CustomerSpendingResponse)
def customer_spending(
    customer_id: str, service: CompletionServiceDep
) -> CustomerSpendingResponse:
    summary = service.customer_spending(customer_id)
    return CustomerSpendingResponse(
        customer_id=customer_id, total_spending=summary.total, trip_count=summary.trip_count
    )


@router.get("/customers/{customer_id}/completions", response_model=list[TripCompletionRecord])
def customer_completions(
    customer_id: str, service: CompletionServiceDep, category: BookingCategory | None = None
) -> list[TripCompletionRecord]:
    return service.list_customer_completions(customer_id, category)
