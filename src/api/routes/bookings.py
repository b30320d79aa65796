from fastapi import APIRouter, Response, status

from api.dependencies import CompletionServiceDep
from api.models.fares import CompletionRequest
from completion import TripCompletionRecord

router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.post(
    "/{booking_id}/complete",
    response_model=TripCompletionRecord,
    status_code=status.HTTP_201_CREATED,
)
def complete_booking(
    booking_id: str,
    body: CompletionRequest,
    response: Response,
    service: CompletionServiceDep,
) -> TripCompletionRecord:
    """Compute and store the fare; repeated calls return the stored record."""
    outcome = service.complete(booking_id, body.measurement, body.driver)
    if not outcome.created:
        response.status_code = status.HTTP_200_OK
    return outcome.record


@router.get("/{booking_id}/completion", response_model=TripCompletionRecord)
def get_completion(booking_id: str, service: CompletionServiceDep) -> TripCompletionRecord:
    return service.get_completion(booking_id)
