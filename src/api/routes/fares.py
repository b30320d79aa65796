from typing import Annotated

from fastapi import APIRouter, Body

from api.dependencies import CompletionServiceDep
from booking import TripFacts
from pricing import FareResult

router = APIRouter(prefix="/fares", tags=["fares"])


@router.post("/quote", response_model=FareResult)
def quote_fare(
    trip: Annotated[TripFacts, Body()], service: CompletionServiceDep
) -> FareResult:
    """Price trip facts without recording a completion."""
    return service.quote(trip)
