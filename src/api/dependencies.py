"""FastAPI dependency injection providers."""

from typing import Annotated

from fastapi import Depends, Request

from completion import TripCompletionService


def get_completion_service(request: Request) -> TripCompletionService:
    """Retrieve TripCompletionService from app state."""
    service: TripCompletionService = request.app.state.completion_service
    return service


CompletionServiceDep = Annotated[TripCompletionService, Depends(get_completion_service)]
