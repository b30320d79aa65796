"""FastAPI application factory for the fare service."""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import sessionmaker

from api.models.fares import HealthResponse
from api.routes import bookings, fares, parties
from completion import TripCompletionService
from core.exceptions import FareEngineError
from pricing import PricingConfig
from settings import Settings, get_settings

logger = logging.getLogger(__name__)


async def fare_engine_error_handler(request: Request, exc: FareEngineError) -> JSONResponse:
    code = exc.http_status
    if code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.warning(f"{request.method} {request.url.path} rejected: {exc.message}")
    return JSONResponse(status_code=code, content={"detail": exc.message})


def create_app(
    session_factory: sessionmaker[Any],
    settings: Settings | None = None,
) -> FastAPI:
    """Create FastAPI application with injected dependencies.

    Args:
        session_factory: Session factory bound to the rate and completion database
        settings: Application settings; loaded from the environment when omitted
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Fare Engine API",
        version="0.1.0",
        description="Fare quotes and trip completion for regular, rental, "
        "outstation and airport bookings",
    )

    # Set dependencies immediately so they're available for testing
    app.state.settings = settings
    app.state.completion_service = TripCompletionService(
        session_factory,
        config=PricingConfig.from_settings(settings.pricing),
        default_rental_hours=settings.pricing.default_rental_hours,
    )

    app.add_exception_handler(FareEngineError, fare_engine_error_handler)  # type: ignore[arg-type]

    app.include_router(fares.router)
    app.include_router(bookings.router)
    app.include_router(parties.router)

    @app.get("/health", response_model=HealthResponse)
    def health() -> HealthResponse:
        return HealthResponse()

    return app
