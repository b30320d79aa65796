"""Process entry point for the fare service."""

import logging

import uvicorn

from api.app import create_app
from db import init_database
from fare_logging import setup_logging_from_settings
from settings import get_settings

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()
    setup_logging_from_settings(settings.logging)

    session_factory = init_database(settings.database.path)
    app = create_app(session_factory, settings)

    logger.info(
        f"Starting fare service on {settings.api.host}:{settings.api.port} "
        f"(database {settings.database.path})"
    )
    uvicorn.run(app, host=settings.api.host, port=settings.api.port, log_config=None)


if __name__ == "__main__":
    main()
