"""SQLite engine setup for rate cards, bookings and completions."""

import logging
from pathlib import Path
from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from .schema import Base

logger = logging.getLogger(__name__)

IN_MEMORY = ":memory:"


def init_database(db_path: str, echo: bool = False) -> sessionmaker[Any]:
    """Create missing tables and return a session factory.

    ``":memory:"`` keeps one shared connection so every session sees the
    same database; any other value is a file path whose parent directory is
    created on demand. Sessions may be used from request threads.
    """
    if db_path == IN_MEMORY:
        engine = create_engine(
            "sqlite://",
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        engine = create_engine(
            f"sqlite:///{db_path}",
            echo=echo,
            connect_args={"check_same_thread": False},
        )

    Base.metadata.create_all(engine)
    logger.info(f"Fare database ready at {db_path} ({len(Base.metadata.tables)} tables)")

    return sessionmaker(bind=engine)
