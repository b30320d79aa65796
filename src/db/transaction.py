"""Commit/rollback boundary for completion writes."""

from collections.abc import Generator
from contextlib import contextmanager

from sqlalchemy.orm import Session


@contextmanager
def transaction(session: Session) -> Generator[Session]:
    """Commit when the block succeeds, roll back and re-raise otherwise.

    Example:
        with transaction(session):
            completions.for_category(booking.category).add(**fields)

    A unique-constraint violation on ``booking_id`` surfaces here as
    ``IntegrityError`` after the rollback, leaving the session usable for
    re-reading the stored completion.
    """
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
