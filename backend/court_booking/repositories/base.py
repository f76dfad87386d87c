import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from court_booking.errors import StorageError

logger = logging.getLogger(__name__)


@contextmanager
def storage_operation(session: Session, operation: str, **context) -> Iterator[None]:
    """Roll back and re-raise any SQLAlchemy failure as StorageError."""
    try:
        yield
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("Storage failure during %s %s", operation, context)
        raise StorageError(operation, exc, **context) from exc
