import logging
from contextlib import contextmanager
from typing import Callable, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from bookstore.exceptions import PersistenceError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@contextmanager
def transaction(session: Session):
    """
    Commit everything done inside the block, or roll all of it back.

    Storage errors come out as PersistenceError; anything else (business
    errors included) is re-raised untouched after the rollback.
    """
    try:
        yield session
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.exception("Transaction rolled back on storage error")
        raise PersistenceError(str(e)) from e
    except Exception:
        session.rollback()
        raise


def with_transaction(session: Session, fn: Callable[[], T]) -> T:
    with transaction(session):
        return fn()
