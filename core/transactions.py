"""Single place where workflow writes are committed or rolled back."""

import logging
from contextlib import contextmanager
from typing import Callable, Iterator, TypeVar

from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError
from sqlalchemy.orm import Session

from core.exceptions import (
    ConflictError,
    NotFoundError,
    TransientStoreError,
    ValidationError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


def translate_integrity_error(exc: IntegrityError):
    """Map a driver constraint failure onto the workflow error taxonomy."""
    detail = str(exc.orig).lower()
    if "unique" in detail or "duplicate" in detail:
        return ConflictError("A record with the same unique value already exists")
    if "foreign key" in detail:
        return NotFoundError("Referenced record")
    return ValidationError("A required field is missing or invalid")


@contextmanager
def transaction(db: Session) -> Iterator[Session]:
    """
    Commit everything written inside the block, or nothing.

    Any exception rolls the session back before it propagates. Store
    errors are re-raised as workflow errors.
    """
    try:
        yield db
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.warning("Transaction rolled back on constraint failure: %s", exc.orig)
        raise translate_integrity_error(exc) from exc
    except (OperationalError, InterfaceError) as exc:
        db.rollback()
        logger.error("Transaction rolled back on store failure: %s", exc)
        raise TransientStoreError("The database is unavailable, please retry") from exc
    except Exception:
        db.rollback()
        logger.info("Transaction rolled back", exc_info=True)
        raise


def run_transaction(db: Session, work: Callable[[Session], T]) -> T:
    """Run ``work`` with a handle bound to one transaction and return its result."""
    with transaction(db) as txn:
        return work(txn)
