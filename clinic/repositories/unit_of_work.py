"""
Unit of work over a SQLAlchemy session.

Repositories built on the same session only stage changes; commit() is the
single point where they become durable.
"""

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from clinic.core.exceptions import StoreConflictError
from clinic.domain.interfaces import IUnitOfWork

logger = logging.getLogger(__name__)

# SQLSTATE for foreign key violations (PostgreSQL)
FOREIGN_KEY_VIOLATION = "23503"


def conflict_from_integrity_error(error: IntegrityError) -> StoreConflictError:
    """Classify a driver integrity error as a unique or foreign key conflict."""
    orig = error.orig
    if getattr(orig, "pgcode", None) == FOREIGN_KEY_VIOLATION or (
        "FOREIGN KEY" in str(orig).upper()
    ):
        return StoreConflictError(
            "A referenced record no longer exists",
            constraint=StoreConflictError.FOREIGN_KEY,
        )
    return StoreConflictError()


def flush_or_conflict(session: Session) -> None:
    """Flush pending changes, turning constraint violations into StoreConflictError.

    The session is rolled back on failure since its transaction is no longer
    usable after an integrity error.
    """
    try:
        session.flush()
    except IntegrityError as e:
        session.rollback()
        logger.warning(
            "Store rejected staged changes",
            extra={"context": {"error": str(e.orig)}},
        )
        raise conflict_from_integrity_error(e) from e


class SqlAlchemyUnitOfWork(IUnitOfWork):
    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def commit(self) -> None:
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(
                "Commit rejected by store constraint",
                extra={"context": {"error": str(e.orig)}},
            )
            raise conflict_from_integrity_error(e) from e
        except SQLAlchemyError:
            self.db.rollback()
            logger.error("Commit failed", exc_info=True)
            raise

    def rollback(self) -> None:
        self.db.rollback()
