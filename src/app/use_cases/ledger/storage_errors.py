"""Classification of storage failures into ledger errors"""

import logging
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from src.app.services.unit_of_work import UnitOfWork
from src.domain.errors import ConflictError, LedgerError, StorageError

logger = logging.getLogger(__name__)

# PostgreSQL serialization_failure, deadlock_detected, lock_not_available
TRANSIENT_SQLSTATES = {"40001", "40P01", "55P03"}
TRANSIENT_MESSAGES = ("database is locked", "database table is locked")


def is_transient(exc: SQLAlchemyError) -> bool:
    """True when the failure is lock contention that a retry can resolve"""
    if not isinstance(exc, DBAPIError):
        return False
    orig = exc.orig
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate in TRANSIENT_SQLSTATES:
        return True
    message = str(orig).lower()
    return any(marker in message for marker in TRANSIENT_MESSAGES)


def to_ledger_error(exc: SQLAlchemyError, action: str) -> LedgerError:
    if is_transient(exc):
        return ConflictError(
            message=f"Concurrent update while trying to {action}",
            reason=str(exc),
        )
    return StorageError(
        message=f"Storage failure while trying to {action}",
        reason=str(exc),
    )


async def rollback_and_classify(uow: UnitOfWork, exc: SQLAlchemyError, action: str) -> LedgerError:
    """
    Roll back after a storage failure and map the original failure

    A rollback that fails too (dead connection) is logged; the caller
    still gets the error for the failure that triggered it.
    """
    try:
        await uow.rollback()
    except SQLAlchemyError as rollback_exc:
        logger.warning(f"Rollback after failed attempt to {action} also failed: {rollback_exc}")
    return to_ledger_error(exc, action)
