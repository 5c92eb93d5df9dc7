"""Ledger Engine

Entry point for every ledger operation. Owns input validation, the
per-customer serialization discipline and the bounded retry of
conflicting writes. Storage is reached only through unit-of-work scopes
obtained from the injected factory.
"""

import asyncio
import logging
from typing import AsyncContextManager, Callable, Optional, Union
from pydantic import ValidationError as PydanticValidationError
from libs.result import Result, Return
from src.app.services.keyed_lock import KeyedLock
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.ledger import (
    ApplyTransaction,
    GetStatement,
    AccountBalanceDTO,
    StatementResponseDTO,
    TransactionCommandDTO,
    DEFAULT_STATEMENT_SIZE,
)
from src.domain.errors import ValidationError
from src.domain.transaction import TransactionKind

logger = logging.getLogger(__name__)

UnitOfWorkFactory = Callable[[], AsyncContextManager[UnitOfWork]]

DEFAULT_MAX_ATTEMPTS = 5
DEFAULT_RETRY_BACKOFF_SECONDS = 0.005


class LedgerEngine:
    """
    Applies transactions and serves statements

    Concurrency:
    - Calls for the same customer are serialized in-process by a per-key
      lock held for the duration of the read-modify-write.
    - Across processes the row lock / compare-and-set in ApplyTransaction
      detects lost races; those attempts come back as CONFLICT and are
      retried here, re-validating the limit against fresh state.
    - Calls for different customers share no lock.

    Usage:
        engine = LedgerEngine(uow_factory)
        result = await engine.apply_transaction(1, 1000, "d", "rent")
    """

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        statement_size: int = DEFAULT_STATEMENT_SIZE,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        retry_backoff_seconds: float = DEFAULT_RETRY_BACKOFF_SECONDS,
        locks: Optional[KeyedLock] = None,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        self.uow_factory = uow_factory
        self.statement_size = statement_size
        self.max_attempts = max_attempts
        self.retry_backoff_seconds = retry_backoff_seconds
        self.locks = locks if locks is not None else KeyedLock()

    async def apply_transaction(
        self,
        customer_id: int,
        amount: int,
        kind: Union[str, TransactionKind],
        description: str,
    ) -> Result[AccountBalanceDTO]:
        """
        Apply a credit or debit under the overdraft invariant

        Args:
            customer_id: Customer identifier
            amount: Positive integer magnitude
            kind: "c"/"d" or a TransactionKind
            description: 1 to 10 characters

        Returns:
            Result[AccountBalanceDTO]: Post-transaction limit and balance, or one of
            VALIDATION_ERROR, ACCOUNT_NOT_FOUND, LIMIT_EXCEEDED, CONFLICT, STORAGE_ERROR
        """
        try:
            command = TransactionCommandDTO(
                customer_id=customer_id,
                amount=amount,
                kind=kind,
                description=description,
            )
        except PydanticValidationError as e:
            return Return.err(
                ValidationError(
                    message="Invalid transaction",
                    reason=_format_validation_errors(e),
                )
            )

        async with self.locks.acquire(command.customer_id):
            for attempt in range(1, self.max_attempts + 1):
                async with self.uow_factory() as uow:
                    result = await ApplyTransaction(uow).execute(command)

                if result.is_ok():
                    logger.debug(
                        f"Applied {command.kind.name.lower()} of {command.amount} to customer "
                        f"{command.customer_id}: balance={result.value.balance}"
                    )
                    return result

                error = result.error
                if not error.retryable:
                    _log_rejection(command, error)
                    return result

                if attempt < self.max_attempts:
                    logger.warning(
                        f"Conflict applying transaction for customer {command.customer_id} "
                        f"(attempt {attempt}/{self.max_attempts}): {error.message}"
                    )
                    await asyncio.sleep(self.retry_backoff_seconds * attempt)

        logger.warning(
            f"Giving up on transaction for customer {command.customer_id} "
            f"after {self.max_attempts} attempts"
        )
        return result

    async def get_statement(self, customer_id: int) -> Result[StatementResponseDTO]:
        """
        Snapshot of balance, limit and the latest transactions

        Args:
            customer_id: Customer identifier

        Returns:
            Result[StatementResponseDTO]: Statement or ACCOUNT_NOT_FOUND / STORAGE_ERROR / CONFLICT
        """
        async with self.uow_factory() as uow:
            result = await GetStatement(uow, statement_size=self.statement_size).execute(customer_id)

        if result.is_err() and result.error.code == "STORAGE_ERROR":
            logger.error(f"Statement for customer {customer_id} failed: {result.error.reason}")
        return result


def _format_validation_errors(exc: PydanticValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
        for err in exc.errors()
    )


def _log_rejection(command: TransactionCommandDTO, error) -> None:
    if error.code == "STORAGE_ERROR":
        logger.error(
            f"Storage failure applying transaction for customer {command.customer_id}: {error.reason}"
        )
    else:
        logger.info(f"Transaction rejected for customer {command.customer_id}: {error.code}")
