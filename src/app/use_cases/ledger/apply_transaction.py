"""ApplyTransaction Use Case

Applies one credit or debit to an account under the overdraft invariant,
as a single database transaction.
"""

from sqlalchemy.exc import SQLAlchemyError
from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.errors import ConflictError, LimitExceededError, NotFoundError
from src.domain.transaction import Transaction, TransactionKind
from .dtos import AccountBalanceDTO, TransactionCommandDTO
from .storage_errors import rollback_and_classify


class ApplyTransaction:
    """
    Use Case: Apply a transaction to an account (single attempt)

    Business Rules:
    1. Unknown account -> ACCOUNT_NOT_FOUND
    2. Debit may not take the balance below -limit -> LIMIT_EXCEEDED
    3. Balance update and log append commit together or not at all
    4. A concurrent writer changing the balance first -> CONFLICT (retryable)

    Flow:
    1. Get account with lock (SELECT FOR UPDATE)
    2. Compute new balance and check the invariant
    3. Compare-and-set the balance
    4. Append the transaction record
    5. Commit
    6. Return limit and new balance
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, command: TransactionCommandDTO) -> Result[AccountBalanceDTO]:
        """
        Execute one application attempt

        Args:
            command: Validated TransactionCommandDTO

        Returns:
            Result[AccountBalanceDTO]: Post-transaction limit and balance, or error
        """
        try:
            # Step 1: Get account with pessimistic lock
            account = await self.uow.accounts.get_by_id(command.customer_id, for_update=True)

            if not account:
                return Return.err(
                    NotFoundError(
                        message=f"Account not found for customer {command.customer_id}",
                    )
                )

            # Rollback expires the instance, so read everything needed up front
            account_id, limit, balance_before = account.id, account.limit, account.balance

            # Step 2: Check the invariant
            balance_after = balance_before + command.delta

            if command.kind == TransactionKind.DEBIT and not account.allows(balance_after):
                await self.uow.rollback()
                return Return.err(
                    LimitExceededError(
                        message=f"Debit of {command.amount} exceeds limit. Balance: {balance_before}, Limit: {limit}",
                        reason=f"balance={balance_before}, amount={command.amount}, limit={limit}",
                    )
                )

            # Step 3: Compare-and-set balance
            swapped = await self.uow.accounts.compare_and_set_balance(
                account_id, expected_balance=balance_before, new_balance=balance_after
            )

            if not swapped:
                await self.uow.rollback()
                return Return.err(
                    ConflictError(
                        message=f"Balance of customer {command.customer_id} changed concurrently",
                        reason=f"expected_balance={balance_before}",
                    )
                )

            # Step 4: Append transaction record
            await self.uow.transactions.append(
                Transaction(
                    account_id=account_id,
                    amount=command.amount,
                    kind=command.kind.value,
                    description=command.description,
                    balance_after=balance_after,
                    occurred_at=utcnow(),
                )
            )

            # Step 5: Commit
            await self.uow.commit()

            return Return.ok(AccountBalanceDTO(limit=limit, balance=balance_after))

        except SQLAlchemyError as e:
            return Return.err(await rollback_and_classify(self.uow, e, "apply transaction"))
