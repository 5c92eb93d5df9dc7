"""Get Statement Use Case

Point-in-time snapshot of an account: balance, limit and the most
recent transactions.
"""

from sqlalchemy.exc import SQLAlchemyError
from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import as_utc, utcnow
from src.domain.errors import NotFoundError
from src.domain.transaction import TransactionKind
from .dtos import StatementBalanceDTO, StatementResponseDTO, StatementTransactionDTO
from .storage_errors import rollback_and_classify

DEFAULT_STATEMENT_SIZE = 10


class GetStatement:
    """
    Get Statement Use Case

    Read-only. The reported total is taken from the newest listed
    transaction's balance_after when there is one, so the total and the
    list describe the same point in the account's history even if a
    writer commits between the two reads.
    """

    def __init__(self, uow: UnitOfWork, statement_size: int = DEFAULT_STATEMENT_SIZE):
        self.uow = uow
        self.statement_size = statement_size

    async def execute(self, customer_id: int) -> Result[StatementResponseDTO]:
        """
        Execute get statement operation

        Args:
            customer_id: Customer identifier

        Returns:
            Result[StatementResponseDTO]: Snapshot or error

        Errors:
            ACCOUNT_NOT_FOUND: No account for the customer
        """
        as_of = utcnow()

        try:
            account = await self.uow.accounts.get_by_id(customer_id)

            if not account:
                return Return.err(
                    NotFoundError(
                        message=f"Account not found for customer {customer_id}",
                    )
                )

            transactions = await self.uow.transactions.list_recent(
                customer_id, limit=self.statement_size
            )
        except SQLAlchemyError as e:
            return Return.err(await rollback_and_classify(self.uow, e, "read statement"))

        total = transactions[0].balance_after if transactions else account.balance

        return Return.ok(
            StatementResponseDTO(
                balance=StatementBalanceDTO(total=total, date=as_of, limit=account.limit),
                last_transactions=[
                    StatementTransactionDTO(
                        amount=txn.amount,
                        kind=TransactionKind(txn.kind).value,
                        description=txn.description,
                        occurred_at=as_utc(txn.occurred_at),
                    )
                    for txn in transactions
                ],
            )
        )
