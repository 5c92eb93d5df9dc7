"""Ledger API Routes

FastAPI routes for customer transactions and statements.
"""

from fastapi import APIRouter, Depends, status

from src.api.error import ClientError
from src.api.schemas.ledger_request import TransactionRequestSchema
from src.app.services.ledger_engine import LedgerEngine
from src.app.use_cases.ledger.dtos import AccountBalanceDTO, StatementResponseDTO
from src.depends import get_ledger_engine

router = APIRouter(prefix="/customers", tags=["Ledger"])


def _error_example(code: str, message: str) -> dict:
    return {
        "content": {
            "application/json": {
                "example": {"error": {"code": code, "message": message}}
            }
        }
    }


@router.post(
    "/{customer_id}/transactions",
    response_model=AccountBalanceDTO,
    status_code=status.HTTP_200_OK,
    responses={
        404: {"description": "Customer not found", **_error_example("ACCOUNT_NOT_FOUND", "Account not found for customer 6")},
        409: {"description": "Concurrent update, retry", **_error_example("CONFLICT", "Balance of customer 1 changed concurrently")},
        422: {"description": "Invalid request or limit exceeded", **_error_example("LIMIT_EXCEEDED", "Debit of 1000 exceeds limit. Balance: -99500, Limit: 100000")},
    }
)
async def create_transaction(
    customer_id: int,
    request: TransactionRequestSchema,
    engine: LedgerEngine = Depends(get_ledger_engine),
):
    """
    Apply a credit or debit to a customer's account.

    A debit that would take the balance below -limit is rejected and
    leaves the account unchanged.

    **Request body:**
    - `amount` (required): Positive integer
    - `kind` (required): `c` (credit) or `d` (debit)
    - `description` (required): 1 to 10 characters

    **Returns:**
    - 200: `{"limit": ..., "balance": ...}` after the transaction
    - 404: Customer not found
    - 409: Concurrent update, safe to retry
    - 422: Invalid request or limit exceeded
    """
    result = await engine.apply_transaction(
        customer_id, request.amount, request.kind, request.description
    )

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get(
    "/{customer_id}/statement",
    response_model=StatementResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={
        404: {"description": "Customer not found", **_error_example("ACCOUNT_NOT_FOUND", "Account not found for customer 6")},
    }
)
async def get_statement(
    customer_id: int,
    engine: LedgerEngine = Depends(get_ledger_engine),
):
    """
    Get a customer's statement: balance, limit, snapshot time and the
    10 most recent transactions, newest first.

    **Returns:**
    - 200: Statement
    - 404: Customer not found
    """
    result = await engine.get_statement(customer_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value
