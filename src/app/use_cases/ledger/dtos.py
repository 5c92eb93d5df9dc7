"""Data Transfer Objects for Ledger Use Cases

Pydantic models for command inputs and response outputs. Response field
aliases are the public wire names.
"""

from datetime import datetime
from typing import List
from pydantic import BaseModel, Field, StrictInt, StrictStr
from src.domain.transaction import (
    DESCRIPTION_MAX_LENGTH,
    DESCRIPTION_MIN_LENGTH,
    TransactionKind,
)


class TransactionCommandDTO(BaseModel):
    """
    Command DTO for applying a transaction

    Constructing it is the ledger's input validation: a failed
    construction never reaches storage.
    """

    customer_id: int = Field(
        ...,
        description="Customer (account) identifier"
    )

    amount: StrictInt = Field(
        ...,
        gt=0,
        description="Positive integer magnitude"
    )

    kind: TransactionKind = Field(
        ...,
        description="c = credit, d = debit"
    )

    description: StrictStr = Field(
        ...,
        min_length=DESCRIPTION_MIN_LENGTH,
        max_length=DESCRIPTION_MAX_LENGTH,
        description="Free text, 1 to 10 characters"
    )

    @property
    def delta(self) -> int:
        """Signed balance change"""
        return self.kind.signed(self.amount)

    class Config:
        json_schema_extra = {
            "example": {
                "customer_id": 1,
                "amount": 1000,
                "kind": "d",
                "description": "groceries"
            }
        }


class AccountBalanceDTO(BaseModel):
    """
    Response DTO for apply transaction

    Account state right after the transaction was committed.
    """

    limit: int = Field(
        ...,
        description="Overdraft limit"
    )

    balance: int = Field(
        ...,
        description="Balance after the transaction"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "limit": 100000,
                "balance": -9098
            }
        }


class StatementBalanceDTO(BaseModel):
    total: int = Field(..., description="Balance at snapshot time")
    date: datetime = Field(..., description="When the snapshot was taken")
    limit: int = Field(..., description="Overdraft limit")


class StatementTransactionDTO(BaseModel):
    amount: int = Field(..., description="Positive magnitude")
    kind: str = Field(..., description="c = credit, d = debit")
    description: str = Field(..., description="Transaction description")
    occurred_at: datetime = Field(
        ...,
        alias="occurredAt",
        description="When the transaction was applied"
    )

    class Config:
        populate_by_name = True


class StatementResponseDTO(BaseModel):
    """
    Response DTO for get statement

    ``balance.total`` always agrees with ``last_transactions``: it is the
    balance right after the newest listed transaction.
    """

    balance: StatementBalanceDTO

    last_transactions: List[StatementTransactionDTO] = Field(
        default_factory=list,
        alias="lastTransactions",
        description="Most recent transactions, newest first"
    )

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "balance": {
                    "total": -9098,
                    "date": "2024-01-17T02:34:41.217753Z",
                    "limit": 100000
                },
                "lastTransactions": [
                    {
                        "amount": 10,
                        "kind": "c",
                        "description": "descricao",
                        "occurredAt": "2024-01-17T02:34:38.543030Z"
                    }
                ]
            }
        }
