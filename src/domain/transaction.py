"""Transaction Domain Entity

Immutable append-only log of applied credits and debits, one sequence
per account ordered by id.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import BigInteger, DateTime, ForeignKey, String
from src.domain.account import ID_TYPE
from src.domain.base import BaseModel, utcnow

DESCRIPTION_MIN_LENGTH = 1
DESCRIPTION_MAX_LENGTH = 10


class TransactionKind(str, Enum):
    """Transaction kinds, stored as their one-character wire code"""
    CREDIT = "c"
    DEBIT = "d"

    def signed(self, amount: int) -> int:
        """Balance delta for an amount of this kind"""
        return amount if self is TransactionKind.CREDIT else -amount


class Transaction(BaseModel, table=True):
    """
    Transaction - One applied balance mutation

    Domain Rules:
    - Created exactly once per successful application, never updated or deleted
    - amount is a positive magnitude; kind gives the sign
    - balance_after is written in the same database transaction as the
      account balance, so statements can be checked against it
    - occurred_at is assigned by the ledger, never by the client
    """

    __tablename__ = "transactions"
    __table_args__ = (
        Index("ix_transactions_account_id_id", "account_id", "id"),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(ID_TYPE, primary_key=True, autoincrement=True),
        description="Unique transaction identifier (auto-increment, defines order)"
    )

    account_id: int = Field(
        sa_column=Column(BigInteger, ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False),
        description="Foreign key to Account"
    )

    amount: int = Field(
        sa_column=Column(BigInteger, nullable=False),
        description="Positive magnitude"
    )

    kind: TransactionKind = Field(
        sa_column=Column(String(1), nullable=False),
        description="c = credit, d = debit"
    )

    description: str = Field(
        sa_column=Column(String(DESCRIPTION_MAX_LENGTH), nullable=False),
        description="Free text, 1 to 10 characters"
    )

    balance_after: int = Field(
        sa_column=Column(BigInteger, nullable=False),
        description="Account balance right after this transaction"
    )

    occurred_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="Application timestamp (immutable)"
    )

    class Config:
        """SQLModel configuration"""
        json_schema_extra = {
            "example": {
                "id": 1,
                "account_id": 1,
                "amount": 1000,
                "kind": "d",
                "description": "groceries",
                "balance_after": -1000,
                "occurred_at": "2024-01-01T00:00:00Z"
            }
        }
