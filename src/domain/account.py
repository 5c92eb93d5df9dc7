"""Account Domain Entity

Customer account provisioned out of band. The ledger only ever mutates
``balance``; ``limit`` is fixed at provisioning time.
"""

from sqlmodel import Field, Column
from sqlalchemy import CheckConstraint, BigInteger, Integer
from src.domain.base import BaseModel

# SQLite only auto-increments INTEGER PRIMARY KEY columns
ID_TYPE = BigInteger().with_variant(Integer(), "sqlite")


class Account(BaseModel, table=True):
    """
    Account - Customer balance under an overdraft limit

    Domain Rules:
    - Accounts pre-exist; the ledger never creates or deletes them
    - limit is non-negative and immutable
    - balance >= -limit at all times
    - balance changes only through applied Transactions
    """

    __tablename__ = "accounts"
    __table_args__ = (
        CheckConstraint('"limit" >= 0', name="limit_non_negative"),
        CheckConstraint('balance >= -"limit"', name="balance_within_limit"),
    )

    id: int = Field(
        sa_column=Column(ID_TYPE, primary_key=True, autoincrement=False),
        description="Customer identifier (assigned at provisioning)"
    )

    limit: int = Field(
        sa_column=Column("limit", BigInteger, nullable=False),
        description="Overdraft ceiling: how far below zero the balance may go"
    )

    balance: int = Field(
        default=0,
        sa_column=Column(BigInteger, nullable=False, default=0),
        description="Current balance (signed, >= -limit)"
    )

    def allows(self, new_balance: int) -> bool:
        """True when new_balance keeps the account within its overdraft limit"""
        return new_balance >= -self.limit

    class Config:
        """SQLModel configuration"""
        json_schema_extra = {
            "example": {
                "id": 1,
                "limit": 100000,
                "balance": -2500,
            }
        }
