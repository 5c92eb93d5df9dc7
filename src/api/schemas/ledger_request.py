"""Request schemas for Ledger API

Pydantic models for validating incoming HTTP requests.
"""

from pydantic import BaseModel, Field, StrictInt, StrictStr
from src.domain.transaction import (
    DESCRIPTION_MAX_LENGTH,
    DESCRIPTION_MIN_LENGTH,
    TransactionKind,
)


class TransactionRequestSchema(BaseModel):
    """
    Request schema for applying a transaction

    Used for POST /customers/{customer_id}/transactions endpoint.
    """

    amount: StrictInt = Field(
        ...,
        gt=0,
        description="Positive integer amount (no fractions)"
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

    class Config:
        json_schema_extra = {
            "example": {
                "amount": 1000,
                "kind": "c",
                "description": "salary"
            }
        }
