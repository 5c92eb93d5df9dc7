"""Ledger domain use cases"""
from .apply_transaction import ApplyTransaction
from .get_statement import GetStatement, DEFAULT_STATEMENT_SIZE
from .dtos import (
    TransactionCommandDTO,
    AccountBalanceDTO,
    StatementBalanceDTO,
    StatementTransactionDTO,
    StatementResponseDTO,
)

__all__ = [
    "ApplyTransaction",
    "GetStatement",
    "DEFAULT_STATEMENT_SIZE",
    "TransactionCommandDTO",
    "AccountBalanceDTO",
    "StatementBalanceDTO",
    "StatementTransactionDTO",
    "StatementResponseDTO",
]
