"""Unit tests for Transaction domain entity"""

from datetime import datetime, timezone

from src.domain.base import as_utc
from src.domain.transaction import Transaction, TransactionKind


class TestTransactionKind:
    """Test TransactionKind enum"""

    def test_wire_codes(self):
        assert TransactionKind("c") is TransactionKind.CREDIT
        assert TransactionKind("d") is TransactionKind.DEBIT

    def test_credit_is_positive_delta(self):
        assert TransactionKind.CREDIT.signed(500) == 500

    def test_debit_is_negative_delta(self):
        assert TransactionKind.DEBIT.signed(500) == -500


class TestTransactionCreation:
    """Test Transaction entity creation"""

    def test_create_transaction_with_valid_data(self):
        """Test creating Transaction with all required fields"""
        # Arrange & Act
        transaction = Transaction(
            account_id=1,
            amount=1000,
            kind="d",
            description="rent",
            balance_after=-1000,
        )

        # Assert
        assert transaction.id is None
        assert transaction.account_id == 1
        assert transaction.amount == 1000
        assert transaction.kind == "d"
        assert transaction.balance_after == -1000

    def test_occurred_at_is_assigned_in_utc(self):
        """Test that occurred_at defaults to an aware UTC timestamp"""
        # Arrange & Act
        transaction = Transaction(
            account_id=1, amount=1, kind="c", description="x", balance_after=1
        )

        # Assert
        assert isinstance(transaction.occurred_at, datetime)
        assert transaction.occurred_at.tzinfo is not None
        assert transaction.occurred_at.utcoffset().total_seconds() == 0


class TestAsUtc:
    """Test timestamp normalization for databases without tz support"""

    def test_naive_datetime_is_treated_as_utc(self):
        naive = datetime(2024, 1, 17, 2, 34, 38)

        assert as_utc(naive) == datetime(2024, 1, 17, 2, 34, 38, tzinfo=timezone.utc)

    def test_aware_datetime_is_kept(self):
        aware = datetime(2024, 1, 17, 2, 34, 38, tzinfo=timezone.utc)

        assert as_utc(aware) == aware
