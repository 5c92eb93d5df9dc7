"""Unit tests for ledger error kinds"""

import pytest

from libs.result import Error, Return
from src.domain.errors import (
    ConflictError,
    LedgerError,
    LimitExceededError,
    NotFoundError,
    StorageError,
    ValidationError,
)


class TestLedgerErrors:

    @pytest.mark.parametrize(
        "error_cls, code",
        [
            (ValidationError, "VALIDATION_ERROR"),
            (NotFoundError, "ACCOUNT_NOT_FOUND"),
            (LimitExceededError, "LIMIT_EXCEEDED"),
            (ConflictError, "CONFLICT"),
            (StorageError, "STORAGE_ERROR"),
        ],
    )
    def test_each_kind_has_fixed_code(self, error_cls, code):
        error = error_cls(message="boom", reason="why")

        assert isinstance(error, LedgerError)
        assert isinstance(error, Error)
        assert error.code == code
        assert error.message == "boom"
        assert error.reason == "why"

    def test_only_conflict_is_retryable(self):
        assert ConflictError("x").retryable
        for error_cls in (ValidationError, NotFoundError, LimitExceededError, StorageError):
            assert not error_cls("x").retryable

    def test_errors_compare_by_kind_and_content(self):
        assert NotFoundError("missing") == NotFoundError("missing")
        assert NotFoundError("missing") != StorageError("missing")


class TestResult:

    def test_ok_result(self):
        result = Return.ok(42)

        assert result.is_ok()
        assert not result.is_err()
        assert result.value == 42
        assert result.error is None

    def test_err_result(self):
        result = Return.err(NotFoundError("missing"))

        assert result.is_err()
        assert result.error.code == "ACCOUNT_NOT_FOUND"
        with pytest.raises(ValueError):
            result.value
