"""Unit tests for API error mapping"""

import pytest

from libs.result import Error
from src.api.error import ClientError, get_status_code
from src.domain.errors import (
    ConflictError,
    LimitExceededError,
    NotFoundError,
    StorageError,
    ValidationError,
)


class TestStatusMapping:

    @pytest.mark.parametrize(
        "error, status_code",
        [
            (ValidationError("bad"), 422),
            (LimitExceededError("over"), 422),
            (NotFoundError("missing"), 404),
            (ConflictError("race"), 409),
            (StorageError("down"), 503),
        ],
    )
    def test_each_error_kind_maps_to_one_status(self, error, status_code):
        assert get_status_code(error) == status_code

    def test_unknown_error_defaults_to_bad_request(self):
        assert get_status_code(Error(code="OTHER", message="?")) == 400

    def test_client_error_uses_mapping(self):
        error = ClientError(NotFoundError("missing"))

        assert error.status_code == 404
        assert error.error.code == "ACCOUNT_NOT_FOUND"

    def test_client_error_status_can_be_overridden(self):
        assert ClientError(NotFoundError("missing"), status_code=410).status_code == 410
