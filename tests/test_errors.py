"""Error hierarchy and user-facing messages."""

from __future__ import annotations

import pytest

from core.errors import (
    ConflictError,
    NotFoundError,
    OrderingError,
    TransientConnectivityError,
    ValidationError,
    ValidationReason,
)


class TestHierarchy:
    @pytest.mark.parametrize(
        "error",
        [
            ValidationError(ValidationReason.EMPTY_CART),
            NotFoundError(3),
            TransientConnectivityError(),
            ConflictError(3, 1, 2),
        ],
    )
    def test_all_are_ordering_errors(self, error: Exception) -> None:
        assert isinstance(error, OrderingError)


class TestMessages:
    def test_every_reason_has_a_default_message(self) -> None:
        for reason in ValidationReason:
            assert ValidationError(reason).message

    def test_empty_cart_message_is_actionable(self) -> None:
        err = ValidationError(ValidationReason.EMPTY_CART)
        assert "add items" in err.message
        assert str(err) == err.message

    def test_custom_message(self) -> None:
        err = ValidationError(ValidationReason.INVALID_STATUS, "nope")
        assert err.message == "nope"
        assert err.reason is ValidationReason.INVALID_STATUS

    def test_not_found_names_the_order(self) -> None:
        assert "#42" in NotFoundError(42).message

    def test_conflict_keeps_versions(self) -> None:
        err = ConflictError(7, 1, 3)
        assert (err.order_id, err.expected_version, err.actual_version) == (7, 1, 3)
