# core/errors.py
"""
Errors raised by the cart, submission and order workflow code.

Every error carries a short `message` that the UI can show as-is.
"""
from enum import Enum


class ValidationReason(str, Enum):
    EMPTY_CART = "empty_cart"
    INVALID_TABLE_NUMBER = "invalid_table_number"
    UNKNOWN_TABLE = "unknown_table"
    INVALID_STATUS = "invalid_status"
    INVALID_TRANSITION = "invalid_transition"


_DEFAULT_MESSAGES = {
    ValidationReason.EMPTY_CART: "Please add items to your cart before placing an order.",
    ValidationReason.INVALID_TABLE_NUMBER: "Table number must be a positive whole number.",
    ValidationReason.UNKNOWN_TABLE: "This table is not registered. Please ask a member of staff.",
    ValidationReason.INVALID_STATUS: "Unknown order status.",
    ValidationReason.INVALID_TRANSITION: "That status change is not allowed.",
}


class OrderingError(Exception):
    """Base class for all ordering errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(OrderingError):
    """Input rejected before anything was persisted."""

    def __init__(self, reason: ValidationReason, message: str = None):
        super().__init__(message or _DEFAULT_MESSAGES[reason])
        self.reason = reason


class NotFoundError(OrderingError):
    def __init__(self, order_id):
        super().__init__(f"Order #{order_id} was not found.")
        self.order_id = order_id


class TransientConnectivityError(OrderingError):
    """The order store could not be reached; nothing was changed."""

    def __init__(self, message: str = "Unable to reach the order service. Please try again."):
        super().__init__(message)


class ConflictError(OrderingError):
    """A status update was based on a stale version of the order."""

    def __init__(self, order_id, expected_version, actual_version):
        super().__init__(
            f"Order #{order_id} was changed by someone else (expected v{expected_version}, found v{actual_version}). Refresh and try again."
        )
        self.order_id = order_id
        self.expected_version = expected_version
        self.actual_version = actual_version
