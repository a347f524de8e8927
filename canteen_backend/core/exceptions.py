# core/exceptions.py

"""
CANTEEN DOMAIN ERRORS

Centralized error taxonomy for every service in the project.

Rules:
- Services raise these; views never translate them by hand.
- Each error carries a stable machine `code` and the HTTP status the API
  exception handler renders it with.
- PersistenceError never carries storage details in its message; the
  original database error is chained and logged.
"""

from __future__ import annotations


class CanteenError(Exception):
    """Base exception for all canteen service failures."""

    code = "CANTEEN_ERROR"
    http_status = 400
    default_message = "Request could not be processed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


# ============================================================
# VALIDATION (400)
# ============================================================


class ValidationError(CanteenError):
    """Malformed or out-of-range input."""

    code = "VALIDATION_ERROR"
    default_message = "Invalid input"


class InvalidQuantityError(ValidationError):
    code = "INVALID_QUANTITY"
    default_message = "Quantity must be a whole number of at least 1"


class InvalidPaymentMethodError(ValidationError):
    code = "INVALID_PAYMENT_METHOD"
    default_message = "Invalid payment method. Use 'card', 'cash', or 'qris'"


class EmptyCartError(ValidationError):
    code = "EMPTY_CART"
    default_message = "Cart is empty"


class InsufficientCashError(ValidationError):
    code = "INSUFFICIENT_CASH"
    default_message = "Cash amount does not cover the order total"


class InvalidStatusError(ValidationError):
    code = "INVALID_STATUS"
    default_message = "Invalid order status"


class OrderNotEligibleError(ValidationError):
    code = "ORDER_NOT_ELIGIBLE"
    default_message = "Order is not eligible for this operation"


# ============================================================
# NOT FOUND (404)
# ============================================================


class NotFoundError(CanteenError):
    code = "NOT_FOUND"
    http_status = 404
    default_message = "Resource not found"


# ============================================================
# CONFLICT (409)
# ============================================================


class ConflictError(CanteenError):
    code = "CONFLICT"
    http_status = 409
    default_message = "Request conflicts with current state"


class StandMismatchError(ConflictError):
    code = "STAND_MISMATCH"
    default_message = (
        "Cannot add products from different stands. Please checkout or clear cart first."
    )

    def __init__(self, message: str | None = None, *, current_stand_id=None, requested_stand_id=None):
        super().__init__(message)
        self.current_stand_id = current_stand_id
        self.requested_stand_id = requested_stand_id


# ============================================================
# STOCK (409)
# ============================================================


class StockError(CanteenError):
    code = "INSUFFICIENT_STOCK"
    http_status = 409
    default_message = "Insufficient stock"

    def __init__(self, product_name: str | None = None, message: str | None = None):
        self.product_name = product_name
        if message is None and product_name:
            message = f"Insufficient stock for product: {product_name}"
        super().__init__(message)


# ============================================================
# BALANCE (400)
# ============================================================


class BalanceError(CanteenError):
    code = "BALANCE_ERROR"
    default_message = "Balance operation rejected"


class InsufficientBalanceError(BalanceError):
    code = "INSUFFICIENT_BALANCE"
    default_message = "Insufficient balance"


# ============================================================
# PERSISTENCE (500)
# ============================================================


class PersistenceError(CanteenError):
    code = "PERSISTENCE_ERROR"
    http_status = 500
    default_message = "The operation could not be saved. Please try again."
