"""
ORDER LIFECYCLE DOMAIN RULES

States:
    payment_pending -> request -> cooking -> done
    cancelled is the alternate terminal state

DESIGN PRINCIPLES:
- No database writes
- No stock or balance mutation (both happen once, at order creation)
- Single source of truth for who may move an order where
"""

from core.exceptions import InvalidStatusError
from orders.models import Order

# ============================================================
# STATE DEFINITIONS
# ============================================================

ORDER_STATUSES = frozenset(
    {
        Order.STATUS_PAYMENT_PENDING,
        Order.STATUS_REQUEST,
        Order.STATUS_COOKING,
        Order.STATUS_DONE,
        Order.STATUS_CANCELLED,
    }
)

TERMINAL_STATES = frozenset({Order.STATUS_DONE, Order.STATUS_CANCELLED})

# Vendors may set any known status from any state. Forward-only
# progression is not enforced for vendor updates.
VENDOR_SETTABLE_STATUSES = ORDER_STATUSES

BUYER_CANCELLABLE_STATES = frozenset({Order.STATUS_PAYMENT_PENDING, Order.STATUS_REQUEST})

VENDOR_UNDELETABLE_STATES = TERMINAL_STATES

PAYMENT_METHODS = frozenset({Order.PAYMENT_CARD, Order.PAYMENT_CASH, Order.PAYMENT_QRIS})


# ============================================================
# DOMAIN RULES
# ============================================================


def initial_status_for(payment_method: str) -> str:
    """
    qris waits for a payment proof; card is debited and cash is collected
    at creation, so both go straight to the stand's queue.
    """
    if payment_method == Order.PAYMENT_QRIS:
        return Order.STATUS_PAYMENT_PENDING
    return Order.STATUS_REQUEST


def validate_vendor_status(status: str) -> str:
    value = (status or "").strip()
    if value not in VENDOR_SETTABLE_STATUSES:
        raise InvalidStatusError(
            f"Invalid status. Use one of: {', '.join(sorted(VENDOR_SETTABLE_STATUSES))}"
        )
    return value


def can_buyer_cancel(*, order: Order) -> bool:
    return order.status in BUYER_CANCELLABLE_STATES


def can_vendor_delete(*, order: Order) -> bool:
    return order.status not in VENDOR_UNDELETABLE_STATES


def can_upload_payment_proof(*, order: Order) -> bool:
    return (
        order.payment_method == Order.PAYMENT_QRIS
        and order.status == Order.STATUS_PAYMENT_PENDING
    )
