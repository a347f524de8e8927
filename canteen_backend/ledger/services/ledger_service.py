# ledger/services/ledger_service.py

"""
======================================================
PATH: ledger/services/ledger_service.py
======================================================
LEDGER SERVICE

The only code path that changes User.balance.

HARD RULES:
- read balance -> check -> write balance -> write Transaction is ONE
  atomic unit, with the user row locked (select_for_update)
- purchase never takes balance below zero (InsufficientBalanceError)
- callers running inside a wider atomic block (checkout) get rolled back
  together with it when this raises
"""

from __future__ import annotations

import logging
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.db import DatabaseError, transaction

from core.exceptions import InsufficientBalanceError, NotFoundError, PersistenceError, ValidationError
from core.money import money, positive_money
from ledger.models import Transaction

logger = logging.getLogger(__name__)

User = get_user_model()

TOP_UP_DESCRIPTION = "Balance top-up"


@transaction.atomic
def apply_transaction(*, user, tx_type: str, amount, order=None, description: str = "") -> Transaction:
    """
    Apply one balance movement and record it.

    - top_up / refund add, purchase subtracts
    - the passed `user` instance is refreshed with the new balance
    """
    if tx_type not in Transaction.NUMBER_PREFIX:
        raise ValidationError(f"Unknown transaction type: {tx_type!r}")

    amount = positive_money(amount)

    locked = User.objects.select_for_update().filter(pk=user.pk).first()
    if locked is None:
        raise NotFoundError("User not found")

    balance_before = money(locked.balance)

    if tx_type == Transaction.TYPE_PURCHASE:
        if balance_before < amount:
            logger.warning(
                "Balance debit rejected",
                extra={"user_id": str(locked.pk), "required": str(amount), "available": str(balance_before)},
            )
            raise InsufficientBalanceError(
                f"Insufficient balance. Required: {amount}, Available: {balance_before}"
            )
        balance_after = balance_before - amount
    else:
        balance_after = balance_before + amount

    locked.balance = balance_after
    locked.save(update_fields=["balance", "updated_at"])

    entry = Transaction(
        user=locked,
        type=tx_type,
        amount=amount,
        balance_before=balance_before,
        balance_after=balance_after,
        description=description,
        order=order,
    )
    entry.save()

    user.balance = balance_after

    logger.info(
        "Balance transaction applied",
        extra={
            "transaction_number": entry.transaction_number,
            "user_id": str(locked.pk),
            "type": tx_type,
            "amount": str(amount),
            "balance_after": str(balance_after),
        },
    )
    return entry


def top_up_balance(user_id, amount) -> Decimal:
    """
    Admin top-up. Returns the user's new balance.
    """
    amount = positive_money(amount)

    user = User.objects.filter(pk=user_id).first()
    if user is None:
        raise NotFoundError("User not found")

    try:
        apply_transaction(
            user=user,
            tx_type=Transaction.TYPE_TOP_UP,
            amount=amount,
            description=TOP_UP_DESCRIPTION,
        )
    except DatabaseError as exc:
        logger.exception("Top-up failed to persist", extra={"user_id": str(user_id)})
        raise PersistenceError() from exc

    return money(user.balance)


def get_balance(user) -> Decimal:
    current = User.objects.filter(pk=user.pk).values_list("balance", flat=True).first()
    if current is None:
        raise NotFoundError("User not found")
    return money(current)


def list_transactions(user):
    return Transaction.objects.filter(user=user).select_related("order").order_by("-created_at")
