# core/money.py

"""
MONEY HELPERS

Hard rules:
- Money is Decimal, quantized to 2dp with ROUND_HALF_UP.
- Quantities are whole integer units.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from core.exceptions import InvalidQuantityError, ValidationError

TWOPLACES = Decimal("0.01")
ZERO = Decimal("0.00")
HUNDRED = Decimal("100")


def money(value) -> Decimal:
    if value is None or value == "":
        return ZERO
    try:
        return Decimal(str(value)).quantize(TWOPLACES, rounding=ROUND_HALF_UP)
    except (InvalidOperation, ValueError) as exc:
        raise ValidationError(f"Invalid money amount: {value!r}") from exc


def positive_money(value, *, field: str = "amount") -> Decimal:
    amount = money(value)
    if amount <= ZERO:
        raise ValidationError(f"{field} must be greater than zero")
    return amount


def to_int_qty(value) -> int:
    """
    Quantity normalizer.
    HARD RULE: quantities are integer units >= 1.
    """
    if isinstance(value, bool):
        raise InvalidQuantityError()

    if isinstance(value, str):
        s = value.strip()
        if not s.isdigit():
            raise InvalidQuantityError()
        value = int(s)

    if not isinstance(value, int) or value < 1:
        raise InvalidQuantityError()

    return value


def discounted_price(price, discount) -> Decimal:
    """
    Effective unit price: price * (1 - discount/100) when discount > 0.
    """
    base = money(price)
    pct = Decimal(str(discount or 0))
    if pct <= 0:
        return base
    return money(base * (Decimal("1") - pct / HUNDRED))
