# orders/services/checkout_orchestrator.py

"""
CHECKOUT ORCHESTRATOR (APPLICATION SERVICE)

Purpose:
- Turn a buyer's cart, a buyer's direct item list, or a stand's counter
  order into Orders: one Order per stand.

Hard rules:
- Quantities are integer units; money is computed server-side.
- Per stand group, inside ONE DB transaction:
    lock products -> re-check stock -> decrement stock -> total ->
    payment rules -> Order + OrderItems -> card debit (ledger)
  Any failure rolls back every group of the same checkout.
- Stock is decremented with a conditional UPDATE (stock >= qty), so a
  stale read can never push stock below zero.
- Emptying the cart after a cart checkout runs after commit and is best
  effort: a failure there is logged and the Order stands.

Payment methods:
- card : status "request", buyer balance debited via LedgerService
- cash : status "request"; cart checkout requires cash_amount >= total
- qris : status "payment_pending"; stand QRIS attached when configured
"""

from __future__ import annotations

import logging
import uuid
from collections import OrderedDict
from dataclasses import dataclass, field
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.db import DatabaseError, transaction
from django.db.models import F
from django.utils import timezone

from cart.models import Cart
from cart.services import cart_service
from core.exceptions import (
    EmptyCartError,
    InsufficientCashError,
    InvalidPaymentMethodError,
    NotFoundError,
    PersistenceError,
    StockError,
    ValidationError,
)
from core.money import ZERO, money, to_int_qty
from ledger.models import Transaction
from ledger.services.ledger_service import apply_transaction
from orders.models import Order, OrderItem
from orders.services.order_lifecycle import PAYMENT_METHODS, initial_status_for
from products.models import Product
from stands.services.qris import qris_payload

logger = logging.getLogger(__name__)

User = get_user_model()


# ============================================================
# DATA
# ============================================================


@dataclass(frozen=True)
class CheckoutLine:
    product_id: uuid.UUID
    quantity: int
    # Snapshot price from the cart; None means "use the product's
    # effective price at lock time".
    price: Decimal | None = None


@dataclass
class CheckoutResult:
    orders: list[Order]
    qris: dict = field(default_factory=dict)

    @property
    def order(self) -> Order:
        return self.orders[0]

    def qris_for(self, order: Order) -> dict | None:
        return self.qris.get(order.pk)


# ============================================================
# HELPERS
# ============================================================


def _validate_payment_method(payment_method) -> str:
    value = (payment_method or "").strip().lower()
    if value not in PAYMENT_METHODS:
        raise InvalidPaymentMethodError()
    return value


def _as_uuid(value) -> uuid.UUID:
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError, AttributeError) as exc:
        raise ValidationError(f"Invalid product_id: {value!r}") from exc


def _normalize_items(items) -> list[CheckoutLine]:
    """
    Merge duplicate products, keeping first-seen order.
    """
    merged: "OrderedDict[uuid.UUID, int]" = OrderedDict()

    for raw in items or []:
        if not isinstance(raw, dict):
            raise ValidationError("Each item must be an object with product_id and quantity")

        product_id = _as_uuid(raw.get("product_id"))
        qty = to_int_qty(raw.get("quantity"))
        merged[product_id] = merged.get(product_id, 0) + qty

    if not merged:
        raise EmptyCartError("No items provided")

    return [CheckoutLine(product_id=pid, quantity=qty) for pid, qty in merged.items()]


def _group_by_stand(lines: list[CheckoutLine]) -> "OrderedDict[uuid.UUID, list[CheckoutLine]]":
    products = Product.objects.in_bulk([line.product_id for line in lines])

    groups: "OrderedDict[uuid.UUID, list[CheckoutLine]]" = OrderedDict()
    for line in lines:
        product = products.get(line.product_id)
        if product is None or not product.is_active:
            raise NotFoundError("Product not found or inactive")
        groups.setdefault(product.stand_id, []).append(line)

    # Deterministic lock order across concurrent multi-stand checkouts.
    return OrderedDict(sorted(groups.items(), key=lambda kv: str(kv[0])))


def _decrement_stock(*, product: Product, quantity: int) -> None:
    updated = Product.objects.filter(pk=product.pk, stock__gte=quantity).update(
        stock=F("stock") - quantity,
        updated_at=timezone.now(),
    )
    if updated != 1:
        raise StockError(product.name)


def _qris_map(orders: list[Order]) -> dict:
    result = {}
    for order in orders:
        if order.payment_method != Order.PAYMENT_QRIS:
            continue
        payload = qris_payload(order.stand_id)
        if payload is not None:
            result[order.pk] = payload
    return result


# ============================================================
# CORE: ONE STAND GROUP
# ============================================================


def _place_group(
    *,
    buyer,
    stand_id,
    lines: list[CheckoutLine],
    payment_method: str,
    cash_amount: Decimal | None = None,
) -> Order:
    """
    Must run inside transaction.atomic(); raises on any rule violation so
    the caller's atomic block rolls the whole checkout back.
    """
    if not lines:
        raise EmptyCartError()

    ids = sorted((line.product_id for line in lines), key=str)
    locked = {p.pk: p for p in Product.objects.select_for_update().filter(pk__in=ids).order_by("pk")}

    priced: list[tuple[Product, CheckoutLine, Decimal, Decimal]] = []
    for line in lines:
        product = locked.get(line.product_id)
        if product is None or not product.is_active:
            raise NotFoundError("Product not found or inactive")
        if product.stand_id != stand_id:
            raise ValidationError(f"Product does not belong to this stand: {product.name}")

        if product.stock < line.quantity:
            logger.warning(
                "Checkout rejected: insufficient stock",
                extra={"product_id": str(product.pk), "stock": product.stock, "requested": line.quantity},
            )
            raise StockError(product.name)

        price = money(line.price) if line.price is not None else product.effective_price
        priced.append((product, line, price, money(price * line.quantity)))

    for product, line, _, _ in priced:
        _decrement_stock(product=product, quantity=line.quantity)

    total = money(sum((subtotal for _, _, _, subtotal in priced), ZERO))

    if payment_method == Order.PAYMENT_CASH and cash_amount is not None and cash_amount < total:
        raise InsufficientCashError(f"Insufficient cash. Required: {total}, Provided: {cash_amount}")

    order = Order.objects.create(
        user=buyer,
        stand_id=stand_id,
        total_amount=total,
        status=initial_status_for(payment_method),
        payment_method=payment_method,
        cash_amount=cash_amount if payment_method == Order.PAYMENT_CASH else None,
    )

    for product, line, price, subtotal in priced:
        OrderItem.objects.create(
            order=order,
            product=product,
            quantity=line.quantity,
            price=price,
            subtotal=subtotal,
        )

    if payment_method == Order.PAYMENT_CARD:
        apply_transaction(
            user=buyer,
            tx_type=Transaction.TYPE_PURCHASE,
            amount=total,
            order=order,
            description=f"Purchase: {order.order_number}",
        )

    logger.info(
        "Order placed",
        extra={
            "order_number": order.order_number,
            "user_id": str(buyer.pk),
            "stand_id": str(stand_id),
            "payment_method": payment_method,
            "total_amount": str(total),
        },
    )
    return order


def _run_atomic(fn, *, context: dict):
    """
    Run a checkout unit; storage failures surface as PersistenceError.
    """
    try:
        with transaction.atomic():
            return fn()
    except DatabaseError as exc:
        logger.exception("Checkout failed to persist", extra=context)
        raise PersistenceError() from exc


# ============================================================
# PUBLIC ENTRYPOINTS
# ============================================================


def checkout_cart(*, user, payment_method, cash_amount=None) -> CheckoutResult:
    """
    Convert the buyer's single-stand cart into one Order, then empty the cart.
    """
    payment_method = _validate_payment_method(payment_method)

    if payment_method == Order.PAYMENT_CASH:
        cash_amount = money(cash_amount)
        if cash_amount <= ZERO:
            raise InsufficientCashError("Cash amount is required for cash payment")
    else:
        cash_amount = None

    cart = Cart.objects.filter(user=user).first()
    items = list(cart.items.select_related("product").order_by("created_at")) if cart else []
    if not items:
        raise EmptyCartError()

    stand_id = items[0].stand_id
    lines = [
        CheckoutLine(product_id=item.product_id, quantity=item.quantity, price=item.price)
        for item in items
    ]

    order = _run_atomic(
        lambda: _place_group(
            buyer=user,
            stand_id=stand_id,
            lines=lines,
            payment_method=payment_method,
            cash_amount=cash_amount,
        ),
        context={"user_id": str(user.pk), "source": "cart"},
    )

    try:
        cart_service.clear_cart(user)
    except DatabaseError:
        logger.warning(
            "Cart cleanup after checkout failed",
            exc_info=True,
            extra={"user_id": str(user.pk), "order_number": order.order_number},
        )

    return CheckoutResult(orders=[order], qris=_qris_map([order]))


def place_order(*, user, payment_method, items) -> CheckoutResult:
    """
    Direct buyer order from an item list; may span stands and yields one
    Order per stand. All groups commit together or not at all.
    """
    payment_method = _validate_payment_method(payment_method)
    lines = _normalize_items(items)
    groups = _group_by_stand(lines)

    def _place_all():
        return [
            _place_group(buyer=user, stand_id=stand_id, lines=group, payment_method=payment_method)
            for stand_id, group in groups.items()
        ]

    orders = _run_atomic(_place_all, context={"user_id": str(user.pk), "source": "direct"})
    return CheckoutResult(orders=orders, qris=_qris_map(orders))


def create_stand_order(*, stand, user_id, payment_method, items) -> CheckoutResult:
    """
    Counter order entered by a stand for a buyer. Every product must
    belong to the calling stand.
    """
    payment_method = _validate_payment_method(payment_method)

    buyer = User.objects.filter(pk=user_id, is_active=True).first()
    if buyer is None:
        raise NotFoundError("User not found")

    lines = _normalize_items(items)

    owned = set(
        Product.objects.filter(pk__in=[line.product_id for line in lines], stand=stand).values_list("pk", flat=True)
    )
    if len(owned) != len(lines):
        raise NotFoundError("Product not found or doesn't belong to this stand")

    order = _run_atomic(
        lambda: _place_group(buyer=buyer, stand_id=stand.pk, lines=lines, payment_method=payment_method),
        context={"stand_id": str(stand.pk), "user_id": str(buyer.pk), "source": "stand"},
    )
    return CheckoutResult(orders=[order], qris=_qris_map([order]))
