# cart/services/cart_service.py

"""
CART SERVICE

Purpose:
- Every cart mutation for a buyer: add, update quantity, remove, clear.

Hard rules:
- A cart holds products of ONE stand at a time (StandMismatchError).
- Unit price is server-owned: the product's effective price is
  snapshotted on add; merges and quantity updates keep that snapshot.
- Totals are recomputed from all current items after each mutation.
- Reading a cart never creates one.
"""

from __future__ import annotations

import logging

from django.db import transaction
from django.db.models import Sum

from cart.models import Cart, CartItem
from core.exceptions import NotFoundError, StandMismatchError, StockError
from core.money import ZERO, money, to_int_qty
from products.models import Product

logger = logging.getLogger(__name__)


# =====================================================
# HELPERS
# =====================================================


def _recompute_totals(cart: Cart) -> Cart:
    agg = cart.items.aggregate(qty=Sum("quantity"), total=Sum("subtotal"))
    cart.total_items = int(agg["qty"] or 0)
    cart.total_price = money(agg["total"] or ZERO)
    cart.save(update_fields=["total_items", "total_price", "updated_at"])
    return cart


def _locked_cart(user) -> Cart:
    cart = Cart.objects.select_for_update().filter(user=user).first()
    if cart is None:
        raise NotFoundError("Cart not found")
    return cart


def _cart_item(cart: Cart, item_id) -> CartItem:
    item = cart.items.select_related("product").filter(pk=item_id).first()
    if item is None:
        raise NotFoundError("Cart item not found")
    return item


# =====================================================
# READ
# =====================================================


def get_cart(user) -> Cart:
    """
    The user's cart, or an unsaved empty Cart when none exists yet.
    """
    cart = Cart.objects.filter(user=user).prefetch_related("items__product").first()
    if cart is None:
        return Cart(user=user, total_items=0, total_price=ZERO)
    return cart


# =====================================================
# MUTATIONS
# =====================================================


@transaction.atomic
def add_item(*, user, product_id, quantity) -> Cart:
    qty = to_int_qty(quantity)

    product = Product.objects.filter(pk=product_id, is_active=True).first()
    if product is None:
        raise NotFoundError("Product not found or inactive")

    if product.stock < qty:
        raise StockError(product.name)

    Cart.objects.get_or_create(user=user)
    cart = _locked_cart(user)

    current = cart.items.order_by("created_at").first()
    if current is not None and current.stand_id != product.stand_id:
        logger.warning(
            "Cart stand mismatch",
            extra={"user_id": str(user.pk), "current_stand": str(current.stand_id), "requested_stand": str(product.stand_id)},
        )
        raise StandMismatchError(
            current_stand_id=current.stand_id,
            requested_stand_id=product.stand_id,
        )

    item = cart.items.filter(product=product).first()
    if item is not None:
        item.quantity = item.quantity + qty
        item.subtotal = money(item.price * item.quantity)
        item.save()
    else:
        price = product.effective_price
        CartItem.objects.create(
            cart=cart,
            product=product,
            stand_id=product.stand_id,
            quantity=qty,
            price=price,
            subtotal=money(price * qty),
        )

    return _recompute_totals(cart)


@transaction.atomic
def update_item(*, user, item_id, quantity) -> Cart:
    qty = to_int_qty(quantity)

    cart = _locked_cart(user)
    item = _cart_item(cart, item_id)

    if item.product.stock < qty:
        raise StockError(item.product.name)

    item.quantity = qty
    item.subtotal = money(item.price * qty)
    item.save()

    return _recompute_totals(cart)


@transaction.atomic
def remove_item(*, user, item_id) -> Cart:
    cart = _locked_cart(user)
    item = _cart_item(cart, item_id)
    item.delete()
    return _recompute_totals(cart)


@transaction.atomic
def clear_cart(user) -> Cart:
    cart = Cart.objects.select_for_update().filter(user=user).first()
    if cart is None:
        return get_cart(user)

    cart.items.all().delete()
    cart.total_items = 0
    cart.total_price = ZERO
    cart.save(update_fields=["total_items", "total_price", "updated_at"])
    return cart
