# products/services/menu.py

"""
STAND MENU SERVICE

Purpose:
- A stand manages its own products: create, edit price/discount/stock,
  switch availability, delete.

Rules:
- Every lookup is scoped to the calling stand; another stand's product
  is reported as not found.
- Edits lock the product row, so a restock never interleaves with a
  checkout decrementing the same row.
- A product that appears on any order cannot be deleted (order items keep
  a PROTECT reference); it can only be deactivated.
"""

from __future__ import annotations

import logging

from django.db import transaction
from django.db.models import ProtectedError

from core.exceptions import ConflictError, NotFoundError
from products.models import Product

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("name", "description", "price", "discount", "stock", "is_active")


def list_stand_products(stand):
    return Product.objects.filter(stand=stand).order_by("name")


def _locked(*, stand, product_id) -> Product:
    product = Product.objects.select_for_update().filter(pk=product_id, stand=stand).first()
    if product is None:
        raise NotFoundError("Product not found")
    return product


def create_product(*, stand, data: dict) -> Product:
    product = Product.objects.create(
        stand=stand,
        **{field: data[field] for field in EDITABLE_FIELDS if field in data},
    )
    logger.info(
        "Product created",
        extra={"stand_id": str(stand.pk), "product_id": str(product.pk), "stock": product.stock},
    )
    return product


@transaction.atomic
def update_product(*, stand, product_id, data: dict) -> Product:
    product = _locked(stand=stand, product_id=product_id)

    changed = [field for field in EDITABLE_FIELDS if field in data]
    for field in changed:
        setattr(product, field, data[field])

    if changed:
        product.save(update_fields=[*changed, "updated_at"])
        logger.info(
            "Product updated",
            extra={"product_id": str(product.pk), "fields": changed},
        )
    return product


def set_product_active(*, stand, product_id, is_active: bool) -> Product:
    return update_product(stand=stand, product_id=product_id, data={"is_active": bool(is_active)})


@transaction.atomic
def delete_product(*, stand, product_id) -> None:
    product = _locked(stand=stand, product_id=product_id)
    try:
        with transaction.atomic():
            product.delete()
    except ProtectedError as exc:
        raise ConflictError("Product has orders and cannot be deleted; deactivate it instead") from exc

    logger.info("Product deleted", extra={"product_id": str(product_id), "stand_id": str(stand.pk)})
