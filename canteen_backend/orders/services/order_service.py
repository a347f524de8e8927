# orders/services/order_service.py

"""
ORDER SERVICE

Purpose:
- Everything that happens to an Order after checkout: status updates by
  the stand, buyer cancellation, stand deletion, QRIS payment proof.
- Read helpers scoped to the buyer or the stand.

Rules:
- Lifecycle decisions live in orders.services.order_lifecycle.
- Status changes never touch stock or balance.
- Cancellation and deletion are soft: status "cancelled" + deleted_at.
  No restock and no refund happen automatically; a cancelled card order
  is logged for manual reconciliation.
"""

from __future__ import annotations

import calendar
import logging
import os
import uuid

from django.conf import settings
from django.core.files.storage import default_storage
from django.db import transaction
from django.db.models import Count, Q, Sum
from django.db.models.functions import TruncMonth
from django.utils import timezone

from core.exceptions import NotFoundError, OrderNotEligibleError, ValidationError
from core.money import ZERO, money
from orders.models import Order
from orders.services.order_lifecycle import (
    can_buyer_cancel,
    can_upload_payment_proof,
    can_vendor_delete,
    validate_vendor_status,
)
from stands.services.qris import get_qris_for_stand

logger = logging.getLogger(__name__)

PENDING_STATUSES = (Order.STATUS_PAYMENT_PENDING, Order.STATUS_REQUEST, Order.STATUS_COOKING)


# ============================================================
# QUERIES
# ============================================================


def _with_items(qs):
    return qs.select_related("user", "stand").prefetch_related("items__product")


def list_buyer_orders(user):
    return _with_items(Order.objects.live().filter(user=user)).order_by("-created_at")


def get_buyer_order(*, user, order_id) -> Order:
    order = _with_items(Order.objects.live().filter(pk=order_id, user=user)).first()
    if order is None:
        raise NotFoundError("Order not found")
    return order


def list_stand_orders(stand):
    return _with_items(Order.objects.live().filter(stand=stand)).order_by("-created_at")


def list_pending_stand_orders(stand):
    return list_stand_orders(stand).filter(status__in=PENDING_STATUSES).order_by("created_at")


def get_stand_order(*, stand, order_id) -> Order:
    order = _with_items(Order.objects.live().filter(pk=order_id, stand=stand)).first()
    if order is None:
        raise NotFoundError("Order not found")
    return order


# ============================================================
# STAND REPORTS
# ============================================================


def _year_month(year, month=None) -> tuple[int, int | None]:
    try:
        year = int(year)
        month = int(month) if month is not None else None
    except (TypeError, ValueError) as exc:
        raise ValidationError("year and month must be integers") from exc

    if not 2000 <= year <= 9999:
        raise ValidationError("year is out of range")
    if month is not None and not 1 <= month <= 12:
        raise ValidationError("month must be between 1 and 12")
    return year, month


def _revenue_totals(qs) -> dict:
    """
    Cancelled orders are counted nowhere: no revenue, no order count.
    """
    agg = qs.exclude(status=Order.STATUS_CANCELLED).aggregate(
        total_orders=Count("pk"),
        completed_orders=Count("pk", filter=Q(status=Order.STATUS_DONE)),
        pending_orders=Count(
            "pk",
            filter=Q(status__in=[Order.STATUS_PAYMENT_PENDING, Order.STATUS_REQUEST]),
        ),
        total_revenue=Sum("total_amount"),
    )
    agg["total_revenue"] = money(agg["total_revenue"] or ZERO)
    return agg


def list_stand_orders_for_month(*, stand, year, month) -> tuple:
    """
    (orders, summary) for one calendar month in the server time zone.
    """
    year, month = _year_month(year, month)
    qs = list_stand_orders(stand).filter(created_at__year=year, created_at__month=month)

    summary = {"year": year, "month": month, **_revenue_totals(qs)}
    return qs, summary


def monthly_revenue_recap(*, stand, year) -> dict:
    """
    Per-month revenue for a stand over one year, all twelve months
    present (zero-filled), plus the yearly totals.
    """
    year, _ = _year_month(year)
    qs = Order.objects.live().filter(stand=stand, created_at__year=year).exclude(status=Order.STATUS_CANCELLED)

    rows = (
        qs.annotate(period=TruncMonth("created_at"))
        .values("period")
        .annotate(
            total_orders=Count("pk"),
            completed_orders=Count("pk", filter=Q(status=Order.STATUS_DONE)),
            total_revenue=Sum("total_amount"),
        )
        .order_by("period")
    )
    by_month = {row["period"].month: row for row in rows}

    months = []
    for month in range(1, 13):
        row = by_month.get(month, {})
        months.append(
            {
                "month": month,
                "month_name": calendar.month_name[month],
                "total_orders": row.get("total_orders", 0),
                "completed_orders": row.get("completed_orders", 0),
                "total_revenue": money(row.get("total_revenue") or ZERO),
            }
        )

    totals = _revenue_totals(qs)
    totals.pop("pending_orders")
    return {"year": year, "months": months, "yearly_summary": totals}


def _lock(**lookup) -> Order:
    order = Order.objects.live().select_for_update().filter(**lookup).first()
    if order is None:
        raise NotFoundError("Order not found")
    return order


def _soft_cancel(order: Order) -> Order:
    order.status = Order.STATUS_CANCELLED
    order.deleted_at = timezone.now()
    order.save(update_fields=["status", "deleted_at", "updated_at"])

    if order.payment_method == Order.PAYMENT_CARD:
        logger.warning(
            "Card-paid order cancelled; balance not refunded automatically",
            extra={"order_number": order.order_number, "total_amount": str(order.total_amount)},
        )
    return order


# ============================================================
# STAND ACTIONS
# ============================================================


@transaction.atomic
def update_order_status(*, stand, order_id, new_status) -> Order:
    status = validate_vendor_status(new_status)

    order = _lock(pk=order_id, stand=stand)
    previous = order.status

    order.status = status
    order.save(update_fields=["status", "updated_at"])

    logger.info(
        "Order status updated",
        extra={"order_number": order.order_number, "from": previous, "to": status},
    )
    return order


@transaction.atomic
def delete_stand_order(*, stand, order_id) -> Order:
    order = _lock(pk=order_id, stand=stand)

    if not can_vendor_delete(order=order):
        raise OrderNotEligibleError(f"Cannot delete an order that is {order.status}")

    _soft_cancel(order)
    logger.info("Order deleted by stand", extra={"order_number": order.order_number})
    return order


# ============================================================
# BUYER ACTIONS
# ============================================================


@transaction.atomic
def cancel_order(*, user, order_id) -> Order:
    order = _lock(pk=order_id, user=user)

    if not can_buyer_cancel(order=order):
        raise OrderNotEligibleError("Order can only be cancelled while payment is pending or requested")

    _soft_cancel(order)
    logger.info("Order cancelled by buyer", extra={"order_number": order.order_number})
    return order


def get_qris_for_order(*, user, order_id) -> dict:
    order = get_buyer_order(user=user, order_id=order_id)
    payload = get_qris_for_stand(order.stand_id)
    return {
        **payload,
        "order_id": str(order.pk),
        "order_number": order.order_number,
        "total_amount": order.total_amount,
    }


# ============================================================
# PAYMENT PROOF (QRIS)
# ============================================================


def _ensure_proof_eligible(order: Order) -> None:
    if not can_upload_payment_proof(order=order):
        raise OrderNotEligibleError("Order is not eligible for payment proof upload")


def _apply_payment_proof(order: Order, file_ref: str) -> Order:
    order.payment_proof_url = file_ref
    order.status = Order.STATUS_REQUEST
    order.save(update_fields=["payment_proof_url", "status", "updated_at"])

    logger.info("Payment proof accepted", extra={"order_number": order.order_number})
    return order


@transaction.atomic
def upload_payment_proof(*, user, order_id, file_ref: str) -> Order:
    """
    Attach an already-stored proof reference and move payment_pending -> request.
    """
    file_ref = (file_ref or "").strip()
    if not file_ref:
        raise ValidationError("Payment proof reference is required")

    order = _lock(pk=order_id, user=user)
    _ensure_proof_eligible(order)
    return _apply_payment_proof(order, file_ref)


def validate_payment_proof_file(upload) -> str:
    """
    Returns the lowercased extension of an acceptable proof image.
    """
    if upload is None:
        raise ValidationError("Payment proof file is required")

    ext = os.path.splitext(upload.name or "")[1].lower()
    if ext not in settings.PAYMENT_PROOF_EXTENSIONS:
        raise ValidationError(
            f"Invalid file type. Allowed: {', '.join(settings.PAYMENT_PROOF_EXTENSIONS)}"
        )

    if upload.size > settings.PAYMENT_PROOF_MAX_BYTES:
        raise ValidationError("Payment proof file is too large")

    return ext


@transaction.atomic
def submit_payment_proof(*, user, order_id, upload) -> Order:
    """
    Validate + store an uploaded proof image, then apply it to the order.
    The order is checked before the file is written, so rejected uploads
    leave nothing behind in storage.
    """
    ext = validate_payment_proof_file(upload)

    order = _lock(pk=order_id, user=user)
    _ensure_proof_eligible(order)

    name = f"{settings.PAYMENT_PROOF_DIR}/{order.pk}_{uuid.uuid4().hex}{ext}"
    saved = default_storage.save(name, upload)

    return _apply_payment_proof(order, default_storage.url(saved))
