# orders/models/order.py

"""
ORDER MODEL

Purpose:
- One order per stand per checkout.

Guarantees:
- Created once, atomically, with its items (orders.services.checkout_orchestrator).
- After creation only status, payment_proof_url and the soft-delete stamp
  (deleted_at) may change; money and ownership fields are immutable.
- Soft-deleted orders are hidden from every listing via Order.objects.live().
"""

import uuid
from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.utils import timezone


class OrderQuerySet(models.QuerySet):
    def live(self):
        return self.filter(deleted_at__isnull=True)


class Order(models.Model):
    STATUS_PAYMENT_PENDING = "payment_pending"
    STATUS_REQUEST = "request"
    STATUS_COOKING = "cooking"
    STATUS_DONE = "done"
    STATUS_CANCELLED = "cancelled"

    STATUS_CHOICES = [
        (STATUS_PAYMENT_PENDING, "Payment pending"),
        (STATUS_REQUEST, "Request"),
        (STATUS_COOKING, "Cooking"),
        (STATUS_DONE, "Done"),
        (STATUS_CANCELLED, "Cancelled"),
    ]

    PAYMENT_CARD = "card"
    PAYMENT_CASH = "cash"
    PAYMENT_QRIS = "qris"

    PAYMENT_METHOD_CHOICES = [
        (PAYMENT_CARD, "Card (balance)"),
        (PAYMENT_CASH, "Cash"),
        (PAYMENT_QRIS, "QRIS"),
    ]

    _IMMUTABLE_FIELDS = (
        "order_number",
        "user_id",
        "stand_id",
        "total_amount",
        "payment_method",
        "cash_amount",
    )

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    order_number = models.CharField(max_length=100, unique=True, editable=False)

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="orders",
    )
    stand = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="stand_orders",
    )

    total_amount = models.DecimalField(max_digits=12, decimal_places=2)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PAYMENT_PENDING)
    payment_method = models.CharField(max_length=10, choices=PAYMENT_METHOD_CHOICES)

    cash_amount = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    payment_proof_url = models.CharField(max_length=500, blank=True, default="")

    deleted_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = OrderQuerySet.as_manager()

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["stand", "status"], name="order_stand_status_idx"),
            models.Index(fields=["user", "created_at"], name="order_user_created_idx"),
        ]
        constraints = [
            models.CheckConstraint(condition=models.Q(total_amount__gte=0), name="order_total_non_negative"),
        ]

    def __str__(self):
        return f"{self.order_number} ({self.status})"

    @staticmethod
    def generate_number(*, user_id, stand_id) -> str:
        stamp = timezone.now().strftime("%Y%m%d%H%M%S")
        return (
            f"ORD-{uuid.UUID(str(user_id)).hex[:8].upper()}-{uuid.UUID(str(stand_id)).hex[:8].upper()}"
            f"-{stamp}-{uuid.uuid4().hex[:6].upper()}"
        )

    @property
    def change_amount(self):
        if self.cash_amount is None:
            return None
        return Decimal(self.cash_amount) - Decimal(self.total_amount)

    def _validate_immutable(self, previous: "Order"):
        for field in self._IMMUTABLE_FIELDS:
            if getattr(self, field) != getattr(previous, field):
                raise ValidationError(f"Order field '{field.removesuffix('_id')}' cannot be changed after creation")

    def save(self, *args, **kwargs):
        if not self._state.adding:
            previous = Order.objects.filter(pk=self.pk).first()
            if previous is not None:
                self._validate_immutable(previous)

        if not self.order_number:
            self.order_number = self.generate_number(user_id=self.user_id, stand_id=self.stand_id)

        return super().save(*args, **kwargs)
