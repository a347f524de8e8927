# ledger/models.py

"""
======================================================
PATH: ledger/models.py
======================================================
BALANCE TRANSACTION MODEL

One row per balance-affecting event (top-up, card purchase, refund).

Guarantees:
- Immutable once created (no updates, no deletes)
- balance_after = balance_before +/- amount, checked on create
- transaction_number is unique (timestamp + random suffix)
"""

from __future__ import annotations

import uuid
from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.utils import timezone


class Transaction(models.Model):
    TYPE_TOP_UP = "top_up"
    TYPE_PURCHASE = "purchase"
    TYPE_REFUND = "refund"

    TYPE_CHOICES = [
        (TYPE_TOP_UP, "Top up"),
        (TYPE_PURCHASE, "Purchase"),
        (TYPE_REFUND, "Refund"),
    ]

    NUMBER_PREFIX = {
        TYPE_TOP_UP: "TOPUP",
        TYPE_PURCHASE: "PUR",
        TYPE_REFUND: "REF",
    }

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    transaction_number = models.CharField(max_length=64, unique=True, editable=False)

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="transactions",
    )

    type = models.CharField(max_length=20, choices=TYPE_CHOICES)

    amount = models.DecimalField(max_digits=12, decimal_places=2)
    balance_before = models.DecimalField(max_digits=12, decimal_places=2)
    balance_after = models.DecimalField(max_digits=12, decimal_places=2)

    description = models.TextField(blank=True, default="")

    order = models.ForeignKey(
        "orders.Order",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="transactions",
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["user", "created_at"], name="ledger_user_created_idx"),
        ]
        constraints = [
            models.CheckConstraint(condition=models.Q(amount__gt=0), name="ledger_amount_positive"),
            models.CheckConstraint(condition=models.Q(balance_after__gte=0), name="ledger_balance_after_non_negative"),
        ]

    def __str__(self):
        return f"{self.transaction_number} ({self.type} {self.amount})"

    @classmethod
    def generate_number(cls, tx_type: str) -> str:
        prefix = cls.NUMBER_PREFIX.get(tx_type, "TX")
        stamp = timezone.now().strftime("%Y%m%d%H%M%S")
        return f"{prefix}-{stamp}-{uuid.uuid4().hex[:8].upper()}"

    def clean(self):
        if self.type not in self.NUMBER_PREFIX:
            raise ValidationError({"type": f"Unknown transaction type: {self.type!r}"})

        amount = Decimal(self.amount)
        before = Decimal(self.balance_before)
        after = Decimal(self.balance_after)

        if amount <= 0:
            raise ValidationError({"amount": "amount must be greater than zero"})

        expected = before - amount if self.type == self.TYPE_PURCHASE else before + amount
        if after != expected:
            raise ValidationError("balance_after does not reconcile with balance_before and amount")

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValidationError("Transaction records are immutable once created")

        if not self.transaction_number:
            self.transaction_number = self.generate_number(self.type)

        self.full_clean()
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("Transaction records are immutable and cannot be deleted")
