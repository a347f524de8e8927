# cart/models/cart.py

"""
CART MODEL

Purpose:
- Per-user staging area for a purchase before checkout.

Rules:
- Exactly one cart per user (DB constraint); created lazily on first add.
- A cart is never deleted, only emptied.
- total_items / total_price are recomputed from the items on every
  mutation by cart.services.cart_service, never adjusted in place.
"""

import uuid
from decimal import Decimal

from django.conf import settings
from django.db import models


class Cart(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="cart",
    )

    total_items = models.PositiveIntegerField(default=0)
    total_price = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-updated_at"]

    @property
    def stand_id(self):
        """Stand of the items currently in the cart, or None when empty."""
        if self._state.adding:
            return None
        first = self.items.order_by("created_at").first()
        return first.stand_id if first else None

    def __str__(self):
        return f"Cart({self.user_id}) items={self.total_items}"
