# orders/models/order_item.py

"""
ORDER ITEM MODEL

Immutable snapshot of one line at order creation. Later product price
changes never reach existing orders.
"""

import uuid

from django.core.exceptions import ValidationError
from django.db import models

from products.models import Product
from .order import Order


class OrderItem(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="items")
    product = models.ForeignKey(Product, on_delete=models.PROTECT, related_name="order_items")

    quantity = models.PositiveIntegerField()
    price = models.DecimalField(max_digits=10, decimal_places=2)
    subtotal = models.DecimalField(max_digits=12, decimal_places=2)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at"]

    def clean(self):
        if self.quantity is None or int(self.quantity) <= 0:
            raise ValidationError({"quantity": "Quantity must be greater than zero"})
        if self.subtotal != self.price * self.quantity:
            raise ValidationError({"subtotal": "subtotal must equal price * quantity"})

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValidationError("Order items are immutable once created")
        self.full_clean()
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("Order items are immutable and cannot be deleted")

    def __str__(self):
        return f"{getattr(self.product, 'name', 'Product')} x {self.quantity}"
