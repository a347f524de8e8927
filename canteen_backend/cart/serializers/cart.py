# cart/serializers/cart.py

"""
CART SERIALIZER

Guarantees:
- items and totals are read-only, computed server-side
- an unsaved (never used) cart renders as empty with zero totals
"""

from rest_framework import serializers

from cart.models import Cart
from .cart_item import CartItemSerializer


class CartSerializer(serializers.ModelSerializer):
    items = serializers.SerializerMethodField()
    stand_id = serializers.SerializerMethodField()

    class Meta:
        model = Cart
        fields = [
            "id",
            "stand_id",
            "items",
            "total_items",
            "total_price",
        ]
        read_only_fields = fields

    def to_representation(self, instance):
        data = super().to_representation(instance)
        if instance._state.adding:
            data["id"] = None
        return data

    def get_items(self, obj) -> list:
        if obj._state.adding:
            return []
        return CartItemSerializer(obj.items.select_related("product").order_by("created_at"), many=True).data

    def get_stand_id(self, obj):
        stand_id = obj.stand_id
        return str(stand_id) if stand_id else None
