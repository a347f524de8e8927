# cart/serializers/cart_item.py

from rest_framework import serializers

from cart.models import CartItem


class CartItemSerializer(serializers.ModelSerializer):
    product_id = serializers.UUIDField(source="product.id", read_only=True)
    product_name = serializers.CharField(source="product.name", read_only=True)
    stand_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = CartItem
        fields = [
            "id",
            "product_id",
            "product_name",
            "stand_id",
            "quantity",
            "price",
            "subtotal",
        ]
        read_only_fields = fields
