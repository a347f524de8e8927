# orders/serializers/order.py

from rest_framework import serializers

from orders.models import Order, OrderItem


class OrderItemSerializer(serializers.ModelSerializer):
    product_id = serializers.UUIDField(source="product.id", read_only=True)
    product_name = serializers.CharField(source="product.name", read_only=True)

    class Meta:
        model = OrderItem
        fields = ["id", "product_id", "product_name", "quantity", "price", "subtotal"]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    """
    Read-only order with its item snapshots.
    """

    user_id = serializers.UUIDField(read_only=True)
    user_name = serializers.CharField(source="user.name", read_only=True)
    stand_id = serializers.UUIDField(read_only=True)
    items = OrderItemSerializer(many=True, read_only=True)
    change_amount = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True, allow_null=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "order_number",
            "user_id",
            "user_name",
            "stand_id",
            "status",
            "payment_method",
            "total_amount",
            "cash_amount",
            "change_amount",
            "payment_proof_url",
            "items",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
