# products/serializers.py

from rest_framework import serializers

from products.models import Product


class ProductSerializer(serializers.ModelSerializer):
    """
    Read-only catalog row. `effective_price` is the unit price a cart or
    order will snapshot right now.
    """

    stand_id = serializers.UUIDField(read_only=True)
    effective_price = serializers.DecimalField(max_digits=10, decimal_places=2, read_only=True)

    class Meta:
        model = Product
        fields = [
            "id",
            "stand_id",
            "name",
            "description",
            "price",
            "discount",
            "effective_price",
            "stock",
            "is_active",
        ]
        read_only_fields = fields


class StandProductWriteSerializer(serializers.ModelSerializer):
    """
    Stand-side create/edit body. Ownership is never taken from input; the
    stand is the caller.
    """

    class Meta:
        model = Product
        fields = [
            "name",
            "description",
            "price",
            "discount",
            "stock",
            "is_active",
        ]

    def validate_price(self, value):
        if value is None or value <= 0:
            raise serializers.ValidationError("price must be greater than zero")
        return value


class ProductStatusInputSerializer(serializers.Serializer):
    is_active = serializers.BooleanField()
