# orders/serializers/inputs.py

"""
Request bodies. Business rules (stock, cash, stand ownership) are
enforced by the services; these only shape the input.
"""

from decimal import Decimal

from rest_framework import serializers


class OrderItemInputSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1)


class CheckoutInputSerializer(serializers.Serializer):
    payment_method = serializers.CharField()
    cash_amount = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        required=False,
        allow_null=True,
        min_value=Decimal("0.00"),
    )


class PlaceOrderInputSerializer(serializers.Serializer):
    payment_method = serializers.CharField()
    items = OrderItemInputSerializer(many=True, allow_empty=False)


class StandOrderInputSerializer(PlaceOrderInputSerializer):
    user_id = serializers.UUIDField()


class UpdateStatusInputSerializer(serializers.Serializer):
    status = serializers.CharField()


class PaymentProofInputSerializer(serializers.Serializer):
    payment_proof = serializers.FileField()


class MonthQuerySerializer(serializers.Serializer):
    year = serializers.IntegerField(min_value=2000, max_value=9999)
    month = serializers.IntegerField(min_value=1, max_value=12)


class YearQuerySerializer(serializers.Serializer):
    year = serializers.IntegerField(min_value=2000, max_value=9999, required=False)
