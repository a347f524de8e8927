# ledger/serializers.py

from decimal import Decimal

from rest_framework import serializers

from ledger.models import Transaction


class TransactionSerializer(serializers.ModelSerializer):
    order_number = serializers.CharField(source="order.order_number", read_only=True, default=None)

    class Meta:
        model = Transaction
        fields = [
            "id",
            "transaction_number",
            "type",
            "amount",
            "balance_before",
            "balance_after",
            "description",
            "order",
            "order_number",
            "created_at",
        ]
        read_only_fields = fields


class BalanceSerializer(serializers.Serializer):
    user_id = serializers.UUIDField()
    balance = serializers.DecimalField(max_digits=12, decimal_places=2)


class TopUpInputSerializer(serializers.Serializer):
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal("0.01"))
