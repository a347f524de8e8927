# ledger/views.py

"""
BALANCE + LEDGER API

Student:
- GET  /api/users/me/balance/
- GET  /api/users/me/transactions/?type=<top_up|purchase|refund>

Admin:
- POST /api/admin/users/<user_id>/topup/   {"amount": "50000"}
"""

from drf_spectacular.utils import extend_schema
from rest_framework import generics, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from ledger.serializers import BalanceSerializer, TopUpInputSerializer, TransactionSerializer
from ledger.services.ledger_service import get_balance, list_transactions, top_up_balance
from users.permissions import IsAdmin


class BalanceView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(responses=BalanceSerializer)
    def get(self, request):
        balance = get_balance(request.user)
        return Response(BalanceSerializer({"user_id": request.user.pk, "balance": balance}).data)


class TransactionListView(generics.ListAPIView):
    serializer_class = TransactionSerializer
    permission_classes = [IsAuthenticated]
    filterset_fields = ["type"]

    def get_queryset(self):
        return list_transactions(self.request.user)


class TopUpView(APIView):
    permission_classes = [IsAuthenticated, IsAdmin]

    @extend_schema(request=TopUpInputSerializer, responses={200: BalanceSerializer})
    def post(self, request, user_id):
        serializer = TopUpInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        new_balance = top_up_balance(user_id, serializer.validated_data["amount"])

        return Response(
            BalanceSerializer({"user_id": user_id, "balance": new_balance}).data,
            status=status.HTTP_200_OK,
        )
