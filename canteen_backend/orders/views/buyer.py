# orders/views/buyer.py

"""
BUYER ORDER API

- POST   /api/orders/checkout/                 cart -> one order
- POST   /api/orders/                          item list -> one order per stand
- GET    /api/orders/                          my orders
- GET    /api/orders/<id>/                     my order
- POST   /api/orders/<id>/cancel/              cancel (payment_pending / request only)
- GET    /api/orders/<id>/qris/                stand QRIS + order total
- POST   /api/orders/<id>/payment-proof/       multipart image upload (qris)
"""

from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import generics, status
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from orders.serializers import (
    CheckoutInputSerializer,
    OrderSerializer,
    PaymentProofInputSerializer,
    PlaceOrderInputSerializer,
)
from orders.services import order_service
from orders.services.checkout_orchestrator import checkout_cart, place_order
from orders.views.common import render_order, render_result
from users.permissions import IsStudent


class CheckoutView(APIView):
    permission_classes = [IsAuthenticated, IsStudent]

    @extend_schema(
        request=CheckoutInputSerializer,
        responses={201: dict},
        description="Check out the cart (card / cash / qris). Cash requires cash_amount >= total.",
    )
    def post(self, request):
        serializer = CheckoutInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = checkout_cart(
            user=request.user,
            payment_method=serializer.validated_data["payment_method"],
            cash_amount=serializer.validated_data.get("cash_amount"),
        )

        body = {"order": OrderSerializer(result.order).data}
        qris = result.qris_for(result.order)
        if qris:
            body["qris_code"] = qris
        return Response(body, status=status.HTTP_201_CREATED)


class BuyerOrderListView(generics.ListAPIView):
    """
    GET lists the caller's orders; POST places a direct order that is
    split into one order per stand.
    """

    serializer_class = OrderSerializer
    permission_classes = [IsAuthenticated, IsStudent]
    filterset_fields = ["status"]

    def get_queryset(self):
        return order_service.list_buyer_orders(self.request.user)

    @extend_schema(request=PlaceOrderInputSerializer, responses={201: dict})
    def post(self, request):
        serializer = PlaceOrderInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = place_order(
            user=request.user,
            payment_method=serializer.validated_data["payment_method"],
            items=serializer.validated_data["items"],
        )
        return Response({"orders": render_result(result)}, status=status.HTTP_201_CREATED)


class BuyerOrderDetailView(APIView):
    permission_classes = [IsAuthenticated, IsStudent]

    @extend_schema(responses=OrderSerializer)
    def get(self, request, order_id):
        order = order_service.get_buyer_order(user=request.user, order_id=order_id)
        return Response(OrderSerializer(order).data)


class CancelOrderView(APIView):
    permission_classes = [IsAuthenticated, IsStudent]

    @extend_schema(request=None, responses=OrderSerializer)
    def post(self, request, order_id):
        order = order_service.cancel_order(user=request.user, order_id=order_id)
        return Response(OrderSerializer(order).data)


class OrderQRISView(APIView):
    permission_classes = [IsAuthenticated, IsStudent]

    @extend_schema(responses={200: dict})
    def get(self, request, order_id):
        return Response(order_service.get_qris_for_order(user=request.user, order_id=order_id))


class PaymentProofUploadView(APIView):
    permission_classes = [IsAuthenticated, IsStudent]
    parser_classes = [MultiPartParser, FormParser]

    @extend_schema(request={"multipart/form-data": PaymentProofInputSerializer}, responses=OrderSerializer)
    def post(self, request, order_id):
        serializer = PaymentProofInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        order = order_service.submit_payment_proof(
            user=request.user,
            order_id=order_id,
            upload=serializer.validated_data["payment_proof"],
        )
        return Response(render_order(order))
