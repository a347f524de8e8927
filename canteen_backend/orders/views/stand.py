# orders/views/stand.py

"""
STAND ORDER API

- GET    /api/stand/orders/?status=<status>     stand's orders
- POST   /api/stand/orders/                     counter order for a buyer
- GET    /api/stand/orders/pending/             payment_pending / request / cooking
- GET    /api/stand/orders/<id>/                one order
- DELETE /api/stand/orders/<id>/                soft delete (not done / cancelled)
- PATCH  /api/stand/orders/<id>/status/         set status
- GET    /api/stand/orders/monthly/?year=&month=  one month of orders + summary
- GET    /api/stand/orders/recap/?year=          revenue per month
"""

from __future__ import annotations

from django.utils import timezone
from drf_spectacular.utils import extend_schema
from rest_framework import generics, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from orders.filters import StandOrderFilter
from orders.serializers import (
    MonthQuerySerializer,
    OrderSerializer,
    StandOrderInputSerializer,
    UpdateStatusInputSerializer,
    YearQuerySerializer,
)
from orders.services import order_service
from orders.services.checkout_orchestrator import create_stand_order
from orders.views.common import render_order
from users.permissions import IsStandAdmin


class StandOrderListView(generics.ListAPIView):
    serializer_class = OrderSerializer
    permission_classes = [IsAuthenticated, IsStandAdmin]
    filterset_class = StandOrderFilter

    def get_queryset(self):
        return order_service.list_stand_orders(self.request.user)

    @extend_schema(request=StandOrderInputSerializer, responses={201: OrderSerializer})
    def post(self, request):
        serializer = StandOrderInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = create_stand_order(
            stand=request.user,
            user_id=serializer.validated_data["user_id"],
            payment_method=serializer.validated_data["payment_method"],
            items=serializer.validated_data["items"],
        )
        return Response(
            render_order(result.order, result.qris_for(result.order)),
            status=status.HTTP_201_CREATED,
        )


class StandPendingOrderListView(generics.ListAPIView):
    serializer_class = OrderSerializer
    permission_classes = [IsAuthenticated, IsStandAdmin]
    filter_backends = []

    def get_queryset(self):
        return order_service.list_pending_stand_orders(self.request.user)


class StandOrderDetailView(APIView):
    permission_classes = [IsAuthenticated, IsStandAdmin]

    @extend_schema(responses=OrderSerializer)
    def get(self, request, order_id):
        order = order_service.get_stand_order(stand=request.user, order_id=order_id)
        return Response(OrderSerializer(order).data)

    @extend_schema(responses={200: dict})
    def delete(self, request, order_id):
        order = order_service.delete_stand_order(stand=request.user, order_id=order_id)
        return Response({"id": str(order.pk), "status": order.status, "deleted": True})


class StandOrderStatusView(APIView):
    permission_classes = [IsAuthenticated, IsStandAdmin]

    @extend_schema(request=UpdateStatusInputSerializer, responses=OrderSerializer)
    def patch(self, request, order_id):
        serializer = UpdateStatusInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        order = order_service.update_order_status(
            stand=request.user,
            order_id=order_id,
            new_status=serializer.validated_data["status"],
        )
        return Response(OrderSerializer(order).data)


class StandMonthlyOrdersView(APIView):
    permission_classes = [IsAuthenticated, IsStandAdmin]

    @extend_schema(parameters=[MonthQuerySerializer], responses={200: dict})
    def get(self, request):
        query = MonthQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        orders, summary = order_service.list_stand_orders_for_month(
            stand=request.user,
            year=query.validated_data["year"],
            month=query.validated_data["month"],
        )
        return Response({"orders": OrderSerializer(orders, many=True).data, "summary": summary})


class StandRevenueRecapView(APIView):
    permission_classes = [IsAuthenticated, IsStandAdmin]

    @extend_schema(parameters=[YearQuerySerializer], responses={200: dict})
    def get(self, request):
        query = YearQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        year = query.validated_data.get("year") or timezone.localdate().year
        return Response(order_service.monthly_revenue_recap(stand=request.user, year=year))
