# orders/stand_urls.py

from django.urls import path

from orders.views.stand import (
    StandMonthlyOrdersView,
    StandOrderDetailView,
    StandOrderListView,
    StandOrderStatusView,
    StandPendingOrderListView,
    StandRevenueRecapView,
)

app_name = "stand_orders"

urlpatterns = [
    path("", StandOrderListView.as_view(), name="list"),
    path("pending/", StandPendingOrderListView.as_view(), name="pending"),
    path("monthly/", StandMonthlyOrdersView.as_view(), name="monthly"),
    path("recap/", StandRevenueRecapView.as_view(), name="recap"),
    path("<uuid:order_id>/", StandOrderDetailView.as_view(), name="detail"),
    path("<uuid:order_id>/status/", StandOrderStatusView.as_view(), name="status"),
]
