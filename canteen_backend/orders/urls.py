# orders/urls.py

from django.urls import path

from orders.views.buyer import (
    BuyerOrderDetailView,
    BuyerOrderListView,
    CancelOrderView,
    CheckoutView,
    OrderQRISView,
    PaymentProofUploadView,
)

app_name = "orders"

urlpatterns = [
    path("", BuyerOrderListView.as_view(), name="list"),
    path("checkout/", CheckoutView.as_view(), name="checkout"),
    path("<uuid:order_id>/", BuyerOrderDetailView.as_view(), name="detail"),
    path("<uuid:order_id>/cancel/", CancelOrderView.as_view(), name="cancel"),
    path("<uuid:order_id>/qris/", OrderQRISView.as_view(), name="qris"),
    path("<uuid:order_id>/payment-proof/", PaymentProofUploadView.as_view(), name="payment-proof"),
]
