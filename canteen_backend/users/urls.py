# users/urls.py

from django.urls import path

from ledger.views import BalanceView, TransactionListView
from users.views import MeView

app_name = "users"

urlpatterns = [
    path("me/", MeView.as_view(), name="me"),
    path("me/balance/", BalanceView.as_view(), name="balance"),
    path("me/transactions/", TransactionListView.as_view(), name="transactions"),
]
