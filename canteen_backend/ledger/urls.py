# ledger/urls.py

from django.urls import path

from ledger.views import TopUpView

app_name = "ledger"

urlpatterns = [
    path("users/<uuid:user_id>/topup/", TopUpView.as_view(), name="topup"),
]
