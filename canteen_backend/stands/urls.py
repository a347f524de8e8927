# stands/urls.py

from django.urls import path

from stands.views import StandQRISView

app_name = "stands"

urlpatterns = [
    path("<uuid:stand_id>/qris/", StandQRISView.as_view(), name="qris"),
]
