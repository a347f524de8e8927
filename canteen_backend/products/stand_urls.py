# products/stand_urls.py

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from products.views import StandProductViewSet

router = SimpleRouter()
router.register(r"", StandProductViewSet, basename="stand-products")

urlpatterns = [
    path("", include(router.urls)),
]
