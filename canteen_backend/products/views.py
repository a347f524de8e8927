# products/views.py

from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from products.models import Product
from products.serializers import (
    ProductSerializer,
    ProductStatusInputSerializer,
    StandProductWriteSerializer,
)
from products.services import menu
from users.permissions import IsStandAdmin


class ProductViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Catalog browsing for buyers.

    - only active products are listed
    - ?stand=<uuid> narrows the list to one stand
    """

    serializer_class = ProductSerializer
    permission_classes = [IsAuthenticated]
    filterset_fields = ["stand"]

    def get_queryset(self):
        return Product.objects.filter(is_active=True).order_by("name")


class StandProductViewSet(viewsets.ModelViewSet):
    """
    Menu management for the calling stand.

    - GET    /api/stand/products/               own products, inactive included
    - POST   /api/stand/products/               create
    - PATCH  /api/stand/products/<id>/          edit price / discount / stock / ...
    - PATCH  /api/stand/products/<id>/status/   {"is_active": bool}
    - DELETE /api/stand/products/<id>/          only while never ordered
    """

    serializer_class = ProductSerializer
    permission_classes = [IsAuthenticated, IsStandAdmin]
    filterset_fields = ["is_active"]
    http_method_names = ["get", "post", "patch", "delete", "head", "options"]
    lookup_value_regex = "[0-9a-fA-F-]{36}"

    def get_queryset(self):
        return menu.list_stand_products(self.request.user)

    @extend_schema(request=StandProductWriteSerializer, responses={201: ProductSerializer})
    def create(self, request, *args, **kwargs):
        serializer = StandProductWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        product = menu.create_product(stand=request.user, data=serializer.validated_data)
        return Response(ProductSerializer(product).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=StandProductWriteSerializer, responses=ProductSerializer)
    def partial_update(self, request, *args, **kwargs):
        serializer = StandProductWriteSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        product = menu.update_product(
            stand=request.user,
            product_id=kwargs["pk"],
            data=serializer.validated_data,
        )
        return Response(ProductSerializer(product).data)

    def destroy(self, request, *args, **kwargs):
        menu.delete_product(stand=request.user, product_id=kwargs["pk"])
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=ProductStatusInputSerializer, responses=ProductSerializer)
    @action(detail=True, methods=["patch"], url_path="status")
    def set_status(self, request, pk=None):
        serializer = ProductStatusInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        product = menu.set_product_active(
            stand=request.user,
            product_id=pk,
            is_active=serializer.validated_data["is_active"],
        )
        return Response(ProductSerializer(product).data)
