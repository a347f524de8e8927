# cart/views/api.py

"""
CART API VIEWS

Purpose:
- Buyer cart lifecycle: read, add, update quantity, remove, clear.

Hard rules:
- Money is server-owned: prices come from Product, never from the client.
- Domain errors propagate to core.api.canteen_exception_handler.
"""

from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import serializers, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from cart.serializers import CartSerializer
from cart.services import cart_service
from users.permissions import IsStudent


# =====================================================
# SWAGGER INPUT SERIALIZERS
# =====================================================


class AddCartItemInputSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1)


class UpdateCartItemInputSerializer(serializers.Serializer):
    quantity = serializers.IntegerField(min_value=1)


# =====================================================
# CART API VIEWS
# =====================================================


class CartView(APIView):
    """
    GET    -> current cart (empty structure when none exists)
    DELETE -> clear all items
    """

    permission_classes = [IsAuthenticated, IsStudent]
    serializer_class = CartSerializer

    @extend_schema(responses={200: CartSerializer})
    def get(self, request):
        cart = cart_service.get_cart(request.user)
        return Response(CartSerializer(cart).data, status=status.HTTP_200_OK)

    @extend_schema(responses={200: CartSerializer}, description="Remove every item from the cart")
    def delete(self, request):
        cart = cart_service.clear_cart(request.user)
        return Response(CartSerializer(cart).data, status=status.HTTP_200_OK)


class AddCartItemView(APIView):
    permission_classes = [IsAuthenticated, IsStudent]
    serializer_class = CartSerializer

    @extend_schema(
        request=AddCartItemInputSerializer,
        responses={201: CartSerializer},
        description="Add a product to the cart (merges quantity when already present)",
    )
    def post(self, request):
        serializer = AddCartItemInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        cart = cart_service.add_item(
            user=request.user,
            product_id=serializer.validated_data["product_id"],
            quantity=serializer.validated_data["quantity"],
        )
        return Response(CartSerializer(cart).data, status=status.HTTP_201_CREATED)


class CartItemView(APIView):
    permission_classes = [IsAuthenticated, IsStudent]
    serializer_class = CartSerializer

    @extend_schema(request=UpdateCartItemInputSerializer, responses={200: CartSerializer})
    def patch(self, request, item_id):
        serializer = UpdateCartItemInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        cart = cart_service.update_item(
            user=request.user,
            item_id=item_id,
            quantity=serializer.validated_data["quantity"],
        )
        return Response(CartSerializer(cart).data, status=status.HTTP_200_OK)

    @extend_schema(responses={200: CartSerializer})
    def delete(self, request, item_id):
        cart = cart_service.remove_item(user=request.user, item_id=item_id)
        return Response(CartSerializer(cart).data, status=status.HTTP_200_OK)
