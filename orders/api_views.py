from __future__ import annotations

import logging

from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.roles import identity_id
from core.errors import StorefrontError

from .serializers import (
    AddToCartSerializer,
    CartItemSerializer,
    CartSerializer,
    OrderSerializer,
    UpdateCartItemSerializer,
)
from .services.cart import get_cart_service
from .services.orders import fetch_user_orders

logger = logging.getLogger(__name__)


def _cart_payload(owner_id: str) -> dict:
    cart, items = get_cart_service().get_cart_details(owner_id)
    return {
        "cart": CartSerializer(cart).data,
        "items": CartItemSerializer(items, many=True).data,
    }


def _error(exc: StorefrontError) -> Response:
    return Response({"error": exc.message}, status=exc.status_code)


class CartView(APIView):
    """GET the signed-in user's cart with its lines."""
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return Response(_cart_payload(identity_id(request.user)))


class CartItemsView(APIView):
    """POST {product_id, amount} to add a product to the cart."""
    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = AddToCartSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        owner = identity_id(request.user)
        try:
            message = get_cart_service().add_to_cart(owner, **serializer.validated_data)
        except StorefrontError as exc:
            return _error(exc)
        return Response({"message": message, **_cart_payload(owner)}, status=status.HTTP_201_CREATED)


class CartItemDetailView(APIView):
    """PATCH {amount} to change a line, DELETE to remove it."""
    permission_classes = [IsAuthenticated]

    def patch(self, request, item_id: int):
        serializer = UpdateCartItemSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        owner = identity_id(request.user)
        try:
            message = get_cart_service().update_cart_item(owner, item_id, serializer.validated_data["amount"])
        except StorefrontError as exc:
            return _error(exc)
        return Response({"message": message, **_cart_payload(owner)})

    def delete(self, request, item_id: int):
        owner = identity_id(request.user)
        try:
            message = get_cart_service().remove_cart_item(owner, item_id)
        except StorefrontError as exc:
            return _error(exc)
        return Response({"message": message, **_cart_payload(owner)})


class MyOrdersView(APIView):
    """Paid orders of the signed-in user, newest first."""
    permission_classes = [IsAuthenticated]

    def get(self, request):
        orders = fetch_user_orders(identity_id(request.user)).prefetch_related("items")
        return Response(OrderSerializer(orders, many=True).data)
