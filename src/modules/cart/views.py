"""Cart API views (consumer only).

GET/POST/DELETE ``/cart/`` and PUT/DELETE ``/cart/{item_id}/``.  Every
call answers with the resulting cart snapshot.
"""

from __future__ import annotations

from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import ViewSet

from modules.accounts.permissions import IsConsumer
from modules.cart.dtos import AddCartItemDTO, UpdateCartItemDTO
from modules.cart.repositories.django_repository import CartDjangoRepository
from modules.cart.serializers import (
    AddCartItemSerializer,
    CartSerializer,
    UpdateCartItemSerializer,
)
from modules.cart.services import CartService
from modules.products.repositories.django_repository import ProductDjangoRepository


class CartViewSet(ViewSet):
    permission_classes = [IsConsumer]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = CartService(
            repository=CartDjangoRepository(),
            product_repository=ProductDjangoRepository(),
        )

    def _render(self, cart) -> Response:
        return Response(CartSerializer(cart).data)

    def list(self, request: Request) -> Response:
        """GET /api/v1/cart/"""
        return self._render(self._service.get_cart(request.user))

    def create(self, request: Request) -> Response:
        """POST /api/v1/cart/"""
        serializer = AddCartItemSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        cart = self._service.add_item(request.user, AddCartItemDTO(**serializer.validated_data))
        return self._render(cart)

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT /api/v1/cart/{item_id}/"""
        serializer = UpdateCartItemSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        cart = self._service.update_item(
            request.user, pk, UpdateCartItemDTO(**serializer.validated_data)
        )
        return self._render(cart)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/cart/{item_id}/"""
        return self._render(self._service.remove_item(request.user, pk))

    def clear(self, request: Request) -> Response:
        """DELETE /api/v1/cart/"""
        return self._render(self._service.clear(request.user))
