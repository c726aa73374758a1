"""Cart service layer (Use Cases).

- ``get_cart`` never fails: a consumer who never added anything gets an
  empty, unsaved cart.
- Adding requires the product to be available and to cover the
  requested quantity; an existing line for the product is replaced.
- ``total`` is recomputed with ``cart_total`` after every mutation;
  lines of withdrawn products stay until removed but no longer count.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog
from django.db import transaction

from modules.cart.exceptions import CartItemNotFound, CartNotFound
from modules.cart.models import Cart, cart_total
from modules.products.exceptions import OutOfStock, ProductNotFound

if TYPE_CHECKING:
    from modules.accounts.models import User
    from modules.cart.dtos import AddCartItemDTO, UpdateCartItemDTO
    from modules.cart.repositories.interfaces import ICartRepository
    from modules.products.models import Product
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


def ensure_in_stock(product: Product, quantity: int) -> None:
    if not product.is_available or quantity > product.quantity:
        raise OutOfStock(
            f"{product.name} is out of stock or has insufficient quantity.",
            available=product.quantity,
            requested=quantity,
        )


class CartService:
    def __init__(
        self,
        repository: ICartRepository,
        product_repository: IProductRepository,
    ) -> None:
        self._repo = repository
        self._products = product_repository

    def get_cart(self, user: User) -> Cart:
        return self._repo.get_for_user(user.pk) or Cart(user=user)

    @transaction.atomic
    def add_item(self, user: User, dto: AddCartItemDTO) -> Cart:
        product = self._products.get_by_id(dto.product_id)
        if not product:
            raise ProductNotFound()
        ensure_in_stock(product, dto.quantity)

        cart = self._repo.get_or_create_for_user(user.pk)
        self._repo.upsert_item(cart, product, dto.quantity)
        logger.info(
            "cart.item_upserted",
            cart_id=str(cart.id),
            product_id=str(product.id),
            quantity=dto.quantity,
        )
        return self._recompute(user)

    @transaction.atomic
    def update_item(self, user: User, item_id: Any, dto: UpdateCartItemDTO) -> Cart:
        cart = self._existing_cart(user)
        item = self._repo.get_item(cart, item_id)
        if not item:
            raise CartItemNotFound()
        if item.product.is_deleted:
            raise ProductNotFound()
        ensure_in_stock(item.product, dto.quantity)

        item.quantity = dto.quantity
        self._repo.save_item(item)
        logger.info("cart.item_updated", cart_id=str(cart.id), item_id=str(item.id))
        return self._recompute(user)

    @transaction.atomic
    def remove_item(self, user: User, item_id: Any) -> Cart:
        cart = self._existing_cart(user)
        item = self._repo.get_item(cart, item_id)
        if not item:
            raise CartItemNotFound()
        self._repo.delete_item(item)
        logger.info("cart.item_removed", cart_id=str(cart.id), item_id=str(item_id))
        return self._recompute(user)

    @transaction.atomic
    def clear(self, user: User) -> Cart:
        cart = self._repo.get_for_user(user.pk)
        if cart is None:
            return Cart(user=user)
        self._repo.clear(cart)
        logger.info("cart.cleared", cart_id=str(cart.id))
        return self._recompute(user)

    def _existing_cart(self, user: User) -> Cart:
        cart = self._repo.get_for_user(user.pk)
        if cart is None:
            raise CartNotFound()
        return cart

    def _recompute(self, user: User) -> Cart:
        cart = self._repo.get_for_user(user.pk)
        cart.total = cart_total(cart.lines())
        return self._repo.save(cart)
