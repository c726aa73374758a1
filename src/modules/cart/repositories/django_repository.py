"""Django ORM implementation of the Cart repository."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction

from modules.cart.models import Cart, CartItem
from modules.cart.repositories.interfaces import ICartRepository

logger = structlog.get_logger(__name__)


class CartDjangoRepository(ICartRepository):
    def _carts(self):
        return Cart.objects.prefetch_related("items__product")

    def get_by_id(self, id: str) -> Optional[Cart]:
        try:
            return self._carts().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Cart]:
        queryset = self._carts()
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    @transaction.atomic
    def save(self, entity: Cart) -> Cart:
        entity.save()
        return entity

    @transaction.atomic
    def delete(self, id: str) -> bool:
        deleted, _ = Cart.objects.filter(id=id).delete()
        return deleted > 0

    def get_for_user(self, user_id: Any) -> Optional[Cart]:
        return self._carts().filter(user_id=user_id).first()

    def get_or_create_for_user(self, user_id: Any) -> Cart:
        cart, created = Cart.objects.get_or_create(user_id=user_id)
        if created:
            logger.info("cart.created", cart_id=str(cart.id), user_id=user_id)
        return cart

    def get_item(self, cart: Cart, item_id: Any) -> Optional[CartItem]:
        try:
            return (
                CartItem.objects.select_related("product")
                .filter(cart=cart, id=item_id)
                .first()
            )
        except (ValueError, ValidationError):
            return None

    def upsert_item(self, cart: Cart, product: Any, quantity: int) -> CartItem:
        item, _ = CartItem.objects.update_or_create(
            cart=cart,
            product=product,
            defaults={"quantity": quantity},
        )
        return item

    def save_item(self, item: CartItem) -> CartItem:
        item.save()
        return item

    def delete_item(self, item: CartItem) -> None:
        item.delete()

    def clear(self, cart: Cart) -> None:
        CartItem.objects.filter(cart=cart).delete()
