"""Cart repository interface."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.cart.models import Cart, CartItem


class ICartRepository(IRepository["Cart"]):
    @abstractmethod
    def get_for_user(self, user_id: Any) -> Optional["Cart"]:
        """The user's cart with lines and products resolved, ``None`` if never created."""

    @abstractmethod
    def get_or_create_for_user(self, user_id: Any) -> "Cart":
        """Lazily create the user's cart."""

    @abstractmethod
    def get_item(self, cart: "Cart", item_id: Any) -> Optional["CartItem"]:
        """A line of *this* cart, ``None`` when the id belongs elsewhere."""

    @abstractmethod
    def upsert_item(self, cart: "Cart", product: Any, quantity: int) -> "CartItem":
        """Replace the product's line quantity, or append a new line."""

    @abstractmethod
    def save_item(self, item: "CartItem") -> "CartItem": ...

    @abstractmethod
    def delete_item(self, item: "CartItem") -> None: ...

    @abstractmethod
    def clear(self, cart: "Cart") -> None:
        """Remove every line; the cart row stays."""
