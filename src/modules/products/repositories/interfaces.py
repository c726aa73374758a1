"""Product repository interface.

Besides CRUD, the catalog exposes the two stock primitives every order
path goes through: ``reserve`` and ``release``.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Iterable, Optional

from django.db import models

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.products.models import Product, ProductRating


class IProductRepository(IRepository["Product"]):
    """Repository contract for the Product aggregate."""

    @abstractmethod
    def queryset(self) -> "models.QuerySet[Product]":
        """Live (not withdrawn) products, for filtered and paginated listings."""

    @abstractmethod
    def get_many(self, ids: Iterable[Any]) -> Dict[Any, "Product"]:
        """Live products keyed by id; missing ids are simply absent."""

    @abstractmethod
    def get_for_update(self, id: Any) -> Optional["Product"]:
        """Live product with a row-level lock, ``None`` when absent."""

    @abstractmethod
    def update(self, entity: "Product", fields: Iterable[str]) -> "Product":
        """Write only ``fields`` of ``entity``, leaving stock counters to the primitives."""

    @abstractmethod
    def reserve(self, id: Any, quantity: int) -> "Product":
        """Atomically take ``quantity`` off the shelf.

        The check ``quantity <= on hand`` and the decrement happen in a
        single statement.  Raises ``InsufficientStock`` carrying what is
        on hand, or ``ProductNotFound``.
        """

    @abstractmethod
    def release(self, id: Any, quantity: int) -> Optional["Product"]:
        """Put ``quantity`` back on the shelf; ``None`` if the product is gone."""

    @abstractmethod
    def upsert_rating(self, product: "Product", user: Any, rating: int, review: str) -> "ProductRating":
        """Create or replace the user's rating of ``product``."""

    @abstractmethod
    def ratings_of(self, product_id: Any) -> list[int]:
        """All rating values recorded for the product."""
