"""Product service layer (Use Cases).

Orchestrates catalog use cases on top of the injected
``IProductRepository``:

- Only the farmer who listed a product may change or withdraw it.
- Withdrawal is a soft delete; past orders keep their snapshot.
- ``average_rating`` is recomputed explicitly after each rating.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog
from django.db import transaction

from modules.products.exceptions import NotProductOwner, ProductNotFound
from modules.products.models import Product, average_rating_of

if TYPE_CHECKING:
    from django.db import models

    from modules.accounts.models import User
    from modules.products.dtos import CreateProductDTO, RateProductDTO, UpdateProductDTO
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)

UPDATABLE_FIELDS = (
    "name",
    "description",
    "category",
    "price",
    "unit",
    "quantity",
    "harvest_date",
    "expiry_date",
    "organic",
)


class ProductService:
    def __init__(self, repository: IProductRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_products(self) -> models.QuerySet[Product]:
        return self._repo.queryset()

    def get_product(self, id: Any) -> Product:
        product = self._repo.get_by_id(id)
        if not product:
            raise ProductNotFound()
        return product

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_product(self, farmer: User, dto: CreateProductDTO) -> Product:
        product = Product(farmer=farmer, **dto.model_dump())
        product = self._repo.save(product)
        logger.info("product.created", product_id=str(product.id), farmer_id=farmer.pk)
        return product

    @transaction.atomic
    def update_product(self, id: Any, actor: User, dto: UpdateProductDTO) -> Product:
        product = self._owned(self._repo.get_for_update(id), actor)
        changed = [field for field in UPDATABLE_FIELDS if getattr(dto, field) is not None]
        for field in changed:
            setattr(product, field, getattr(dto, field))
        if changed:
            product = self._repo.update(product, changed)
        logger.info("product.updated", product_id=str(product.id), fields=changed)
        return product

    @transaction.atomic
    def delete_product(self, id: Any, actor: User) -> None:
        product = self._owned(self.get_product(id), actor)
        self._repo.delete(product.id)

    @transaction.atomic
    def rate_product(self, id: Any, user: User, dto: RateProductDTO) -> Product:
        product = self.get_product(id)
        self._repo.upsert_rating(product, user, dto.rating, dto.review)
        product.average_rating = average_rating_of(self._repo.ratings_of(product.id))
        product.save(update_fields=["average_rating"])
        logger.info(
            "product.rated",
            product_id=str(product.id),
            user_id=user.pk,
            average_rating=str(product.average_rating),
        )
        return product

    @staticmethod
    def _owned(product: Product | None, actor: User) -> Product:
        if product is None:
            raise ProductNotFound()
        if product.farmer_id != actor.pk:
            logger.warning("product.not_owner", product_id=str(product.id), actor_id=actor.pk)
            raise NotProductOwner()
        return product
