"""Unit tests for ProductService."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from unittest import mock

import pytest

from modules.products.dtos import CreateProductDTO, RateProductDTO, UpdateProductDTO
from modules.products.exceptions import NotProductOwner, ProductNotFound
from modules.products.models import Product, ProductRating
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.services import ProductService

pytestmark = pytest.mark.unit


@pytest.fixture()
def service():
    return ProductService(repository=ProductDjangoRepository())


class TestCreate:
    def test_listing_belongs_to_farmer(self, service, farmer):
        dto = CreateProductDTO(
            name="Mangoes",
            description="Alphonso",
            category="fruits",
            price=Decimal("120.00"),
            unit="dozen",
            quantity=0,
            harvest_date=date(2026, 5, 1),
        )

        product = service.create_product(farmer, dto)

        assert product.farmer_id == farmer.pk
        assert product.status == "sold_out"
        assert Product.objects.alive().count() == 1


class TestOwnership:
    def test_owner_can_update(self, service, farmer, make_product):
        product = make_product(farmer)

        updated = service.update_product(
            product.id, farmer, UpdateProductDTO(price=Decimal("12.50"), quantity=0)
        )

        assert updated.price == Decimal("12.50")
        assert updated.status == "sold_out"

    def test_other_farmer_cannot_update(self, service, farmer, other_farmer, make_product):
        product = make_product(farmer)

        with pytest.raises(NotProductOwner):
            service.update_product(product.id, other_farmer, UpdateProductDTO(name="Mine"))

        product.refresh_from_db()
        assert product.name == "Tomatoes"

    def test_other_farmer_cannot_delete(self, service, farmer, other_farmer, make_product):
        product = make_product(farmer)

        with pytest.raises(NotProductOwner):
            service.delete_product(product.id, other_farmer)

    def test_delete_is_soft(self, service, farmer, make_product):
        product = make_product(farmer)

        service.delete_product(product.id, farmer)

        with pytest.raises(ProductNotFound):
            service.get_product(product.id)
        assert Product.objects.filter(id=product.id).exists()


class TestUpdateKeepsStock:
    def test_price_edit_keeps_a_reservation_made_meanwhile(self, farmer, make_product):
        product = make_product(farmer, quantity=5)
        repo = ProductDjangoRepository()
        locked_read = repo.get_for_update

        def read_then_reserve(id):
            current = locked_read(id)
            repo.reserve(id, 3)
            return current

        with mock.patch.object(repo, "get_for_update", side_effect=read_then_reserve):
            ProductService(repository=repo).update_product(
                product.id, farmer, UpdateProductDTO(price=Decimal("12.00"))
            )

        product.refresh_from_db()
        assert product.price == Decimal("12.00")
        assert product.quantity == 2
        assert product.total_sales == 3

    def test_quantity_edit_rederives_status(self, service, farmer, make_product):
        product = make_product(farmer, quantity=5)

        service.update_product(product.id, farmer, UpdateProductDTO(quantity=0))

        product.refresh_from_db()
        assert product.quantity == 0
        assert product.status == "sold_out"

    def test_withdrawn_product_cannot_be_updated(self, service, farmer, make_product):
        product = make_product(farmer)
        product.delete()

        with pytest.raises(ProductNotFound):
            service.update_product(product.id, farmer, UpdateProductDTO(name="Back"))


class TestRating:
    def test_average_is_recomputed(self, service, farmer, consumer, other_consumer, make_product):
        product = make_product(farmer)

        service.rate_product(product.id, consumer, RateProductDTO(rating=5, review="Great"))
        rated = service.rate_product(
            product.id, other_consumer, RateProductDTO(rating=2, review="Bruised")
        )

        assert rated.average_rating == Decimal("3.50")

    def test_rerating_overwrites(self, service, farmer, consumer, make_product):
        product = make_product(farmer)

        service.rate_product(product.id, consumer, RateProductDTO(rating=1, review="Meh"))
        rated = service.rate_product(product.id, consumer, RateProductDTO(rating=4, review="Better"))

        assert ProductRating.objects.filter(product=product).count() == 1
        assert rated.average_rating == Decimal("4.00")

    def test_missing_product(self, service, consumer):
        with pytest.raises(ProductNotFound):
            service.rate_product(
                "0190f3b0-0000-7000-8000-000000000000",
                consumer,
                RateProductDTO(rating=3, review="?"),
            )
