"""Unit tests for catalog DTO validation."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError

from modules.products.dtos import CreateProductDTO, RateProductDTO, UpdateProductDTO

pytestmark = pytest.mark.unit


def _create(**overrides) -> CreateProductDTO:
    data = {
        "name": "Carrots",
        "description": "Fresh",
        "category": "vegetables",
        "price": Decimal("3.50"),
        "unit": "kg",
        "quantity": 20,
        "harvest_date": date(2026, 9, 30),
    }
    data.update(overrides)
    return CreateProductDTO(**data)


class TestCreateProductDTO:
    def test_valid(self):
        dto = _create(name="  Carrots  ")
        assert dto.name == "Carrots"
        assert dto.organic is False

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError, match="Price cannot be negative"):
            _create(price=Decimal("-1"))

    def test_negative_quantity_rejected(self):
        with pytest.raises(ValidationError):
            _create(quantity=-3)

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError):
            _create(name="   ")

    def test_unknown_category_rejected(self):
        with pytest.raises(ValidationError):
            _create(category="spices")

    def test_expiry_before_harvest_rejected(self):
        with pytest.raises(ValidationError, match="Expiry date"):
            _create(expiry_date=date(2026, 9, 1))

    def test_is_frozen(self):
        dto = _create()
        with pytest.raises(ValidationError):
            dto.name = "Beets"


class TestUpdateProductDTO:
    def test_all_fields_optional(self):
        dto = UpdateProductDTO()
        assert dto.price is None

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError):
            UpdateProductDTO(price=Decimal("-0.01"))


class TestRateProductDTO:
    @pytest.mark.parametrize("rating", [0, 6])
    def test_rating_out_of_range(self, rating):
        with pytest.raises(ValidationError):
            RateProductDTO(rating=rating, review="ok")

    def test_blank_review_rejected(self):
        with pytest.raises(ValidationError):
            RateProductDTO(rating=4, review=" ")
