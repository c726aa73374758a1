from datetime import date
from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from django.core.cache import cache
from rest_framework.test import APIClient

from modules.accounts.models import UserRole
from modules.products.constants import ProductCategory, ProductUnit
from modules.products.models import Product

User = get_user_model()


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture(autouse=True)
def _clear_cache():
    """Throttle counters live in the cache; start every test from zero."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


@pytest.fixture()
def farmer():
    return User.objects.create_user(
        username="farmer_ravi",
        email="ravi@example.com",
        password="testpass123",
        role=UserRole.FARMER,
        name="Ravi",
        farm_name="Green Acres",
    )


@pytest.fixture()
def other_farmer():
    return User.objects.create_user(
        username="farmer_meena",
        email="meena@example.com",
        password="testpass123",
        role=UserRole.FARMER,
        name="Meena",
        farm_name="Sunrise Fields",
    )


@pytest.fixture()
def consumer():
    return User.objects.create_user(
        username="consumer_anil",
        email="anil@example.com",
        password="testpass123",
        role=UserRole.CONSUMER,
        name="Anil",
    )


@pytest.fixture()
def other_consumer():
    return User.objects.create_user(
        username="consumer_priya",
        email="priya@example.com",
        password="testpass123",
        role=UserRole.CONSUMER,
        name="Priya",
    )


def _client_for(user) -> APIClient:
    client = APIClient()
    client.force_authenticate(user=user)
    return client


@pytest.fixture()
def farmer_client(farmer):
    return _client_for(farmer)


@pytest.fixture()
def other_farmer_client(other_farmer):
    return _client_for(other_farmer)


@pytest.fixture()
def consumer_client(consumer):
    return _client_for(consumer)


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------


@pytest.fixture()
def make_product():
    """Factory: ``make_product(farmer, price="10.00", quantity=5, ...)``."""

    def _make(owner, **overrides) -> Product:
        defaults = {
            "name": "Tomatoes",
            "description": "Vine ripened",
            "category": ProductCategory.VEGETABLES,
            "price": Decimal("10.00"),
            "unit": ProductUnit.KG,
            "quantity": 10,
            "harvest_date": date(2026, 10, 1),
        }
        defaults.update(overrides)
        defaults["price"] = Decimal(str(defaults["price"]))
        return Product.objects.create(farmer=owner, **defaults)

    return _make


@pytest.fixture()
def shipping_payload():
    return {
        "fullName": "Anil Kumar",
        "address": "12 MG Road",
        "city": "Pune",
        "state": "MH",
        "postalCode": "411001",
        "phoneNumber": "+91 98765 43210",
    }


@pytest.fixture()
def checkout_payload(shipping_payload):
    return {"paymentMethod": "cash-on-delivery", "shippingDetails": shipping_payload}
