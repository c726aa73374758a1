"""Integration tests for POST /api/v1/orders/ (direct orders)."""

from __future__ import annotations

import pytest

from modules.orders.models import Order

pytestmark = pytest.mark.integration

ORDERS_URL = "/api/v1/orders/"


class TestCreateOrderApi:
    def test_single_farmer_order(self, consumer_client, farmer, make_product, checkout_payload):
        product = make_product(farmer, name="Spinach", price="2.50", quantity=10)
        payload = {**checkout_payload, "items": [{"productId": str(product.id), "quantity": 4}]}

        response = consumer_client.post(ORDERS_URL, payload, format="json")

        assert response.status_code == 201
        (order,) = response.json()
        assert order["totalAmount"] == "10.00"
        assert order["orderNumber"].startswith("ORD-")
        assert order["items"] == [
            {
                "id": order["items"][0]["id"],
                "productId": str(product.id),
                "name": "Spinach",
                "price": "2.50",
                "quantity": 4,
                "subtotal": "10.00",
            }
        ]
        assert [entry["newStatus"] for entry in order["statusHistory"]] == ["pending"]
        product.refresh_from_db()
        assert product.quantity == 6

    def test_items_from_two_farmers_make_two_orders(
        self, consumer_client, farmer, other_farmer, make_product, checkout_payload
    ):
        first = make_product(farmer, quantity=5)
        second = make_product(other_farmer, quantity=5)
        payload = {
            **checkout_payload,
            "items": [
                {"productId": str(first.id), "quantity": 1},
                {"productId": str(second.id), "quantity": 1},
            ],
        }

        response = consumer_client.post(ORDERS_URL, payload, format="json")

        assert response.status_code == 201
        assert [order["farmer"]["id"] for order in response.json()] == [farmer.pk, other_farmer.pk]

    def test_no_items(self, consumer_client, checkout_payload):
        response = consumer_client.post(
            ORDERS_URL, {**checkout_payload, "items": []}, format="json"
        )

        assert response.status_code == 400
        assert Order.objects.count() == 0

    def test_duplicate_products(self, consumer_client, farmer, make_product, checkout_payload):
        product = make_product(farmer)
        line = {"productId": str(product.id), "quantity": 1}

        response = consumer_client.post(
            ORDERS_URL, {**checkout_payload, "items": [line, line]}, format="json"
        )

        assert response.status_code == 400
        assert Order.objects.count() == 0

    def test_unknown_product(self, consumer_client, checkout_payload):
        payload = {
            **checkout_payload,
            "items": [{"productId": "0190f3b0-0000-7000-8000-000000000000", "quantity": 1}],
        }

        response = consumer_client.post(ORDERS_URL, payload, format="json")

        assert response.status_code == 404
        assert response.json()["errors"][0]["code"] == "product_not_found"

    def test_shortfall_on_any_line_creates_nothing(
        self, consumer_client, farmer, other_farmer, make_product, checkout_payload
    ):
        plenty = make_product(farmer, name="Rice", quantity=50)
        scarce = make_product(other_farmer, name="Saffron", quantity=1)
        payload = {
            **checkout_payload,
            "items": [
                {"productId": str(plenty.id), "quantity": 10},
                {"productId": str(scarce.id), "quantity": 2},
            ],
        }

        response = consumer_client.post(ORDERS_URL, payload, format="json")

        assert response.status_code == 400
        assert response.json()["product"] == "Saffron"
        assert Order.objects.count() == 0
        plenty.refresh_from_db()
        assert plenty.quantity == 50

    def test_cart_is_untouched(self, consumer_client, farmer, make_product, checkout_payload):
        in_cart = make_product(farmer, name="Beans", quantity=5)
        direct = make_product(farmer, name="Peas", quantity=5)
        consumer_client.post(
            "/api/v1/cart/", {"productId": str(in_cart.id), "quantity": 1}, format="json"
        )

        consumer_client.post(
            ORDERS_URL,
            {**checkout_payload, "items": [{"productId": str(direct.id), "quantity": 1}]},
            format="json",
        )

        assert len(consumer_client.get("/api/v1/cart/").json()["items"]) == 1
