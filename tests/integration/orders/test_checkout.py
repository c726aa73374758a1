"""Integration tests for POST /api/v1/orders/checkout/."""

from __future__ import annotations

import pytest

from modules.orders.models import Order

pytestmark = pytest.mark.integration

CHECKOUT_URL = "/api/v1/orders/checkout/"


def _add(client, product, quantity):
    response = client.post(
        "/api/v1/cart/", {"productId": str(product.id), "quantity": quantity}, format="json"
    )
    assert response.status_code == 200


class TestCheckout:
    def test_splits_cart_by_farmer(
        self, consumer_client, farmer, other_farmer, make_product, checkout_payload
    ):
        tomatoes = make_product(farmer, name="Tomatoes", price="10.00", quantity=5)
        milk = make_product(other_farmer, name="Milk", price="5.00", quantity=2)
        _add(consumer_client, tomatoes, 2)
        _add(consumer_client, milk, 1)

        response = consumer_client.post(CHECKOUT_URL, checkout_payload, format="json")

        assert response.status_code == 201
        orders = response.json()
        assert len(orders) == 2
        totals = {order["farmer"]["id"]: order["totalAmount"] for order in orders}
        assert totals == {farmer.pk: "20.00", other_farmer.pk: "5.00"}
        assert {order["status"] for order in orders} == {"pending"}
        assert orders[0]["shippingDetails"]["city"] == "Pune"
        assert orders[0]["paymentMethod"] == "cash-on-delivery"

        tomatoes.refresh_from_db()
        milk.refresh_from_db()
        assert (tomatoes.quantity, milk.quantity) == (3, 1)

        cart = consumer_client.get("/api/v1/cart/").json()
        assert cart["items"] == []
        assert cart["total"] == "0.00"

    def test_insufficient_stock_reports_shortfall(
        self, consumer_client, farmer, make_product, checkout_payload
    ):
        product = make_product(farmer, name="Honey", quantity=5)
        _add(consumer_client, product, 5)
        product.quantity = 3
        product.save()

        response = consumer_client.post(CHECKOUT_URL, checkout_payload, format="json")

        assert response.status_code == 400
        body = response.json()
        assert body["product"] == "Honey"
        assert body["available"] == 3
        assert body["requested"] == 5
        assert body["errors"][0]["code"] == "insufficient_stock"
        assert Order.objects.count() == 0
        product.refresh_from_db()
        assert product.quantity == 3
        assert len(consumer_client.get("/api/v1/cart/").json()["items"]) == 1

    def test_empty_cart(self, consumer_client, checkout_payload):
        response = consumer_client.post(CHECKOUT_URL, checkout_payload, format="json")

        assert response.status_code == 400
        assert response.json()["errors"][0]["code"] == "empty_cart"

    @pytest.mark.parametrize(
        "field", ["fullName", "address", "city", "state", "postalCode", "phoneNumber"]
    )
    def test_missing_shipping_field(
        self, consumer_client, farmer, make_product, checkout_payload, field
    ):
        _add(consumer_client, make_product(farmer), 1)
        del checkout_payload["shippingDetails"][field]

        response = consumer_client.post(CHECKOUT_URL, checkout_payload, format="json")

        assert response.status_code == 400
        assert response.json()["errors"][0]["attr"] == f"shippingDetails.{field}"
        assert Order.objects.count() == 0

    def test_blank_shipping_field(self, consumer_client, farmer, make_product, checkout_payload):
        _add(consumer_client, make_product(farmer), 1)
        checkout_payload["shippingDetails"]["city"] = "   "

        response = consumer_client.post(CHECKOUT_URL, checkout_payload, format="json")

        assert response.status_code == 400
        assert Order.objects.count() == 0

    def test_unknown_payment_method(self, consumer_client, farmer, make_product, checkout_payload):
        _add(consumer_client, make_product(farmer), 1)
        checkout_payload["paymentMethod"] = "barter"

        response = consumer_client.post(CHECKOUT_URL, checkout_payload, format="json")

        assert response.status_code == 400
        assert response.json()["errors"][0]["attr"] == "paymentMethod"

    def test_farmers_cannot_check_out(self, farmer_client, checkout_payload):
        response = farmer_client.post(CHECKOUT_URL, checkout_payload, format="json")

        assert response.status_code == 403
