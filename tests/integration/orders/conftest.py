from decimal import Decimal

import pytest

from modules.cart.repositories.django_repository import CartDjangoRepository
from modules.orders.dtos import PlaceOrderDTO
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.services import OrderService
from modules.products.repositories.django_repository import ProductDjangoRepository

SHIPPING = {
    "full_name": "Anil Kumar",
    "address": "12 MG Road",
    "city": "Pune",
    "state": "MH",
    "postal_code": "411001",
    "phone_number": "+91 98765 43210",
}


@pytest.fixture()
def order_service():
    return OrderService(
        order_repository=OrderDjangoRepository(),
        product_repository=ProductDjangoRepository(),
        cart_repository=CartDjangoRepository(),
    )


@pytest.fixture()
def place(order_service):
    """Factory: ``place(consumer, product, quantity)`` returns the single order."""

    def _place(consumer, product, quantity=1):
        (order,) = order_service.place_order(
            consumer,
            PlaceOrderDTO(
                payment_method="online",
                shipping=SHIPPING,
                items=[{"product_id": product.id, "quantity": quantity}],
            ),
        )
        return order

    return _place


@pytest.fixture()
def order(place, consumer, farmer, make_product):
    product = make_product(farmer, name="Potatoes", price=Decimal("30.00"), quantity=10)
    return place(consumer, product, 2)


@pytest.fixture()
def shipping():
    return dict(SHIPPING)
