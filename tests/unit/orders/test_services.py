"""Unit tests for OrderService: checkout coordination and the status machine."""

from __future__ import annotations

from decimal import Decimal
from uuid import uuid4

import pytest

from modules.cart.dtos import AddCartItemDTO
from modules.cart.repositories.django_repository import CartDjangoRepository
from modules.cart.services import CartService
from modules.core.models import OutboxEvent
from modules.orders.constants import OrderStatus
from modules.orders.dtos import CheckoutDTO, OrderLine, PlaceOrderDTO, SetOrderStatusDTO
from modules.orders.exceptions import (
    CancelReasonRequired,
    EmptyCart,
    InvalidOrderStatus,
    NotOrderOwner,
    OrderNotFound,
    ProductGone,
)
from modules.orders.models import Order
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.services import OrderService, partition_by_farmer
from modules.products.exceptions import InsufficientStock
from modules.products.repositories.django_repository import ProductDjangoRepository

pytestmark = pytest.mark.unit

SHIPPING = {
    "full_name": "Anil Kumar",
    "address": "12 MG Road",
    "city": "Pune",
    "state": "MH",
    "postal_code": "411001",
    "phone_number": "+91 98765 43210",
}


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def service():
    return OrderService(
        order_repository=OrderDjangoRepository(),
        product_repository=ProductDjangoRepository(),
        cart_repository=CartDjangoRepository(),
    )


@pytest.fixture()
def cart_service():
    return CartService(
        repository=CartDjangoRepository(),
        product_repository=ProductDjangoRepository(),
    )


@pytest.fixture()
def checkout_dto():
    return CheckoutDTO(payment_method="cash-on-delivery", shipping=SHIPPING)


@pytest.fixture()
def placed(service, consumer, farmer, make_product):
    product = make_product(farmer, price="10.00", quantity=5)
    dto = PlaceOrderDTO(
        payment_method="online",
        shipping=SHIPPING,
        items=[{"product_id": product.id, "quantity": 2}],
    )
    (order,) = service.place_order(consumer, dto)
    return order


# ---------------------------------------------------------------------------
# Partitioning
# ---------------------------------------------------------------------------


def _line(farmer_id: int, name: str) -> OrderLine:
    return OrderLine(
        product_id=uuid4(),
        farmer_id=farmer_id,
        product_name=name,
        unit_price=Decimal("1.00"),
        quantity=1,
    )


class TestPartitionByFarmer:
    def test_groups_in_first_seen_order(self):
        lines = [_line(7, "a"), _line(3, "b"), _line(7, "c")]

        partitions = partition_by_farmer(lines)

        assert list(partitions) == [7, 3]
        assert [line.product_name for line in partitions[7]] == ["a", "c"]

    def test_empty(self):
        assert partition_by_farmer([]) == {}


# ---------------------------------------------------------------------------
# Checkout
# ---------------------------------------------------------------------------


class TestCheckout:
    def test_one_order_per_farmer(
        self, service, cart_service, checkout_dto, consumer, farmer, other_farmer, make_product
    ):
        tomatoes = make_product(farmer, name="Tomatoes", price="10.00", quantity=5)
        milk = make_product(other_farmer, name="Milk", price="5.00", quantity=2)
        cart_service.add_item(consumer, AddCartItemDTO(product_id=tomatoes.id, quantity=2))
        cart_service.add_item(consumer, AddCartItemDTO(product_id=milk.id, quantity=1))

        orders = service.checkout(consumer, checkout_dto)

        totals = {order.farmer_id: order.total_amount for order in orders}
        assert totals == {farmer.pk: Decimal("20.00"), other_farmer.pk: Decimal("5.00")}
        assert all(order.status == OrderStatus.PENDING for order in orders)
        tomatoes.refresh_from_db()
        milk.refresh_from_db()
        assert tomatoes.quantity == 3
        assert milk.quantity == 1

        cart = cart_service.get_cart(consumer)
        assert cart.lines() == []
        assert cart.total == Decimal("0.00")

    def test_items_are_snapshots(
        self, service, cart_service, checkout_dto, consumer, farmer, make_product
    ):
        product = make_product(farmer, name="Garlic", price="8.00", quantity=5)
        cart_service.add_item(consumer, AddCartItemDTO(product_id=product.id, quantity=1))
        (order,) = service.checkout(consumer, checkout_dto)

        product.name = "Black Garlic"
        product.price = Decimal("80.00")
        product.save()

        item = order.items.get()
        assert (item.product_name, item.unit_price) == ("Garlic", Decimal("8.00"))
        assert order.total_amount == Decimal("8.00")

    def test_empty_cart(self, service, checkout_dto, consumer):
        with pytest.raises(EmptyCart):
            service.checkout(consumer, checkout_dto)

    def test_shortfall_aborts_everything(
        self, service, cart_service, checkout_dto, consumer, farmer, other_farmer, make_product
    ):
        plenty = make_product(farmer, name="Rice", quantity=50)
        scarce = make_product(other_farmer, name="Honey", quantity=5)
        cart_service.add_item(consumer, AddCartItemDTO(product_id=plenty.id, quantity=10))
        cart_service.add_item(consumer, AddCartItemDTO(product_id=scarce.id, quantity=5))
        scarce.quantity = 3
        scarce.save()

        with pytest.raises(InsufficientStock) as exc_info:
            service.checkout(consumer, checkout_dto)

        assert exc_info.value.extra == {"product": "Honey", "available": 3, "requested": 5}
        assert Order.objects.count() == 0
        plenty.refresh_from_db()
        scarce.refresh_from_db()
        assert (plenty.quantity, scarce.quantity) == (50, 3)
        assert len(cart_service.get_cart(consumer).lines()) == 2

    def test_withdrawn_product(
        self, service, cart_service, checkout_dto, consumer, farmer, make_product
    ):
        product = make_product(farmer)
        cart_service.add_item(consumer, AddCartItemDTO(product_id=product.id, quantity=1))
        product.delete()

        with pytest.raises(ProductGone):
            service.checkout(consumer, checkout_dto)
        assert Order.objects.count() == 0


class TestPlaceOrder:
    def test_leaves_cart_alone(self, service, cart_service, consumer, farmer, make_product):
        in_cart = make_product(farmer, name="Beans", quantity=5)
        direct = make_product(farmer, name="Peas", price="3.00", quantity=5)
        cart_service.add_item(consumer, AddCartItemDTO(product_id=in_cart.id, quantity=1))

        (order,) = service.place_order(
            consumer,
            PlaceOrderDTO(
                payment_method="bank_transfer",
                shipping=SHIPPING,
                items=[{"product_id": direct.id, "quantity": 4}],
            ),
        )

        assert order.total_amount == Decimal("12.00")
        assert len(cart_service.get_cart(consumer).lines()) == 1

    def test_writes_history_and_outbox(self, placed):
        assert [h.new_status for h in placed.status_history.all()] == [OrderStatus.PENDING]
        assert OutboxEvent.objects.filter(
            event_name="OrderPlaced", aggregate_id=str(placed.id)
        ).exists()


# ---------------------------------------------------------------------------
# Status machine
# ---------------------------------------------------------------------------


class TestSetStatus:
    def test_owner_moves_forward(self, service, placed, farmer):
        order = service.set_status(placed.id, farmer, SetOrderStatusDTO(status="confirmed"))

        assert order.status == OrderStatus.CONFIRMED
        latest = order.status_history.order_by("-created_at").first()
        assert (latest.old_status, latest.new_status) == ("pending", "confirmed")

    @pytest.mark.parametrize("target", OrderStatus.values + ["bogus"])
    def test_non_owner_is_refused_for_every_status(self, service, placed, other_farmer, target):
        with pytest.raises(NotOrderOwner):
            service.set_status(
                placed.id, other_farmer, SetOrderStatusDTO(status=target, cancel_reason="x")
            )

    def test_consumer_is_refused(self, service, placed, consumer):
        with pytest.raises(NotOrderOwner):
            service.set_status(placed.id, consumer, SetOrderStatusDTO(status="confirmed"))

    def test_unknown_status(self, service, placed, farmer):
        with pytest.raises(InvalidOrderStatus):
            service.set_status(placed.id, farmer, SetOrderStatusDTO(status="teleported"))

    def test_skipping_states(self, service, placed, farmer):
        with pytest.raises(InvalidOrderStatus):
            service.set_status(placed.id, farmer, SetOrderStatusDTO(status="delivered"))

    @pytest.mark.parametrize("reason", [None, "", "   "])
    def test_cancel_needs_reason(self, service, placed, farmer, reason):
        with pytest.raises(CancelReasonRequired):
            service.set_status(
                placed.id, farmer, SetOrderStatusDTO(status="cancelled", cancel_reason=reason)
            )

    def test_cancel_releases_stock(self, service, placed, farmer):
        product = placed.items.get().product
        assert product.quantity == 3

        order = service.set_status(
            placed.id,
            farmer,
            SetOrderStatusDTO(status="cancelled", cancel_reason="Crop failed"),
        )

        product.refresh_from_db()
        assert product.quantity == 5
        assert order.cancel_reason == "Crop failed"
        assert OutboxEvent.objects.filter(
            event_name="OrderCancelled", aggregate_id=str(placed.id)
        ).exists()

    def test_cancelled_is_terminal(self, service, placed, farmer):
        service.set_status(
            placed.id, farmer, SetOrderStatusDTO(status="cancelled", cancel_reason="No")
        )

        with pytest.raises(InvalidOrderStatus):
            service.set_status(placed.id, farmer, SetOrderStatusDTO(status="confirmed"))

    def test_missing_order(self, service, farmer):
        with pytest.raises(OrderNotFound):
            service.set_status(uuid4(), farmer, SetOrderStatusDTO(status="confirmed"))


class TestVisibility:
    def test_parties_can_view(self, service, placed, consumer, farmer):
        assert service.get_for(placed.id, consumer).id == placed.id
        assert service.get_for(placed.id, farmer).id == placed.id

    def test_outsider_cannot_view(self, service, placed, other_consumer):
        with pytest.raises(NotOrderOwner):
            service.get_for(placed.id, other_consumer)

    def test_listing_is_scoped(self, service, placed, consumer, farmer, other_farmer):
        assert list(service.list_for(consumer)) == [placed]
        assert list(service.list_for(farmer)) == [placed]
        assert list(service.list_for(other_farmer)) == []
