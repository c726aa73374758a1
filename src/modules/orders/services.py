"""Order service layer (Use Cases).

``OrderService`` is the checkout coordinator and the order ledger's
status machine.  Every write is one ``transaction.atomic`` unit:

- Checkout and direct orders validate every line against the catalog
  before anything is written; a shortfall aborts with zero orders.
- Lines are partitioned by farmer (first-occurrence order) and each
  partition becomes one order with a frozen total.
- Stock moves only through the catalog ``reserve`` / ``release``
  primitives; a failed reservation rolls back the whole unit, orders and
  cart included.
- Only the order's farmer may change its status; cancelling needs a
  reason and puts the stock back.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Tuple

import structlog
from django.db import transaction

from modules.accounts.models import UserRole
from modules.cart.models import cart_total
from modules.orders.constants import OrderStatus
from modules.orders.dtos import OrderLine
from modules.orders.events import OrderCancelled, OrderPlaced, OrderStatusChanged
from modules.orders.exceptions import (
    CancelReasonRequired,
    EmptyCart,
    InvalidOrderStatus,
    NotOrderOwner,
    OrderNotFound,
    ProductGone,
)
from modules.products.exceptions import InsufficientStock

if TYPE_CHECKING:
    from django.db import models

    from modules.accounts.models import User
    from modules.cart.models import Cart
    from modules.cart.repositories.interfaces import ICartRepository
    from modules.orders.dtos import CheckoutDTO, PlaceOrderDTO, SetOrderStatusDTO
    from modules.orders.models import Order
    from modules.orders.repositories.interfaces import IOrderRepository
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


def partition_by_farmer(lines: Iterable[OrderLine]) -> Dict[int, List[OrderLine]]:
    """Group lines by farmer, keeping the order in which farmers first appear."""
    partitions: Dict[int, List[OrderLine]] = {}
    for line in lines:
        partitions.setdefault(line.farmer_id, []).append(line)
    return partitions


class OrderService:
    def __init__(
        self,
        order_repository: IOrderRepository,
        product_repository: IProductRepository,
        cart_repository: ICartRepository,
    ) -> None:
        self._order_repo = order_repository
        self._product_repo = product_repository
        self._cart_repo = cart_repository

    # ------------------------------------------------------------------
    # Placing orders
    # ------------------------------------------------------------------

    @transaction.atomic
    def checkout(self, consumer: User, dto: CheckoutDTO) -> List[Order]:
        """Turn the consumer's cart into one order per farmer and empty the cart."""
        log = logger.bind(consumer_id=consumer.pk)
        log.info("checkout.started")

        cart = self._cart_repo.get_for_user(consumer.pk)
        cart_lines = cart.lines() if cart else []
        if not cart_lines:
            raise EmptyCart()

        requested = [(item.product_id, item.quantity) for item in cart_lines]
        orders = self._place(consumer, requested, dto)
        self._empty(cart)

        log.info("checkout.completed", order_count=len(orders))
        return orders

    @transaction.atomic
    def place_order(self, consumer: User, dto: PlaceOrderDTO) -> List[Order]:
        """Direct order with explicit items; the cart is left alone."""
        requested = [(item.product_id, item.quantity) for item in dto.items]
        orders = self._place(consumer, requested, dto)
        logger.info("order.placed", consumer_id=consumer.pk, order_count=len(orders))
        return orders

    def _place(
        self,
        consumer: User,
        requested: List[Tuple[Any, int]],
        dto: CheckoutDTO,
    ) -> List[Order]:
        lines = self._snapshot(requested)

        orders = [
            self._order_repo.create(
                consumer_id=consumer.pk,
                farmer_id=farmer_id,
                lines=farmer_lines,
                payment_method=dto.payment_method,
                shipping=dto.shipping,
                notes=dto.notes,
            )
            for farmer_id, farmer_lines in partition_by_farmer(lines).items()
        ]

        for line in lines:
            self._product_repo.reserve(line.product_id, line.quantity)

        for order in orders:
            self._order_repo.add_history(
                order, OrderStatus.PENDING, user=consumer, notes="Order placed"
            )
            order.add_domain_event(
                OrderPlaced(
                    aggregate_id=order.id,
                    order_number=order.order_number,
                    consumer_id=order.consumer_id,
                    farmer_id=order.farmer_id,
                    total_amount=order.total_amount,
                )
            )
            self._order_repo.save(order)

        return [self._order_repo.get_by_id(order.id) for order in orders]

    def _snapshot(self, requested: List[Tuple[Any, int]]) -> List[OrderLine]:
        """Resolve every product and check stock before anything is written."""
        products = self._product_repo.get_many(product_id for product_id, _ in requested)
        lines = []
        for product_id, quantity in requested:
            product = products.get(product_id)
            if product is None:
                raise ProductGone()
            if quantity > product.quantity:
                logger.warning(
                    "checkout.insufficient_stock",
                    product_id=str(product.id),
                    available=product.quantity,
                    requested=quantity,
                )
                raise InsufficientStock(product.name, product.quantity, quantity)
            lines.append(
                OrderLine(
                    product_id=product.id,
                    farmer_id=product.farmer_id,
                    product_name=product.name,
                    unit_price=product.price,
                    quantity=quantity,
                )
            )
        return lines

    def _empty(self, cart: Cart) -> None:
        self._cart_repo.clear(cart)
        cart.total = cart_total([])
        self._cart_repo.save(cart)

    # ------------------------------------------------------------------
    # Status machine
    # ------------------------------------------------------------------

    @transaction.atomic
    def set_status(self, order_id: Any, actor: User, dto: SetOrderStatusDTO) -> Order:
        order = self._order_repo.get_for_update(order_id)
        if not order:
            raise OrderNotFound()

        log = logger.bind(
            order_id=str(order.id),
            current_status=order.status,
            new_status=dto.status,
            actor_id=actor.pk,
        )

        if order.farmer_id != actor.pk:
            log.warning("order.not_owner")
            raise NotOrderOwner()

        if dto.status not in OrderStatus.values:
            raise InvalidOrderStatus(f"Unknown order status '{dto.status}'.", attr="status")
        if not order.can_transition_to(dto.status):
            log.warning("order.invalid_transition")
            raise InvalidOrderStatus(
                f"Cannot transition from {order.status} to {dto.status}.",
                attr="status",
            )

        reason = (dto.cancel_reason or "").strip()
        if dto.status == OrderStatus.CANCELLED and not reason:
            raise CancelReasonRequired()

        old_status = order.status
        order.status = dto.status
        order.add_domain_event(
            OrderStatusChanged(
                aggregate_id=order.id,
                old_status=old_status,
                new_status=dto.status,
                actor_id=actor.pk,
            )
        )

        if dto.status == OrderStatus.CANCELLED:
            for item in order.items.all():
                if item.product_id is not None:
                    self._product_repo.release(item.product_id, item.quantity)
            order.cancel_reason = reason
            order.add_domain_event(
                OrderCancelled(aggregate_id=order.id, reason=reason, actor_id=actor.pk)
            )

        self._order_repo.save(order)
        self._order_repo.add_history(
            order, dto.status, user=actor, notes=reason, old_status=old_status
        )
        log.info("order.status_updated")
        return self._order_repo.get_by_id(order.id)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_for(self, user: User) -> models.QuerySet[Order]:
        return self._order_repo.visible_to(user)

    def get_for(self, order_id: Any, user: User) -> Order:
        order = self._order_repo.get_by_id(order_id)
        if not order:
            raise OrderNotFound()
        if not self._can_view(order, user):
            raise NotOrderOwner()
        return order

    @staticmethod
    def _can_view(order: Order, user: User) -> bool:
        return (
            user.is_staff
            or user.role == UserRole.ADMIN
            or order.consumer_id == user.pk
            or order.farmer_id == user.pk
        )
