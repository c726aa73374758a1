"""Order domain exceptions.

Raised by the Service Layer; ``api_exception_handler`` renders them.
Stock shortfalls surface as ``modules.products.exceptions.InsufficientStock``
straight from the catalog reservation primitive.
"""

from __future__ import annotations

from modules.core.exceptions import DomainError, Forbidden, NotFound, ValidationFailed


class OrderNotFound(NotFound):
    code = "order_not_found"
    default_message = "Order not found."


class NotOrderOwner(Forbidden):
    """Actor is neither allowed to view nor to change the order."""


class EmptyCart(DomainError):
    code = "empty_cart"
    default_message = "Your cart is empty."


class ProductGone(NotFound):
    """A product referenced by the cart or request no longer exists."""

    code = "product_not_found"
    default_message = "Product not found."


class InvalidOrderStatus(ValidationFailed):
    """Unknown status or a move the state machine does not allow."""

    code = "invalid_status"


class CancelReasonRequired(ValidationFailed):
    code = "cancel_reason_required"
    default_message = "A cancel reason is required to cancel an order."

    def __init__(self) -> None:
        super().__init__(attr="cancelReason")
