"""Catalog domain exceptions.

Raised by the Service Layer and by the stock primitives of the
repository; the API exception handler renders them.
"""

from __future__ import annotations

from modules.core.exceptions import DomainError, Forbidden, NotFound


class ProductNotFound(NotFound):
    """The product does not exist or has been withdrawn."""

    code = "product_not_found"
    default_message = "Product not found."


class NotProductOwner(Forbidden):
    """Only the farmer who listed a product may change it."""


class InsufficientStock(DomainError):
    """Reservation asked for more than is on hand.

    Carries the product name, what is available and what was requested so
    the client can correct the quantity.
    """

    code = "insufficient_stock"

    def __init__(self, product_name: str, available: int, requested: int) -> None:
        self.product_name = product_name
        self.available = available
        self.requested = requested
        super().__init__(
            f"Insufficient quantity for {product_name}. "
            f"Available: {available}, Requested: {requested}",
            product=product_name,
            available=available,
            requested=requested,
        )


class OutOfStock(DomainError):
    """Product is sold out or cannot cover the requested quantity."""

    code = "out_of_stock"
    default_message = "Product is out of stock."
