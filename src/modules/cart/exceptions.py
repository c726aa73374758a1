"""Cart domain exceptions."""

from modules.core.exceptions import NotFound


class CartNotFound(NotFound):
    code = "cart_not_found"
    default_message = "Cart not found."


class CartItemNotFound(NotFound):
    """The item id does not belong to the caller's cart."""

    code = "cart_item_not_found"
    default_message = "Item not found in cart."
