"""Cart URL configuration.

The collection route carries GET/POST/DELETE so it is declared by hand;
a router would only map GET/POST there.
"""

from __future__ import annotations

from django.urls import path

from modules.cart.views import CartViewSet

cart_root = CartViewSet.as_view({"get": "list", "post": "create", "delete": "clear"})
cart_item = CartViewSet.as_view({"put": "update", "delete": "destroy"})

urlpatterns = [
    path("cart/", cart_root, name="cart"),
    path("cart/<str:pk>/", cart_item, name="cart-item"),
]
