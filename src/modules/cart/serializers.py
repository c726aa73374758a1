"""Cart DRF serializers."""

from __future__ import annotations

from rest_framework import serializers


class CartProductSerializer(serializers.Serializer):
    id = serializers.UUIDField(read_only=True)
    name = serializers.CharField(read_only=True)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, read_only=True)
    unit = serializers.CharField(read_only=True)
    quantity = serializers.IntegerField(read_only=True)
    status = serializers.CharField(read_only=True)


class CartItemSerializer(serializers.Serializer):
    id = serializers.UUIDField(read_only=True)
    product = CartProductSerializer(read_only=True)
    quantity = serializers.IntegerField(read_only=True)
    subtotal = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)


class CartSerializer(serializers.Serializer):
    id = serializers.SerializerMethodField()
    user = serializers.IntegerField(source="user_id", read_only=True)
    items = serializers.SerializerMethodField()
    total = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)

    def get_id(self, obj) -> str | None:
        return None if obj._state.adding else str(obj.id)

    def get_items(self, obj) -> list:
        return CartItemSerializer(obj.lines(), many=True).data


class AddCartItemSerializer(serializers.Serializer):
    productId = serializers.UUIDField(source="product_id")
    quantity = serializers.IntegerField(min_value=1)


class UpdateCartItemSerializer(serializers.Serializer):
    quantity = serializers.IntegerField(min_value=1)
