"""Order DRF serializers for API input/output.

Wire names are camelCase.  Shipping details are stored flat on the
order and exposed as a nested ``shippingDetails`` object.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.orders.constants import PaymentMethod
from modules.orders.models import Order, OrderItem, OrderStatusHistory

# ---------------------------------------------------------------------------
# Input Serializers
# ---------------------------------------------------------------------------


class ShippingDetailsSerializer(serializers.Serializer):
    fullName = serializers.CharField(source="full_name")
    address = serializers.CharField()
    city = serializers.CharField()
    state = serializers.CharField()
    postalCode = serializers.CharField(source="postal_code")
    phoneNumber = serializers.CharField(source="phone_number")


class CheckoutSerializer(serializers.Serializer):
    paymentMethod = serializers.ChoiceField(source="payment_method", choices=PaymentMethod.choices)
    shippingDetails = ShippingDetailsSerializer(source="shipping")
    notes = serializers.CharField(required=False, default="", allow_blank=True)


class OrderItemRequestSerializer(serializers.Serializer):
    productId = serializers.UUIDField(source="product_id")
    quantity = serializers.IntegerField(min_value=1)


class CreateOrderSerializer(CheckoutSerializer):
    items = OrderItemRequestSerializer(many=True, allow_empty=False)


class UpdateOrderStatusSerializer(serializers.Serializer):
    status = serializers.CharField()
    cancelReason = serializers.CharField(
        source="cancel_reason", required=False, allow_blank=True, allow_null=True
    )


# ---------------------------------------------------------------------------
# Output Serializers (Read)
# ---------------------------------------------------------------------------


class OrderPartySerializer(serializers.Serializer):
    id = serializers.IntegerField(source="pk", read_only=True)
    name = serializers.CharField(source="display_name", read_only=True)
    email = serializers.EmailField(read_only=True)


class OrderItemSerializer(serializers.ModelSerializer):
    productId = serializers.UUIDField(source="product_id", read_only=True, allow_null=True)
    name = serializers.CharField(source="product_name", read_only=True)
    price = serializers.DecimalField(
        source="unit_price", max_digits=10, decimal_places=2, read_only=True
    )

    class Meta:
        model = OrderItem
        fields = ["id", "productId", "name", "price", "quantity", "subtotal"]
        read_only_fields = fields


class StatusHistorySerializer(serializers.ModelSerializer):
    oldStatus = serializers.CharField(source="old_status", read_only=True, allow_null=True)
    newStatus = serializers.CharField(source="new_status", read_only=True)
    changedBy = serializers.IntegerField(source="user_id", read_only=True, allow_null=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = OrderStatusHistory
        fields = ["id", "oldStatus", "newStatus", "changedBy", "notes", "createdAt"]
        read_only_fields = fields


class OrderListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for listings and dashboards."""

    orderNumber = serializers.CharField(source="order_number", read_only=True)
    consumer = OrderPartySerializer(read_only=True)
    farmer = OrderPartySerializer(read_only=True)
    totalAmount = serializers.DecimalField(
        source="total_amount", max_digits=12, decimal_places=2, read_only=True
    )
    paymentMethod = serializers.CharField(source="payment_method", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "orderNumber",
            "consumer",
            "farmer",
            "status",
            "totalAmount",
            "paymentMethod",
            "createdAt",
        ]
        read_only_fields = fields


class OrderSerializer(OrderListSerializer):
    items = OrderItemSerializer(many=True, read_only=True)
    shippingDetails = serializers.SerializerMethodField()
    cancelReason = serializers.CharField(source="cancel_reason", read_only=True)
    statusHistory = StatusHistorySerializer(source="status_history", many=True, read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta(OrderListSerializer.Meta):
        fields = OrderListSerializer.Meta.fields + [
            "items",
            "shippingDetails",
            "notes",
            "cancelReason",
            "statusHistory",
            "updatedAt",
        ]
        read_only_fields = fields

    def get_shippingDetails(self, obj: Order) -> dict:
        return {
            "fullName": obj.shipping_full_name,
            "address": obj.shipping_address,
            "city": obj.shipping_city,
            "state": obj.shipping_state,
            "postalCode": obj.shipping_postal_code,
            "phoneNumber": obj.shipping_phone,
        }
