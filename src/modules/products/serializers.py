"""Product DRF serializers.

Wire names are camelCase; ``source=`` maps them onto the model fields.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.products.constants import MAX_RATING, MIN_RATING, ProductCategory, ProductUnit
from modules.products.models import Product


class ProductFarmerSerializer(serializers.Serializer):
    id = serializers.IntegerField(source="pk", read_only=True)
    name = serializers.CharField(source="display_name", read_only=True)
    farmName = serializers.CharField(source="farm_name", read_only=True)


class ProductSerializer(serializers.ModelSerializer):
    farmer = ProductFarmerSerializer(read_only=True)
    harvestDate = serializers.DateField(source="harvest_date")
    expiryDate = serializers.DateField(source="expiry_date", allow_null=True, required=False)
    averageRating = serializers.DecimalField(
        source="average_rating", max_digits=3, decimal_places=2, read_only=True
    )
    totalSales = serializers.IntegerField(source="total_sales", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Product
        fields = [
            "id",
            "farmer",
            "name",
            "description",
            "category",
            "price",
            "unit",
            "quantity",
            "harvestDate",
            "expiryDate",
            "organic",
            "status",
            "averageRating",
            "totalSales",
            "createdAt",
            "updatedAt",
        ]
        read_only_fields = ["id", "status"]


class ProductWriteSerializer(serializers.Serializer):
    """Shape check for create/update; business rules live in the DTOs."""

    name = serializers.CharField(max_length=255)
    description = serializers.CharField()
    category = serializers.ChoiceField(choices=ProductCategory.choices)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0)
    unit = serializers.ChoiceField(choices=ProductUnit.choices)
    quantity = serializers.IntegerField(min_value=0, required=False, default=0)
    harvestDate = serializers.DateField(source="harvest_date")
    expiryDate = serializers.DateField(source="expiry_date", required=False, allow_null=True)
    organic = serializers.BooleanField(required=False, default=False)


class RateProductSerializer(serializers.Serializer):
    rating = serializers.IntegerField(min_value=MIN_RATING, max_value=MAX_RATING)
    review = serializers.CharField()
