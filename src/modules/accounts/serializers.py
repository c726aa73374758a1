"""Accounts DRF serializers."""

from __future__ import annotations

from rest_framework import serializers

from modules.accounts.models import User


class FarmDetailsSerializer(serializers.Serializer):
    farmName = serializers.CharField(source="farm_name", required=False, allow_blank=True)
    address = serializers.CharField(source="farm_address", required=False, allow_blank=True)
    sizeAcres = serializers.DecimalField(
        source="farm_size_acres",
        max_digits=10,
        decimal_places=2,
        min_value=0,
        required=False,
        allow_null=True,
    )
    latitude = serializers.FloatField(
        source="farm_latitude", min_value=-90, max_value=90, required=False, allow_null=True
    )
    longitude = serializers.FloatField(
        source="farm_longitude", min_value=-180, max_value=180, required=False, allow_null=True
    )


class FarmerProfileSerializer(serializers.ModelSerializer):
    """Read serializer for a farmer's own profile."""

    contactNumber = serializers.CharField(source="contact_number", read_only=True)
    farmDetails = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ["id", "username", "email", "name", "role", "contactNumber", "farmDetails"]
        read_only_fields = fields

    def get_farmDetails(self, obj: User) -> dict:
        return FarmDetailsSerializer(obj).data


class UpdateFarmerProfileSerializer(serializers.Serializer):
    name = serializers.CharField()
    contactNumber = serializers.CharField(source="contact_number")
    farmDetails = FarmDetailsSerializer()


class PublicFarmerSerializer(serializers.ModelSerializer):
    """What anonymous visitors may see about a farmer."""

    name = serializers.CharField(source="display_name", read_only=True)
    farmDetails = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ["id", "name", "farmDetails"]
        read_only_fields = fields

    def get_farmDetails(self, obj: User) -> dict:
        return FarmDetailsSerializer(obj).data


class NearbyFarmersQuerySerializer(serializers.Serializer):
    latitude = serializers.FloatField(min_value=-90, max_value=90)
    longitude = serializers.FloatField(min_value=-180, max_value=180)
    maxDistance = serializers.IntegerField(min_value=1, required=False, default=10_000)
