"""Serializers for the offices domain."""

from __future__ import annotations

import os

from django.conf import settings  # type: ignore
from django.core.files.storage import default_storage  # type: ignore
from rest_framework import serializers  # type: ignore

from apps.users.serializers import UserSerializer

from .models import MAX_MONTHLY_DISCOUNT, MIN_PRICE_PER_DAY, Office, OfficeImage, Tag

ALLOWED_IMAGE_EXTENSIONS = (".png", ".jpg", ".jpeg")


class TagSerializer(serializers.ModelSerializer):
    class Meta:
        model = Tag
        fields = ["id", "name"]


class OfficeImageSerializer(serializers.ModelSerializer):
    url = serializers.SerializerMethodField()

    class Meta:
        model = OfficeImage
        fields = ["id", "path", "url", "created_at"]
        read_only_fields = fields

    def get_url(self, obj: OfficeImage) -> str:
        return default_storage.url(obj.path)


class OfficeSerializer(serializers.ModelSerializer):
    """Read serializer with the owner, images and tags nested."""

    user = UserSerializer(source="owner", read_only=True)
    images = OfficeImageSerializer(many=True, read_only=True)
    tags = TagSerializer(many=True, read_only=True)
    featured_image_id = serializers.ReadOnlyField()
    reservations_count = serializers.SerializerMethodField()
    distance = serializers.SerializerMethodField()

    class Meta:
        model = Office
        fields = [
            "id",
            "user",
            "title",
            "description",
            "lat",
            "lng",
            "address_line1",
            "address_line2",
            "approval_status",
            "hidden",
            "price_per_day",
            "monthly_discount",
            "featured_image_id",
            "images",
            "tags",
            "reservations_count",
            "distance",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_reservations_count(self, obj: Office) -> int:
        count = getattr(obj, "reservations_count", None)
        if count is None:
            count = obj.reservations.active().count()
        return count

    def get_distance(self, obj: Office):  # type: ignore
        distance = getattr(obj, "distance", None)
        return None if distance is None else round(distance, 3)


class OfficeSummarySerializer(serializers.ModelSerializer):
    """Compact office representation embedded in reservation responses."""

    featured_image = OfficeImageSerializer(read_only=True)

    class Meta:
        model = Office
        fields = ["id", "title", "address_line1", "address_line2", "price_per_day", "featured_image"]
        read_only_fields = fields


class OfficeWriteSerializer(serializers.Serializer):
    """
    Input of office creation and update.

    Only shape and ranges are checked here; ownership, status and the
    featured image rule belong to ``apps.offices.services``.
    """

    title = serializers.CharField(max_length=255)
    description = serializers.CharField()
    lat = serializers.FloatField(min_value=-90, max_value=90)
    lng = serializers.FloatField(min_value=-180, max_value=180)
    address_line1 = serializers.CharField(max_length=255, required=False, allow_blank=True)
    address_line2 = serializers.CharField(max_length=255, required=False, allow_blank=True)
    hidden = serializers.BooleanField(required=False)
    price_per_day = serializers.IntegerField(min_value=MIN_PRICE_PER_DAY)
    monthly_discount = serializers.IntegerField(min_value=0, max_value=MAX_MONTHLY_DISCOUNT, required=False)
    tags = serializers.PrimaryKeyRelatedField(queryset=Tag.objects.all(), many=True, required=False)
    featured_image_id = serializers.IntegerField(required=False, allow_null=True)

    def validate_featured_image_id(self, value):  # type: ignore
        if self.instance is None and value is not None:
            raise serializers.ValidationError("A new office has no images yet.")
        return value


class OfficeListParamsSerializer(serializers.Serializer):
    """Query string of the office listing."""

    user_id = serializers.IntegerField(required=False)
    visitor_id = serializers.IntegerField(required=False)
    lat = serializers.FloatField(min_value=-90, max_value=90, required=False)
    lng = serializers.FloatField(min_value=-180, max_value=180, required=False)


class OfficeImageUploadSerializer(serializers.Serializer):
    image = serializers.ImageField()

    def validate_image(self, value):  # type: ignore
        extension = os.path.splitext(value.name)[1].lower()
        if extension not in ALLOWED_IMAGE_EXTENSIONS:
            raise serializers.ValidationError("Only png and jpg images are accepted.")
        max_kb = getattr(settings, "OFFICE_IMAGE_MAX_KB", 5000)
        if value.size > max_kb * 1024:
            raise serializers.ValidationError(f"The image may not be greater than {max_kb} kilobytes.")
        return value
