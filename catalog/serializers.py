from __future__ import annotations

from django.conf import settings
from rest_framework import serializers

from core.formatting import currency_string_to_cents

from .models import Product


class PriceField(serializers.IntegerField):
    """Integers are cents; strings are dollar amounts typed by an admin ("$1,234.56", "12")."""

    def to_internal_value(self, data):
        if isinstance(data, str):
            try:
                data = currency_string_to_cents(data)
            except ValueError:
                self.fail("invalid")
        return super().to_internal_value(data)


class ProductSerializer(serializers.ModelSerializer):
    name = serializers.CharField(
        min_length=3,
        max_length=200,
        error_messages={"min_length": "name must be at least 3 characters."},
    )
    company = serializers.CharField(max_length=200, error_messages={"blank": "company is required."})
    price = PriceField(min_value=0, error_messages={"min_value": "price must be a positive number."})
    featured = serializers.BooleanField(required=False, default=False)

    class Meta:
        model = Product
        fields = ["id", "name", "company", "description", "featured", "image", "price", "created_at", "updated_at"]
        read_only_fields = ["id", "image", "created_at", "updated_at"]

    def validate_description(self, value):
        words = len(value.split())
        if words < 10 or words > 1000:
            raise serializers.ValidationError("description must be between 10 and 1000 words.")
        return value


class ProductImageSerializer(serializers.Serializer):
    image = serializers.FileField(allow_empty_file=False)

    def validate_image(self, value):
        max_bytes = getattr(settings, "PRODUCT_IMAGE_MAX_MB", 5) * 1024 * 1024
        if value.size > max_bytes:
            raise serializers.ValidationError(
                f"File size must be less than {getattr(settings, 'PRODUCT_IMAGE_MAX_MB', 5)} MB"
            )
        content_type = getattr(value, "content_type", "") or ""
        if not content_type.startswith("image/"):
            raise serializers.ValidationError("File must be an image")
        return value
