from rest_framework import serializers

from .models import Review


class ReviewSerializer(serializers.ModelSerializer):
    product_id = serializers.IntegerField(error_messages={"required": "product id is required."})
    author_name = serializers.CharField(max_length=200, error_messages={"blank": "author name is required."})
    author_image_url = serializers.URLField(max_length=500)
    rating = serializers.IntegerField(
        min_value=1,
        max_value=5,
        error_messages={
            "min_value": "rating must be at least 1.",
            "max_value": "rating must be at most 5.",
        },
    )
    comment = serializers.CharField(
        min_length=10,
        max_length=2000,
        error_messages={
            "min_length": "comment must be at least 10 characters.",
            "max_length": "comment must be at most 2000 characters.",
        },
    )

    class Meta:
        model = Review
        fields = ["id", "product_id", "author_name", "author_image_url", "rating", "comment", "created_at"]
        read_only_fields = ["id", "created_at"]
