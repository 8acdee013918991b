from __future__ import annotations

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models


class Favorite(models.Model):
    owner_id = models.CharField(max_length=64)
    product = models.ForeignKey("catalog.Product", on_delete=models.CASCADE, related_name="favorites")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(fields=["owner_id", "product"], name="uniq_favorite_owner_product"),
        ]

    def __str__(self) -> str:
        return f"{self.owner_id} favorites {self.product_id}"


class Review(models.Model):
    owner_id = models.CharField(max_length=64)
    product = models.ForeignKey("catalog.Product", on_delete=models.CASCADE, related_name="reviews")
    author_name = models.CharField(max_length=200)
    author_image_url = models.URLField(max_length=500)
    rating = models.PositiveSmallIntegerField(validators=[MinValueValidator(1), MaxValueValidator(5)])
    comment = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(fields=["owner_id", "product"], name="uniq_review_owner_product"),
        ]

    def __str__(self) -> str:
        return f"{self.rating}/5 by {self.author_name} on {self.product_id}"
