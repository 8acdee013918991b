from __future__ import annotations

from django.core.validators import MinValueValidator
from django.db import models


class Product(models.Model):
    """A sellable product. ``price`` is stored in integer cents."""

    name = models.CharField(max_length=200)
    company = models.CharField(max_length=200)
    description = models.TextField()
    featured = models.BooleanField(default=False)
    image = models.CharField(max_length=500, blank=True, default="", help_text="Public URL of the product image")
    price = models.PositiveIntegerField(validators=[MinValueValidator(0)], help_text="Price in cents")
    owner_id = models.CharField(max_length=64, help_text="Identity id of the admin who created the product")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["featured"], name="catalog_pro_feature_2d1c4e_idx"),
            models.Index(fields=["-created_at"], name="catalog_pro_created_8f3a1b_idx"),
        ]

    def __str__(self):
        return f"{self.name} ({self.company})"
