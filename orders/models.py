from __future__ import annotations

from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models


def default_tax_rate() -> Decimal:
    return Decimal(str(getattr(settings, "DEFAULT_TAX_RATE", "0.08")))


class Cart(models.Model):
    """
    One open cart per shopper. Money columns hold integer cents and are
    rewritten from the cart lines every time the lines change.
    """
    owner_id = models.CharField(max_length=64, db_index=True)
    num_items_in_cart = models.PositiveIntegerField(default=0)
    cart_total = models.PositiveIntegerField(default=0, help_text="Subtotal in cents")
    shipping = models.PositiveIntegerField(default=0)
    tax = models.PositiveIntegerField(default=0)
    tax_rate = models.DecimalField(max_digits=6, decimal_places=4, default=default_tax_rate)
    order_total = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(fields=["owner_id"], name="uniq_cart_owner"),
        ]

    def __str__(self):
        return f"Cart #{self.pk} ({self.owner_id})"


class CartItem(models.Model):
    cart = models.ForeignKey(Cart, on_delete=models.CASCADE, related_name="items")
    product = models.ForeignKey("catalog.Product", on_delete=models.CASCADE, related_name="cart_items")
    amount = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["created_at"]
        constraints = [
            models.UniqueConstraint(fields=["cart", "product"], name="uniq_cart_product"),
        ]

    def __str__(self):
        return f"{self.amount} x {self.product_id}"


class Order(models.Model):
    """Snapshot of a cart at checkout time; ``is_paid`` flips once the payment is confirmed."""

    owner_id = models.CharField(max_length=64, db_index=True)
    email = models.EmailField()
    num_items = models.PositiveIntegerField(default=0)
    sub_total = models.PositiveIntegerField(default=0)
    tax = models.PositiveIntegerField(default=0)
    shipping = models.PositiveIntegerField(default=0)
    order_total = models.PositiveIntegerField(default=0)
    is_paid = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["is_paid", "updated_at"], name="orders_paid_updated_idx"),
        ]

    def __str__(self):
        return f"Order #{self.pk} ({'paid' if self.is_paid else 'unpaid'})"


class OrderItem(models.Model):
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="items")
    product = models.ForeignKey(
        "catalog.Product", on_delete=models.SET_NULL, null=True, blank=True, related_name="order_items"
    )
    product_name = models.CharField(max_length=200)
    amount = models.PositiveIntegerField()
    price = models.PositiveIntegerField(help_text="Unit price in cents at the time of ordering")

    def __str__(self):
        return f"{self.amount} x {self.product_name}"
