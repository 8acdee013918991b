from __future__ import annotations

import logging
from datetime import timedelta
from typing import Optional, Tuple

from django.conf import settings
from django.db import transaction
from django.db.models import QuerySet
from django.utils import timezone

from accounts.roles import Identity
from core.errors import NotFound, StorefrontError

from ..models import Order, OrderItem
from .cart import CartService, get_cart_service

logger = logging.getLogger(__name__)


def create_order(identity: Identity, service: Optional[CartService] = None) -> Tuple[Order, object]:
    """
    Turn the shopper's cart into an unpaid order.

    Returns the order and the id of the cart it was built from; the cart itself
    is only removed once the payment is confirmed.
    """
    if not identity.email:
        raise StorefrontError("User does not have an email address.")
    service = service or get_cart_service()
    cart = service.fetch_or_create_cart(identity.user_id, error_if_none=True)
    items = service.list_items(cart.id)
    if not items:
        raise StorefrontError("Your cart is empty")

    with transaction.atomic():
        order = Order.objects.create(
            owner_id=identity.user_id,
            email=identity.email,
            num_items=cart.num_items_in_cart,
            sub_total=cart.cart_total,
            tax=cart.tax,
            shipping=cart.shipping,
            order_total=cart.order_total,
        )
        OrderItem.objects.bulk_create([
            OrderItem(
                order=order,
                product_id=item.product.id,
                product_name=item.product.name,
                amount=item.amount,
                price=item.product.price,
            )
            for item in items
        ])
    logger.info("Order %s created from cart %s for %s", order.pk, cart.id, identity.user_id)
    return order, cart.id


def fetch_user_orders(owner_id: str) -> QuerySet[Order]:
    return Order.objects.filter(owner_id=owner_id, is_paid=True).order_by("-created_at")


def fetch_admin_orders() -> QuerySet[Order]:
    return Order.objects.order_by("-created_at")


def finalize_paid_order(order_id, cart_id, service: Optional[CartService] = None) -> Order:
    """Mark the order paid and drop the cart it came from. Safe to call twice."""
    service = service or get_cart_service()
    with transaction.atomic():
        order = Order.objects.select_for_update().filter(pk=order_id).first()
        if order is None:
            raise NotFound("Order not found")
        if not order.is_paid:
            order.is_paid = True
            order.save(update_fields=["is_paid", "updated_at"])
            logger.info("Order %s marked as paid", order.pk)
        if cart_id:
            service.delete_cart(cart_id)
    return order


def delete_old_unpaid_orders(now=None) -> int:
    """Delete unpaid orders that have not been touched within UNPAID_ORDER_TTL_MINUTES."""
    now = now or timezone.now()
    cutoff = now - timedelta(minutes=getattr(settings, "UNPAID_ORDER_TTL_MINUTES", 30))
    _, per_model = Order.objects.filter(is_paid=False, updated_at__lt=cutoff).delete()
    count = per_model.get(Order._meta.label, 0)
    logger.info("Deleted %d unpaid order(s) older than %s", count, cutoff.isoformat())
    return count
