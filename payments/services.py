from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import stripe
from django.conf import settings

from core.errors import NotFound, StorefrontError
from orders.models import Order
from orders.services.cart import get_cart_service
from orders.services.orders import finalize_paid_order

logger = logging.getLogger(__name__)


class PaymentProviderError(StorefrontError):
    status_code = 500
    default_message = "Internal Server Error"


def _currency() -> str:
    return getattr(settings, "STRIPE_CURRENCY", "usd")


def build_line_items(order: Order) -> List[Dict[str, Any]]:
    """One Stripe line per ordered product plus tax and shipping lines. Amounts are cents already."""
    currency = _currency()
    lines: List[Dict[str, Any]] = []
    for item in order.items.select_related("product"):
        product_data: Dict[str, Any] = {"name": item.product_name}
        image = getattr(item.product, "image", "") if item.product_id else ""
        if image and image.startswith("http"):
            product_data["images"] = [image]
        lines.append({
            "quantity": item.amount,
            "price_data": {
                "currency": currency,
                "product_data": product_data,
                "unit_amount": item.price,
            },
        })
    if order.tax:
        lines.append({
            "quantity": 1,
            "price_data": {"currency": currency, "product_data": {"name": "Tax"}, "unit_amount": order.tax},
        })
    if order.shipping:
        lines.append({
            "quantity": 1,
            "price_data": {"currency": currency, "product_data": {"name": "Shipping"}, "unit_amount": order.shipping},
        })
    return lines


def create_checkout_session(order_id, cart_id, owner_id: str, base_url: Optional[str] = None) -> str:
    """Start an embedded Stripe checkout for the order and return its client secret."""
    try:
        order = Order.objects.filter(pk=order_id, owner_id=owner_id).first()
        cart = get_cart_service().get_cart_by_id(cart_id)
    except (TypeError, ValueError):
        order = cart = None
    if order is None or cart is None or cart.owner_id != owner_id:
        raise NotFound("Order or Cart Not found")

    base_url = (base_url or settings.SITE_URL).rstrip("/")
    try:
        session = stripe.checkout.Session.create(
            ui_mode="embedded",
            mode="payment",
            metadata={"order_id": str(order.pk), "cart_id": str(cart.id)},
            client_reference_id=str(order.pk),
            customer_email=order.email or None,
            line_items=build_line_items(order),
            return_url=f"{base_url}/api/confirm/?session_id={{CHECKOUT_SESSION_ID}}",
        )
    except stripe.StripeError as exc:
        logger.error("Stripe checkout session failed for order %s: %s", order.pk, exc)
        raise PaymentProviderError() from exc
    logger.info("Checkout session %s created for order %s", session.id, order.pk)
    return session.client_secret


def _field(obj, key: str, default=None):
    try:
        value = obj[key]
    except (KeyError, TypeError):
        return default
    return default if value is None else value


def _finalize_from_session(session) -> Optional[Order]:
    metadata = _field(session, "metadata", {})
    order_id = _field(metadata, "order_id")
    status = _field(session, "status")
    if status != "complete" or not order_id:
        logger.info("Checkout session %s not complete (status=%s)", _field(session, "id"), status)
        return None
    return finalize_paid_order(order_id, _field(metadata, "cart_id"))


def confirm_checkout_session(session_id: str) -> Optional[Order]:
    """Look the session up at Stripe and finalize the order once it is complete."""
    if not session_id:
        raise StorefrontError("Missing session_id")
    try:
        session = stripe.checkout.Session.retrieve(session_id)
    except stripe.StripeError as exc:
        logger.error("Stripe session %s lookup failed: %s", session_id, exc)
        raise PaymentProviderError() from exc
    return _finalize_from_session(session)


def handle_webhook(payload: bytes, signature: str) -> str:
    """Verify and apply a Stripe webhook; returns the event type."""
    secret = getattr(settings, "STRIPE_WEBHOOK_SECRET", "")
    if not secret:
        logger.warning("Stripe webhook secret not configured")
        raise StorefrontError("Webhook not configured")
    try:
        event = stripe.Webhook.construct_event(payload, signature, secret)
    except (stripe.SignatureVerificationError, ValueError) as exc:
        logger.error("Webhook signature verification failed: %s", exc)
        raise StorefrontError("Invalid signature") from exc

    event_type = event["type"]
    logger.info("Processing Stripe webhook event: %s (ID: %s)", event_type, _field(event, "id"))
    if event_type == "checkout.session.completed":
        _finalize_from_session(event["data"]["object"])
    return event_type
