from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from django.db import transaction
from django.db.models import Q, QuerySet
from django.shortcuts import get_object_or_404

from core.errors import NotFound
from core.storage import ImageStorage, get_image_storage
from core.validation import validate_with_serializer
from orders.models import CartItem
from orders.services.cart import CartService, get_cart_service

from .models import Product
from .serializers import ProductImageSerializer, ProductSerializer

logger = logging.getLogger(__name__)


def fetch_featured_products() -> QuerySet[Product]:
    return Product.objects.filter(featured=True)


def fetch_all_products(search: str = "") -> QuerySet[Product]:
    """All products, newest first, optionally narrowed by name or company."""
    qs = Product.objects.all()
    search = (search or "").strip()
    if search:
        qs = qs.filter(Q(name__icontains=search) | Q(company__icontains=search))
    return qs.order_by("-created_at")


def fetch_single_product(product_id) -> Product:
    return get_object_or_404(Product, pk=product_id)


def fetch_admin_products() -> QuerySet[Product]:
    return Product.objects.order_by("-created_at")


def fetch_admin_product_details(product_id) -> Product:
    try:
        return Product.objects.get(pk=product_id)
    except (Product.DoesNotExist, ValueError):
        raise NotFound("Product not found") from None


def create_product(
    owner_id: str,
    data: Dict[str, Any],
    image,
    storage: Optional[ImageStorage] = None,
) -> Product:
    """Validate fields and image, upload the image, then save the product."""
    fields = validate_with_serializer(ProductSerializer, data)
    validated_image = validate_with_serializer(ProductImageSerializer, {"image": image})["image"]
    storage = storage or get_image_storage()
    image_url = storage.upload(validated_image)
    product = Product.objects.create(owner_id=owner_id, image=image_url, **fields)
    logger.info("Product %s created by %s", product.pk, owner_id)
    return product


@transaction.atomic
def update_product(product_id, data: Dict[str, Any], cart_service: Optional[CartService] = None) -> Product:
    product = fetch_admin_product_details(product_id)
    fields = validate_with_serializer(ProductSerializer, data, instance=product)
    old_price = product.price
    for key, value in fields.items():
        setattr(product, key, value)
    product.save()
    if product.price != old_price:
        _recompute_carts(_carts_holding(product.pk), cart_service)
    logger.info("Product %s updated", product.pk)
    return product


@transaction.atomic
def update_product_image(product_id, image, storage: Optional[ImageStorage] = None) -> Product:
    """Upload the replacement first; the old file is removed only once the new one is stored."""
    product = fetch_admin_product_details(product_id)
    validated_image = validate_with_serializer(ProductImageSerializer, {"image": image})["image"]
    storage = storage or get_image_storage()
    old_url = product.image
    product.image = storage.upload(validated_image)
    product.save(update_fields=["image", "updated_at"])
    if old_url:
        storage.delete(old_url)
    return product


def delete_product(
    product_id,
    storage: Optional[ImageStorage] = None,
    cart_service: Optional[CartService] = None,
) -> None:
    """Delete the product, then recompute every cart that lost a line with it."""
    product = fetch_admin_product_details(product_id)
    image_url = product.image
    with transaction.atomic():
        cart_ids = _carts_holding(product.pk)
        product.delete()
        _recompute_carts(cart_ids, cart_service)
    if image_url:
        (storage or get_image_storage()).delete(image_url)
    logger.info("Product %s deleted", product_id)


def _carts_holding(product_id) -> List[Any]:
    return list(CartItem.objects.filter(product_id=product_id).order_by().values_list("cart_id", flat=True).distinct())


def _recompute_carts(cart_ids, cart_service: Optional[CartService] = None) -> None:
    if not cart_ids:
        return
    service = cart_service or get_cart_service()
    for cart_id in cart_ids:
        cart = service.get_cart_by_id(cart_id)
        if cart is not None:
            service.update_cart(cart)
    logger.info("Recomputed %d cart(s) after a product change", len(cart_ids))
