from __future__ import annotations

import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Optional, Tuple

from django.db import IntegrityError, transaction
from django.db.models import Avg, Count, QuerySet

from catalog.models import Product
from core.errors import NotFound, StorefrontError
from core.validation import validate_with_serializer

from .models import Favorite, Review
from .serializers import ReviewSerializer

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Favorites
# ---------------------------------------------------------------------------

def fetch_favorite_id(owner_id: str, product_id) -> Optional[int]:
    return (
        Favorite.objects.filter(owner_id=owner_id, product_id=product_id)
        .values_list("id", flat=True)
        .first()
    )


def toggle_favorite(owner_id: str, product_id, favorite_id: Optional[int] = None) -> str:
    """Remove the favorite when *favorite_id* is given, otherwise add one."""
    if favorite_id:
        deleted, _ = Favorite.objects.filter(pk=favorite_id, owner_id=owner_id).delete()
        if not deleted:
            raise NotFound("Favorite not found")
        return "Removed from Faves"
    if not Product.objects.filter(pk=product_id).exists():
        raise NotFound("Product not found")
    Favorite.objects.get_or_create(owner_id=owner_id, product_id=product_id)
    return "Added to Faves"


def fetch_user_favorites(owner_id: str) -> QuerySet[Favorite]:
    return Favorite.objects.filter(owner_id=owner_id).select_related("product")


# ---------------------------------------------------------------------------
# Reviews
# ---------------------------------------------------------------------------

def create_review(owner_id: str, data: Dict[str, Any]) -> Review:
    fields = validate_with_serializer(ReviewSerializer, data)
    if not Product.objects.filter(pk=fields["product_id"]).exists():
        raise NotFound("Product not found")
    if Review.objects.filter(owner_id=owner_id, product_id=fields["product_id"]).exists():
        raise StorefrontError("You have already reviewed this product")
    try:
        with transaction.atomic():
            review = Review.objects.create(owner_id=owner_id, **fields)
    except IntegrityError:
        raise StorefrontError("You have already reviewed this product") from None
    logger.info("Review %s created for product %s", review.pk, review.product_id)
    return review


def fetch_product_reviews(product_id) -> QuerySet[Review]:
    return Review.objects.filter(product_id=product_id).order_by("-created_at")


def fetch_product_rating(product_id) -> Tuple[float, int]:
    """Average rating rounded to one decimal and the review count; (0, 0) without reviews."""
    agg = Review.objects.filter(product_id=product_id).aggregate(avg=Avg("rating"), count=Count("id"))
    if not agg["count"]:
        return 0.0, 0
    rating = Decimal(str(agg["avg"])).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    return float(rating), agg["count"]


def fetch_product_reviews_by_user(owner_id: str) -> QuerySet[Review]:
    return Review.objects.filter(owner_id=owner_id).select_related("product")


def find_existing_review(owner_id: str, product_id) -> Optional[Review]:
    return Review.objects.filter(owner_id=owner_id, product_id=product_id).first()


def delete_review(owner_id: str, review_id) -> str:
    deleted, _ = Review.objects.filter(pk=review_id, owner_id=owner_id).delete()
    if not deleted:
        raise NotFound("Review not found")
    return "Review deleted successfully"


def update_review(owner_id: str, review_id, data: Dict[str, Any]) -> Review:
    review = Review.objects.filter(pk=review_id, owner_id=owner_id).first()
    if review is None:
        raise NotFound("Review not found")
    changes = {k: v for k, v in data.items() if k in ("rating", "comment")}
    fields = validate_with_serializer(ReviewSerializer, changes, instance=review, partial=True)
    for key, value in fields.items():
        setattr(review, key, value)
    review.save()
    return review
