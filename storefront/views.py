# storefront/views.py
from __future__ import annotations

import logging
from typing import Callable
from urllib.parse import urlencode

from django.conf import settings
from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.http import HttpRequest, HttpResponse, HttpResponseRedirect
from django.shortcuts import render
from django.urls import reverse
from django.utils.http import url_has_allowed_host_and_scheme
from django.views.decorators.http import require_GET, require_POST

from accounts.roles import get_identity, identity_id
from catalog.services import fetch_all_products, fetch_featured_products, fetch_single_product
from core.errors import ActionResult, StorefrontError, render_error
from engagement import services as engagement
from orders.services.cart import get_cart_service
from orders.services.orders import create_order, fetch_user_orders

logger = logging.getLogger(__name__)


def _back(request: HttpRequest, fallback: str) -> HttpResponseRedirect:
    referer = request.META.get("HTTP_REFERER")
    if referer and url_has_allowed_host_and_scheme(
        referer, allowed_hosts={request.get_host()}, require_https=request.is_secure(),
    ):
        return HttpResponseRedirect(referer)
    return HttpResponseRedirect(fallback)


def _flash(request: HttpRequest, action: Callable[[], str]) -> ActionResult:
    """Run a storefront action and flash its outcome."""
    try:
        result = ActionResult(message=action())
    except StorefrontError as exc:
        result = render_error(exc)
    if result.error:
        messages.error(request, result.message)
    else:
        messages.success(request, result.message)
    return result


def _amount(request: HttpRequest, default: int = 1) -> int:
    try:
        return int(request.POST.get("amount", default))
    except (TypeError, ValueError):
        raise StorefrontError("Amount must be a whole number") from None


# ---------------------------------------------------------------------------
# Catalog pages
# ---------------------------------------------------------------------------

@require_GET
def home(request: HttpRequest) -> HttpResponse:
    return render(request, "storefront/home.html", {"products": fetch_featured_products()})


@require_GET
def about(request: HttpRequest) -> HttpResponse:
    return render(request, "storefront/about.html")


@require_GET
def products(request: HttpRequest) -> HttpResponse:
    search = request.GET.get("search", "")
    layout = "list" if request.GET.get("layout") == "list" else "grid"
    items = fetch_all_products(search)
    return render(request, "storefront/products.html", {
        "products": items,
        "search": search,
        "layout": layout,
        "total": items.count(),
    })


@require_GET
def product_detail(request: HttpRequest, pk: int) -> HttpResponse:
    product = fetch_single_product(pk)
    rating, count = engagement.fetch_product_rating(pk)
    context = {
        "product": product,
        "rating": rating,
        "rating_count": count,
        "reviews": engagement.fetch_product_reviews(pk),
        "favorite_id": None,
        "existing_review": None,
        "amount_choices": range(1, 11),
    }
    if request.user.is_authenticated:
        owner = identity_id(request.user)
        context["favorite_id"] = engagement.fetch_favorite_id(owner, pk)
        context["existing_review"] = engagement.find_existing_review(owner, pk)
    return render(request, "storefront/product_detail.html", context)


# ---------------------------------------------------------------------------
# Favorites
# ---------------------------------------------------------------------------

@login_required
@require_POST
def favorite_toggle(request: HttpRequest, pk: int) -> HttpResponse:
    favorite_id = request.POST.get("favorite_id") or None
    owner = identity_id(request.user)
    _flash(request, lambda: engagement.toggle_favorite(owner, pk, favorite_id))
    return _back(request, reverse("storefront:product_detail", args=[pk]))


@require_GET
def favorites(request: HttpRequest) -> HttpResponse:
    return render(request, "storefront/favorites.html", {
        "favorites": engagement.fetch_user_favorites(identity_id(request.user)),
    })


# ---------------------------------------------------------------------------
# Reviews
# ---------------------------------------------------------------------------

@login_required
@require_POST
def review_create(request: HttpRequest, pk: int) -> HttpResponse:
    identity = get_identity(request)
    data = {
        "product_id": pk,
        "author_name": identity.display_name,
        "author_image_url": identity.image_url,
        "rating": request.POST.get("rating"),
        "comment": request.POST.get("comment", ""),
    }

    def _create() -> str:
        engagement.create_review(identity.user_id, data)
        return "Review submitted successfully"

    _flash(request, _create)
    return HttpResponseRedirect(reverse("storefront:product_detail", args=[pk]))


@require_GET
def reviews(request: HttpRequest) -> HttpResponse:
    return render(request, "storefront/reviews.html", {
        "reviews": engagement.fetch_product_reviews_by_user(identity_id(request.user)),
    })


@require_POST
def review_update(request: HttpRequest, pk: int) -> HttpResponse:
    owner = identity_id(request.user)
    data = {k: request.POST[k] for k in ("rating", "comment") if request.POST.get(k)}

    def _update() -> str:
        engagement.update_review(owner, pk, data)
        return "Review updated successfully"

    _flash(request, _update)
    return _back(request, reverse("storefront:reviews"))


@require_POST
def review_delete(request: HttpRequest, pk: int) -> HttpResponse:
    owner = identity_id(request.user)
    _flash(request, lambda: engagement.delete_review(owner, pk))
    return HttpResponseRedirect(reverse("storefront:reviews"))


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------

@require_GET
def cart(request: HttpRequest) -> HttpResponse:
    cart_record, items = get_cart_service().get_cart_details(identity_id(request.user))
    return render(request, "storefront/cart.html", {"cart": cart_record, "items": items})


@login_required
@require_POST
def cart_add(request: HttpRequest) -> HttpResponse:
    owner = identity_id(request.user)
    product_id = request.POST.get("product_id")
    result = _flash(request, lambda: get_cart_service().add_to_cart(owner, product_id, _amount(request)))
    target = getattr(settings, "REDIRECT_AFTER_ADDING_TO_CART", "")
    if target and not result.error:
        return HttpResponseRedirect(target)
    return _back(request, reverse("storefront:cart"))


@require_POST
def cart_update(request: HttpRequest, item_id: int) -> HttpResponse:
    owner = identity_id(request.user)
    _flash(request, lambda: get_cart_service().update_cart_item(owner, item_id, _amount(request)))
    return HttpResponseRedirect(reverse("storefront:cart"))


@require_POST
def cart_remove(request: HttpRequest, item_id: int) -> HttpResponse:
    owner = identity_id(request.user)
    _flash(request, lambda: get_cart_service().remove_cart_item(owner, item_id))
    return HttpResponseRedirect(reverse("storefront:cart"))


# ---------------------------------------------------------------------------
# Orders & checkout
# ---------------------------------------------------------------------------

@require_POST
def order_create(request: HttpRequest) -> HttpResponse:
    try:
        order, cart_id = create_order(get_identity(request))
    except StorefrontError as exc:
        messages.error(request, render_error(exc).message)
        return HttpResponseRedirect(reverse("storefront:cart"))
    query = urlencode({"orderId": order.pk, "cartId": cart_id})
    return HttpResponseRedirect(f"{reverse('storefront:checkout')}?{query}")


@require_GET
def checkout(request: HttpRequest) -> HttpResponse:
    return render(request, "storefront/checkout.html", {
        "order_id": request.GET.get("orderId", ""),
        "cart_id": request.GET.get("cartId", ""),
        "stripe_public_key": getattr(settings, "STRIPE_PUBLIC_KEY", ""),
    })


@require_GET
def orders(request: HttpRequest) -> HttpResponse:
    return render(request, "storefront/orders.html", {
        "orders": fetch_user_orders(identity_id(request.user)),
    })


def http_404(request: HttpRequest, exception=None) -> HttpResponse:
    return render(request, "storefront/404.html", status=404)
