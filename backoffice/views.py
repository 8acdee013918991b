# backoffice/views.py
from __future__ import annotations

import logging

from django.contrib import messages
from django.http import HttpRequest, HttpResponse, HttpResponseRedirect
from django.shortcuts import render
from django.urls import reverse
from django.views.decorators.http import require_GET, require_http_methods, require_POST

from accounts.permissions import admin_required
from accounts.roles import identity_id
from catalog import services as catalog
from core.errors import StorefrontError, render_error
from orders.services.orders import delete_old_unpaid_orders, fetch_admin_orders

logger = logging.getLogger(__name__)

PRODUCT_FIELDS = ("name", "company", "price", "description")


def _product_data(request: HttpRequest) -> dict:
    data = {k: request.POST.get(k, "") for k in PRODUCT_FIELDS}
    data["featured"] = request.POST.get("featured") in ("on", "true", "1")
    return data


@admin_required
@require_GET
def sales(request: HttpRequest) -> HttpResponse:
    return render(request, "backoffice/sales.html", {"orders": fetch_admin_orders()})


@admin_required
@require_GET
def products(request: HttpRequest) -> HttpResponse:
    return render(request, "backoffice/products.html", {"products": catalog.fetch_admin_products()})


@admin_required
@require_http_methods(["GET", "POST"])
def product_create(request: HttpRequest) -> HttpResponse:
    if request.method == "POST":
        try:
            product = catalog.create_product(
                identity_id(request.user),
                _product_data(request),
                request.FILES.get("image"),
            )
        except StorefrontError as exc:
            messages.error(request, render_error(exc).message)
            return render(request, "backoffice/product_form.html", {"data": request.POST}, status=400)
        messages.success(request, f"{product.name} created")
        return HttpResponseRedirect(reverse("backoffice:products"))
    return render(request, "backoffice/product_form.html", {"data": {}})


@admin_required
@require_http_methods(["GET", "POST"])
def product_edit(request: HttpRequest, pk: int) -> HttpResponse:
    product = catalog.fetch_admin_product_details(pk)
    if request.method == "POST":
        try:
            catalog.update_product(pk, _product_data(request))
        except StorefrontError as exc:
            messages.error(request, render_error(exc).message)
        else:
            messages.success(request, "Product updated successfully")
        return HttpResponseRedirect(reverse("backoffice:product_edit", args=[pk]))
    return render(request, "backoffice/product_edit.html", {"product": product})


@admin_required
@require_POST
def product_image(request: HttpRequest, pk: int) -> HttpResponse:
    try:
        catalog.update_product_image(pk, request.FILES.get("image"))
    except StorefrontError as exc:
        messages.error(request, render_error(exc).message)
    else:
        messages.success(request, "Product image updated successfully")
    return HttpResponseRedirect(reverse("backoffice:product_edit", args=[pk]))


@admin_required
@require_POST
def product_delete(request: HttpRequest, pk: int) -> HttpResponse:
    try:
        catalog.delete_product(pk)
    except StorefrontError as exc:
        messages.error(request, render_error(exc).message)
    else:
        messages.success(request, "Product removed")
    return HttpResponseRedirect(reverse("backoffice:products"))


@admin_required
@require_http_methods(["GET", "POST"])
def tasks(request: HttpRequest) -> HttpResponse:
    if request.method == "POST":
        count = delete_old_unpaid_orders()
        messages.success(request, f"{count} old unpaid orders deleted")
        return HttpResponseRedirect(reverse("backoffice:tasks"))
    return render(request, "backoffice/tasks.html")
