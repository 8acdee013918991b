from __future__ import annotations

import logging

from django.http import HttpRequest, HttpResponse, HttpResponseRedirect, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from accounts.roles import identity_id
from core.errors import StorefrontError

from .services import PaymentProviderError, confirm_checkout_session, create_checkout_session, handle_webhook

logger = logging.getLogger(__name__)


@api_view(["POST"])
@permission_classes([IsAuthenticated])
def create_payment(request):
    """POST {orderId, cartId} -> {clientSecret} for the embedded checkout."""
    order_id = request.data.get("orderId")
    cart_id = request.data.get("cartId")
    try:
        client_secret = create_checkout_session(
            order_id,
            cart_id,
            identity_id(request.user),
            base_url=request.build_absolute_uri("/"),
        )
    except StorefrontError as exc:
        return Response({"error": exc.message}, status=exc.status_code)
    return Response({"clientSecret": client_secret}, status=status.HTTP_200_OK)


@require_GET
def confirm_payment(request: HttpRequest) -> HttpResponse:
    try:
        confirm_checkout_session(request.GET.get("session_id", ""))
    except PaymentProviderError:
        return JsonResponse(None, status=500, safe=False)
    return HttpResponseRedirect("/orders/")


@csrf_exempt
@require_POST
def stripe_webhook(request: HttpRequest) -> HttpResponse:
    signature = request.META.get("HTTP_STRIPE_SIGNATURE", "")
    try:
        event_type = handle_webhook(request.body, signature)
    except StorefrontError as exc:
        return HttpResponse(exc.message, status=exc.status_code, content_type="text/plain")
    return HttpResponse(f"Processed {event_type}", status=200, content_type="text/plain")
