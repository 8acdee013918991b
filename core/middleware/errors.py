# core/middleware/errors.py
from __future__ import annotations

import logging
from typing import Callable

from django.conf import settings
from django.core.exceptions import PermissionDenied, ValidationError
from django.db import DatabaseError
from django.http import Http404, HttpRequest, HttpResponse, JsonResponse
from django.shortcuts import render
from django.template.loader import render_to_string
from django.utils import timezone
from django.utils.deprecation import MiddlewareMixin

from core.errors import StorefrontError

logger = logging.getLogger(__name__)
security_logger = logging.getLogger("django.security")
error_logger = logging.getLogger("django.request")


class ErrorHandlingMiddleware(MiddlewareMixin):
    """
    Turns exceptions escaping a view into consistent responses:
    JSON bodies for API callers, storefront error pages otherwise.
    Unknown exceptions on HTML pages are left to Django's handler500.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]):
        self.get_response = get_response
        super().__init__(get_response)

    def process_exception(self, request: HttpRequest, exception: Exception) -> HttpResponse | None:
        user = getattr(request, "user", None)
        context = {
            "url": request.get_full_path(),
            "method": request.method,
            "client_ip": self._get_client_ip(request),
            "user_id": user.pk if user is not None and user.is_authenticated else None,
            "timestamp": timezone.now().isoformat(),
        }

        if isinstance(exception, Http404):
            return self._handle_404(request, exception, context)
        if isinstance(exception, PermissionDenied):
            return self._handle_403(request, exception, context)
        if isinstance(exception, StorefrontError):
            return self._handle_storefront_error(request, exception, context)
        if isinstance(exception, ValidationError):
            return self._handle_400(request, exception, context)
        if isinstance(exception, DatabaseError):
            return self._handle_database_error(request, exception, context)
        if self._is_api_request(request):
            return self._handle_500(request, exception, context)
        return None

    def _handle_404(self, request, exception, context) -> HttpResponse:
        logger.info("404 Not Found: %s from %s", context["url"], context["client_ip"])
        if self._is_api_request(request):
            return JsonResponse({
                "error": "Not Found",
                "message": "The requested resource was not found.",
                "status_code": 404,
            }, status=404)
        return render(request, "storefront/404.html", status=404)

    def _handle_403(self, request, exception, context) -> HttpResponse:
        security_logger.warning(
            "403 Forbidden: %s from %s (User: %s) - %s",
            context["url"], context["client_ip"], context["user_id"], exception,
        )
        if self._is_api_request(request):
            return JsonResponse({
                "error": "Forbidden",
                "message": "You do not have permission to access this resource.",
                "status_code": 403,
            }, status=403)
        return render(request, "storefront/403.html", status=403)

    def _handle_storefront_error(self, request, exception: StorefrontError, context) -> HttpResponse:
        logger.warning("%s %s: %s", exception.status_code, context["url"], exception.message)
        if self._is_api_request(request):
            return JsonResponse({
                "error": exception.__class__.__name__,
                "message": exception.message,
                "status_code": exception.status_code,
            }, status=exception.status_code)
        if exception.status_code == 404:
            return render(request, "storefront/404.html", status=404)
        return render(request, "storefront/400.html", {"message": exception.message}, status=exception.status_code)

    def _handle_400(self, request, exception: ValidationError, context) -> HttpResponse:
        logger.warning("400 Bad Request: %s from %s - %s", context["url"], context["client_ip"], exception)
        if self._is_api_request(request):
            return JsonResponse({
                "error": "Bad Request",
                "message": "Invalid input data.",
                "details": exception.messages,
                "status_code": 400,
            }, status=400)
        return render(request, "storefront/400.html", {"message": ", ".join(exception.messages)}, status=400)

    def _handle_database_error(self, request, exception, context) -> HttpResponse:
        error_logger.error("Database Error: %s from %s", context["url"], context["client_ip"], exc_info=exception)
        message = str(exception) if settings.DEBUG else "A database error occurred. Please try again later."
        if self._is_api_request(request):
            return JsonResponse({
                "error": "Database Error",
                "message": message,
                "status_code": 500,
            }, status=500)
        return HttpResponse(render_to_string("storefront/500.html"), status=500)

    def _handle_500(self, request, exception, context) -> HttpResponse:
        error_logger.error(
            "500 Internal Server Error: %s from %s (User: %s)",
            context["url"], context["client_ip"], context["user_id"],
            exc_info=exception,
        )
        message = str(exception) if settings.DEBUG else "An internal server error occurred. Please try again later."
        return JsonResponse({
            "error": "Internal Server Error",
            "message": message,
            "status_code": 500,
        }, status=500)

    def _is_api_request(self, request: HttpRequest) -> bool:
        if "application/json" in request.META.get("HTTP_ACCEPT", ""):
            return True
        return request.path.startswith("/api/")

    def _get_client_ip(self, request: HttpRequest) -> str:
        x_forwarded_for = request.META.get("HTTP_X_FORWARDED_FOR")
        if x_forwarded_for:
            return x_forwarded_for.split(",")[0].strip()
        return request.META.get("REMOTE_ADDR", "unknown")
