# accounts/middleware.py
from __future__ import annotations

import logging
import re

from django.conf import settings
from django.contrib.auth.views import redirect_to_login
from django.http import HttpResponseRedirect, JsonResponse

from .roles import Role, classify_user

security_logger = logging.getLogger("django.security")


class AccessControlMiddleware:
    """
    Route protection applied before any view:
      - back-office paths are for admins only; everyone else is sent home
      - non-public paths require a signed-in user; API callers get a JSON 401
    """

    def __init__(self, get_response):
        self.get_response = get_response
        self.public_patterns = [re.compile(p) for p in getattr(settings, "PUBLIC_PATH_PATTERNS", [])]
        self.admin_prefix = getattr(settings, "ADMIN_PATH_PREFIX", "/admin/")

    def is_public(self, path: str) -> bool:
        return any(p.match(path) for p in self.public_patterns)

    def __call__(self, request):
        role = classify_user(getattr(request, "user", None))
        path = request.path

        if path.startswith(self.admin_prefix) and role is not Role.ADMIN:
            security_logger.warning("Non-admin (%s) denied back-office path %s", role.value, path)
            return HttpResponseRedirect("/")

        if role is Role.GUEST and not self.is_public(path):
            if path.startswith("/api/"):
                return JsonResponse({
                    "error": "Unauthorized",
                    "message": "Authentication credentials were not provided.",
                    "status_code": 401,
                }, status=401)
            return redirect_to_login(request.get_full_path(), settings.LOGIN_URL)

        return self.get_response(request)
