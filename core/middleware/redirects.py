# core/middleware/redirects.py
from __future__ import annotations

import logging

from django.http import HttpResponseRedirect

from core.redirects import get_redirect_table, resolve

logger = logging.getLogger(__name__)


class RedirectMiddleware:
    """
    Sends the request to the end of its redirect chain before any view runs.
    Requests with no applicable redirect (or a looping one) pass through.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        target = resolve(request.path, get_redirect_table())
        if target is None:
            return self.get_response(request)

        query = request.META.get("QUERY_STRING", "")
        location = f"{target}?{query}" if query else target
        logger.debug("Redirecting %s -> %s", request.path, location)
        return HttpResponseRedirect(location)
