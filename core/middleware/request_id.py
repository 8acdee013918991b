# core/middleware/request_id.py
from __future__ import annotations

import logging
import re
import uuid
from threading import local

_thread_locals = local()

# Upstream ids are trusted only when they look like an opaque token
_INCOMING_ID = re.compile(r"^[A-Za-z0-9\-_.]{8,64}$")

REQUEST_ID_HEADER = "X-Request-ID"


class RequestIDMiddleware:
    """
    Tags every request with an id that is echoed in the X-Request-ID response
    header and attached to log records for the duration of the request.
    An id supplied by a proxy in the same header is reused.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        incoming = request.headers.get(REQUEST_ID_HEADER, "")
        request_id = incoming if _INCOMING_ID.match(incoming) else uuid.uuid4().hex
        request.request_id = request_id
        _thread_locals.request_id = request_id
        try:
            response = self.get_response(request)
        finally:
            if hasattr(_thread_locals, "request_id"):
                del _thread_locals.request_id
        response[REQUEST_ID_HEADER] = request_id
        return response


def get_request_id():
    """Id of the request being served on this thread, or None outside a request."""
    return getattr(_thread_locals, "request_id", None)


class RequestIDFilter(logging.Filter):
    """Logging filter that adds ``request_id`` to every record."""

    def filter(self, record):
        record.request_id = get_request_id() or "no-request-id"
        return True
