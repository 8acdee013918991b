from __future__ import annotations

from functools import wraps

from django.http import HttpResponseRedirect

from .roles import Role, classify_user


def admin_required(view_func):
    """Send anyone who is not an admin back to the home page."""

    @wraps(view_func)
    def _wrapped(request, *args, **kwargs):
        if classify_user(request.user) is not Role.ADMIN:
            return HttpResponseRedirect("/")
        return view_func(request, *args, **kwargs)

    return _wrapped
