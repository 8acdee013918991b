from __future__ import annotations

import hashlib
import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from django.conf import settings
from django.http import HttpRequest

logger = logging.getLogger(__name__)


class Role(str, Enum):
    GUEST = "guest"
    USER = "user"
    ADMIN = "admin"


def get_admin_user_ids() -> frozenset[str]:
    """
    Identity ids granted the admin role.

    ``settings.ADMIN_USER_IDS`` holds a JSON array of strings (as read from the
    environment) or an already-parsed list. Anything else is logged and
    treated as "no admins".
    """
    raw = getattr(settings, "ADMIN_USER_IDS", "")
    if not raw:
        return frozenset()
    if isinstance(raw, str):
        try:
            parsed = json.loads(raw)
        except ValueError as exc:
            logger.error("Failed to parse ADMIN_USER_IDS: %s", exc)
            return frozenset()
    else:
        parsed = raw
    if isinstance(parsed, (list, tuple)) and all(isinstance(i, str) for i in parsed):
        return frozenset(parsed)
    logger.error("ADMIN_USER_IDS is not a valid string array")
    return frozenset()


def identity_id(user) -> str:
    """Stable id the storefront stores as the owner of carts, orders, reviews and favorites."""
    return str(user.pk)


def classify_user(user) -> Role:
    """The single place that decides who is a guest, a shopper or an admin."""
    if user is None or not getattr(user, "is_authenticated", False):
        return Role.GUEST
    if getattr(user, "is_superuser", False) or identity_id(user) in get_admin_user_ids():
        return Role.ADMIN
    return Role.USER


@dataclass(frozen=True)
class Identity:
    user_id: str
    email: str
    display_name: str
    role: Role
    image_url: str = ""

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN


def _avatar_url(email: str) -> str:
    digest = hashlib.md5(email.strip().lower().encode("utf-8")).hexdigest()
    return f"https://www.gravatar.com/avatar/{digest}?d=identicon"


def get_identity(request: HttpRequest) -> Optional[Identity]:
    """Identity of the signed-in user, or None for guests."""
    user = getattr(request, "user", None)
    role = classify_user(user)
    if role is Role.GUEST:
        return None
    return Identity(
        user_id=identity_id(user),
        email=user.email or "",
        display_name=user.first_name or user.get_username(),
        role=role,
        image_url=_avatar_url(user.email or ""),
    )
