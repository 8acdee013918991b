from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List

from .roles import Role


@dataclass(frozen=True)
class NavLink:
    href: str
    label: str


GUEST_LINKS: List[NavLink] = [
    NavLink("/", "home"),
    NavLink("/about/", "about"),
    NavLink("/products/", "products"),
]

USER_LINKS: List[NavLink] = GUEST_LINKS + [
    NavLink("/accounts/profile/", "user"),
    NavLink("/favorites/", "favorites"),
    NavLink("/reviews/", "reviews"),
    NavLink("/cart/", "cart"),
    NavLink("/orders/", "orders"),
]

ADMIN_LINKS: List[NavLink] = USER_LINKS + [
    NavLink("/admin/sales/", "dashboard"),
]

LINKS: Dict[Role, List[NavLink]] = {
    Role.GUEST: GUEST_LINKS,
    Role.USER: USER_LINKS,
    Role.ADMIN: ADMIN_LINKS,
}

ADMIN_SIDEBAR_LINKS: List[NavLink] = [
    NavLink("/admin/sales/", "sales"),
    NavLink("/admin/products/", "products"),
    NavLink("/admin/products/create/", "create product"),
    NavLink("/admin/tasks/", "tasks"),
]
