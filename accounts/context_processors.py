from __future__ import annotations

from .links import ADMIN_SIDEBAR_LINKS, LINKS
from .roles import Role, classify_user, identity_id


def navigation(request):
    """Navbar links for the current role plus the cart badge count."""
    user = getattr(request, "user", None)
    role = classify_user(user)
    cart_count = 0
    if role is not Role.GUEST:
        from orders.services.cart import get_cart_service
        cart_count = get_cart_service().fetch_number_of_cart_items(identity_id(user))
    return {
        "user_role": role.value,
        "nav_links": LINKS[role],
        "admin_sidebar_links": ADMIN_SIDEBAR_LINKS,
        "cart_item_count": cart_count,
    }
