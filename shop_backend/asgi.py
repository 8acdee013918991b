"""
ASGI config for the storefront backend.
"""

import os

from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "shop_backend.settings")

application = get_asgi_application()
