# shop_backend/urls.py
from __future__ import annotations

from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    # Django-rendered storefront at root
    path("", include(("storefront.urls", "storefront"), namespace="storefront")),

    # Sign-in / sign-out and the profile page
    path("accounts/", include(("accounts.urls", "accounts"), namespace="accounts")),

    # Back-office pages; "/admin/" itself is only an entry in the redirect table
    path("admin/", include(("backoffice.urls", "backoffice"), namespace="backoffice")),

    # Django default admin interface (kept off /admin/, which belongs to the back-office)
    path("site-admin/", admin.site.urls),

    # ---- JSON APIs ----
    path("api/", include(("catalog.api_urls", "catalog_api"), namespace="catalog_api")),
    path("api/", include(("orders.api_urls", "orders_api"), namespace="orders_api")),
    path("api/", include(("payments.urls", "payments"), namespace="payments")),
]

if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)

handler404 = "storefront.views.http_404"
