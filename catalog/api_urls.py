# catalog/api_urls.py
from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .api_views import ProductViewSet

router = DefaultRouter()
router.register(r"products", ProductViewSet, basename="product")

urlpatterns = [
    path("", include(router.urls)),
]

# /api/products/            - list (search, featured filters)
# /api/products/{id}/       - retrieve
