# orders/api_urls.py
from django.urls import path

from .api_views import CartItemDetailView, CartItemsView, CartView, MyOrdersView

urlpatterns = [
    path("cart/", CartView.as_view(), name="cart"),
    path("cart/items/", CartItemsView.as_view(), name="cart_items"),
    path("cart/items/<int:item_id>/", CartItemDetailView.as_view(), name="cart_item_detail"),
    path("orders/", MyOrdersView.as_view(), name="my_orders"),
]
