# storefront/urls.py
from django.urls import path

from . import views

app_name = "storefront"

urlpatterns = [
    path("", views.home, name="home"),
    path("about/", views.about, name="about"),

    # Products
    path("products/", views.products, name="products"),
    path("products/<int:pk>/", views.product_detail, name="product_detail"),
    path("products/<int:pk>/favorite/", views.favorite_toggle, name="favorite_toggle"),
    path("products/<int:pk>/reviews/", views.review_create, name="review_create"),

    # Signed-in pages
    path("favorites/", views.favorites, name="favorites"),
    path("reviews/", views.reviews, name="reviews"),
    path("reviews/<int:pk>/update/", views.review_update, name="review_update"),
    path("reviews/<int:pk>/delete/", views.review_delete, name="review_delete"),

    # Cart
    path("cart/", views.cart, name="cart"),
    path("cart/add/", views.cart_add, name="cart_add"),
    path("cart/items/<int:item_id>/update/", views.cart_update, name="cart_update"),
    path("cart/items/<int:item_id>/remove/", views.cart_remove, name="cart_remove"),
    path("cart/order/", views.order_create, name="order_create"),

    # Checkout / orders
    path("checkout/", views.checkout, name="checkout"),
    path("orders/", views.orders, name="orders"),
]
