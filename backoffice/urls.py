# backoffice/urls.py
from django.urls import path

from . import views

app_name = "backoffice"

urlpatterns = [
    path("sales/", views.sales, name="sales"),
    path("products/", views.products, name="products"),
    path("products/create/", views.product_create, name="product_create"),
    path("products/<int:pk>/edit/", views.product_edit, name="product_edit"),
    path("products/<int:pk>/image/", views.product_image, name="product_image"),
    path("products/<int:pk>/delete/", views.product_delete, name="product_delete"),
    path("tasks/", views.tasks, name="tasks"),
]
