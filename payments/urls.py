# payments/urls.py
from django.urls import path

from . import views

urlpatterns = [
    path("payment/", views.create_payment, name="payment"),
    path("confirm/", views.confirm_payment, name="confirm"),
    path("webhooks/stripe/", views.stripe_webhook, name="stripe_webhook"),
]
