from django.apps import AppConfig


class PaymentsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "payments"

    def ready(self):
        import stripe
        from django.conf import settings

        stripe.api_key = getattr(settings, "STRIPE_SECRET_KEY", "")
