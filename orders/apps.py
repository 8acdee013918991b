# orders/apps.py
import atexit

from django.apps import AppConfig


class OrdersConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "orders"

    def ready(self):
        # build the cart store and service once per process
        from .services.cart import CartService, set_cart_service
        from .storage import DjangoCartStore

        service = CartService(DjangoCartStore())
        set_cart_service(service)
        atexit.register(service.close)
