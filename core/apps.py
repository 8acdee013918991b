from django.apps import AppConfig


class CoreConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "core"

    def ready(self):
        """Load the static redirect table once per process."""
        from .redirects import load_redirect_table
        load_redirect_table()
