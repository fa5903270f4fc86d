from django.apps import AppConfig


class TicketsConfig(AppConfig):
    name = "tickets"
    default_auto_field = "django.db.models.BigAutoField"

    def ready(self):
        from tickets import signals  # noqa: F401
        from tickets.conf import get_setting
        from tickets.providers.registry import build_registry

        self.registry = build_registry(get_setting("PROVIDERS"))
