from django.apps import AppConfig


class BannersConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "src.banners"
    label = "banners"

    def ready(self):
        from .zones import ZoneCache

        self.zone_cache = ZoneCache()
        # Import signal handlers
        from . import signals  # noqa: F401
