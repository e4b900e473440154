import pytest
from django.apps import apps
from django.core.cache import caches
from django.conf import settings

@pytest.fixture(autouse=True)
def clear_all_caches():
    """Reset throttle history and the resolved-zone cache before every test."""
    for alias in settings.CACHES.keys():
        caches[alias].clear()
    apps.get_app_config("banners").zone_cache.invalidate()
