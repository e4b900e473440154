from rest_framework.settings import api_settings
from rest_framework.throttling import ScopedRateThrottle


class ScopedRateThrottleIsolated(ScopedRateThrottle):
    """
    Read the rates from the live DRF settings and include the resolved rate
    in the cache key, so tests or environments that override
    DEFAULT_THROTTLE_RATES neither see stale rates nor collide.
    """
    @property
    def THROTTLE_RATES(self):
        return api_settings.DEFAULT_THROTTLE_RATES

    def get_cache_key(self, request, view):
        key = super().get_cache_key(request, view)
        if key is None:
            return None
        return f"{key}:{self.get_rate() or 'none'}"


READ_SCOPE = "banners_read"
MUTATION_SCOPE = "banners_mutation"
EVENT_SCOPE = "banner_events"
UPLOAD_SCOPE = "banner_upload"


class ActionScopedThrottleMixin:
    """Pick the read or mutation scope per request method (viewsets with @action)."""
    throttle_classes = (ScopedRateThrottleIsolated,)
    read_throttle_scope = READ_SCOPE
    mutation_throttle_scope = MUTATION_SCOPE

    def get_throttles(self):
        if self.request.method in ("GET", "HEAD", "OPTIONS"):
            self.throttle_scope = self.read_throttle_scope
        else:
            self.throttle_scope = self.mutation_throttle_scope
        return super().get_throttles()
