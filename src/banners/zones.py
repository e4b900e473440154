"""
Zone resolution: page context (country, optional region) -> the active Zone row.

A missing zone means "advertising is not offered here"; callers treat ``None``
as a normal answer, not an error.
"""
import logging
import threading
import time
from collections import OrderedDict

from django.apps import apps
from django.conf import settings

from . import pricing
from .models import Zone

logger = logging.getLogger(__name__)


def resolve_zone(zone_type, country_id=None, region_id=None):
    """
    Return the unique active zone for the context, or None.

    - home_country: region must be empty
    - city: region is required and must match
    If the filters still match more than one row (e.g. no country given)
    the context is ambiguous and None is returned.
    """
    if str(zone_type) not in (pricing.HOME_COUNTRY, pricing.CITY):
        return None

    qs = Zone.objects.filter(zone_type=zone_type, is_active=True)
    if country_id:
        qs = qs.filter(country_id=country_id)

    if zone_type == pricing.CITY:
        if not region_id:
            return None
        qs = qs.filter(region_id=region_id)
    else:
        qs = qs.filter(region__isnull=True)

    matches = list(qs.select_related('country', 'region')[:2])
    if len(matches) != 1:
        if matches:
            logger.warning(
                "ambiguous zone context zone_type=%s country=%s region=%s",
                zone_type, country_id, region_id,
            )
        return None
    return matches[0]


def get_zones_for_country(country_id):
    return (
        Zone.objects
        .filter(country_id=country_id, is_active=True)
        .select_related('country', 'region')
        .order_by('zone_type', 'name')
    )


def get_all_zones():
    return (
        Zone.objects
        .filter(is_active=True)
        .select_related('country', 'region')
        .order_by('name')
    )


class ZoneCache:
    """
    TTL cache in front of `resolve_zone`.

    `clock` returns seconds (monotonic); tests inject a fake one.
    Misses ("no zone here") are cached as well. Expired entries are dropped
    on every insert, and the least recently used ones once `max_entries`
    is reached.
    """

    def __init__(self, ttl=None, clock=time.monotonic, resolver=resolve_zone, max_entries=None):
        self.ttl = float(ttl if ttl is not None else getattr(settings, 'BANNER_ZONE_CACHE_TTL', 300))
        self.max_entries = int(
            max_entries if max_entries is not None
            else getattr(settings, 'BANNER_ZONE_CACHE_MAX_ENTRIES', 1024)
        )
        self._clock = clock
        self._resolver = resolver
        self._entries = OrderedDict()
        self._lock = threading.Lock()

    def get(self, zone_type, country_id=None, region_id=None):
        key = (str(zone_type), str(country_id or ''), str(region_id or ''))
        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and entry[0] > now:
                self._entries.move_to_end(key)
                return entry[1]

        zone = self._resolver(zone_type, country_id, region_id)
        with self._lock:
            self._purge_expired(now)
            self._entries[key] = (now + self.ttl, zone)
            self._entries.move_to_end(key)
            while len(self._entries) > self.max_entries:
                self._entries.popitem(last=False)
        return zone

    def _purge_expired(self, now):
        # caller holds the lock
        expired = [key for key, (expires_at, _) in self._entries.items() if expires_at <= now]
        for key in expired:
            del self._entries[key]

    def invalidate(self):
        with self._lock:
            self._entries.clear()

    def __len__(self):
        with self._lock:
            return len(self._entries)


def get_zone_cache() -> ZoneCache:
    """Process-wide cache owned by the banners AppConfig."""
    return apps.get_app_config('banners').zone_cache
