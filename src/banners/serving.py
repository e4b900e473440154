"""
What a page actually shows in a slot: the live booking if there is one,
otherwise the best fallback ad code. Also records impressions/clicks.
"""
import hashlib
import logging

from django.conf import settings
from django.db.models import Q
from django.utils import timezone

from .models import BannerBooking, BannerEvent, BannerFallback, BLOCKING_STATUSES

logger = logging.getLogger(__name__)


def get_active_banner(zone_id, position, today=None):
    """
    The approved/active booking whose range covers today, or None.
    Approved bookings count too, so a late scheduler run does not leave the slot empty.
    """
    today = today or timezone.localdate()
    return (
        BannerBooking.objects
        .filter(
            zone_id=zone_id,
            position=position,
            status__in=BLOCKING_STATUSES,
            start_date__lte=today,
            end_date__gte=today,
        )
        .order_by('start_date', 'id')
        .first()
    )


def get_fallback(zone_id, position, banner_format):
    """Zone-specific fallback first, then a global one; highest priority wins."""
    base = BannerFallback.objects.filter(position=position, format=banner_format, is_active=True)
    if zone_id:
        fallback = base.filter(zone_id=zone_id).order_by('-priority', '-created_at').first()
        if fallback is not None:
            return fallback
    return base.filter(Q(zone__isnull=True)).order_by('-priority', '-created_at').first()


def hash_ip(ip: str) -> str:
    if not ip:
        return ''
    salt = getattr(settings, 'BANNER_EVENT_IP_SALT', '') or settings.SECRET_KEY
    return hashlib.blake2b(f"{salt}:{ip}".encode(), digest_size=16).hexdigest()


def track_event(event_type, booking=None, fallback=None, zone=None, position='', ip='', user_agent=''):
    """Store one impression/click. Zone and position default to the booking's."""
    if booking is not None:
        zone = zone or booking.zone
        position = position or booking.position
    elif fallback is not None and zone is None:
        zone = fallback.zone

    event = BannerEvent.objects.create(
        event_type=event_type,
        booking=booking,
        fallback=fallback,
        zone=zone,
        position=position or '',
        anon_ip_hash=hash_ip(ip),
        user_agent=(user_agent or '')[:500],
    )
    logger.debug("banner %s recorded booking=%s fallback=%s", event_type,
                 getattr(booking, 'pk', None), getattr(fallback, 'pk', None))
    return event
