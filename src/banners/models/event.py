from django.db import models

from .booking import BannerBooking
from .fallback import BannerFallback
from .zone import Zone


class BannerEvent(models.Model):
    """Impression or click on a served banner. Raw IPs are never stored."""

    class EventType(models.TextChoices):
        IMPRESSION = 'impression', 'Impression'
        CLICK = 'click', 'Click'

    event_type = models.CharField(max_length=12, choices=EventType.choices)
    booking = models.ForeignKey(
        BannerBooking, on_delete=models.SET_NULL, null=True, blank=True, related_name='events',
    )
    fallback = models.ForeignKey(
        BannerFallback, on_delete=models.SET_NULL, null=True, blank=True, related_name='events',
    )
    zone = models.ForeignKey(
        Zone, on_delete=models.SET_NULL, null=True, blank=True, related_name='events',
    )
    position = models.CharField(max_length=20, blank=True, default='')
    anon_ip_hash = models.CharField(max_length=64, blank=True, default='', db_index=True)
    user_agent = models.TextField(blank=True, default='')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['booking', 'event_type', 'created_at'], name='banner_event_booking_idx'),
        ]
