from django.conf import settings
from django.db import models
from django.db.models import F, Q

from src.banners import pricing
from src.banners.catalog import Position, BannerFormat
from src.banners.exceptions import InvalidTransition
from .zone import Zone


class BookingStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    APPROVED = 'approved', 'Approved'
    ACTIVE = 'active', 'Active'
    EXPIRED = 'expired', 'Expired'
    REJECTED = 'rejected', 'Rejected'
    CANCELLED = 'cancelled', 'Cancelled'


# The only legal status changes. Anything else raises InvalidTransition.
TRANSITIONS = {
    BookingStatus.PENDING.value: frozenset({'approved', 'rejected', 'cancelled'}),
    BookingStatus.APPROVED.value: frozenset({'active', 'cancelled'}),
    BookingStatus.ACTIVE.value: frozenset({'expired', 'cancelled'}),
    BookingStatus.EXPIRED.value: frozenset(),
    BookingStatus.REJECTED.value: frozenset(),
    BookingStatus.CANCELLED.value: frozenset(),
}

# Statuses that hold a slot; two of these may never overlap on one zone+position
BLOCKING_STATUSES = (BookingStatus.APPROVED.value, BookingStatus.ACTIVE.value)
TERMINAL_STATUSES = (
    BookingStatus.EXPIRED.value,
    BookingStatus.REJECTED.value,
    BookingStatus.CANCELLED.value,
)


def can_transition(current, new) -> bool:
    return str(new) in TRANSITIONS.get(str(current), frozenset())


class BannerBooking(models.Model):
    """A request to show one banner in one zone/position for a fixed run of days."""
    Status = BookingStatus

    zone = models.ForeignKey(Zone, on_delete=models.PROTECT, related_name='bookings')
    position = models.CharField(max_length=20, choices=Position.choices)
    format = models.CharField(max_length=10, choices=BannerFormat.choices)
    image_url = models.URLField(max_length=500)
    click_url = models.URLField(max_length=500, blank=True, null=True)

    start_date = models.DateField()
    end_date = models.DateField()
    duration_days = models.PositiveSmallIntegerField(
        choices=[(d, f'{d} days') for d in pricing.DURATION_OPTIONS],
    )
    price_usd = models.DecimalField(max_digits=8, decimal_places=2)

    status = models.CharField(
        max_length=10, choices=BookingStatus.choices, default=BookingStatus.PENDING,
    )
    requested_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='banner_bookings',
    )
    reviewed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL,
        null=True, blank=True, related_name='reviewed_banner_bookings',
    )
    reviewed_at = models.DateTimeField(null=True, blank=True)
    admin_notes = models.TextField(blank=True, default='')

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(
                fields=['zone', 'position', 'status', 'start_date', 'end_date'],
                name='banner_booking_overlap_idx',
            ),
            models.Index(fields=['status', 'start_date'], name='banner_booking_sched_idx'),
        ]
        constraints = [
            models.CheckConstraint(
                condition=Q(end_date__gte=F('start_date')),
                name='banner_booking_dates_ordered',
            ),
        ]

    def __str__(self):
        return f"{self.requested_by} → {self.zone} / {self.position} [{self.status}]"

    @property
    def is_terminal(self):
        return self.status in TERMINAL_STATUSES

    @property
    def is_blocking(self):
        return self.status in BLOCKING_STATUSES

    def can_transition_to(self, new_status) -> bool:
        return can_transition(self.status, new_status)

    def transition_to(self, new_status):
        """Move to `new_status` in memory; the caller saves."""
        if not self.can_transition_to(new_status):
            raise InvalidTransition(
                f"Cannot change booking status from {self.status} to {new_status}."
            )
        self.status = str(new_status)
