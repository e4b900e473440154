"""
Slot availability for a (zone, position, date range).

Ranges are inclusive on both ends. Only approved/active bookings hold a slot;
pending requests may overlap each other until one of them is approved.
"""
from .models import BannerBooking, BLOCKING_STATUSES


def overlaps(a_start, a_end, b_start, b_end) -> bool:
    """Closed-interval overlap test; symmetric in its two ranges."""
    return a_start <= b_end and a_end >= b_start


def conflicting_bookings(zone_id, position, start_date, end_date, exclude_booking_id=None):
    """Approved/active bookings on the same slot whose range overlaps [start_date, end_date]."""
    qs = BannerBooking.objects.filter(
        zone_id=zone_id,
        position=position,
        status__in=BLOCKING_STATUSES,
        start_date__lte=end_date,
        end_date__gte=start_date,
    )
    if exclude_booking_id is not None:
        qs = qs.exclude(pk=exclude_booking_id)
    return qs


def check_availability(zone_id, position, start_date, end_date, exclude_booking_id=None) -> bool:
    """
    True when no approved/active booking overlaps the range.

    This is an advisory read. Writes that depend on it go through
    `lifecycle`, which repeats the check under a zone row lock.
    """
    return not conflicting_bookings(
        zone_id, position, start_date, end_date, exclude_booking_id,
    ).exists()
