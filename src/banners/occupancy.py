"""
Occupancy calendar: booked ranges of a slot, next free start date and a
per-day month grid. Read-only.
"""
import calendar
from datetime import date, timedelta

from django.utils import timezone

from .models import BannerBooking, BookingStatus, BLOCKING_STATUSES
from .pricing import get_min_start_date


def get_occupied_dates(zone_id, position, from_date=None, to_date=None, include_pending=True):
    """
    Booked ranges for a zone/position ordered by start date.

    Ranges that ended before `from_date` (default: today) are left out;
    `to_date` is open-ended when omitted.
    """
    statuses = list(BLOCKING_STATUSES)
    if include_pending:
        statuses.append(BookingStatus.PENDING.value)

    from_date = from_date or timezone.localdate()
    qs = BannerBooking.objects.filter(
        zone_id=zone_id,
        position=position,
        status__in=statuses,
        end_date__gte=from_date,
    )
    if to_date is not None:
        qs = qs.filter(start_date__lte=to_date)

    qs = qs.select_related('requested_by').order_by('start_date', 'id')
    return [
        {
            'booking_id': b.id,
            'start_date': b.start_date,
            'end_date': b.end_date,
            'username': b.requested_by.public_name,
            'avatar_url': b.requested_by.avatar_url or None,
            'status': b.status,
        }
        for b in qs
    ]


def next_available_date(occupied, today=None):
    """
    First start date after every approved/active range still running or upcoming,
    never earlier than the minimum lead time.
    """
    today = today or timezone.localdate()
    earliest = get_min_start_date(today)

    ends = [
        item['end_date'] for item in occupied
        if item['status'] in BLOCKING_STATUSES and item['end_date'] >= today
    ]
    if not ends:
        return earliest
    return max(max(ends) + timedelta(days=1), earliest)


def month_calendar(zone_id, position, year, month):
    """One entry per day of the month: available, pending (requested) or booked."""
    first = date(year, month, 1)
    last = date(year, month, calendar.monthrange(year, month)[1])
    occupied = get_occupied_dates(zone_id, position, from_date=first, to_date=last)

    days = []
    current = first
    while current <= last:
        state = 'available'
        for item in occupied:
            if item['start_date'] <= current <= item['end_date']:
                if item['status'] in BLOCKING_STATUSES:
                    state = 'booked'
                    break
                state = 'pending'
        days.append({'date': current, 'status': state})
        current += timedelta(days=1)
    return days
