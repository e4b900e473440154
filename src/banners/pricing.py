"""
Banner pricing.

Prices are fixed USD amounts per (zone type, duration). Home/country zones
cost twice the city tier at every duration.
"""
from datetime import date, timedelta

from django.conf import settings
from django.utils import timezone

from src.banners.exceptions import InvalidDateRange

HOME_COUNTRY = "home_country"
CITY = "city"

DURATION_OPTIONS = (7, 15, 30, 90, 180)

# City/region zones (subforums): +$5 per tier
CITY_PRICES = {
    7: 5,
    15: 10,
    30: 15,
    90: 20,
    180: 25,
}

# Home page / country zones: +$10 per tier
HOME_COUNTRY_PRICES = {
    7: 10,
    15: 20,
    30: 30,
    90: 40,
    180: 50,
}

_PRICES_BY_ZONE_TYPE = {
    HOME_COUNTRY: HOME_COUNTRY_PRICES,
    CITY: CITY_PRICES,
}

MIN_DAYS_ADVANCE = 3
# Bookings may start at most this far ahead
MAX_DAYS_ADVANCE = 365


def is_valid_duration(value) -> bool:
    return value in DURATION_OPTIONS


def get_price(zone_type: str, duration: int) -> int:
    """Return the fixed USD price for a zone type and duration (days)."""
    try:
        table = _PRICES_BY_ZONE_TYPE[str(zone_type)]
    except KeyError:
        raise ValueError(f"Unknown zone type: {zone_type!r}")
    if not is_valid_duration(duration):
        raise ValueError(f"Duration must be one of {DURATION_OPTIONS}, got {duration!r}")
    return table[duration]


def get_price_table(zone_type: str) -> list[dict]:
    """All (duration, price) pairs for display, shortest duration first."""
    return [
        {"duration": d, "price": get_price(zone_type, d)}
        for d in sorted(DURATION_OPTIONS)
    ]


def calculate_end_date(start_date: date, duration: int) -> date:
    """Inclusive end date: a 7-day booking starting on the 1st ends on the 7th."""
    try:
        return start_date + timedelta(days=duration - 1)
    except OverflowError:
        raise InvalidDateRange(f"A {duration}-day booking cannot start on {start_date.isoformat()}.")


def get_min_start_date(today: date | None = None) -> date:
    """Earliest bookable start date (today + lead time)."""
    today = today or timezone.localdate()
    lead = int(getattr(settings, "BANNER_MIN_DAYS_ADVANCE", MIN_DAYS_ADVANCE))
    return today + timedelta(days=lead)


def get_max_start_date(today: date | None = None) -> date:
    """Latest bookable start date (today + booking horizon)."""
    today = today or timezone.localdate()
    horizon = int(getattr(settings, "BANNER_MAX_DAYS_ADVANCE", MAX_DAYS_ADVANCE))
    return today + timedelta(days=horizon)
