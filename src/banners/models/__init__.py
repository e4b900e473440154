from .geo import Country, Region
from .zone import Zone
from .booking import (
    BannerBooking, BookingStatus, BLOCKING_STATUSES, TERMINAL_STATUSES, TRANSITIONS, can_transition,
)
from .fallback import BannerFallback
from .event import BannerEvent
from .payment import (
    BannerPayment, PaymentStatus, PaymentMethod, OPEN_PAYMENT_STATUSES, REVIEWABLE_PAYMENT_STATUSES,
)

__all__ = [
    "Country",
    "Region",
    "Zone",
    "BannerBooking",
    "BookingStatus",
    "BLOCKING_STATUSES",
    "TERMINAL_STATUSES",
    "TRANSITIONS",
    "can_transition",
    "BannerFallback",
    "BannerEvent",
    "BannerPayment",
    "PaymentStatus",
    "PaymentMethod",
    "OPEN_PAYMENT_STATUSES",
    "REVIEWABLE_PAYMENT_STATUSES",
]
