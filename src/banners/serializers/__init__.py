from .common import PublicUserTinySerializer, ErrorResponseSerializer, SlotQuerySerializer
from .zone import ZoneSerializer, ZoneResolveQuerySerializer, PriceItemSerializer
from .occupancy import (
    OccupiedRangeSerializer, OccupancySerializer, OccupancyQuerySerializer,
    AvailabilityQuerySerializer, AvailabilityResultSerializer,
    CalendarQuerySerializer, CalendarDaySerializer,
)
from .booking import (
    BookingCreateSerializer, BookingCreatedSerializer, BookingEditSerializer,
    BookingStatusSerializer, BannerBookingSerializer,
)
from .serving import (
    SlotResponseSerializer, BannerEventSerializer,
    BannerUploadSerializer, BannerUploadResultSerializer,
)
from .payment import (
    PaymentCreateSerializer, PaymentProofSerializer, PaymentConfirmSerializer,
    PaymentRejectSerializer, BannerPaymentSerializer,
)

__all__ = [
    "PublicUserTinySerializer",
    "ErrorResponseSerializer",
    "SlotQuerySerializer",
    "ZoneSerializer",
    "ZoneResolveQuerySerializer",
    "PriceItemSerializer",
    "OccupiedRangeSerializer",
    "OccupancySerializer",
    "OccupancyQuerySerializer",
    "AvailabilityQuerySerializer",
    "AvailabilityResultSerializer",
    "CalendarQuerySerializer",
    "CalendarDaySerializer",
    "BookingCreateSerializer",
    "BookingCreatedSerializer",
    "BookingEditSerializer",
    "BookingStatusSerializer",
    "BannerBookingSerializer",
    "SlotResponseSerializer",
    "BannerEventSerializer",
    "BannerUploadSerializer",
    "BannerUploadResultSerializer",
    "PaymentCreateSerializer",
    "PaymentProofSerializer",
    "PaymentConfirmSerializer",
    "PaymentRejectSerializer",
    "BannerPaymentSerializer",
]
