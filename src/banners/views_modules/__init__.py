from .booking import BannerBookingViewSet
from .catalog import PricingView, FormatsView, ZoneListView, ZoneResolveView
from .occupancy import OccupancyView, AvailabilityView
from .serving import SlotView, BannerEventView, BannerUploadView
from .payment import BannerPaymentViewSet

__all__ = [
    "BannerBookingViewSet",
    "PricingView",
    "FormatsView",
    "ZoneListView",
    "ZoneResolveView",
    "OccupancyView",
    "AvailabilityView",
    "SlotView",
    "BannerEventView",
    "BannerUploadView",
    "BannerPaymentViewSet",
]
