from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views_modules import (
    BannerBookingViewSet, PricingView, FormatsView, ZoneListView, ZoneResolveView,
    OccupancyView, AvailabilityView, SlotView, BannerEventView, BannerUploadView,
    BannerPaymentViewSet,
)

app_name = "banners"

router = DefaultRouter()
router.register(r"bookings", BannerBookingViewSet, basename="booking")
router.register(r"payments", BannerPaymentViewSet, basename="payment")

urlpatterns = [
    path("", include(router.urls)),
    path("pricing/", PricingView.as_view(), name="pricing"),
    path("formats/", FormatsView.as_view(), name="formats"),
    path("zones/", ZoneListView.as_view(), name="zones"),
    path("zones/resolve/", ZoneResolveView.as_view(), name="zone-resolve"),
    path("occupancy/", OccupancyView.as_view(), name="occupancy"),
    path("availability/", AvailabilityView.as_view(), name="availability"),
    path("slot/", SlotView.as_view(), name="slot"),
    path("events/", BannerEventView.as_view(), name="events"),
    path("uploads/", BannerUploadView.as_view(), name="uploads"),
]
