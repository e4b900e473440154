from django.utils import timezone
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import viewsets, mixins, permissions, status
from rest_framework.decorators import action
from rest_framework.filters import OrderingFilter
from rest_framework.response import Response
from drf_spectacular.utils import (
    extend_schema_view, extend_schema, OpenApiParameter, OpenApiTypes,
    OpenApiExample, OpenApiResponse
)

from .. import lifecycle
from ..models import BannerBooking
from ..occupancy import month_calendar
from ..permissions import IsBookingRequesterOrStaff
from ..serializers import (
    BannerBookingSerializer, BookingCreateSerializer, BookingCreatedSerializer,
    BookingEditSerializer, BookingStatusSerializer,
    CalendarQuerySerializer, CalendarDaySerializer, ErrorResponseSerializer,
    PaymentCreateSerializer, BannerPaymentSerializer,
)
from ..throttling import ActionScopedThrottleMixin
from .common import BookingErrorMixin, get_active_zone


@extend_schema_view(
    list=extend_schema(
        summary="List banner bookings",
        description="Own bookings; staff see every booking.",
        parameters=[
            OpenApiParameter("status", OpenApiTypes.STR, description="Filter by status"),
            OpenApiParameter("zone", OpenApiTypes.INT, description="Filter by zone"),
            OpenApiParameter("position", OpenApiTypes.STR, description="Filter by position"),
            OpenApiParameter("ordering", OpenApiTypes.STR, description="start_date, created_at, price_usd (prefix - for desc)"),
        ],
        responses={200: BannerBookingSerializer(many=True)},
    ),
    retrieve=extend_schema(
        summary="Get banner booking",
        responses={
            200: BannerBookingSerializer,
            404: OpenApiResponse(description="Booking not found"),
        }
    ),
    create=extend_schema(
        summary="Request a banner slot",
        description=(
            "Creates a pending booking in the zone resolved from the page context. "
            "End date and price are computed server-side."
        ),
        request=BookingCreateSerializer,
        responses={
            201: BookingCreatedSerializer,
            400: ErrorResponseSerializer,
            403: ErrorResponseSerializer,
            404: ErrorResponseSerializer,
            409: OpenApiResponse(
                response=ErrorResponseSerializer,
                description="Slot already reserved",
                examples=[
                    OpenApiExample(
                        "Conflict",
                        value={
                            "success": False,
                            "error": "SLOT_UNAVAILABLE",
                            "detail": "Slot already reserved from 2025-03-10 to 2025-03-16.",
                            "occupied": [{"start_date": "2025-03-10", "end_date": "2025-03-16", "status": "approved"}],
                            "next_available_date": "2025-03-17",
                        }
                    )
                ]
            ),
        }
    ),
)
class BannerBookingViewSet(BookingErrorMixin, ActionScopedThrottleMixin,
                           mixins.ListModelMixin, mixins.RetrieveModelMixin,
                           viewsets.GenericViewSet):
    """
    Banner slot bookings.

    Users request slots and may cancel their own bookings; staff moderate.
    Every state change goes through `lifecycle`.
    """
    serializer_class = BannerBookingSerializer
    permission_classes = (permissions.IsAuthenticated, IsBookingRequesterOrStaff)
    filter_backends = (DjangoFilterBackend, OrderingFilter)
    filterset_fields = ('status', 'zone', 'position')
    ordering_fields = ('start_date', 'created_at', 'price_usd')
    ordering = ('-created_at',)

    def get_queryset(self):
        qs = BannerBooking.objects.select_related('zone', 'requested_by')
        user = self.request.user
        if user.is_staff:
            return qs
        return qs.filter(requested_by=user)

    def get_serializer_class(self):
        if self.action == 'create':
            return BookingCreateSerializer
        if self.action == 'edit':
            return BookingEditSerializer
        if self.action == 'change_status':
            return BookingStatusSerializer
        if self.action == 'payment':
            return PaymentCreateSerializer
        return BannerBookingSerializer

    def _booking_response(self, booking, detail):
        data = BannerBookingSerializer(booking, context=self.get_serializer_context()).data
        return Response({"success": True, "detail": detail, "booking": data})

    def create(self, request, *args, **kwargs):
        serializer = BookingCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        booking = lifecycle.create_booking_for_context(
            request.user,
            zone_type=data['zone_type'],
            country_id=data['country'],
            region_id=data.get('region'),
            position=data['position'],
            banner_format=data['format'],
            start_date=data['start_date'],
            duration=data['duration_days'],
            image_url=data['image_url'],
            click_url=data.get('click_url'),
        )
        return Response({"success": True, "booking_id": booking.id}, status=status.HTTP_201_CREATED)

    @extend_schema(
        summary="Approve booking",
        description="pending -> approved (staff only). Fails with SLOT_UNAVAILABLE if the dates were taken meanwhile.",
        request=None,
        responses={
            200: OpenApiResponse(description="Booking approved"),
            400: ErrorResponseSerializer,
            403: OpenApiResponse(description="Permission denied"),
            404: OpenApiResponse(description="Booking not found"),
            409: ErrorResponseSerializer,
        }
    )
    @action(detail=True, methods=['post'], permission_classes=[permissions.IsAdminUser])
    def approve(self, request, pk=None):
        booking = self.get_object()
        booking = lifecycle.approve_booking(booking.pk, request.user)
        return self._booking_response(booking, "Booking approved.")

    @extend_schema(
        summary="Reject booking",
        description="pending -> rejected (staff only).",
        request=None,
        responses={
            200: OpenApiResponse(description="Booking rejected"),
            400: ErrorResponseSerializer,
            403: OpenApiResponse(description="Permission denied"),
            404: OpenApiResponse(description="Booking not found"),
        }
    )
    @action(detail=True, methods=['post'], permission_classes=[permissions.IsAdminUser])
    def reject(self, request, pk=None):
        booking = self.get_object()
        booking = lifecycle.reject_booking(booking.pk, request.user)
        return self._booking_response(booking, "Booking rejected.")

    @extend_schema(
        summary="Cancel booking",
        description="Any non-final booking -> cancelled (requester or staff).",
        request=None,
        responses={
            200: OpenApiResponse(description="Booking cancelled"),
            400: ErrorResponseSerializer,
            404: OpenApiResponse(description="Booking not found"),
        }
    )
    @action(detail=True, methods=['post'])
    def cancel(self, request, pk=None):
        booking = self.get_object()
        booking = lifecycle.cancel_booking(booking.pk, request.user)
        return self._booking_response(booking, "Booking cancelled.")

    @extend_schema(
        summary="Pay for booking",
        description=(
            "Open a manual payment for a pending booking (requester only). "
            "Returns the open payment when one already exists."
        ),
        request=PaymentCreateSerializer,
        responses={
            201: OpenApiResponse(description="Payment opened"),
            200: OpenApiResponse(description="Existing open payment"),
            403: ErrorResponseSerializer,
            404: OpenApiResponse(description="Booking not found"),
            409: ErrorResponseSerializer,
        }
    )
    @action(detail=True, methods=['post'])
    def payment(self, request, pk=None):
        booking = self.get_object()
        serializer = PaymentCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        payment, created = lifecycle.create_payment(
            booking.pk, request.user, serializer.validated_data['payment_method'],
        )
        data = BannerPaymentSerializer(payment, context=self.get_serializer_context()).data
        return Response(
            {"success": True, "created": created, "payment": data},
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK,
        )

    @extend_schema(
        summary="Edit booking",
        description="Change dates and/or admin notes (staff only). New dates are re-checked for conflicts.",
        request=BookingEditSerializer,
        responses={
            200: OpenApiResponse(description="Booking updated"),
            400: ErrorResponseSerializer,
            403: OpenApiResponse(description="Permission denied"),
            409: ErrorResponseSerializer,
        }
    )
    @action(detail=True, methods=['patch'], permission_classes=[permissions.IsAdminUser])
    def edit(self, request, pk=None):
        booking = self.get_object()
        serializer = BookingEditSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        booking = lifecycle.edit_booking(
            booking.pk,
            start_date=data.get('start_date'),
            end_date=data.get('end_date'),
            notes=data.get('admin_notes'),
        )
        return self._booking_response(booking, "Booking updated.")

    @extend_schema(
        summary="Set booking status",
        description="Admin status change, validated against the allowed transitions.",
        request=BookingStatusSerializer,
        responses={
            200: OpenApiResponse(description="Status changed"),
            400: ErrorResponseSerializer,
            403: OpenApiResponse(description="Permission denied"),
            409: ErrorResponseSerializer,
        }
    )
    @action(detail=True, methods=['post'], url_path='status', permission_classes=[permissions.IsAdminUser])
    def change_status(self, request, pk=None):
        booking = self.get_object()
        serializer = BookingStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        booking = lifecycle.change_status(booking.pk, serializer.validated_data['status'], request.user)
        return self._booking_response(booking, f"Status set to {booking.status}.")

    @extend_schema(
        summary="Booking statistics",
        description="Counts per status and revenue. Staff see everything, users their own bookings.",
        responses={
            200: OpenApiResponse(
                description="Booking statistics",
                examples=[
                    OpenApiExample(
                        "Example response",
                        value={
                            "total_bookings": 12,
                            "pending_bookings": 3,
                            "approved_bookings": 2,
                            "active_bookings": 4,
                            "expired_bookings": 1,
                            "rejected_bookings": 1,
                            "cancelled_bookings": 1,
                            "total_revenue": 145.0,
                        }
                    )
                ]
            ),
        }
    )
    @action(detail=False, methods=['get'])
    def stats(self, request):
        return Response(lifecycle.booking_stats(self.get_queryset()))

    @extend_schema(
        summary="Slot calendar",
        description="Per-day state (available, pending, booked) of one zone/position for a month (staff only).",
        parameters=[
            OpenApiParameter("zone", OpenApiTypes.INT, required=True, description="Zone ID"),
            OpenApiParameter("position", OpenApiTypes.STR, required=True),
            OpenApiParameter("year", OpenApiTypes.INT, description="Year (YYYY), defaults to current"),
            OpenApiParameter("month", OpenApiTypes.INT, description="Month (1-12), defaults to current"),
        ],
        responses={
            200: OpenApiResponse(description="Calendar days"),
            400: OpenApiResponse(description="Invalid parameters"),
            403: OpenApiResponse(description="Permission denied"),
            404: ErrorResponseSerializer,
        }
    )
    @action(detail=False, methods=['get'], permission_classes=[permissions.IsAdminUser])
    def calendar(self, request):
        query = CalendarQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        params = query.validated_data

        zone = get_active_zone(params['zone'])
        today = timezone.localdate()
        year = params.get('year') or today.year
        month = params.get('month') or today.month

        days = month_calendar(zone.pk, params['position'], year, month)
        return Response({
            'zone': zone.pk,
            'position': params['position'],
            'year': year,
            'month': month,
            'days': CalendarDaySerializer(days, many=True).data,
        })
