from rest_framework import serializers
from drf_spectacular.utils import extend_schema_field, OpenApiTypes

from src.banners import pricing
from src.banners.catalog import Position, BannerFormat
from src.banners.models import BannerBooking, BookingStatus, TERMINAL_STATUSES
from src.banners.serializers.common import PublicUserTinySerializer
from src.banners.serializers.occupancy import DATE_ERRORS, check_booking_horizon


class BookingCreateSerializer(serializers.Serializer):
    """
    Input of POST /bookings/. Only shape is checked here; format/position,
    duration, lead time and availability are business rules checked by the
    lifecycle service and reported as structured errors.
    Prices are never accepted from the client.
    """
    country = serializers.IntegerField(min_value=1)
    zone_type = serializers.ChoiceField(choices=(pricing.HOME_COUNTRY, pricing.CITY))
    region = serializers.IntegerField(min_value=1, required=False, allow_null=True)
    position = serializers.ChoiceField(choices=Position.choices)
    format = serializers.ChoiceField(choices=BannerFormat.choices)
    start_date = serializers.DateField(error_messages=DATE_ERRORS)
    duration_days = serializers.IntegerField(min_value=1)
    image_url = serializers.URLField(max_length=500)
    click_url = serializers.URLField(max_length=500, required=False, allow_blank=True, allow_null=True)

    def validate_start_date(self, value):
        return check_booking_horizon(value)


class BookingCreatedSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    booking_id = serializers.IntegerField()


class BookingEditSerializer(serializers.Serializer):
    start_date = serializers.DateField(required=False, error_messages=DATE_ERRORS)
    end_date = serializers.DateField(required=False, error_messages=DATE_ERRORS)
    admin_notes = serializers.CharField(required=False, allow_blank=True)

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError(
                {"non_field_errors": ["Nothing to change."]}
            )
        return attrs


class BookingStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=BookingStatus.choices)


class BannerBookingSerializer(serializers.ModelSerializer):
    zone_name = serializers.CharField(source="zone.name", read_only=True)
    zone_type = serializers.CharField(source="zone.zone_type", read_only=True)
    requested_by = serializers.SerializerMethodField(read_only=True)

    # Action flags based on the current user and status
    can_cancel = serializers.SerializerMethodField(read_only=True)
    can_approve = serializers.SerializerMethodField(read_only=True)
    can_reject = serializers.SerializerMethodField(read_only=True)

    class Meta:
        model = BannerBooking
        fields = (
            "id",
            "zone", "zone_name", "zone_type",
            "position", "format",
            "image_url", "click_url",
            "start_date", "end_date", "duration_days",
            "price_usd", "status",
            "requested_by", "reviewed_by", "reviewed_at", "admin_notes",
            "created_at", "updated_at",
            "can_cancel", "can_approve", "can_reject",
        )
        read_only_fields = fields

    @extend_schema_field(PublicUserTinySerializer)
    def get_requested_by(self, obj):
        u = obj.requested_by
        return {"id": u.id, "username": u.public_name, "avatar_url": u.avatar_url or None}

    def _user(self):
        return getattr(self.context.get("request"), "user", None)

    def _is_staff(self):
        user = self._user()
        return bool(user and user.is_authenticated and user.is_staff)

    @extend_schema_field(OpenApiTypes.BOOL)
    def get_can_cancel(self, obj):
        user = self._user()
        if obj.status in TERMINAL_STATUSES or not (user and user.is_authenticated):
            return False
        return user.is_staff or obj.requested_by_id == user.id

    @extend_schema_field(OpenApiTypes.BOOL)
    def get_can_approve(self, obj):
        return self._is_staff() and obj.status == BookingStatus.PENDING

    @extend_schema_field(OpenApiTypes.BOOL)
    def get_can_reject(self, obj):
        return self._is_staff() and obj.status == BookingStatus.PENDING
