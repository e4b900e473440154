from rest_framework import serializers

from src.banners import pricing
from src.banners.serializers.common import SlotQuerySerializer

DATE_ERRORS = {
    "invalid": "Invalid date or format. Expected YYYY-MM-DD and a real calendar date."
}


def check_booking_horizon(value):
    latest = pricing.get_max_start_date()
    if value > latest:
        raise serializers.ValidationError(f"Bookings can start on {latest.isoformat()} at the latest.")
    return value


class OccupiedRangeSerializer(serializers.Serializer):
    booking_id = serializers.IntegerField()
    start_date = serializers.DateField()
    end_date = serializers.DateField()
    username = serializers.CharField()
    avatar_url = serializers.URLField(allow_null=True)
    status = serializers.CharField()


class OccupancySerializer(serializers.Serializer):
    occupied = OccupiedRangeSerializer(many=True)
    next_available_date = serializers.DateField()
    min_start_date = serializers.DateField()


class OccupancyQuerySerializer(SlotQuerySerializer):
    from_date = serializers.DateField(required=False, error_messages=DATE_ERRORS)
    to_date = serializers.DateField(required=False, error_messages=DATE_ERRORS)

    def validate(self, attrs):
        from_date, to_date = attrs.get("from_date"), attrs.get("to_date")
        if from_date and to_date and to_date < from_date:
            raise serializers.ValidationError({"to_date": "must not be before from_date"})
        return attrs


class AvailabilityQuerySerializer(SlotQuerySerializer):
    start_date = serializers.DateField(error_messages=DATE_ERRORS)
    duration = serializers.IntegerField(min_value=1)

    def validate_start_date(self, value):
        return check_booking_horizon(value)


class AvailabilityResultSerializer(serializers.Serializer):
    available = serializers.BooleanField()
    start_date = serializers.DateField()
    end_date = serializers.DateField()
    price_usd = serializers.IntegerField()
    min_start_date = serializers.DateField()


class CalendarQuerySerializer(SlotQuerySerializer):
    year = serializers.IntegerField(min_value=2000, max_value=2100, required=False)
    month = serializers.IntegerField(min_value=1, max_value=12, required=False)


class CalendarDaySerializer(serializers.Serializer):
    date = serializers.DateField()
    status = serializers.ChoiceField(choices=("available", "pending", "booked"))
