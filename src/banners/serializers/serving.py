from rest_framework import serializers

from src.banners.catalog import BannerFormat
from src.banners.models import BannerEvent, BannerBooking, BannerFallback


class SlotResponseSerializer(serializers.Serializer):
    """Either a booked banner or fallback ad code; both null when the slot is empty."""
    kind = serializers.ChoiceField(choices=("booking", "fallback", "empty"))
    booking_id = serializers.IntegerField(allow_null=True)
    image_url = serializers.URLField(allow_null=True)
    click_url = serializers.URLField(allow_null=True)
    fallback_id = serializers.IntegerField(allow_null=True)
    code_html = serializers.CharField(allow_null=True)
    format = serializers.CharField()
    width = serializers.IntegerField()
    height = serializers.IntegerField()


class BannerEventSerializer(serializers.Serializer):
    event_type = serializers.ChoiceField(choices=BannerEvent.EventType.choices)
    booking = serializers.PrimaryKeyRelatedField(
        queryset=BannerBooking.objects.all(), required=False, allow_null=True,
    )
    fallback = serializers.PrimaryKeyRelatedField(
        queryset=BannerFallback.objects.all(), required=False, allow_null=True,
    )

    def validate(self, attrs):
        if not attrs.get("booking") and not attrs.get("fallback"):
            raise serializers.ValidationError(
                {"non_field_errors": ["Either booking or fallback is required."]}
            )
        return attrs


class BannerUploadSerializer(serializers.Serializer):
    """multipart/form-data: a single `image` plus the target `format`."""
    image = serializers.ImageField(allow_empty_file=False, use_url=False)
    format = serializers.ChoiceField(choices=BannerFormat.choices)


class BannerUploadResultSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    image_url = serializers.CharField()
