from rest_framework import serializers

from src.banners.catalog import Position


class PublicUserTinySerializer(serializers.Serializer):
    """Public projection for nested user references."""
    id = serializers.IntegerField()
    username = serializers.CharField()
    avatar_url = serializers.URLField(allow_null=True, required=False)


class ErrorResponseSerializer(serializers.Serializer):
    """Shape of every booking error response."""
    success = serializers.BooleanField(default=False)
    error = serializers.CharField()
    detail = serializers.CharField()


class SlotQuerySerializer(serializers.Serializer):
    zone = serializers.IntegerField(min_value=1)
    position = serializers.ChoiceField(choices=Position.choices)
