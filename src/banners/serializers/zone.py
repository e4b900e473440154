from rest_framework import serializers

from src.banners import pricing
from src.banners.models import Zone


class ZoneSerializer(serializers.ModelSerializer):
    country_name = serializers.CharField(source="country.name", read_only=True)
    region_name = serializers.CharField(source="region.name", read_only=True, default=None)

    class Meta:
        model = Zone
        fields = (
            "id", "name", "zone_type",
            "country", "country_name",
            "region", "region_name",
            "is_active",
        )
        read_only_fields = fields


class ZoneResolveQuerySerializer(serializers.Serializer):
    zone_type = serializers.ChoiceField(choices=(pricing.HOME_COUNTRY, pricing.CITY))
    country = serializers.IntegerField(min_value=1)
    region = serializers.IntegerField(min_value=1, required=False, allow_null=True)


class PriceItemSerializer(serializers.Serializer):
    duration = serializers.IntegerField()
    price = serializers.IntegerField()
