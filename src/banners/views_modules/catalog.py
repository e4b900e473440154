from rest_framework import generics, status
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_spectacular.utils import (
    extend_schema, OpenApiParameter, OpenApiTypes,
    OpenApiExample, OpenApiResponse
)

from .. import pricing
from ..catalog import catalog_items
from ..serializers import ZoneSerializer, ZoneResolveQuerySerializer, ErrorResponseSerializer
from ..zones import get_all_zones, get_zones_for_country, get_zone_cache
from ..exceptions import ZoneNotFound
from .common import BookingErrorMixin, PublicReadMixin


@extend_schema(
    summary="Banner price table",
    description="Fixed USD prices per duration. Without `zone_type` both tables are returned.",
    parameters=[
        OpenApiParameter("zone_type", OpenApiTypes.STR, description="home_country | city"),
    ],
    responses={
        200: OpenApiResponse(
            description="Price table",
            examples=[
                OpenApiExample(
                    "City zone",
                    value={
                        "zone_type": "city",
                        "prices": [{"duration": 7, "price": 5}, {"duration": 15, "price": 10}],
                        "min_start_date": "2025-03-04",
                    }
                )
            ]
        ),
        400: OpenApiResponse(description="Unknown zone_type"),
    }
)
class PricingView(PublicReadMixin, APIView):
    def get(self, request):
        zone_type = request.query_params.get('zone_type')
        min_start = pricing.get_min_start_date()

        if not zone_type:
            return Response({
                pricing.HOME_COUNTRY: pricing.get_price_table(pricing.HOME_COUNTRY),
                pricing.CITY: pricing.get_price_table(pricing.CITY),
                "durations": list(pricing.DURATION_OPTIONS),
                "min_start_date": min_start,
            })

        try:
            prices = pricing.get_price_table(zone_type)
        except ValueError:
            return Response(
                {"detail": "zone_type must be 'home_country' or 'city'."},
                status=status.HTTP_400_BAD_REQUEST
            )
        return Response({"zone_type": zone_type, "prices": prices, "min_start_date": min_start})


@extend_schema(
    summary="Banner formats and positions",
    responses={200: OpenApiResponse(description="Format catalog with allowed positions")},
)
class FormatsView(PublicReadMixin, APIView):
    def get(self, request):
        return Response(catalog_items())


@extend_schema(
    summary="List advertising zones",
    parameters=[
        OpenApiParameter("country", OpenApiTypes.INT, description="Only zones of this country"),
    ],
    responses={200: ZoneSerializer(many=True)},
)
class ZoneListView(PublicReadMixin, generics.ListAPIView):
    serializer_class = ZoneSerializer
    pagination_class = None

    def get_queryset(self):
        country = self.request.query_params.get('country')
        if country and country.isdigit():
            return get_zones_for_country(int(country))
        return get_all_zones()


@extend_schema(
    summary="Resolve the zone for a page",
    description="Maps a page context (zone type, country, optional region) to its advertising zone.",
    parameters=[
        OpenApiParameter("zone_type", OpenApiTypes.STR, required=True, description="home_country | city"),
        OpenApiParameter("country", OpenApiTypes.INT, required=True),
        OpenApiParameter("region", OpenApiTypes.INT, description="Required for city zones"),
    ],
    responses={
        200: ZoneSerializer,
        400: OpenApiResponse(description="Invalid parameters"),
        404: ErrorResponseSerializer,
    }
)
class ZoneResolveView(BookingErrorMixin, PublicReadMixin, APIView):
    def get(self, request):
        query = ZoneResolveQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        params = query.validated_data

        zone = get_zone_cache().get(params['zone_type'], params['country'], params.get('region'))
        if zone is None:
            raise ZoneNotFound()
        return Response(ZoneSerializer(zone).data)
