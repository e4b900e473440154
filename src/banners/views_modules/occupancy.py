from rest_framework.response import Response
from rest_framework.views import APIView
from drf_spectacular.utils import (
    extend_schema, OpenApiParameter, OpenApiTypes,
    OpenApiExample, OpenApiResponse
)

from .. import pricing
from ..availability import check_availability
from ..exceptions import InvalidDuration
from ..occupancy import get_occupied_dates, next_available_date
from ..serializers import (
    OccupancySerializer, OccupancyQuerySerializer,
    AvailabilityQuerySerializer, AvailabilityResultSerializer, ErrorResponseSerializer,
)
from .common import BookingErrorMixin, PublicReadMixin, get_active_zone


@extend_schema(
    summary="Slot occupancy",
    description=(
        "Booked and requested ranges of one zone/position, plus the first date "
        "after every approved/active range that can still be booked."
    ),
    parameters=[
        OpenApiParameter("zone", OpenApiTypes.INT, required=True, description="Zone ID"),
        OpenApiParameter("position", OpenApiTypes.STR, required=True),
        OpenApiParameter("from_date", OpenApiTypes.DATE, description="Defaults to today"),
        OpenApiParameter("to_date", OpenApiTypes.DATE, description="Open-ended when omitted"),
    ],
    responses={
        200: OccupancySerializer,
        400: OpenApiResponse(description="Invalid parameters"),
        404: ErrorResponseSerializer,
    }
)
class OccupancyView(BookingErrorMixin, PublicReadMixin, APIView):
    def get(self, request):
        query = OccupancyQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        params = query.validated_data

        zone = get_active_zone(params['zone'])
        occupied = get_occupied_dates(
            zone.pk, params['position'],
            from_date=params.get('from_date'), to_date=params.get('to_date'),
        )
        payload = {
            'occupied': occupied,
            'next_available_date': next_available_date(occupied),
            'min_start_date': pricing.get_min_start_date(),
        }
        return Response(OccupancySerializer(payload).data)


@extend_schema(
    summary="Check a slot",
    description="Whether a run of `duration` days from `start_date` is free, with its end date and price.",
    parameters=[
        OpenApiParameter("zone", OpenApiTypes.INT, required=True, description="Zone ID"),
        OpenApiParameter("position", OpenApiTypes.STR, required=True),
        OpenApiParameter("start_date", OpenApiTypes.DATE, required=True),
        OpenApiParameter("duration", OpenApiTypes.INT, required=True, description="7, 15, 30, 90 or 180"),
    ],
    responses={
        200: OpenApiResponse(
            response=AvailabilityResultSerializer,
            description="Availability",
            examples=[
                OpenApiExample(
                    "Free slot",
                    value={
                        "available": True,
                        "start_date": "2025-03-10",
                        "end_date": "2025-03-16",
                        "price_usd": 5,
                        "min_start_date": "2025-03-04",
                    }
                )
            ]
        ),
        400: ErrorResponseSerializer,
        404: ErrorResponseSerializer,
    }
)
class AvailabilityView(BookingErrorMixin, PublicReadMixin, APIView):
    def get(self, request):
        query = AvailabilityQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        params = query.validated_data

        if not pricing.is_valid_duration(params['duration']):
            raise InvalidDuration(f"Duration must be one of {list(pricing.DURATION_OPTIONS)} days.")

        zone = get_active_zone(params['zone'])
        start = params['start_date']
        end = pricing.calculate_end_date(start, params['duration'])
        payload = {
            'available': check_availability(zone.pk, params['position'], start, end),
            'start_date': start,
            'end_date': end,
            'price_usd': pricing.get_price(zone.zone_type, params['duration']),
            'min_start_date': pricing.get_min_start_date(),
        }
        return Response(AvailabilityResultSerializer(payload).data)
