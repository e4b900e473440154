from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import permissions, status
from rest_framework.parsers import MultiPartParser, FormParser
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_spectacular.utils import extend_schema, OpenApiParameter, OpenApiTypes, OpenApiResponse

from ..catalog import get_format_for_position, get_dimensions_for_format
from ..serializers import (
    SlotQuerySerializer, SlotResponseSerializer, BannerEventSerializer,
    BannerUploadSerializer, BannerUploadResultSerializer, ErrorResponseSerializer,
)
from ..serving import get_active_banner, get_fallback, track_event
from ..throttling import ScopedRateThrottleIsolated, EVENT_SCOPE, UPLOAD_SCOPE
from ..uploads import store_banner_image
from .common import BookingErrorMixin, PublicReadMixin, client_ip, get_active_zone


@extend_schema(
    summary="Banner for a slot",
    description="The live booked banner for a zone/position, otherwise the best fallback ad code.",
    parameters=[
        OpenApiParameter("zone", OpenApiTypes.INT, required=True, description="Zone ID"),
        OpenApiParameter("position", OpenApiTypes.STR, required=True),
    ],
    responses={200: SlotResponseSerializer, 404: ErrorResponseSerializer},
)
class SlotView(BookingErrorMixin, PublicReadMixin, APIView):
    def get(self, request):
        query = SlotQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        zone = get_active_zone(query.validated_data['zone'])
        position = query.validated_data['position']

        banner_format = get_format_for_position(position)
        width, height = get_dimensions_for_format(banner_format)
        payload = {
            'kind': 'empty',
            'booking_id': None, 'image_url': None, 'click_url': None,
            'fallback_id': None, 'code_html': None,
            'format': banner_format, 'width': width, 'height': height,
        }

        booking = get_active_banner(zone.pk, position)
        if booking is not None:
            payload.update(
                kind='booking', booking_id=booking.pk,
                image_url=booking.image_url, click_url=booking.click_url,
            )
        else:
            fallback = get_fallback(zone.pk, position, banner_format)
            if fallback is not None:
                payload.update(kind='fallback', fallback_id=fallback.pk, code_html=fallback.code_html)

        return Response(SlotResponseSerializer(payload).data)


@extend_schema(
    summary="Record an impression or click",
    request=BannerEventSerializer,
    responses={
        201: OpenApiResponse(description="Event recorded"),
        400: OpenApiResponse(description="Validation error"),
    }
)
class BannerEventView(APIView):
    permission_classes = [permissions.AllowAny]
    throttle_classes = (ScopedRateThrottleIsolated,)
    throttle_scope = EVENT_SCOPE

    def post(self, request):
        serializer = BannerEventSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        event = track_event(
            data['event_type'],
            booking=data.get('booking'),
            fallback=data.get('fallback'),
            ip=client_ip(request),
            user_agent=request.META.get('HTTP_USER_AGENT') or '',
        )
        return Response({"success": True, "id": event.pk}, status=status.HTTP_201_CREATED)


@extend_schema(
    summary="Upload a banner image",
    description="multipart/form-data with `image` and `format`. The image must match the format's pixel size exactly.",
    request={"multipart/form-data": BannerUploadSerializer},
    responses={
        201: BannerUploadResultSerializer,
        400: OpenApiResponse(description="Invalid image"),
        401: OpenApiResponse(description="Authentication required"),
        502: ErrorResponseSerializer,
    }
)
class BannerUploadView(BookingErrorMixin, APIView):
    permission_classes = [permissions.IsAuthenticated]
    parser_classes = (MultiPartParser, FormParser)
    throttle_classes = (ScopedRateThrottleIsolated,)
    throttle_scope = UPLOAD_SCOPE

    def post(self, request):
        serializer = BannerUploadSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            url = store_banner_image(
                serializer.validated_data['image'], request.user, serializer.validated_data['format'],
            )
        except DjangoValidationError as e:
            return Response({"image": e.messages}, status=status.HTTP_400_BAD_REQUEST)

        return Response({"success": True, "image_url": url}, status=status.HTTP_201_CREATED)
