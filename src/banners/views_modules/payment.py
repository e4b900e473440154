from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import viewsets, mixins, permissions
from rest_framework.decorators import action
from rest_framework.filters import OrderingFilter
from rest_framework.response import Response
from drf_spectacular.utils import (
    extend_schema_view, extend_schema, OpenApiParameter, OpenApiTypes, OpenApiResponse
)

from .. import lifecycle
from ..models import BannerPayment
from ..permissions import IsPaymentPayerOrStaff
from ..serializers import (
    BannerPaymentSerializer, PaymentProofSerializer, PaymentConfirmSerializer,
    PaymentRejectSerializer, ErrorResponseSerializer,
)
from ..throttling import ActionScopedThrottleMixin
from .common import BookingErrorMixin


@extend_schema_view(
    list=extend_schema(
        summary="List banner payments",
        description="Own payments; staff see every payment.",
        parameters=[
            OpenApiParameter("status", OpenApiTypes.STR, description="pending, submitted, confirmed, rejected"),
            OpenApiParameter("booking", OpenApiTypes.INT, description="Filter by booking"),
            OpenApiParameter("ordering", OpenApiTypes.STR, description="created_at, amount_usd (prefix - for desc)"),
        ],
        responses={200: BannerPaymentSerializer(many=True)},
    ),
    retrieve=extend_schema(
        summary="Get banner payment",
        responses={
            200: BannerPaymentSerializer,
            404: OpenApiResponse(description="Payment not found"),
        }
    ),
)
class BannerPaymentViewSet(BookingErrorMixin, ActionScopedThrottleMixin,
                           mixins.ListModelMixin, mixins.RetrieveModelMixin,
                           viewsets.GenericViewSet):
    """
    Manual payments for banner bookings.

    Payments are opened from the booking (`POST bookings/{id}/payment/`);
    the payer attaches a proof here and staff confirm or reject it.
    """
    serializer_class = BannerPaymentSerializer
    permission_classes = (permissions.IsAuthenticated, IsPaymentPayerOrStaff)
    filter_backends = (DjangoFilterBackend, OrderingFilter)
    filterset_fields = ('status', 'booking')
    ordering_fields = ('created_at', 'amount_usd')
    ordering = ('-created_at',)

    def get_queryset(self):
        qs = BannerPayment.objects.select_related('booking', 'payer')
        user = self.request.user
        if user.is_staff:
            return qs
        return qs.filter(payer=user)

    def get_serializer_class(self):
        if self.action == 'proof':
            return PaymentProofSerializer
        if self.action == 'confirm':
            return PaymentConfirmSerializer
        if self.action == 'reject':
            return PaymentRejectSerializer
        return BannerPaymentSerializer

    def _payment_response(self, payment, detail):
        data = BannerPaymentSerializer(payment, context=self.get_serializer_context()).data
        return Response({"success": True, "detail": detail, "payment": data})

    @extend_schema(
        summary="Submit payment proof",
        description="pending -> submitted, with a receipt URL and/or a note (payer only).",
        request=PaymentProofSerializer,
        responses={
            200: OpenApiResponse(description="Proof submitted"),
            400: ErrorResponseSerializer,
            403: ErrorResponseSerializer,
            404: OpenApiResponse(description="Payment not found"),
            409: ErrorResponseSerializer,
        }
    )
    @action(detail=True, methods=['post'])
    def proof(self, request, pk=None):
        payment = self.get_object()
        serializer = PaymentProofSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        payment = lifecycle.submit_payment_proof(
            payment.pk, request.user,
            proof_url=serializer.validated_data.get('proof_url'),
            proof_notes=serializer.validated_data.get('proof_notes', ''),
        )
        return self._payment_response(payment, "Payment proof submitted.")

    @extend_schema(
        summary="Confirm payment",
        description=(
            "pending/submitted -> confirmed (staff only). Approves the pending booking; "
            "fails with SLOT_UNAVAILABLE if its dates were taken meanwhile."
        ),
        request=PaymentConfirmSerializer,
        responses={
            200: OpenApiResponse(description="Payment confirmed"),
            403: OpenApiResponse(description="Permission denied"),
            404: OpenApiResponse(description="Payment not found"),
            409: ErrorResponseSerializer,
        }
    )
    @action(detail=True, methods=['post'], permission_classes=[permissions.IsAdminUser])
    def confirm(self, request, pk=None):
        payment = self.get_object()
        serializer = PaymentConfirmSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        payment = lifecycle.confirm_payment(
            payment.pk, request.user, admin_notes=serializer.validated_data.get('admin_notes', ''),
        )
        return self._payment_response(payment, f"Payment confirmed, invoice {payment.invoice_number}.")

    @extend_schema(
        summary="Reject payment",
        description="pending/submitted -> rejected with a reason (staff only). The booking stays pending.",
        request=PaymentRejectSerializer,
        responses={
            200: OpenApiResponse(description="Payment rejected"),
            400: OpenApiResponse(description="Reason missing"),
            403: OpenApiResponse(description="Permission denied"),
            409: ErrorResponseSerializer,
        }
    )
    @action(detail=True, methods=['post'], permission_classes=[permissions.IsAdminUser])
    def reject(self, request, pk=None):
        payment = self.get_object()
        serializer = PaymentRejectSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        payment = lifecycle.reject_payment(payment.pk, request.user, serializer.validated_data['reason'])
        return self._payment_response(payment, "Payment rejected.")
