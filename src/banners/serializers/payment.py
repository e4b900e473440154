from rest_framework import serializers
from drf_spectacular.utils import extend_schema_field, OpenApiTypes

from src.banners.models import BannerPayment, PaymentMethod, PaymentStatus


class PaymentCreateSerializer(serializers.Serializer):
    payment_method = serializers.ChoiceField(choices=PaymentMethod.choices)


class PaymentProofSerializer(serializers.Serializer):
    proof_url = serializers.URLField(max_length=500, required=False, allow_blank=True, allow_null=True)
    proof_notes = serializers.CharField(required=False, allow_blank=True, max_length=2000)

    def validate(self, attrs):
        if not attrs.get("proof_url") and not (attrs.get("proof_notes") or "").strip():
            raise serializers.ValidationError(
                {"non_field_errors": ["Attach a receipt URL or describe the transfer."]}
            )
        return attrs


class PaymentConfirmSerializer(serializers.Serializer):
    admin_notes = serializers.CharField(required=False, allow_blank=True, max_length=2000)


class PaymentRejectSerializer(serializers.Serializer):
    reason = serializers.CharField(max_length=2000)


class BannerPaymentSerializer(serializers.ModelSerializer):
    booking_status = serializers.CharField(source="booking.status", read_only=True)
    can_submit_proof = serializers.SerializerMethodField(read_only=True)
    can_review = serializers.SerializerMethodField(read_only=True)

    class Meta:
        model = BannerPayment
        fields = (
            "id", "booking", "booking_status",
            "reference_code", "amount_usd", "payment_method", "status",
            "proof_url", "proof_notes", "submitted_at",
            "reviewed_at", "admin_notes", "rejection_reason", "invoice_number",
            "created_at", "updated_at",
            "can_submit_proof", "can_review",
        )
        read_only_fields = fields

    def _user(self):
        return getattr(self.context.get("request"), "user", None)

    @extend_schema_field(OpenApiTypes.BOOL)
    def get_can_submit_proof(self, obj):
        user = self._user()
        return bool(user and user.is_authenticated and obj.payer_id == user.id
                    and obj.status == PaymentStatus.PENDING)

    @extend_schema_field(OpenApiTypes.BOOL)
    def get_can_review(self, obj):
        user = self._user()
        return bool(user and user.is_authenticated and user.is_staff and obj.is_reviewable)
