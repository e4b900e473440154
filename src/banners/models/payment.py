from django.conf import settings
from django.db import models
from django.db.models import Q

from .booking import BannerBooking


class PaymentStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    SUBMITTED = 'submitted', 'Proof submitted'
    CONFIRMED = 'confirmed', 'Confirmed'
    REJECTED = 'rejected', 'Rejected'


class PaymentMethod(models.TextChoices):
    BANK_TRANSFER = 'bank_transfer', 'Bank transfer'
    PAYPAL = 'paypal', 'PayPal'
    CRYPTO = 'crypto', 'Crypto (USDT)'


# A booking has at most one payment in these statuses
OPEN_PAYMENT_STATUSES = (
    PaymentStatus.PENDING.value,
    PaymentStatus.SUBMITTED.value,
    PaymentStatus.CONFIRMED.value,
)
REVIEWABLE_PAYMENT_STATUSES = (
    PaymentStatus.PENDING.value,
    PaymentStatus.SUBMITTED.value,
)


class BannerPayment(models.Model):
    """
    Manual payment for a banner booking: the requester pays off-site quoting
    `reference_code`, attaches a receipt, and staff confirm or reject it.
    Confirming approves the booking.
    """
    Status = PaymentStatus
    Method = PaymentMethod

    booking = models.ForeignKey(BannerBooking, on_delete=models.CASCADE, related_name='payments')
    payer = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='banner_payments',
    )
    amount_usd = models.DecimalField(max_digits=8, decimal_places=2)
    payment_method = models.CharField(max_length=20, choices=PaymentMethod.choices)
    status = models.CharField(
        max_length=10, choices=PaymentStatus.choices, default=PaymentStatus.PENDING,
    )
    reference_code = models.CharField(max_length=20, unique=True)

    proof_url = models.URLField(max_length=500, blank=True, null=True)
    proof_notes = models.TextField(blank=True, default='')
    submitted_at = models.DateTimeField(null=True, blank=True)

    reviewed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL,
        null=True, blank=True, related_name='reviewed_banner_payments',
    )
    reviewed_at = models.DateTimeField(null=True, blank=True)
    admin_notes = models.TextField(blank=True, default='')
    rejection_reason = models.TextField(blank=True, default='')
    invoice_number = models.CharField(max_length=20, unique=True, null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['status', 'created_at'], name='banner_payment_status_idx'),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=['booking'],
                condition=Q(status__in=OPEN_PAYMENT_STATUSES),
                name='banner_payment_one_open_per_booking',
            ),
        ]

    def __str__(self):
        return f"{self.reference_code} ({self.status})"

    @property
    def is_reviewable(self):
        return self.status in REVIEWABLE_PAYMENT_STATUSES
