"""
Banner booking lifecycle.

    pending -> approved -> active -> expired
    pending -> rejected
    pending | approved | active -> cancelled

Every write that depends on slot availability locks the zone row first and
re-checks overlaps inside the same transaction. Two concurrent approvals of
overlapping bookings are serialised this way: the second one sees the first
and fails with SlotUnavailable.

Payments: pending -> submitted -> confirmed | rejected. Confirming a payment
approves its pending booking in the same transaction.
"""
import logging
import uuid

from django.db import transaction
from django.db.models import Count, Sum
from django.utils import timezone

from . import pricing
from .availability import conflicting_bookings
from .catalog import is_position_allowed
from .exceptions import (
    SlotUnavailable, InvalidFormat, InvalidDuration, InvalidDateRange,
    LeadTimeViolation, ZoneNotFound, InvalidTransition, RequesterSuspended,
    PaymentNotAllowed, InvalidPaymentState, PaymentProofRequired,
)
from .models import (
    BannerBooking, BookingStatus, BLOCKING_STATUSES, Zone,
    BannerPayment, PaymentStatus, OPEN_PAYMENT_STATUSES,
)
from .occupancy import get_occupied_dates, next_available_date
from .zones import resolve_zone

logger = logging.getLogger(__name__)

REVENUE_STATUSES = (
    BookingStatus.APPROVED.value,
    BookingStatus.ACTIVE.value,
    BookingStatus.EXPIRED.value,
)


# -------------------------
# Locking helpers
# -------------------------
def _lock_zone(zone_id):
    try:
        return Zone.objects.select_for_update().get(pk=zone_id)
    except Zone.DoesNotExist:
        raise ZoneNotFound()


def _lock_booking(booking_id):
    """Lock the booking's zone, then the booking itself (always in that order)."""
    zone_id = BannerBooking.objects.values_list('zone_id', flat=True).get(pk=booking_id)
    _lock_zone(zone_id)
    return (
        BannerBooking.objects
        .select_for_update()
        .select_related('zone')
        .get(pk=booking_id)
    )


def _ensure_available(zone_id, position, start_date, end_date, exclude_booking_id=None):
    conflict = conflicting_bookings(
        zone_id, position, start_date, end_date, exclude_booking_id,
    ).order_by('start_date').first()
    if conflict is not None:
        occupied = get_occupied_dates(zone_id, position, from_date=start_date, include_pending=False)
        logger.warning(
            "slot conflict zone=%s position=%s %s..%s with booking %s",
            zone_id, position, start_date, end_date, conflict.pk,
        )
        raise SlotUnavailable(
            f"Slot already reserved from {conflict.start_date.isoformat()} "
            f"to {conflict.end_date.isoformat()}.",
            occupied=[
                {
                    'start_date': item['start_date'].isoformat(),
                    'end_date': item['end_date'].isoformat(),
                    'status': item['status'],
                }
                for item in occupied
            ],
            next_available_date=next_available_date(occupied).isoformat(),
        )


# -------------------------
# Creation
# -------------------------
def create_booking(requester, zone, position, banner_format, start_date, duration,
                   image_url, click_url=None, today=None):
    """
    Create a pending booking. End date and price are always derived here;
    a client-supplied price is never used.
    """
    min_date = pricing.get_min_start_date(today)
    if start_date < min_date:
        raise LeadTimeViolation(
            f"Start date must be on or after {min_date.isoformat()}.",
            min_start_date=min_date.isoformat(),
        )
    if not is_position_allowed(banner_format, position):
        raise InvalidFormat(f"Position '{position}' does not accept format '{banner_format}'.")
    if not pricing.is_valid_duration(duration):
        raise InvalidDuration(f"Duration must be one of {list(pricing.DURATION_OPTIONS)} days.")
    if getattr(requester, 'is_suspended', False):
        raise RequesterSuspended()

    end_date = pricing.calculate_end_date(start_date, duration)
    price = pricing.get_price(zone.zone_type, duration)

    with transaction.atomic():
        locked_zone = _lock_zone(zone.pk)
        if not locked_zone.is_active:
            raise ZoneNotFound()
        _ensure_available(locked_zone.pk, position, start_date, end_date)

        booking = BannerBooking.objects.create(
            zone=locked_zone,
            position=position,
            format=banner_format,
            image_url=image_url,
            click_url=click_url or None,
            start_date=start_date,
            end_date=end_date,
            duration_days=duration,
            price_usd=price,
            status=BookingStatus.PENDING,
            requested_by=requester,
        )

    logger.info(
        "banner booking %s created zone=%s position=%s %s..%s price=%s",
        booking.pk, locked_zone.pk, position, start_date, end_date, price,
    )
    return booking


def create_booking_for_context(requester, *, zone_type, country_id, region_id=None, **kwargs):
    """Resolve the zone for a page context, then create the booking there."""
    zone = resolve_zone(zone_type, country_id, region_id)
    if zone is None:
        raise ZoneNotFound()
    return create_booking(requester, zone, **kwargs)


# -------------------------
# Moderation
# -------------------------
def _stamp_review(booking, reviewer):
    booking.reviewed_by = reviewer
    booking.reviewed_at = timezone.now()


def approve_booking(booking_id, reviewer):
    """
    pending -> approved after re-checking the slot.
    Approving an already approved/active booking changes nothing.
    """
    with transaction.atomic():
        booking = _lock_booking(booking_id)
        if booking.status in BLOCKING_STATUSES:
            return booking

        booking.transition_to(BookingStatus.APPROVED)
        _ensure_available(
            booking.zone_id, booking.position, booking.start_date, booking.end_date,
            exclude_booking_id=booking.pk,
        )
        _stamp_review(booking, reviewer)
        booking.save(update_fields=['status', 'reviewed_by', 'reviewed_at', 'updated_at'])

    logger.info("banner booking %s approved by %s", booking.pk, getattr(reviewer, 'pk', None))
    return booking


def reject_booking(booking_id, reviewer):
    """pending -> rejected. Rejecting a rejected booking is a no-op."""
    with transaction.atomic():
        booking = _lock_booking(booking_id)
        if booking.status == BookingStatus.REJECTED:
            return booking

        booking.transition_to(BookingStatus.REJECTED)
        _stamp_review(booking, reviewer)
        booking.save(update_fields=['status', 'reviewed_by', 'reviewed_at', 'updated_at'])

    logger.info("banner booking %s rejected by %s", booking.pk, getattr(reviewer, 'pk', None))
    return booking


def cancel_booking(booking_id, actor=None):
    """Any non-terminal booking -> cancelled. Cancelling twice is a no-op."""
    with transaction.atomic():
        booking = _lock_booking(booking_id)
        if booking.status == BookingStatus.CANCELLED:
            return booking

        booking.transition_to(BookingStatus.CANCELLED)
        booking.save(update_fields=['status', 'updated_at'])

    logger.info("banner booking %s cancelled by %s", booking.pk, getattr(actor, 'pk', None))
    return booking


def edit_booking(booking_id, start_date=None, end_date=None, notes=None):
    """
    Admin edit of dates and/or notes. New dates must still be free (own range
    excluded). A new length must be a sold duration; duration and price follow it.
    """
    with transaction.atomic():
        booking = _lock_booking(booking_id)
        new_start = start_date or booking.start_date
        new_end = end_date or booking.end_date
        if new_end < new_start:
            raise InvalidDateRange()

        fields = ['updated_at']
        if (new_start, new_end) != (booking.start_date, booking.end_date):
            if booking.is_terminal:
                raise InvalidTransition(f"Cannot reschedule a {booking.status} booking.")
            length = (new_end - new_start).days + 1
            if not pricing.is_valid_duration(length):
                raise InvalidDuration(
                    f"New range covers {length} days; it must be one of {list(pricing.DURATION_OPTIONS)}."
                )
            _ensure_available(
                booking.zone_id, booking.position, new_start, new_end,
                exclude_booking_id=booking.pk,
            )
            booking.start_date, booking.end_date = new_start, new_end
            fields += ['start_date', 'end_date']
            if length != booking.duration_days:
                booking.duration_days = length
                booking.price_usd = pricing.get_price(booking.zone.zone_type, length)
                fields += ['duration_days', 'price_usd']

        if notes is not None:
            booking.admin_notes = notes
            fields.append('admin_notes')

        booking.save(update_fields=fields)

    logger.info("banner booking %s edited (%s)", booking.pk, ", ".join(fields[1:]) or "no changes")
    return booking


def change_status(booking_id, new_status, reviewer):
    """Admin status select. Entering approved/active re-checks the slot."""
    new_status = str(new_status)
    with transaction.atomic():
        booking = _lock_booking(booking_id)
        if booking.status == new_status:
            return booking

        booking.transition_to(new_status)
        fields = ['status', 'updated_at']
        if new_status in BLOCKING_STATUSES:
            _ensure_available(
                booking.zone_id, booking.position, booking.start_date, booking.end_date,
                exclude_booking_id=booking.pk,
            )
        if new_status in (BookingStatus.APPROVED, BookingStatus.REJECTED):
            _stamp_review(booking, reviewer)
            fields += ['reviewed_by', 'reviewed_at']
        booking.save(update_fields=fields)

    logger.info("banner booking %s status -> %s", booking.pk, new_status)
    return booking


# -------------------------
# Scheduled transitions
# -------------------------
def run_scheduled_transitions(today=None):
    """
    approved bookings whose start date has arrived become active;
    active bookings whose end date has passed become expired.
    Both steps run in order, so a long-missed approved booking ends up expired.
    """
    today = today or timezone.localdate()
    now = timezone.now()
    with transaction.atomic():
        activated = (
            BannerBooking.objects
            .filter(status=BookingStatus.APPROVED, start_date__lte=today)
            .update(status=BookingStatus.ACTIVE, updated_at=now)
        )
        expired = (
            BannerBooking.objects
            .filter(status=BookingStatus.ACTIVE, end_date__lt=today)
            .update(status=BookingStatus.EXPIRED, updated_at=now)
        )

    if activated or expired:
        logger.info("banner schedule %s: activated=%d expired=%d", today, activated, expired)
    return {'activated': activated, 'expired': expired}


def booking_stats(queryset=None):
    qs = queryset if queryset is not None else BannerBooking.objects.all()
    counts = {row['status']: row['n'] for row in qs.values('status').annotate(n=Count('id'))}
    revenue = qs.filter(status__in=REVENUE_STATUSES).aggregate(total=Sum('price_usd'))['total'] or 0
    return {
        'total_bookings': sum(counts.values()),
        **{f'{status}_bookings': counts.get(status, 0) for status in BookingStatus.values},
        'total_revenue': float(revenue),
    }


# -------------------------
# Payments
# -------------------------
def _reference_code():
    return f"BN-{uuid.uuid4().hex[:10].upper()}"


def _lock_payment(payment_id):
    """Same lock order as every booking write: zone, booking, then the payment."""
    booking_id = BannerPayment.objects.values_list('booking_id', flat=True).get(pk=payment_id)
    booking = _lock_booking(booking_id)
    payment = BannerPayment.objects.select_for_update().get(pk=payment_id)
    return booking, payment


def create_payment(booking_id, payer, payment_method):
    """
    Open a payment for a pending booking. Requester only.
    Returns (payment, created); an existing open payment is returned as is.
    """
    with transaction.atomic():
        booking = _lock_booking(booking_id)
        if booking.requested_by_id != getattr(payer, 'pk', None):
            raise PaymentNotAllowed()

        existing = booking.payments.filter(status__in=OPEN_PAYMENT_STATUSES).first()
        if existing is not None:
            return existing, False

        if booking.status != BookingStatus.PENDING:
            raise InvalidPaymentState(f"Only pending bookings can be paid; this one is {booking.status}.")

        payment = BannerPayment.objects.create(
            booking=booking,
            payer=payer,
            amount_usd=booking.price_usd,
            payment_method=str(payment_method),
            status=PaymentStatus.PENDING,
            reference_code=_reference_code(),
        )

    logger.info(
        "banner payment %s (%s) opened for booking %s amount=%s",
        payment.pk, payment.reference_code, booking.pk, payment.amount_usd,
    )
    return payment, True


def submit_payment_proof(payment_id, payer, proof_url=None, proof_notes=''):
    """pending -> submitted with a receipt URL and/or a note. Payer only."""
    proof_notes = (proof_notes or '').strip()
    if not proof_url and not proof_notes:
        raise PaymentProofRequired()

    with transaction.atomic():
        _, payment = _lock_payment(payment_id)
        if payment.payer_id != getattr(payer, 'pk', None):
            raise PaymentNotAllowed("Only the payer can submit a proof.")
        if payment.status != PaymentStatus.PENDING:
            raise InvalidPaymentState(f"Proof can only be added to a pending payment; this one is {payment.status}.")

        payment.status = PaymentStatus.SUBMITTED
        payment.proof_url = proof_url or None
        payment.proof_notes = proof_notes
        payment.submitted_at = timezone.now()
        payment.save(update_fields=['status', 'proof_url', 'proof_notes', 'submitted_at', 'updated_at'])

    logger.info("banner payment %s proof submitted", payment.pk)
    return payment


def confirm_payment(payment_id, reviewer, admin_notes=''):
    """
    pending/submitted -> confirmed; a pending booking is approved in the same
    transaction (slot re-checked). Confirming twice changes nothing.
    """
    with transaction.atomic():
        booking, payment = _lock_payment(payment_id)
        if payment.status == PaymentStatus.CONFIRMED:
            return payment
        if not payment.is_reviewable:
            raise InvalidPaymentState(f"Cannot confirm a {payment.status} payment.")

        if booking.status == BookingStatus.PENDING:
            booking.transition_to(BookingStatus.APPROVED)
            _ensure_available(
                booking.zone_id, booking.position, booking.start_date, booking.end_date,
                exclude_booking_id=booking.pk,
            )
            _stamp_review(booking, reviewer)
            booking.save(update_fields=['status', 'reviewed_by', 'reviewed_at', 'updated_at'])
        elif booking.status not in BLOCKING_STATUSES:
            raise InvalidPaymentState(f"Booking is {booking.status}; the payment cannot be confirmed.")

        now = timezone.now()
        payment.status = PaymentStatus.CONFIRMED
        payment.invoice_number = f"INV-{now.year}-{payment.pk:06d}"
        payment.reviewed_by = reviewer
        payment.reviewed_at = now
        if admin_notes:
            payment.admin_notes = admin_notes
        payment.save(update_fields=[
            'status', 'invoice_number', 'reviewed_by', 'reviewed_at', 'admin_notes', 'updated_at',
        ])

    logger.info(
        "banner payment %s confirmed by %s, invoice %s",
        payment.pk, getattr(reviewer, 'pk', None), payment.invoice_number,
    )
    return payment


def reject_payment(payment_id, reviewer, reason):
    """pending/submitted -> rejected. The booking stays pending so it can be paid again."""
    reason = (reason or '').strip()
    with transaction.atomic():
        _, payment = _lock_payment(payment_id)
        if payment.status == PaymentStatus.REJECTED:
            return payment
        if not payment.is_reviewable:
            raise InvalidPaymentState(f"Cannot reject a {payment.status} payment.")

        payment.status = PaymentStatus.REJECTED
        payment.rejection_reason = reason
        payment.reviewed_by = reviewer
        payment.reviewed_at = timezone.now()
        payment.save(update_fields=['status', 'rejection_reason', 'reviewed_by', 'reviewed_at', 'updated_at'])

    logger.info("banner payment %s rejected by %s", payment.pk, getattr(reviewer, 'pk', None))
    return payment
