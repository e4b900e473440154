from datetime import date, timedelta

from django.db import IntegrityError, transaction
from django.test import TestCase

from src.banners import lifecycle
from src.banners.exceptions import (
    InvalidPaymentState, PaymentNotAllowed, PaymentProofRequired, SlotUnavailable,
)
from src.banners.factories import (
    BannerBookingFactory, BannerPaymentFactory, StaffFactory, UserFactory, ZoneFactory,
)
from src.banners.models import BannerPayment, BookingStatus, PaymentStatus


class CreatePaymentTests(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.zone = ZoneFactory()
        cls.member = UserFactory()

    def setUp(self):
        self.booking = BannerBookingFactory(zone=self.zone, requested_by=self.member, duration_days=30)

    def test_opens_pending_payment_for_booking_price(self):
        payment, created = lifecycle.create_payment(self.booking.id, self.member, "paypal")
        self.assertTrue(created)
        self.assertEqual(payment.status, PaymentStatus.PENDING)
        self.assertEqual(payment.amount_usd, self.booking.price_usd)
        self.assertEqual(payment.payer, self.member)
        self.assertTrue(payment.reference_code.startswith("BN-"))

    def test_second_call_returns_open_payment(self):
        first, _ = lifecycle.create_payment(self.booking.id, self.member, "paypal")
        again, created = lifecycle.create_payment(self.booking.id, self.member, "crypto")
        self.assertFalse(created)
        self.assertEqual(again.pk, first.pk)
        self.assertEqual(BannerPayment.objects.filter(booking=self.booking).count(), 1)

    def test_new_payment_after_rejection(self):
        rejected = BannerPaymentFactory(booking=self.booking, status=PaymentStatus.REJECTED)
        payment, created = lifecycle.create_payment(self.booking.id, self.member, "bank_transfer")
        self.assertTrue(created)
        self.assertNotEqual(payment.pk, rejected.pk)

    def test_only_requester_can_pay(self):
        with self.assertRaises(PaymentNotAllowed):
            lifecycle.create_payment(self.booking.id, UserFactory(), "paypal")
        with self.assertRaises(PaymentNotAllowed):
            lifecycle.create_payment(self.booking.id, StaffFactory(), "paypal")

    def test_only_pending_booking_can_be_paid(self):
        lifecycle.cancel_booking(self.booking.id, self.member)
        with self.assertRaises(InvalidPaymentState):
            lifecycle.create_payment(self.booking.id, self.member, "paypal")
        self.assertFalse(BannerPayment.objects.exists())

    def test_one_open_payment_per_booking_in_db(self):
        BannerPaymentFactory(booking=self.booking)
        with self.assertRaises(IntegrityError), transaction.atomic():
            BannerPaymentFactory(booking=self.booking, status=PaymentStatus.SUBMITTED)


class PaymentProofTests(TestCase):
    def setUp(self):
        self.payment = BannerPaymentFactory()
        self.payer = self.payment.payer

    def test_submit_proof(self):
        lifecycle.submit_payment_proof(self.payment.id, self.payer, proof_url="https://r.example.com/1.png")
        self.payment.refresh_from_db()
        self.assertEqual(self.payment.status, PaymentStatus.SUBMITTED)
        self.assertIsNotNone(self.payment.submitted_at)

    def test_proof_needs_url_or_note(self):
        with self.assertRaises(PaymentProofRequired):
            lifecycle.submit_payment_proof(self.payment.id, self.payer, proof_url=None, proof_notes="   ")

    def test_only_payer_submits(self):
        with self.assertRaises(PaymentNotAllowed):
            lifecycle.submit_payment_proof(self.payment.id, UserFactory(), proof_notes="tx 0xabc")

    def test_proof_only_once(self):
        lifecycle.submit_payment_proof(self.payment.id, self.payer, proof_notes="tx 0xabc")
        with self.assertRaises(InvalidPaymentState):
            lifecycle.submit_payment_proof(self.payment.id, self.payer, proof_notes="tx 0xdef")


class PaymentReviewTests(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.staff = StaffFactory()
        cls.zone = ZoneFactory()
        cls.start = date(2030, 6, 1)

    def _payment(self, start=None, **kwargs):
        booking = BannerBookingFactory(zone=self.zone, start_date=start or self.start)
        return BannerPaymentFactory(booking=booking, submitted=True, **kwargs)

    def test_confirm_approves_booking(self):
        payment = self._payment()
        lifecycle.confirm_payment(payment.id, self.staff, admin_notes="seen on statement")

        payment.refresh_from_db()
        self.assertEqual(payment.status, PaymentStatus.CONFIRMED)
        self.assertTrue(payment.invoice_number.startswith("INV-"))
        self.assertEqual(payment.reviewed_by, self.staff)
        self.assertEqual(payment.admin_notes, "seen on statement")

        payment.booking.refresh_from_db()
        self.assertEqual(payment.booking.status, BookingStatus.APPROVED)
        self.assertEqual(payment.booking.reviewed_by, self.staff)

    def test_confirm_twice_keeps_invoice(self):
        payment = self._payment()
        invoice = lifecycle.confirm_payment(payment.id, self.staff).invoice_number
        again = lifecycle.confirm_payment(payment.id, self.staff)
        self.assertEqual(again.invoice_number, invoice)

    def test_confirm_conflicting_booking_rolls_back(self):
        taken = BannerBookingFactory(zone=self.zone, start_date=self.start)
        lifecycle.approve_booking(taken.id, self.staff)
        payment = self._payment(start=self.start + timedelta(days=2))

        with self.assertRaises(SlotUnavailable):
            lifecycle.confirm_payment(payment.id, self.staff)

        payment.refresh_from_db()
        payment.booking.refresh_from_db()
        self.assertEqual(payment.status, PaymentStatus.SUBMITTED)
        self.assertIsNone(payment.invoice_number)
        self.assertEqual(payment.booking.status, BookingStatus.PENDING)

    def test_confirm_for_cancelled_booking_is_refused(self):
        payment = self._payment()
        lifecycle.cancel_booking(payment.booking_id)
        with self.assertRaises(InvalidPaymentState):
            lifecycle.confirm_payment(payment.id, self.staff)

    def test_reject_keeps_booking_pending(self):
        payment = self._payment()
        lifecycle.reject_payment(payment.id, self.staff, "amount does not match")
        lifecycle.reject_payment(payment.id, self.staff, "again")

        payment.refresh_from_db()
        self.assertEqual(payment.status, PaymentStatus.REJECTED)
        self.assertEqual(payment.rejection_reason, "amount does not match")
        payment.booking.refresh_from_db()
        self.assertEqual(payment.booking.status, BookingStatus.PENDING)

    def test_confirmed_payment_cannot_be_rejected(self):
        payment = self._payment()
        lifecycle.confirm_payment(payment.id, self.staff)
        with self.assertRaises(InvalidPaymentState):
            lifecycle.reject_payment(payment.id, self.staff, "too late")
