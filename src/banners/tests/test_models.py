from django.db import IntegrityError, transaction
from django.test import TestCase

from src.banners import pricing
from src.banners.exceptions import InvalidTransition
from src.banners.factories import BannerBookingFactory, CountryFactory, RegionFactory, ZoneFactory
from src.banners.models import TRANSITIONS, BookingStatus, Zone, can_transition


class TransitionTableTests(TestCase):
    def test_every_status_has_an_entry(self):
        self.assertEqual(set(TRANSITIONS), set(BookingStatus.values))

    def test_terminal_statuses_have_no_exit(self):
        for status in ("expired", "rejected", "cancelled"):
            for target in BookingStatus.values:
                self.assertFalse(can_transition(status, target))

    def test_no_way_back_to_pending(self):
        for status in BookingStatus.values:
            self.assertFalse(can_transition(status, BookingStatus.PENDING))

    def test_transition_to(self):
        booking = BannerBookingFactory.build()
        booking.transition_to(BookingStatus.APPROVED)
        self.assertEqual(booking.status, "approved")
        with self.assertRaises(InvalidTransition):
            booking.transition_to(BookingStatus.REJECTED)


class ZoneConstraintTests(TestCase):
    def test_one_active_home_zone_per_country(self):
        country = CountryFactory()
        ZoneFactory(country=country)
        with self.assertRaises(IntegrityError), transaction.atomic():
            Zone.objects.create(name="dup", zone_type=pricing.HOME_COUNTRY, country=country)
        # inactive duplicates are fine
        ZoneFactory(country=country, is_active=False)

    def test_city_zone_needs_region(self):
        country = CountryFactory()
        with self.assertRaises(IntegrityError), transaction.atomic():
            Zone.objects.create(name="no region", zone_type=pricing.CITY, country=country)

    def test_home_zone_cannot_have_region(self):
        region = RegionFactory()
        with self.assertRaises(IntegrityError), transaction.atomic():
            Zone.objects.create(name="bad", zone_type=pricing.HOME_COUNTRY,
                                country=region.country, region=region)
