from datetime import date, timedelta

from django.test import TestCase, override_settings

from src.banners.factories import BannerBookingFactory, BannerFallbackFactory, ZoneFactory
from src.banners.models import BannerEvent, BookingStatus
from src.banners.serving import get_active_banner, get_fallback, hash_ip, track_event


class ActiveBannerTests(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.zone = ZoneFactory()
        cls.today = date(2030, 7, 10)

    def test_approved_booking_covering_today_is_served(self):
        booking = BannerBookingFactory(zone=self.zone, start_date=self.today - timedelta(days=2),
                                       status=BookingStatus.APPROVED)
        self.assertEqual(get_active_banner(self.zone.id, "header", today=self.today), booking)

    def test_active_booking_is_served_until_its_last_day(self):
        booking = BannerBookingFactory(zone=self.zone, start_date=self.today - timedelta(days=6),
                                       status=BookingStatus.ACTIVE)
        self.assertEqual(get_active_banner(self.zone.id, "header", today=self.today), booking)
        self.assertIsNone(get_active_banner(self.zone.id, "header", today=self.today + timedelta(days=1)))

    def test_pending_or_future_bookings_are_not_served(self):
        BannerBookingFactory(zone=self.zone, start_date=self.today)
        BannerBookingFactory(zone=self.zone, start_date=self.today + timedelta(days=1),
                             status=BookingStatus.APPROVED)
        self.assertIsNone(get_active_banner(self.zone.id, "header", today=self.today))


class FallbackTests(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.zone = ZoneFactory()

    def test_zone_fallback_beats_global(self):
        BannerFallbackFactory(priority=100)
        local = BannerFallbackFactory(zone=self.zone, priority=1)
        self.assertEqual(get_fallback(self.zone.id, "header", "728x90"), local)

    def test_global_by_priority(self):
        BannerFallbackFactory(priority=1)
        best = BannerFallbackFactory(priority=5)
        BannerFallbackFactory(priority=10, is_active=False)
        self.assertEqual(get_fallback(self.zone.id, "header", "728x90"), best)

    def test_other_zone_fallback_is_not_used(self):
        BannerFallbackFactory(zone=ZoneFactory())
        self.assertIsNone(get_fallback(self.zone.id, "header", "728x90"))

    def test_format_must_match(self):
        BannerFallbackFactory(position="sidebar_top")
        self.assertIsNone(get_fallback(self.zone.id, "sidebar_top", "728x90"))
        self.assertIsNotNone(get_fallback(self.zone.id, "sidebar_top", "300x250"))


@override_settings(BANNER_EVENT_IP_SALT="pepper")
class TrackEventTests(TestCase):
    def test_event_defaults_from_booking_and_hashes_ip(self):
        booking = BannerBookingFactory(position="footer")
        event = track_event(BannerEvent.EventType.CLICK, booking=booking, ip="203.0.113.7", user_agent="UA")

        self.assertEqual(event.zone, booking.zone)
        self.assertEqual(event.position, "footer")
        self.assertEqual(event.anon_ip_hash, hash_ip("203.0.113.7"))
        self.assertNotIn("203.0.113.7", event.anon_ip_hash)
        self.assertEqual(len(event.anon_ip_hash), 32)

    def test_hash_depends_on_salt(self):
        first = hash_ip("203.0.113.7")
        with self.settings(BANNER_EVENT_IP_SALT="other"):
            self.assertNotEqual(hash_ip("203.0.113.7"), first)
        self.assertEqual(hash_ip(""), "")
