from datetime import timedelta

from django.urls import reverse
from rest_framework.test import APITestCase

from src.banners import pricing
from src.banners.factories import (
    BannerBookingFactory, BannerFallbackFactory, CountryFactory, ZoneFactory,
)
from src.banners.models import BannerEvent, BookingStatus


class PricingAndCatalogApiTests(APITestCase):
    def test_pricing_for_zone_type(self):
        res = self.client.get(reverse("banners:pricing"), {"zone_type": "city"})
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["prices"][2], {"duration": 30, "price": 15})
        self.assertEqual(res.data["min_start_date"], pricing.get_min_start_date())

    def test_pricing_both_tables(self):
        res = self.client.get(reverse("banners:pricing"))
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["home_country"][2], {"duration": 30, "price": 30})
        self.assertEqual(res.data["durations"], [7, 15, 30, 90, 180])

    def test_pricing_unknown_zone_type(self):
        res = self.client.get(reverse("banners:pricing"), {"zone_type": "planet"})
        self.assertEqual(res.status_code, 400)

    def test_formats(self):
        res = self.client.get(reverse("banners:formats"))
        self.assertEqual(res.status_code, 200)
        self.assertEqual({f["format"] for f in res.data}, {"728x90", "300x250"})


class ZoneApiTests(APITestCase):
    @classmethod
    def setUpTestData(cls):
        cls.country = CountryFactory()
        cls.home = ZoneFactory(country=cls.country)
        cls.city = ZoneFactory(city=True, country=cls.country)
        cls.elsewhere = ZoneFactory()

    def test_list_by_country(self):
        res = self.client.get(reverse("banners:zones"), {"country": self.country.id})
        self.assertEqual(res.status_code, 200)
        self.assertEqual({z["id"] for z in res.data}, {self.home.id, self.city.id})

    def test_resolve_city(self):
        res = self.client.get(reverse("banners:zone-resolve"), {
            "zone_type": "city", "country": self.country.id, "region": self.city.region_id,
        })
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["id"], self.city.id)
        self.assertEqual(res.data["region_name"], self.city.region.name)

    def test_resolve_missing(self):
        res = self.client.get(reverse("banners:zone-resolve"), {"zone_type": "city", "country": self.country.id})
        self.assertEqual(res.status_code, 404)
        self.assertEqual(res.data["error"], "ZONE_NOT_FOUND")

    def test_resolve_bad_params(self):
        res = self.client.get(reverse("banners:zone-resolve"), {"zone_type": "planet"})
        self.assertEqual(res.status_code, 400)


class OccupancyApiTests(APITestCase):
    @classmethod
    def setUpTestData(cls):
        cls.zone = ZoneFactory()

    def test_empty_slot(self):
        res = self.client.get(reverse("banners:occupancy"), {"zone": self.zone.id, "position": "header"})
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["occupied"], [])
        min_start = pricing.get_min_start_date().isoformat()
        self.assertEqual(res.data["next_available_date"], min_start)
        self.assertEqual(res.data["min_start_date"], min_start)

    def test_booked_slot(self):
        start = pricing.get_min_start_date() + timedelta(days=5)
        booking = BannerBookingFactory(zone=self.zone, start_date=start, status=BookingStatus.APPROVED)
        BannerBookingFactory(zone=self.zone, start_date=start + timedelta(days=20))

        res = self.client.get(reverse("banners:occupancy"), {"zone": self.zone.id, "position": "header"})
        self.assertEqual(len(res.data["occupied"]), 2)
        self.assertEqual(res.data["occupied"][0]["booking_id"], booking.id)
        self.assertEqual(res.data["occupied"][0]["username"], booking.requested_by.username)
        self.assertEqual(res.data["next_available_date"], (booking.end_date + timedelta(days=1)).isoformat())

    def test_unknown_zone(self):
        res = self.client.get(reverse("banners:occupancy"), {"zone": 999999, "position": "header"})
        self.assertEqual(res.status_code, 404)
        self.assertEqual(res.data["error"], "ZONE_NOT_FOUND")

    def test_bad_position(self):
        res = self.client.get(reverse("banners:occupancy"), {"zone": self.zone.id, "position": "popup"})
        self.assertEqual(res.status_code, 400)
        self.assertIn("position", res.data)

    def test_availability(self):
        start = pricing.get_min_start_date()
        BannerBookingFactory(zone=self.zone, start_date=start, status=BookingStatus.APPROVED)
        url = reverse("banners:availability")

        res = self.client.get(url, {"zone": self.zone.id, "position": "header",
                                    "start_date": start.isoformat(), "duration": 7})
        self.assertEqual(res.status_code, 200)
        self.assertFalse(res.data["available"])
        self.assertEqual(res.data["price_usd"], 10)

        later = start + timedelta(days=7)
        res = self.client.get(url, {"zone": self.zone.id, "position": "header",
                                    "start_date": later.isoformat(), "duration": 7})
        self.assertTrue(res.data["available"])
        self.assertEqual(res.data["end_date"], (later + timedelta(days=6)).isoformat())

    def test_availability_far_future_start(self):
        res = self.client.get(reverse("banners:availability"), {
            "zone": self.zone.id, "position": "header", "start_date": "9999-12-30", "duration": 7,
        })
        self.assertEqual(res.status_code, 400)
        self.assertIn("start_date", res.data)

    def test_availability_bad_duration(self):
        res = self.client.get(reverse("banners:availability"), {
            "zone": self.zone.id, "position": "header",
            "start_date": pricing.get_min_start_date().isoformat(), "duration": 8,
        })
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["error"], "INVALID_DURATION")


class SlotAndEventApiTests(APITestCase):
    @classmethod
    def setUpTestData(cls):
        cls.zone = ZoneFactory()

    def test_slot_serves_running_booking(self):
        booking = BannerBookingFactory(zone=self.zone, running=True)
        res = self.client.get(reverse("banners:slot"), {"zone": self.zone.id, "position": "header"})
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["kind"], "booking")
        self.assertEqual(res.data["booking_id"], booking.id)
        self.assertEqual((res.data["width"], res.data["height"]), (728, 90))

    def test_slot_falls_back(self):
        fallback = BannerFallbackFactory(position="sidebar_top")
        res = self.client.get(reverse("banners:slot"), {"zone": self.zone.id, "position": "sidebar_top"})
        self.assertEqual(res.data["kind"], "fallback")
        self.assertEqual(res.data["fallback_id"], fallback.id)
        self.assertEqual(res.data["format"], "300x250")

    def test_empty_slot(self):
        res = self.client.get(reverse("banners:slot"), {"zone": self.zone.id, "position": "footer"})
        self.assertEqual(res.data["kind"], "empty")
        self.assertIsNone(res.data["image_url"])

    def test_record_click(self):
        booking = BannerBookingFactory(zone=self.zone, running=True)
        res = self.client.post(
            reverse("banners:events"), {"event_type": "click", "booking": booking.id},
            format="json", REMOTE_ADDR="198.51.100.4",
        )
        self.assertEqual(res.status_code, 201)
        event = BannerEvent.objects.get(pk=res.data["id"])
        self.assertEqual(event.zone, self.zone)
        self.assertTrue(event.anon_ip_hash)
        self.assertNotEqual(event.anon_ip_hash, "198.51.100.4")

    def test_event_needs_target(self):
        res = self.client.post(reverse("banners:events"), {"event_type": "impression"}, format="json")
        self.assertEqual(res.status_code, 400)
