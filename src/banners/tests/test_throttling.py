from django.conf import settings
from django.test import override_settings
from django.urls import reverse
from rest_framework.test import APITestCase

from src.banners.factories import UserFactory, ZoneFactory

# For tests we only *lower the rates* for the specific scopes we hit.
# We must MERGE into existing REST_FRAMEWORK so that throttle classes remain enabled.
TEST_RATES = {
    "banners_read": "2/min",
    "banners_mutation": "2/min",
    "auth_login": "2/min",
}

RF_MERGED = {
    **settings.REST_FRAMEWORK,
    "DEFAULT_THROTTLE_RATES": {
        **settings.REST_FRAMEWORK.get("DEFAULT_THROTTLE_RATES", {}),
        **TEST_RATES,
    },
}


@override_settings(REST_FRAMEWORK=RF_MERGED)
class BannersThrottleTests(APITestCase):

    def test_pricing_throttling(self):
        """Third anonymous GET to pricing should be throttled (429)."""
        url = reverse("banners:pricing")
        self.assertEqual(self.client.get(url).status_code, 200)
        self.assertEqual(self.client.get(url).status_code, 200)
        self.assertEqual(self.client.get(url).status_code, 429)

    def test_occupancy_throttling(self):
        zone = ZoneFactory()
        url = reverse("banners:occupancy")
        params = {"zone": zone.id, "position": "header"}
        self.assertEqual(self.client.get(url, params).status_code, 200)
        self.assertEqual(self.client.get(url, params).status_code, 200)
        self.assertEqual(self.client.get(url, params).status_code, 429)

    def test_booking_mutations_throttled_per_user(self):
        member = UserFactory()
        self.client.force_authenticate(member)
        url = reverse("banners:booking-list")
        # invalid payloads still count towards the rate
        self.assertEqual(self.client.post(url, {}, format="json").status_code, 400)
        self.assertEqual(self.client.post(url, {}, format="json").status_code, 400)
        self.assertEqual(self.client.post(url, {}, format="json").status_code, 429)
        # reads use their own bucket
        self.assertEqual(self.client.get(url).status_code, 200)

    def test_login_throttling(self):
        url = reverse("users:login")
        payload = {"email": "nobody@example.com", "password": "wrong"}
        self.assertEqual(self.client.post(url, payload, format="json").status_code, 401)
        self.assertEqual(self.client.post(url, payload, format="json").status_code, 401)
        self.assertEqual(self.client.post(url, payload, format="json").status_code, 429)
