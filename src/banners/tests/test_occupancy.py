from datetime import date

from django.test import TestCase

from src.banners.factories import BannerBookingFactory, UserFactory, ZoneFactory
from src.banners.models import BookingStatus
from src.banners.occupancy import get_occupied_dates, month_calendar, next_available_date


class NextAvailableDateTests(TestCase):
    today = date(2025, 3, 1)

    def _item(self, start, end, status=BookingStatus.APPROVED):
        return {"start_date": start, "end_date": end, "status": status}

    def test_no_bookings_means_lead_time(self):
        self.assertEqual(next_available_date([], today=self.today), date(2025, 3, 4))

    def test_day_after_latest_blocking_range(self):
        occupied = [
            self._item(date(2025, 3, 10), date(2025, 3, 16)),
            self._item(date(2025, 3, 20), date(2025, 4, 3), BookingStatus.ACTIVE),
        ]
        self.assertEqual(next_available_date(occupied, today=self.today), date(2025, 4, 4))

    def test_pending_ranges_are_ignored(self):
        occupied = [self._item(date(2025, 3, 10), date(2025, 3, 16), BookingStatus.PENDING)]
        self.assertEqual(next_available_date(occupied, today=self.today), date(2025, 3, 4))

    def test_never_before_lead_time(self):
        # running booking that ends tomorrow
        occupied = [self._item(date(2025, 2, 26), date(2025, 3, 2), BookingStatus.ACTIVE)]
        self.assertEqual(next_available_date(occupied, today=self.today), date(2025, 3, 4))

    def test_ranges_in_the_past_are_ignored(self):
        occupied = [self._item(date(2025, 2, 1), date(2025, 2, 7), BookingStatus.ACTIVE)]
        self.assertEqual(next_available_date(occupied, today=self.today), date(2025, 3, 4))


class OccupiedDatesTests(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.zone = ZoneFactory()
        cls.member = UserFactory(email="ana@example.com", username="ana", avatar_url="https://cdn.example.com/a.png")
        cls.b1 = BannerBookingFactory(
            zone=cls.zone, position="header", start_date=date(2030, 3, 10),
            status=BookingStatus.APPROVED, requested_by=cls.member,
        )
        cls.b2 = BannerBookingFactory(
            zone=cls.zone, position="header", start_date=date(2030, 3, 20),
            status=BookingStatus.PENDING,
        )
        BannerBookingFactory(
            zone=cls.zone, position="header", start_date=date(2030, 4, 10), status=BookingStatus.REJECTED,
        )

    def test_ordered_with_requester_info(self):
        occupied = get_occupied_dates(self.zone.id, "header", from_date=date(2030, 3, 1))
        self.assertEqual([o["booking_id"] for o in occupied], [self.b1.id, self.b2.id])
        self.assertEqual(occupied[0]["username"], "ana")
        self.assertEqual(occupied[0]["avatar_url"], "https://cdn.example.com/a.png")
        self.assertEqual(occupied[0]["end_date"], date(2030, 3, 16))

    def test_without_pending(self):
        occupied = get_occupied_dates(self.zone.id, "header", from_date=date(2030, 3, 1), include_pending=False)
        self.assertEqual([o["booking_id"] for o in occupied], [self.b1.id])

    def test_window(self):
        occupied = get_occupied_dates(
            self.zone.id, "header", from_date=date(2030, 3, 17), to_date=date(2030, 3, 19),
        )
        self.assertEqual(occupied, [])

    def test_month_calendar(self):
        days = month_calendar(self.zone.id, "header", 2030, 3)
        by_day = {d["date"].day: d["status"] for d in days}
        self.assertEqual(len(days), 31)
        self.assertEqual(by_day[9], "available")
        self.assertEqual(by_day[10], "booked")
        self.assertEqual(by_day[16], "booked")
        self.assertEqual(by_day[17], "available")
        self.assertEqual(by_day[20], "pending")
        self.assertEqual(by_day[26], "pending")
        self.assertEqual(by_day[27], "available")
