import random
from datetime import timedelta
from decimal import Decimal

import factory
from django.contrib.auth import get_user_model
from django.utils import timezone
from factory import Faker, post_generation
from factory.django import DjangoModelFactory

from . import pricing
from .catalog import BANNER_FORMATS, get_format_for_position
from .models import (
    Country, Region, Zone, BannerBooking, BannerFallback, BannerPayment, BookingStatus, PaymentStatus,
)

COUNTRIES = {
    "argentina": ("Argentina", "🇦🇷", ["Buenos Aires", "Córdoba", "Rosario", "Mendoza"]),
    "spain": ("Spain", "🇪🇸", ["Madrid", "Barcelona", "Valencia", "Sevilla"]),
    "mexico": ("Mexico", "🇲🇽", ["Ciudad de México", "Guadalajara", "Monterrey"]),
    "colombia": ("Colombia", "🇨🇴", ["Bogotá", "Medellín", "Cali"]),
}

ALL_POSITIONS = tuple(p for spec in BANNER_FORMATS.values() for p in spec["positions"])

# ---------------------------------------------------------------------------

class UserFactory(DjangoModelFactory):
    """
    Forum member. Username defaults to the email local part in the manager.
    Password is hashed in @post_generation.
    """
    class Meta:
        model = get_user_model()
        django_get_or_create = ("email",)

    email = factory.Sequence(lambda n: f"member{n}@example.com")
    username = factory.Sequence(lambda n: f"member{n}")
    avatar_url = ""

    @post_generation
    def password(self, create, extracted, **kwargs):
        pwd = extracted or "Passw0rd!"
        self.set_password(pwd)
        if create:
            self.save()

class StaffFactory(UserFactory):
    """Moderator allowed to approve/reject bookings."""
    email = factory.Sequence(lambda n: f"staff{n}@example.com")
    username = factory.Sequence(lambda n: f"staff{n}")
    is_staff = True

# ---------------------------------------------------------------------------

class CountryFactory(DjangoModelFactory):
    class Meta:
        model = Country
        django_get_or_create = ("slug",)

    name = factory.Sequence(lambda n: f"Country {n}")
    slug = factory.Sequence(lambda n: f"country-{n}")
    flag_emoji = ""

class RegionFactory(DjangoModelFactory):
    class Meta:
        model = Region

    country = factory.SubFactory(CountryFactory)
    name = Faker("city")
    slug = factory.Sequence(lambda n: f"region-{n}")

class ZoneFactory(DjangoModelFactory):
    """Home/country zone by default; use trait `city` for a region zone."""
    class Meta:
        model = Zone

    name = factory.LazyAttribute(lambda o: f"{o.country.name} home")
    zone_type = pricing.HOME_COUNTRY
    country = factory.SubFactory(CountryFactory)
    region = None
    is_active = True

    class Params:
        city = factory.Trait(
            zone_type=pricing.CITY,
            region=factory.SubFactory(RegionFactory, country=factory.SelfAttribute("..country")),
            name=factory.LazyAttribute(lambda o: f"{o.region.name} forum"),
        )

# ---------------------------------------------------------------------------

class BannerBookingFactory(DjangoModelFactory):
    """
    Pending 7-day header booking starting after the lead time.
    End date and price follow the pricing table unless given explicitly.
    """
    class Meta:
        model = BannerBooking

    zone = factory.SubFactory(ZoneFactory)
    position = "header"
    format = factory.LazyAttribute(lambda o: get_format_for_position(o.position))
    image_url = Faker("image_url", width=728, height=90)
    click_url = Faker("url")

    start_date = factory.LazyFunction(
        lambda: pricing.get_min_start_date() + timedelta(days=random.randint(0, 30))
    )
    duration_days = 7
    end_date = factory.LazyAttribute(lambda o: pricing.calculate_end_date(o.start_date, o.duration_days))
    price_usd = factory.LazyAttribute(
        lambda o: Decimal(pricing.get_price(o.zone.zone_type, o.duration_days))
    )
    status = BookingStatus.PENDING
    requested_by = factory.SubFactory(UserFactory)

    class Params:
        approved = factory.Trait(status=BookingStatus.APPROVED)
        running = factory.Trait(
            status=BookingStatus.ACTIVE,
            start_date=factory.LazyFunction(lambda: timezone.localdate() - timedelta(days=2)),
        )

class BannerFallbackFactory(DjangoModelFactory):
    """Global fallback ad code (zone=None)."""
    class Meta:
        model = BannerFallback

    zone = None
    position = "header"
    format = factory.LazyAttribute(lambda o: get_format_for_position(o.position))
    code_html = factory.LazyAttribute(lambda o: f'<div class="ad-network" data-slot="{o.position}"></div>')
    label = factory.Sequence(lambda n: f"Network fallback {n}")
    is_active = True
    priority = 0

class BannerPaymentFactory(DjangoModelFactory):
    """Open bank-transfer payment by the booking's requester."""
    class Meta:
        model = BannerPayment

    booking = factory.SubFactory(BannerBookingFactory)
    payer = factory.SelfAttribute("booking.requested_by")
    amount_usd = factory.SelfAttribute("booking.price_usd")
    payment_method = "bank_transfer"
    status = PaymentStatus.PENDING
    reference_code = factory.Sequence(lambda n: f"BN-TEST{n:05d}")

    class Params:
        submitted = factory.Trait(
            status=PaymentStatus.SUBMITTED,
            proof_url="https://receipts.example.com/transfer.pdf",
            submitted_at=factory.LazyFunction(timezone.now),
        )
