import random

from django.core.management.base import BaseCommand
from django.db import transaction

from src.banners import pricing
from src.banners.factories import (
    COUNTRIES,
    ALL_POSITIONS,
    UserFactory,
    StaffFactory,
    CountryFactory,
    RegionFactory,
    ZoneFactory,
    BannerBookingFactory,
    BannerFallbackFactory,
)
from src.banners.models import Country, Zone, BannerBooking, BannerFallback


class Command(BaseCommand):
    """
    Seed the database with demo data:
    - A few countries, each with a home zone and one city zone per region
    - Members (password: Passw0rd!) and one staff moderator
    - Pending and approved bookings spread over the next weeks
    - One global fallback per position
    """

    help = "Seed the DB with demo zones, bookings and fallbacks."

    def add_arguments(self, parser):
        parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility.")
        parser.add_argument("--wipe", action="store_true", help="Delete zones, bookings and fallbacks before seeding.")
        parser.add_argument("--members", type=int, default=6, help="How many members to create.")
        parser.add_argument("--bookings", type=int, default=20, help="How many bookings to create.")

    @transaction.atomic
    def handle(self, *args, **opts):
        if opts["seed"] is not None:
            random.seed(opts["seed"])

        if opts["wipe"]:
            self.stdout.write(self.style.WARNING("Wiping banner zones/bookings/fallbacks..."))
            # Bookings protect their zone, delete them first
            BannerBooking.objects.all().delete()
            BannerFallback.objects.all().delete()
            Zone.objects.all().delete()
            Country.objects.all().delete()

        members = [UserFactory(password="Passw0rd!") for _ in range(opts["members"])]
        StaffFactory(password="Passw0rd!")

        zones = []
        for slug, (name, flag, cities) in COUNTRIES.items():
            country = CountryFactory(slug=slug, name=name, flag_emoji=flag)
            if not Zone.objects.filter(country=country, zone_type=pricing.HOME_COUNTRY, is_active=True).exists():
                zones.append(ZoneFactory(country=country, name=f"{name} home"))
            for city in cities:
                region = RegionFactory(country=country, name=city)
                zones.append(ZoneFactory(city=True, country=country, region=region, name=f"{city} forum"))

        created = 0
        for _ in range(opts["bookings"]):
            zone = random.choice(zones)
            position = random.choice(ALL_POSITIONS)
            booking = BannerBookingFactory(
                zone=zone,
                position=position,
                duration_days=random.choice(pricing.DURATION_OPTIONS),
                requested_by=random.choice(members),
            )
            # Approve only when it does not collide with an earlier approval
            clash = BannerBooking.objects.filter(
                zone=zone, position=position, status=BannerBooking.Status.APPROVED,
                start_date__lte=booking.end_date, end_date__gte=booking.start_date,
            ).exists()
            if not clash and random.random() < 0.5:
                booking.status = BannerBooking.Status.APPROVED
                booking.save(update_fields=["status"])
            created += 1

        for position in ALL_POSITIONS:
            BannerFallbackFactory(position=position)

        self.stdout.write(self.style.SUCCESS(
            f"Seeded {len(zones)} zones, {created} bookings, {len(ALL_POSITIONS)} fallbacks."
        ))
