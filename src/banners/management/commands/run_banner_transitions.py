from django.core.management.base import BaseCommand, CommandError
from django.utils.dateparse import parse_date

from src.banners.lifecycle import run_scheduled_transitions


class Command(BaseCommand):
    """
    Daily job: approved bookings whose start date arrived become active,
    active bookings past their end date become expired.

    Schedule it once a day (cron, systemd timer, k8s CronJob...).
    """

    help = "Activate and expire banner bookings for today (or --date)."

    def add_arguments(self, parser):
        parser.add_argument("--date", default=None, help="Run as if today were YYYY-MM-DD.")

    def handle(self, *args, **opts):
        today = None
        if opts["date"]:
            try:
                today = parse_date(opts["date"])
            except ValueError:
                # well formed but not a calendar date, e.g. 2025-02-30
                today = None
            if today is None:
                raise CommandError(f"Invalid --date: {opts['date']!r}")

        result = run_scheduled_transitions(today=today)
        self.stdout.write(self.style.SUCCESS(
            f"Activated {result['activated']}, expired {result['expired']} booking(s)."
        ))
