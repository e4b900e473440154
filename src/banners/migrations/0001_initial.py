import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


POSITION_CHOICES = [
    ("header", "Header"),
    ("sidebar_top", "Sidebar top"),
    ("sidebar_bottom", "Sidebar bottom"),
    ("footer", "Footer"),
    ("content", "Content"),
]
FORMAT_CHOICES = [
    ("728x90", "Leaderboard (728×90)"),
    ("300x250", "Medium Rectangle (300×250)"),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Country",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=100)),
                ("slug", models.SlugField(max_length=100, unique=True)),
                ("flag_emoji", models.CharField(blank=True, default="", max_length=8)),
            ],
            options={
                "ordering": ["name"],
                "verbose_name_plural": "countries",
            },
        ),
        migrations.CreateModel(
            name="Region",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=100)),
                ("slug", models.SlugField(max_length=100)),
                ("country", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="regions", to="banners.country")),
            ],
            options={
                "ordering": ["name"],
                "constraints": [
                    models.UniqueConstraint(fields=("country", "slug"), name="region_country_slug_uniq"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Zone",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=150)),
                ("zone_type", models.CharField(choices=[("home_country", "Home / country"), ("city", "City / region")], max_length=20)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("country", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="banner_zones", to="banners.country")),
                ("region", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name="banner_zones", to="banners.region")),
            ],
            options={
                "ordering": ["zone_type", "name"],
                "indexes": [
                    models.Index(fields=["country", "zone_type", "is_active"], name="zone_lookup_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        condition=models.Q(("is_active", True), ("region__isnull", True)),
                        fields=("country", "zone_type"),
                        name="zone_unique_active_home",
                    ),
                    models.UniqueConstraint(
                        condition=models.Q(("is_active", True), ("region__isnull", False)),
                        fields=("country", "zone_type", "region"),
                        name="zone_unique_active_city",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(
                            models.Q(("region__isnull", True), ("zone_type", "home_country")),
                            models.Q(("region__isnull", False), ("zone_type", "city")),
                            _connector="OR",
                        ),
                        name="zone_region_matches_type",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="BannerBooking",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("position", models.CharField(choices=POSITION_CHOICES, max_length=20)),
                ("format", models.CharField(choices=FORMAT_CHOICES, max_length=10)),
                ("image_url", models.URLField(max_length=500)),
                ("click_url", models.URLField(blank=True, max_length=500, null=True)),
                ("start_date", models.DateField()),
                ("end_date", models.DateField()),
                ("duration_days", models.PositiveSmallIntegerField(choices=[(7, "7 days"), (15, "15 days"), (30, "30 days"), (90, "90 days"), (180, "180 days")])),
                ("price_usd", models.DecimalField(decimal_places=2, max_digits=8)),
                ("status", models.CharField(choices=[("pending", "Pending"), ("approved", "Approved"), ("active", "Active"), ("expired", "Expired"), ("rejected", "Rejected"), ("cancelled", "Cancelled")], default="pending", max_length=10)),
                ("reviewed_at", models.DateTimeField(blank=True, null=True)),
                ("admin_notes", models.TextField(blank=True, default="")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("requested_by", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="banner_bookings", to=settings.AUTH_USER_MODEL)),
                ("reviewed_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="reviewed_banner_bookings", to=settings.AUTH_USER_MODEL)),
                ("zone", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="bookings", to="banners.zone")),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["zone", "position", "status", "start_date", "end_date"], name="banner_booking_overlap_idx"),
                    models.Index(fields=["status", "start_date"], name="banner_booking_sched_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(condition=models.Q(("end_date__gte", models.F("start_date"))), name="banner_booking_dates_ordered"),
                ],
            },
        ),
        migrations.CreateModel(
            name="BannerFallback",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("position", models.CharField(choices=POSITION_CHOICES, max_length=20)),
                ("format", models.CharField(choices=FORMAT_CHOICES, max_length=10)),
                ("code_html", models.TextField()),
                ("label", models.CharField(blank=True, default="", max_length=100)),
                ("is_active", models.BooleanField(default=True)),
                ("priority", models.IntegerField(default=0)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("zone", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name="fallbacks", to="banners.zone")),
            ],
            options={
                "ordering": ["-priority", "-created_at"],
            },
        ),
        migrations.CreateModel(
            name="BannerEvent",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("event_type", models.CharField(choices=[("impression", "Impression"), ("click", "Click")], max_length=12)),
                ("position", models.CharField(blank=True, default="", max_length=20)),
                ("anon_ip_hash", models.CharField(blank=True, db_index=True, default="", max_length=64)),
                ("user_agent", models.TextField(blank=True, default="")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("booking", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="events", to="banners.bannerbooking")),
                ("fallback", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="events", to="banners.bannerfallback")),
                ("zone", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="events", to="banners.zone")),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["booking", "event_type", "created_at"], name="banner_event_booking_idx"),
                ],
            },
        ),
    ]
