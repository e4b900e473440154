import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("banners", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="BannerPayment",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("amount_usd", models.DecimalField(decimal_places=2, max_digits=8)),
                ("payment_method", models.CharField(choices=[("bank_transfer", "Bank transfer"), ("paypal", "PayPal"), ("crypto", "Crypto (USDT)")], max_length=20)),
                ("status", models.CharField(choices=[("pending", "Pending"), ("submitted", "Proof submitted"), ("confirmed", "Confirmed"), ("rejected", "Rejected")], default="pending", max_length=10)),
                ("reference_code", models.CharField(max_length=20, unique=True)),
                ("proof_url", models.URLField(blank=True, max_length=500, null=True)),
                ("proof_notes", models.TextField(blank=True, default="")),
                ("submitted_at", models.DateTimeField(blank=True, null=True)),
                ("reviewed_at", models.DateTimeField(blank=True, null=True)),
                ("admin_notes", models.TextField(blank=True, default="")),
                ("rejection_reason", models.TextField(blank=True, default="")),
                ("invoice_number", models.CharField(blank=True, max_length=20, null=True, unique=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("booking", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="payments", to="banners.bannerbooking")),
                ("payer", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="banner_payments", to=settings.AUTH_USER_MODEL)),
                ("reviewed_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="reviewed_banner_payments", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["status", "created_at"], name="banner_payment_status_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        condition=models.Q(("status__in", ("pending", "submitted", "confirmed"))),
                        fields=("booking",),
                        name="banner_payment_one_open_per_booking",
                    ),
                ],
            },
        ),
    ]
