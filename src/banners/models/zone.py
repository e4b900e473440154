from django.db import models
from django.db.models import Q

from src.banners import pricing
from .geo import Country, Region


class Zone(models.Model):
    """A sellable advertising surface: a country's home pages or a single city/region subforum."""

    class ZoneType(models.TextChoices):
        HOME_COUNTRY = pricing.HOME_COUNTRY, 'Home / country'
        CITY = pricing.CITY, 'City / region'

    name = models.CharField(max_length=150)
    zone_type = models.CharField(max_length=20, choices=ZoneType.choices)
    country = models.ForeignKey(Country, on_delete=models.CASCADE, related_name='banner_zones')
    region = models.ForeignKey(
        Region, on_delete=models.CASCADE, related_name='banner_zones',
        null=True, blank=True,
    )
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['zone_type', 'name']
        indexes = [
            models.Index(fields=['country', 'zone_type', 'is_active'], name='zone_lookup_idx'),
        ]
        constraints = [
            # region NULLs never collide in a unique index, so home zones get their own constraint
            models.UniqueConstraint(
                fields=['country', 'zone_type'],
                condition=Q(is_active=True, region__isnull=True),
                name='zone_unique_active_home',
            ),
            models.UniqueConstraint(
                fields=['country', 'zone_type', 'region'],
                condition=Q(is_active=True, region__isnull=False),
                name='zone_unique_active_city',
            ),
            models.CheckConstraint(
                condition=(
                    Q(zone_type=pricing.HOME_COUNTRY, region__isnull=True)
                    | Q(zone_type=pricing.CITY, region__isnull=False)
                ),
                name='zone_region_matches_type',
            ),
        ]

    def __str__(self):
        return self.name
