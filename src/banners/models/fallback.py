from django.db import models

from src.banners.catalog import Position, BannerFormat
from .zone import Zone


class BannerFallback(models.Model):
    """Third-party ad code shown when a slot has no booking. A null zone applies everywhere."""
    zone = models.ForeignKey(
        Zone, on_delete=models.CASCADE, related_name='fallbacks',
        null=True, blank=True,
    )
    position = models.CharField(max_length=20, choices=Position.choices)
    format = models.CharField(max_length=10, choices=BannerFormat.choices)
    code_html = models.TextField()
    label = models.CharField(max_length=100, blank=True, default='')
    is_active = models.BooleanField(default=True)
    priority = models.IntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-priority', '-created_at']

    def __str__(self):
        return self.label or f"Fallback #{self.pk} ({self.position})"
