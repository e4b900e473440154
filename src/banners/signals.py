# Keep the resolved-zone cache in step with zone edits.

from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from .models import Zone
from .zones import get_zone_cache


@receiver(post_save, sender=Zone)
@receiver(post_delete, sender=Zone)
def zone_changed(sender, instance: Zone, **kwargs):
    """Any zone write can change which zone a page context resolves to."""
    get_zone_cache().invalidate()
