"""
Geography — Signals

Drop the cached reference snapshot whenever an entity is written.

@file geography/signals.py
"""

from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from .models import GeoEntity
from .services import GeographyService


@receiver(post_save, sender=GeoEntity)
def geo_entity_saved(sender, instance, **kwargs):
    GeographyService.invalidate_cache()


@receiver(post_delete, sender=GeoEntity)
def geo_entity_deleted(sender, instance, **kwargs):
    GeographyService.invalidate_cache()
