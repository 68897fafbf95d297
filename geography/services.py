"""
Geography — Service Layer

Query helpers for the geographic hierarchy and the reference-data
fetcher consumed by modal form sessions. The flat entity snapshot is
cached; signals drop it whenever an entity changes.

@file geography/services.py
"""

import logging

from django.conf import settings
from django.core.cache import cache

from cascade.controller import GEO_LEVELS, CascadeController
from cascade.hierarchy import HierarchyIndex

from .models import GeoEntity

logger = logging.getLogger('isp_forms')

ENTITIES_CACHE_KEY = 'geography:entities:v1'


class GeographyService:
    """Read-oriented service for geographic reference data."""

    @staticmethod
    def get_regions():
        return GeoEntity.objects.filter(kind=GeoEntity.Kind.REGION).order_by('name')

    @staticmethod
    def get_children(parent_id):
        return GeoEntity.objects.filter(parent_id=parent_id).order_by('name')

    @staticmethod
    def get_hierarchy(entity_id) -> list[dict]:
        """Return the full parent chain from region down to the given entity."""
        try:
            entity = GeoEntity.objects.select_related(
                'parent__parent__parent',
            ).get(pk=entity_id)
        except GeoEntity.DoesNotExist:
            return []

        chain = []
        current = entity
        while current:
            chain.insert(0, {
                'id': current.pk,
                'name': current.name,
                'kind': current.kind,
            })
            current = current.parent
        return chain

    # ------------------------------------------------------------------
    # Reference-data fetcher
    # ------------------------------------------------------------------

    @staticmethod
    def fetch_entities() -> list:
        """Flat snapshot of every entity as cascade records, cached."""
        records = cache.get(ENTITIES_CACHE_KEY)
        if records is None:
            records = [
                entity.to_record()
                for entity in GeoEntity.objects.order_by('name', 'pk')
            ]
            cache.set(ENTITIES_CACHE_KEY, records, settings.GEOGRAPHY_CACHE_TIMEOUT)
        return list(records)

    @staticmethod
    def invalidate_cache() -> None:
        cache.delete(ENTITIES_CACHE_KEY)
        logger.debug('Geography snapshot cache invalidated.')

    @staticmethod
    def build_index() -> HierarchyIndex:
        return HierarchyIndex.build(GeographyService.fetch_entities())

    @staticmethod
    def cascade_options(selection: dict) -> dict:
        """
        Option list for every level given the ancestors in ``selection``.
        Selections are applied top-down, so a city without a region
        yields no barangays.
        """
        controller = CascadeController(GEO_LEVELS, index=GeographyService.build_index())
        for level in GEO_LEVELS:
            value = selection.get(level)
            if value in (None, ''):
                break
            controller.set_level(level, value)
        return {
            'selection': controller.values(),
            'options': controller.all_options(),
        }
