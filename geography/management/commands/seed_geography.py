"""
Geography — Management Command: seed_geography

Loads the region → city → barangay → location hierarchy from a nested
JSON file.

Usage::

    python manage.py seed_geography --file regions.json

Idempotent: safe to re-run (uses get_or_create on parent + kind + name).

@file geography/management/commands/seed_geography.py
"""

import json
import logging
from collections import Counter

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from geography.models import GeoEntity

logger = logging.getLogger('isp_forms')

# kind -> (key holding its children, child kind)
CHILD_KEYS = {
    GeoEntity.Kind.REGION: ('cities', GeoEntity.Kind.CITY),
    GeoEntity.Kind.CITY: ('barangays', GeoEntity.Kind.BARANGAY),
    GeoEntity.Kind.BARANGAY: ('locations', GeoEntity.Kind.LOCATION),
}


class Command(BaseCommand):
    help = 'Seed the service-area geography from a nested JSON file.'

    def add_arguments(self, parser):
        parser.add_argument(
            '--file',
            type=str,
            required=True,
            help='Path to a JSON file: [{"name": ..., "cities": [{"name": ..., "barangays": [...]}]}].',
        )

    def handle(self, *args, **options):
        self.stdout.write('Loading service-area geography…')

        try:
            with open(options['file'], 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            raise CommandError(f'Cannot read {options["file"]}: {exc}') from exc

        if isinstance(data, dict):
            data = data.get('regions', data.get('data', [data]))
        if not isinstance(data, list):
            raise CommandError('Unexpected JSON structure: expected a list of regions.')

        counter = Counter()
        with transaction.atomic():
            for item in data:
                self._load(item, GeoEntity.Kind.REGION, None, counter)

        logger.info('seed_geography loaded %s', dict(counter))
        self.stdout.write(self.style.SUCCESS(
            f'Done. Regions: {counter["region"]}, Cities: {counter["city"]}, '
            f'Barangays: {counter["barangay"]}, Locations: {counter["location"]}'
        ))

    def _load(self, item, kind, parent, counter):
        """
        Accepts either a bare name string or ``{"name": ..., <children>: [...]}``.
        """
        if isinstance(item, str):
            name, children = item, []
        else:
            name = item.get('name', item.get(kind, ''))
            child_key = CHILD_KEYS.get(kind)
            children = item.get(child_key[0], []) if child_key else []

        name = (name or '').strip()
        if not name:
            return

        entity, _ = GeoEntity.objects.get_or_create(
            parent=parent, kind=kind, name=name,
        )
        counter[kind] += 1
        if kind == GeoEntity.Kind.REGION:
            self.stdout.write(f'  Region: {name}')

        if kind in CHILD_KEYS:
            child_kind = CHILD_KEYS[kind][1]
            for child in children:
                self._load(child, child_kind, entity, counter)
