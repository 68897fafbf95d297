"""
Geography — Service Tests

@file geography/tests/test_services.py
"""

import pytest
from django.core.cache import cache

from geography.services import ENTITIES_CACHE_KEY, GeographyService
from tests.factories import CityFactory


@pytest.mark.django_db
class TestFetchEntities:
    def test_snapshot_is_cached(self, geo_chain, django_assert_num_queries):
        GeographyService.fetch_entities()
        with django_assert_num_queries(0):
            records = GeographyService.fetch_entities()
        assert len(records) == 6

    def test_saving_an_entity_invalidates(self, geo_chain):
        GeographyService.fetch_entities()
        assert cache.get(ENTITIES_CACHE_KEY) is not None

        CityFactory(name='Pasig', parent=geo_chain['region'])

        assert cache.get(ENTITIES_CACHE_KEY) is None
        assert 'Pasig' in {record.name for record in GeographyService.fetch_entities()}

    def test_deleting_an_entity_invalidates(self, geo_chain):
        GeographyService.fetch_entities()
        geo_chain['other_barangay'].delete()
        assert cache.get(ENTITIES_CACHE_KEY) is None


@pytest.mark.django_db
class TestQueries:
    def test_get_hierarchy(self, geo_chain):
        chain = GeographyService.get_hierarchy(geo_chain['location'].pk)
        assert [node['kind'] for node in chain] == ['region', 'city', 'barangay', 'location']

    def test_get_hierarchy_unknown(self, db):
        assert GeographyService.get_hierarchy(999999) == []

    def test_get_children_sorted(self, geo_chain):
        names = list(GeographyService.get_children(geo_chain['region'].pk).values_list('name', flat=True))
        assert names == ['Makati', 'Quezon City']


@pytest.mark.django_db
class TestCascadeOptions:
    def test_region_and_city_selected(self, geo_chain):
        result = GeographyService.cascade_options({
            'region': geo_chain['region'].pk,
            'city': geo_chain['city'].pk,
        })
        assert result['selection']['barangay'] is None
        assert [e.name for e in result['options']['barangay']] == ['Bagumbayan']
        assert result['options']['location'] == []

    def test_city_without_region_yields_nothing_below(self, geo_chain):
        result = GeographyService.cascade_options({'city': geo_chain['city'].pk})
        assert result['selection']['city'] is None
        assert result['options']['barangay'] == []
