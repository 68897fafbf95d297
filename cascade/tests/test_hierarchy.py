"""
Cascade — HierarchyIndex Tests

@file cascade/tests/test_hierarchy.py
"""

import pytest

from cascade.exceptions import EmptyInputError
from cascade.hierarchy import GeoEntity, HierarchyIndex


class TestHierarchyIndex:
    def test_children_of_returns_exact_subset(self, ncr_entities):
        index = HierarchyIndex.build(ncr_entities)
        for parent_id in (1, 10, 11, 100, 999):
            for kind in ('city', 'barangay', 'location'):
                expected = [e for e in ncr_entities if e.parent_id == parent_id and e.kind == kind]
                assert index.children_of(parent_id, kind) == expected

    def test_children_keep_build_order(self):
        index = HierarchyIndex.build([
            GeoEntity(1, 'R', 'region'),
            GeoEntity(3, 'Zeta', 'city', 1),
            GeoEntity(2, 'Alpha', 'city', 1),
        ])
        assert [e.name for e in index.children_of(1, 'city')] == ['Zeta', 'Alpha']

    def test_null_parent_yields_nothing(self, ncr_entities):
        index = HierarchyIndex.build(ncr_entities)
        assert index.children_of(None, 'city') == []

    def test_kind_mismatch_is_filtered(self, ncr_entities):
        index = HierarchyIndex.build(ncr_entities)
        assert index.children_of(1, 'barangay') == []

    def test_roots(self, ncr_entities):
        index = HierarchyIndex.build(ncr_entities)
        assert [e.name for e in index.roots('region')] == ['NCR']

    def test_empty_index(self):
        index = HierarchyIndex.build([])
        assert len(index) == 0
        assert index.children_of(1, 'city') == []

    def test_require_children_of_on_empty_index_raises(self):
        with pytest.raises(EmptyInputError):
            HierarchyIndex.empty().require_children_of(1, 'city')

    def test_require_children_of_with_data(self, ncr_entities):
        index = HierarchyIndex.build(ncr_entities)
        assert len(index.require_children_of(10, 'barangay')) == 2

    def test_ancestors_root_first(self, ncr_entities):
        index = HierarchyIndex.build(ncr_entities)
        assert [e.id for e in index.ancestors(1000)] == [1, 10, 100, 1000]
        assert index.ancestors(424242) == []

    def test_ancestors_stops_on_cycle(self):
        index = HierarchyIndex.build([
            GeoEntity(1, 'A', 'city', 2),
            GeoEntity(2, 'B', 'city', 1),
        ])
        assert [e.id for e in index.ancestors(1)] == [2, 1]


class TestGeoEntityRecord:
    def test_from_dict_accepts_parent_alias(self):
        entity = GeoEntity.from_dict({'id': '5', 'name': 'X', 'kind': 'city', 'parent': '1'})
        assert entity == GeoEntity(5, 'X', 'city', 1)

    def test_from_dict_blank_parent(self):
        entity = GeoEntity.from_dict({'id': 1, 'name': 'NCR', 'kind': 'region', 'parent_id': ''})
        assert entity.parent_id is None
