"""
Cascade — Hierarchy Index

Parent → children lookup tables over a flat list of geographic
entities (region → city → barangay → location). Built once per modal
open in O(n); every query afterwards is a dict lookup.

@file cascade/hierarchy.py
"""

from collections import defaultdict
from dataclasses import dataclass
from typing import Iterable

from .exceptions import EmptyInputError

REGION = 'region'
CITY = 'city'
BARANGAY = 'barangay'
LOCATION = 'location'

KIND_CHAIN = (REGION, CITY, BARANGAY, LOCATION)

PARENT_KIND_MAP = {
    CITY: REGION,
    BARANGAY: CITY,
    LOCATION: BARANGAY,
}


@dataclass(frozen=True)
class GeoEntity:
    id: int
    name: str
    kind: str
    parent_id: int | None = None

    @classmethod
    def from_dict(cls, data: dict) -> 'GeoEntity':
        parent_id = data.get('parent_id', data.get('parent'))
        return cls(
            id=int(data['id']),
            name=str(data.get('name', '')),
            kind=str(data['kind']),
            parent_id=int(parent_id) if parent_id not in (None, '') else None,
        )


class HierarchyIndex:
    """
    Immutable index over a flat entity list.

    Any record with ``id``, ``kind`` and ``parent_id`` attributes can be
    indexed; ordering inside each child group is the order supplied to
    ``build``.
    """

    __slots__ = ('_children', '_by_id', '_size')

    def __init__(self, children: dict, by_id: dict, size: int):
        self._children = children
        self._by_id = by_id
        self._size = size

    @classmethod
    def build(cls, entities: Iterable) -> 'HierarchyIndex':
        grouped = defaultdict(list)
        by_id = {}
        size = 0
        for entity in entities:
            grouped[entity.parent_id].append(entity)
            by_id[entity.id] = entity
            size += 1
        children = {parent_id: tuple(group) for parent_id, group in grouped.items()}
        return cls(children, by_id, size)

    @classmethod
    def empty(cls) -> 'HierarchyIndex':
        return cls({}, {}, 0)

    def __len__(self):
        return self._size

    def children_of(self, parent_id, expected_kind: str) -> list:
        """Entities under ``parent_id`` of ``expected_kind``; [] for a null parent."""
        if parent_id is None:
            return []
        return [e for e in self._children.get(parent_id, ()) if e.kind == expected_kind]

    def require_children_of(self, parent_id, expected_kind: str) -> list:
        """Like children_of, but an index built from nothing is an error."""
        if self._size == 0:
            raise EmptyInputError(
                f'No entities indexed; cannot list {expected_kind} children of {parent_id}.',
            )
        return self.children_of(parent_id, expected_kind)

    def roots(self, kind: str) -> list:
        return [e for e in self._children.get(None, ()) if e.kind == kind]

    def get(self, entity_id):
        return self._by_id.get(entity_id)

    def ancestors(self, entity_id) -> list:
        """Root-first path ending at ``entity_id``; [] when unknown."""
        chain = []
        seen = set()
        current = self._by_id.get(entity_id)
        while current is not None and current.id not in seen:
            seen.add(current.id)
            chain.insert(0, current)
            if current.parent_id is None:
                break
            current = self._by_id.get(current.parent_id)
        return chain
