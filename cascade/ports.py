"""
Cascade — Port Allocation Index

LCP → NAP → Port lookups for LCP-NAP nodes. Answers the same
``roots`` / ``children_of`` queries as HierarchyIndex so a
CascadeController can drive the port picker, but the port level is
computed from the node's declared ``port_total`` minus occupied slots.

A slot held by the service order being edited stays available so the
order can be re-saved without colliding with itself.

@file cascade/ports.py
"""

from dataclasses import dataclass
from typing import Iterable

LCP = 'lcp'
NAP = 'nap'
PORT = 'port'


@dataclass(frozen=True)
class LcpGroup:
    """An LCP label grouping every node that shares it."""

    id: str
    name: str
    kind: str = LCP
    parent_id: None = None


@dataclass(frozen=True)
class PortNode:
    id: int
    lcp_name: str
    nap_name: str
    port_total: int | None
    name: str = ''
    kind: str = NAP

    @property
    def parent_id(self) -> str:
        return self.lcp_name

    @property
    def label(self) -> str:
        return self.name or f'{self.lcp_name} {self.nap_name}'


@dataclass(frozen=True)
class PortSlot:
    node_id: int
    port_number: int
    occupant_service_order_id: int | None = None
    kind: str = PORT

    @property
    def id(self) -> int:
        return self.port_number

    @property
    def parent_id(self) -> int:
        return self.node_id

    @property
    def is_free(self) -> bool:
        return self.occupant_service_order_id is None


class PortAllocationIndex:
    """
    Immutable node/occupancy snapshot for one modal.

    Nodes listed in ``unloaded`` have unknown occupancy (still loading,
    or the fetch failed). They offer no ports and every port reads as
    unavailable until ``with_occupancy`` supplies their slots.
    """

    def __init__(
        self,
        nodes: Iterable[PortNode],
        slots: Iterable[PortSlot] = (),
        *,
        editing_service_order_id: int | None = None,
        unloaded: Iterable[int] = (),
    ):
        self._nodes = {node.id: node for node in nodes}
        self._lcps = list(dict.fromkeys(node.lcp_name for node in self._nodes.values()))
        self._occupied = {}
        for slot in slots:
            if slot.occupant_service_order_id is None:
                continue
            self._occupied.setdefault(slot.node_id, {})[slot.port_number] = slot
        self._unloaded = frozenset(unloaded)
        self.editing_service_order_id = editing_service_order_id

    def _clone(self, unloaded) -> 'PortAllocationIndex':
        clone = PortAllocationIndex(
            self._nodes.values(),
            editing_service_order_id=self.editing_service_order_id,
            unloaded=unloaded,
        )
        clone._occupied = {k: dict(v) for k, v in self._occupied.items()}
        return clone

    def with_occupancy(self, node_id: int, slots: Iterable[PortSlot]) -> 'PortAllocationIndex':
        """Copy of this index with ``node_id``'s occupancy replaced."""
        clone = self._clone(self._unloaded - {node_id})
        clone._occupied.pop(node_id, None)
        fresh = {
            s.port_number: s for s in slots
            if s.node_id == node_id and s.occupant_service_order_id is not None
        }
        if fresh:
            clone._occupied[node_id] = fresh
        return clone

    def without_occupancy(self, node_id: int) -> 'PortAllocationIndex':
        """Copy of this index with ``node_id``'s occupancy marked unknown."""
        clone = self._clone(self._unloaded | {node_id})
        clone._occupied.pop(node_id, None)
        return clone

    def __len__(self):
        return len(self._nodes)

    def get(self, node_id):
        return self._nodes.get(node_id)

    def occupancy_known(self, node_id) -> bool:
        return node_id in self._nodes and node_id not in self._unloaded

    def port_total_of(self, node_id) -> int:
        node = self._nodes.get(node_id)
        if node is None:
            return 0
        return node.port_total or 0

    def roots(self, kind: str) -> list:
        if kind != LCP:
            return []
        return [LcpGroup(id=name, name=name) for name in self._lcps]

    def children_of(self, parent_id, expected_kind: str) -> list:
        if parent_id is None:
            return []
        if expected_kind == NAP:
            return [n for n in self._nodes.values() if n.lcp_name == parent_id]
        if expected_kind == PORT:
            return self.available_ports(parent_id)
        return []

    def slots(self, node_id) -> list[PortSlot]:
        """Every port of the node, occupied or not, in port order."""
        occupied = self._occupied.get(node_id, {})
        return [
            occupied.get(n) or PortSlot(node_id=node_id, port_number=n)
            for n in range(1, self.port_total_of(node_id) + 1)
        ]

    def available_ports(self, node_id) -> list[PortSlot]:
        if not self.occupancy_known(node_id):
            return []
        return [s for s in self.slots(node_id) if self._is_selectable(s)]

    def is_available(self, node_id, port_number) -> bool:
        if not self.occupancy_known(node_id):
            return False
        if not 1 <= port_number <= self.port_total_of(node_id):
            return False
        slot = self._occupied.get(node_id, {}).get(port_number)
        return slot is None or self._is_selectable(slot)

    def _is_selectable(self, slot: PortSlot) -> bool:
        if slot.is_free:
            return True
        return (
            self.editing_service_order_id is not None
            and slot.occupant_service_order_id == self.editing_service_order_id
        )
