"""
Cascade — Test fixtures

@file cascade/tests/conftest.py
"""

import pytest

from cascade.hierarchy import GeoEntity
from cascade.ports import PortNode, PortSlot


@pytest.fixture
def ncr_entities():
    """NCR → 2 cities → 2 barangays each, one location under the first barangay."""
    return [
        GeoEntity(1, 'NCR', 'region'),
        GeoEntity(10, 'Quezon City', 'city', 1),
        GeoEntity(11, 'Makati', 'city', 1),
        GeoEntity(100, 'Bagumbayan', 'barangay', 10),
        GeoEntity(101, 'Commonwealth', 'barangay', 10),
        GeoEntity(110, 'Poblacion', 'barangay', 11),
        GeoEntity(111, 'San Lorenzo', 'barangay', 11),
        GeoEntity(1000, 'Purok 1', 'location', 100),
    ]


@pytest.fixture
def eight_port_node():
    return PortNode(id=7, lcp_name='LCP-01', nap_name='NAP-03', port_total=8, name='LCP-01 NAP-03')


@pytest.fixture
def scenario_b_slots():
    """Ports 1-3 held by other orders, port 4 by order 42."""
    slots = [PortSlot(node_id=7, port_number=n, occupant_service_order_id=900 + n) for n in (1, 2, 3)]
    slots.append(PortSlot(node_id=7, port_number=4, occupant_service_order_id=42))
    return slots
