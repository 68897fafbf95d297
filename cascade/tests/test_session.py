"""
Cascade — Loader and FormSession Tests

@file cascade/tests/test_session.py
"""

import pytest

from cascade.context import ModalContext
from cascade.exceptions import SubmissionRefused
from cascade.loader import ReferenceDataLoader
from cascade.ports import PortNode, PortSlot
from cascade.session import FormSession
from cascade.validation import check, required


def port_rules(context, ports=None, **kwargs):
    return [
        check(
            'port',
            lambda state: not ports.is_available(state['lcpnap'], state['port']),
            'Port is already in use',
        ),
    ]


class TestReferenceDataLoader:
    def test_stale_generation_is_dropped(self):
        loader = ReferenceDataLoader()
        applied = []
        ticket = loader.request('geography')
        loader.invalidate()

        assert not loader.resolve(ticket, ['late'], applied.extend)
        assert applied == []

    def test_newer_request_supersedes_older(self):
        loader = ReferenceDataLoader()
        applied = []
        first = loader.request('occupancy:1')
        second = loader.request('occupancy:1')

        assert not loader.resolve(first, ['old'], applied.extend)
        assert loader.resolve(second, ['new'], applied.extend)
        assert applied == ['new']
        assert not loader.is_loading('occupancy:1')

    def test_failed_fetch_applies_empty_list(self):
        loader = ReferenceDataLoader()
        applied = []

        def fetcher():
            raise ConnectionError('down')

        assert loader.load('nodes', fetcher, applied.append)
        assert applied == [[]]

    def test_failure_hook_replaces_empty_list(self):
        loader = ReferenceDataLoader()
        applied, failed = [], []

        def fetcher():
            raise ConnectionError('down')

        assert loader.load('occupancy:1', fetcher, applied.append, on_failure=lambda: failed.append(True))
        assert applied == []
        assert failed == [True]
        assert not loader.is_loading('occupancy:1')


class TestFormSession:
    def test_options_empty_while_geography_loads(self, ncr_entities):
        session = FormSession()
        session.open()
        ticket = session.request_geography()
        assert session.geo_options('region') == []

        session.resolve_geography(ticket, ncr_entities)
        assert [e.id for e in session.geo_options('region')] == [1]

    def test_late_response_after_close_is_discarded(self, ncr_entities):
        session = FormSession()
        session.open()
        ticket = session.request_geography()
        session.close()

        assert not session.resolve_geography(ticket, ncr_entities)
        assert session.geo.index is None

    def test_reopen_discards_previous_lifetime(self, ncr_entities):
        session = FormSession()
        session.open()
        ticket = session.request_geography()
        session.open()

        assert not session.resolve_geography(ticket, ncr_entities)
        assert session.is_open

    def test_port_options_wait_for_occupancy(self, eight_port_node, scenario_b_slots):
        session = FormSession(ModalContext(editing_record_id=42))
        session.open()
        session.load_nodes(lambda: [eight_port_node])
        session.select_lcp('LCP-01')
        ticket = session.select_node(7)

        assert session.port_options('port') == []
        assert session.resolve_occupancy(ticket, scenario_b_slots)
        assert [s.port_number for s in session.port_options('port')] == [4, 5, 6, 7, 8]

    def test_failed_occupancy_offers_no_ports(self, eight_port_node, caplog):
        session = FormSession(rules_factory=port_rules)
        session.open()
        session.load_nodes(lambda: [eight_port_node])
        session.select_lcp('LCP-01')

        def fetcher():
            raise ConnectionError('transport down')

        session.select_node(7, fetcher)

        assert session.port_options('port') == []
        assert not session.loader.is_loading('occupancy:7')
        assert 'occupancy:7' in caplog.text
        errors = session.validate({'port': 5})
        assert errors == {'port': 'Port is already in use'}

    def test_pending_occupancy_blocks_port(self, eight_port_node):
        session = FormSession(rules_factory=port_rules)
        session.open()
        session.load_nodes(lambda: [eight_port_node])
        session.select_lcp('LCP-01')
        ticket = session.select_node(7)

        assert session.validate({'port': 5}) == {'port': 'Port is already in use'}
        assert session.resolve_occupancy(ticket, [])
        assert session.validate({'port': 5}) == {}

    def test_failed_ticket_forgets_previous_occupancy(self, eight_port_node, scenario_b_slots):
        session = FormSession()
        session.open()
        session.load_nodes(lambda: [eight_port_node])
        session.select_lcp('LCP-01')
        session.select_node(7, lambda: scenario_b_slots)
        assert len(session.port_options('port')) == 4

        ticket = session.select_node(7)
        assert session.fail_occupancy(ticket, ConnectionError('transport down'))
        assert session.port_options('port') == []
        assert not session.ports.index.occupancy_known(7)

    def test_occupancy_for_deselected_node_is_ignored(self, eight_port_node):
        other = PortNode(id=8, lcp_name='LCP-01', nap_name='NAP-04', port_total=8)
        session = FormSession()
        session.open()
        session.load_nodes(lambda: [eight_port_node, other])
        session.select_lcp('LCP-01')
        stale = session.select_node(7)
        session.select_node(8, lambda: [])

        slots = [PortSlot(node_id=7, port_number=n, occupant_service_order_id=1) for n in range(1, 9)]
        assert not session.resolve_occupancy(stale, slots)
        assert not session.loader.is_loading('occupancy:7')
        assert len(session.port_options('port')) == 8

    def test_submit_refuses_while_errors(self):
        calls = []
        session = FormSession(rules_factory=lambda context, **kw: [required('name', 'Name is required')])
        session.open()

        with pytest.raises(SubmissionRefused) as exc_info:
            session.submit({'name': ''}, calls.append)

        assert exc_info.value.errors == {'name': 'Name is required'}
        assert calls == []

    def test_submit_passes_state_with_cascade_values(self, eight_port_node):
        session = FormSession(rules_factory=lambda context, **kw: [required('lcpnap')])
        session.open()
        session.load_nodes(lambda: [eight_port_node])
        session.select_lcp('LCP-01')
        session.select_node(7, lambda: [])
        session.select_port(5)

        result = session.submit({'lcpnap': ''}, lambda state: state)

        assert result['lcpnap'] == 7
        assert result['port'] == 5

    def test_rules_receive_context_and_indexes(self, ncr_entities):
        seen = {}

        def factory(context, geo=None, ports=None):
            seen.update(context=context, geo=geo, ports=ports)
            return []

        context = ModalContext(user_role='technician')
        session = FormSession(context, rules_factory=factory)
        session.open()
        session.load_geography(lambda: ncr_entities)
        session.validate({})

        assert seen['context'].is_technician
        assert len(seen['geo']) == len(ncr_entities)
        assert seen['ports'] is None
