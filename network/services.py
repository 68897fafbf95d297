"""
Network — Service Layer

Port allocation over LCP-NAP nodes and node creation through the
LCP-NAP location rule set.

Occupied ports are those held by service orders; the service order
being edited never collides with its own port.

@file network/services.py
"""

import logging

from django.db import IntegrityError, transaction

from cascade.controller import PORT_LEVELS
from cascade.exceptions import SubmissionRefused
from cascade.ports import LCP, NAP, PORT, PortAllocationIndex, PortSlot
from cascade.session import FormSession
from core.exceptions import BusinessRuleViolation, FormValidationError, ResourceNotFoundError
from geography.models import GeoEntity
from geography.services import GeographyService
from modal_forms.rulesets import lcpnap_location_rules

from .models import LcpNapNode

logger = logging.getLogger('isp_forms')

NODE_FIELDS = ('lcp_name', 'nap_name', 'port_total', 'street', 'coordinates')
GEO_FORM_FIELDS = ('region', 'city', 'barangay', 'location')


class PortAllocationService:
    """Reference-data fetchers and queries for the LCP → NAP → Port chain."""

    @staticmethod
    def fetch_nodes() -> list:
        return [node.to_record() for node in LcpNapNode.objects.order_by('lcp_name', 'nap_name', 'pk')]

    @staticmethod
    def fetch_occupancy(node_id) -> list[PortSlot]:
        from service_orders.models import ServiceOrder

        rows = (
            ServiceOrder.objects
            .filter(lcpnap_id=node_id, port_number__isnull=False)
            .values_list('pk', 'port_number')
        )
        return [
            PortSlot(node_id=node_id, port_number=port_number, occupant_service_order_id=pk)
            for pk, port_number in rows
        ]

    @staticmethod
    def build_index(*, node_id=None, editing_service_order_id=None) -> PortAllocationIndex:
        """Index with occupancy loaded for ``node_id`` only."""
        nodes = PortAllocationService.fetch_nodes()
        slots = PortAllocationService.fetch_occupancy(node_id) if node_id is not None else ()
        return PortAllocationIndex(
            nodes,
            slots,
            editing_service_order_id=editing_service_order_id,
            unloaded=[node.id for node in nodes if node.id != node_id],
        )

    @staticmethod
    def get_node(node_id) -> LcpNapNode:
        try:
            return LcpNapNode.objects.get(pk=node_id)
        except LcpNapNode.DoesNotExist:
            raise ResourceNotFoundError(detail='LCP-NAP node not found.')

    @staticmethod
    def available_ports(node_id, *, current_service_order_id=None) -> list[PortSlot]:
        PortAllocationService.get_node(node_id)
        index = PortAllocationService.build_index(
            node_id=node_id,
            editing_service_order_id=current_service_order_id,
        )
        return index.available_ports(node_id)

    @staticmethod
    def cascade_options(selection: dict, context) -> dict:
        """
        Picker contents for LCP → NAP → Port. Selecting a node always
        re-reads that node's occupancy.
        """
        session = FormSession(context)
        session.open()
        session.load_nodes(PortAllocationService.fetch_nodes)

        lcp_name = selection.get(LCP)
        node_id = selection.get(NAP)
        port_number = selection.get(PORT)
        if lcp_name:
            session.select_lcp(lcp_name)
            if node_id is not None:
                session.select_node(
                    node_id, lambda: PortAllocationService.fetch_occupancy(node_id),
                )
                if port_number is not None:
                    session.select_port(port_number)

        return {
            'selection': session.ports.values(),
            'options': {level: session.port_options(level) for level in PORT_LEVELS},
        }


class NetworkService:
    """LCP-NAP node lifecycle."""

    @staticmethod
    def create_node(*, context, actor=None, **fields) -> LcpNapNode:
        """Validate with the LCP-NAP location rules, then persist."""
        data = dict(fields)
        if not data.get('lcpnap_name') and data.get('lcp_name') and data.get('nap_name'):
            data['lcpnap_name'] = LcpNapNode.compose_name(data['lcp_name'], data['nap_name'])

        session = FormSession(context, rules_factory=lcpnap_location_rules)
        session.open()
        if any(data.get(name) for name in GEO_FORM_FIELDS):
            session.load_geography(GeographyService.fetch_entities)

        try:
            return session.submit(
                data, lambda state: NetworkService._persist_node(state, context=context, actor=actor),
            )
        except SubmissionRefused as exc:
            raise FormValidationError(exc.errors)
        finally:
            session.close()

    @staticmethod
    @transaction.atomic
    def _persist_node(state: dict, *, context, actor=None) -> LcpNapNode:
        node = LcpNapNode(
            name=state['lcpnap_name'].strip(),
            modified_by=context.user_email,
            created_by=actor,
            **{name: state[name] for name in NODE_FIELDS if state.get(name) is not None},
        )
        location_id = state.get('location')
        if location_id:
            node.location = GeoEntity.objects.filter(pk=location_id, kind=GeoEntity.Kind.LOCATION).first()
        try:
            with transaction.atomic():
                node.save()
        except IntegrityError:
            raise BusinessRuleViolation(detail=f'LCP-NAP "{node.name}" already exists.')
        logger.info('LcpNapNode %s created: %s (%s ports)', node.pk, node.name, node.port_total)
        return node
