"""
Service Orders — Service Layer

Saving the service-order edit modal: the submitted form is merged over
the order's current values, checked against the service-order rule set
(with live port occupancy for the chosen LCP-NAP) and only then
persisted. A port grabbed concurrently by another order surfaces as a
409 from the database constraint.

@file service_orders/services.py
"""

import logging
from dataclasses import replace

from django.db import IntegrityError, transaction

from cascade.exceptions import SubmissionRefused
from cascade.session import FormSession
from cascade.validation import to_int
from core.exceptions import FormValidationError, PortCollisionError, ResourceNotFoundError
from geography.services import GeographyService
from modal_forms.rulesets import service_order_edit_rules
from network.services import PortAllocationService

from .models import ServiceOrder

logger = logging.getLogger('isp_forms')

TEXT_FIELDS = (
    'support_status', 'repair_category', 'assigned_email', 'concern',
    'support_remarks', 'new_router_sn', 'new_vlan',
)
GEO_FIELDS = ('region', 'city', 'barangay', 'location')


class ServiceOrderService:

    @staticmethod
    def open_edit_session(context, node_id=None) -> FormSession:
        """
        Edit session with its reference data loaded: geography, every
        node, and the occupancy of ``node_id``.
        """
        session = FormSession(context, rules_factory=service_order_edit_rules)
        session.open()
        session.load_geography(GeographyService.fetch_entities)
        session.load_nodes(PortAllocationService.fetch_nodes)
        node = session.ports.index.get(node_id) if node_id is not None else None
        if node is not None:
            session.select_lcp(node.lcp_name)
            session.select_node(node.id, lambda: PortAllocationService.fetch_occupancy(node.id))
        return session

    @staticmethod
    def update_service_order(*, service_order_id, context, actor=None, **fields) -> ServiceOrder:
        try:
            service_order = ServiceOrder.objects.get(pk=service_order_id)
        except ServiceOrder.DoesNotExist:
            raise ResourceNotFoundError(detail='Service order not found.')

        data = {**service_order.form_values(), **fields}
        session = ServiceOrderService.open_edit_session(
            replace(context, editing_record_id=service_order.pk),
            node_id=to_int(data.get('lcpnap')),
        )
        try:
            return session.submit(
                data,
                lambda state: ServiceOrderService._persist(service_order_id, state, actor=actor),
            )
        except SubmissionRefused as exc:
            raise FormValidationError(exc.errors)
        finally:
            session.close()

    @staticmethod
    @transaction.atomic
    def _persist(service_order_id, state: dict, *, actor=None) -> ServiceOrder:
        service_order = ServiceOrder.objects.select_for_update().get(pk=service_order_id)
        for name in TEXT_FIELDS:
            if name in state:
                setattr(service_order, name, state[name] or '')
        for name in GEO_FIELDS:
            setattr(service_order, f'{name}_id', to_int(state.get(name)))
        service_order.lcpnap_id = to_int(state.get('lcpnap'))
        service_order.port_number = to_int(state.get('port'))
        service_order.updated_by = actor

        try:
            with transaction.atomic():
                service_order.save()
        except IntegrityError:
            raise PortCollisionError(
                detail=f'Port {service_order.port_number} is already assigned on this LCP-NAP.',
            )
        logger.info(
            'ServiceOrder %s saved: status=%s lcpnap=%s port=%s',
            service_order.pk, service_order.support_status,
            service_order.lcpnap_id, service_order.port_number,
        )
        return service_order
