"""
Modal Forms — Service Layer

Dry-run validation of a modal's form data against its rule set, with the
same reference data the modal itself would have loaded.

@file modal_forms/services.py
"""

import logging

from cascade.session import FormSession
from cascade.validation import to_int
from core.exceptions import ResourceNotFoundError
from geography.services import GeographyService
from network.services import PortAllocationService

from .rulesets import get_ruleset

logger = logging.getLogger('isp_forms')


class FormValidationService:

    @staticmethod
    def validate(form_name: str, data: dict, context) -> dict[str, str]:
        """
        Return ``{field: message}`` for every failing field of ``form_name``.
        An empty dict means the form may be submitted.
        """
        rules_factory = get_ruleset(form_name)
        if rules_factory is None:
            raise ResourceNotFoundError(detail=f'Unknown form "{form_name}".')

        session = FormSession(context, rules_factory=rules_factory)
        session.open()
        try:
            session.load_geography(GeographyService.fetch_entities)
            session.load_nodes(PortAllocationService.fetch_nodes)
            node_id = to_int(data.get('lcpnap'))
            node = session.ports.index.get(node_id) if node_id is not None else None
            if node is not None:
                session.select_lcp(node.lcp_name)
                session.select_node(node.id, lambda: PortAllocationService.fetch_occupancy(node.id))
            errors = session.validate(data)
        finally:
            session.close()

        logger.debug('Form %s validated: %d error(s)', form_name, len(errors))
        return errors
