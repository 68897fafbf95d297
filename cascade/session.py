"""
Cascade — Form Session

One modal's lifetime: explicit context, the geographic and port
cascades, the loader guarding their reference data, and the rule set
checked before the persistence submitter may run.

Typical flow::

    session = FormSession(context, rules_factory=service_order_edit_rules)
    session.open()
    session.load_geography(GeographyService.fetch_entities)
    session.load_nodes(PortAllocationService.fetch_nodes)
    session.select_node(node_id, occupancy_fetcher)
    session.submit(form_data, submitter)

@file cascade/session.py
"""

import logging
from typing import Any, Callable, Iterable, Mapping

from .context import ModalContext
from .controller import GEO_LEVELS, PORT_LEVELS, CascadeController
from .exceptions import SubmissionRefused
from .hierarchy import HierarchyIndex
from .loader import FetchTicket, ReferenceDataLoader
from .ports import LCP, NAP, PORT, PortAllocationIndex
from .validation import ValidationEngine, ValidationRule, is_blank

logger = logging.getLogger('isp_forms')

GEOGRAPHY_KEY = 'geography'
NODES_KEY = 'nodes'

# Controller level -> form field carrying the same value.
PORT_FIELD_MAP = {LCP: 'lcp', NAP: 'lcpnap', PORT: 'port'}

RulesFactory = Callable[..., Iterable[ValidationRule]]


def occupancy_key(node_id) -> str:
    return f'occupancy:{node_id}'


class FormSession:

    def __init__(self, context: ModalContext | None = None, rules_factory: RulesFactory | None = None):
        self.context = context or ModalContext()
        self.rules_factory = rules_factory
        self.loader = ReferenceDataLoader()
        self.geo = CascadeController(GEO_LEVELS)
        self.ports = CascadeController(PORT_LEVELS)
        self.is_open = False

    # ------------------------------------------------------------------
    # Lifetime
    # ------------------------------------------------------------------

    def open(self) -> None:
        self._reset()
        self.is_open = True

    def close(self) -> None:
        self._reset()
        self.is_open = False

    def _reset(self) -> None:
        self.loader.invalidate()
        for controller in (self.geo, self.ports):
            controller.reset()
            controller.detach()

    # ------------------------------------------------------------------
    # Geography
    # ------------------------------------------------------------------

    def request_geography(self) -> FetchTicket:
        self.geo.detach()
        return self.loader.request(GEOGRAPHY_KEY)

    def resolve_geography(self, ticket: FetchTicket, records) -> bool:
        return self.loader.resolve(ticket, records, self._attach_geography)

    def load_geography(self, fetcher: Callable[[], list]) -> bool:
        self.geo.detach()
        return self.loader.load(GEOGRAPHY_KEY, fetcher, self._attach_geography)

    def _attach_geography(self, records: list) -> None:
        self.geo.attach(HierarchyIndex.build(records))

    def geo_options(self, level: str) -> list:
        if self.loader.is_loading(GEOGRAPHY_KEY):
            return []
        return self.geo.options_for(level)

    # ------------------------------------------------------------------
    # LCP → NAP → Port
    # ------------------------------------------------------------------

    def request_nodes(self) -> FetchTicket:
        self.ports.detach()
        return self.loader.request(NODES_KEY)

    def resolve_nodes(self, ticket: FetchTicket, nodes) -> bool:
        return self.loader.resolve(ticket, nodes, self._attach_nodes)

    def load_nodes(self, fetcher: Callable[[], list]) -> bool:
        self.ports.detach()
        return self.loader.load(NODES_KEY, fetcher, self._attach_nodes)

    def _attach_nodes(self, nodes: list) -> None:
        # Occupancy arrives per node through select_node.
        self.ports.attach(PortAllocationIndex(
            nodes,
            editing_service_order_id=self.context.editing_record_id,
            unloaded=[node.id for node in nodes],
        ))

    def select_lcp(self, lcp_name) -> None:
        self.ports.set_level(LCP, lcp_name)

    def select_node(self, node_id, occupancy_fetcher: Callable[[], list] | None = None) -> FetchTicket | None:
        """
        Select an LCP-NAP node. Occupancy is always re-fetched for the new
        node; with no fetcher the ticket is returned for a later
        ``resolve_occupancy`` or ``fail_occupancy``. Until it arrives, and
        for good if the fetch fails, the node offers no ports.
        """
        self.ports.set_level(NAP, node_id)
        if node_id is None:
            return None
        self._forget_occupancy(node_id)
        if occupancy_fetcher is None:
            return self.loader.request(occupancy_key(node_id))
        self.loader.load(
            occupancy_key(node_id), occupancy_fetcher,
            lambda slots: self._apply_occupancy(node_id, slots),
            on_failure=lambda: self._forget_occupancy(node_id),
        )
        return None

    def resolve_occupancy(self, ticket: FetchTicket, slots) -> bool:
        node_id = self.ports.value_of(NAP)
        if ticket.key != occupancy_key(node_id):
            self.loader.discard(ticket)
            return False
        return self.loader.resolve(ticket, slots, lambda s: self._apply_occupancy(node_id, s))

    def fail_occupancy(self, ticket: FetchTicket, exc: BaseException) -> bool:
        node_id = self.ports.value_of(NAP)
        if ticket.key != occupancy_key(node_id):
            self.loader.discard(ticket)
            return False
        return self.loader.fail(
            ticket, exc, lambda s: None,
            on_failure=lambda: self._forget_occupancy(node_id),
        )

    def _apply_occupancy(self, node_id, slots: list) -> None:
        index = self.ports.index
        if index is None:
            return
        self.ports.attach(index.with_occupancy(node_id, slots))

    def _forget_occupancy(self, node_id) -> None:
        index = self.ports.index
        if index is None:
            return
        self.ports.attach(index.without_occupancy(node_id))

    def select_port(self, port_number) -> None:
        self.ports.set_level(PORT, port_number)

    def port_options(self, level: str) -> list:
        if self.loader.is_loading(NODES_KEY):
            return []
        if level == PORT:
            node_id = self.ports.value_of(NAP)
            if node_id is not None and self.loader.is_loading(occupancy_key(node_id)):
                return []
        return self.ports.options_for(level)

    # ------------------------------------------------------------------
    # Validation & submission
    # ------------------------------------------------------------------

    def rules(self) -> list[ValidationRule]:
        if self.rules_factory is None:
            return []
        return list(self.rules_factory(self.context, geo=self.geo.index, ports=self.ports.index))

    def form_state(self, data: Mapping[str, Any]) -> dict[str, Any]:
        """Form data with blank cascade fields filled from the controllers."""
        state = dict(data)
        for level, value in self.geo.values().items():
            if value is not None and is_blank(state.get(level)):
                state[level] = value
        for level, value in self.ports.values().items():
            name = PORT_FIELD_MAP[level]
            if value is not None and is_blank(state.get(name)):
                state[name] = value
        return state

    def validate(self, data: Mapping[str, Any]) -> dict[str, str]:
        return ValidationEngine.validate(self.form_state(data), self.rules())

    def submit(self, data: Mapping[str, Any], submitter: Callable[[dict], Any]):
        state = self.form_state(data)
        errors = ValidationEngine.validate(state, self.rules())
        if errors:
            logger.info('Submission refused with %d error(s): %s', len(errors), sorted(errors))
            raise SubmissionRefused(errors)
        return submitter(state)
