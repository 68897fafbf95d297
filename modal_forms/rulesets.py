"""
Modal Forms — Rule Sets

Declarative validation rules for every back-office modal. Each builder
takes the modal's ModalContext (plus the geographic and port indexes
when the form has those pickers) and returns an ordered rule list.
Required-field rules come before format rules for the same field: the
engine keeps the first message that fires.

@file modal_forms/rulesets.py
"""

from cascade.context import ModalContext
from cascade.validation import (
    ValidationRule,
    check,
    field_equals,
    field_in,
    is_blank,
    matches,
    required,
    text,
    to_decimal,
    to_int,
    when,
)
from core.constants import PORT_TRANSFER_CATEGORIES, SUPPORT_STATUS_FOR_VISIT

CONTACT_NUMBER_PATTERN = r'^[0-9+\-\s()]+$'
EMAIL_PATTERN = r'^[^\s@]+@[^\s@]+\.[^\s@]+$'
COORDINATES_PATTERN = r'^-?\d+(\.\d+)?\s*,\s*-?\d+(\.\d+)?$'

GEO_FIELDS = ('region', 'city', 'barangay')

TRUTHY = {'1', 'true', 'yes', 'on'}


def is_truthy(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in TRUTHY
    return bool(value)


def location_matches_chain(state, geo) -> bool:
    """
    True when the selected location sits under the selected barangay,
    city and region. Unknown ids and an unloaded index pass: the cascade
    pickers only ever offer children of the current selection.
    """
    if geo is None or is_blank(state.get('location')):
        return True
    location_id = to_int(state.get('location'))
    path = {entity.kind: entity.id for entity in geo.ancestors(location_id)}
    if not path:
        return True
    for kind in GEO_FIELDS:
        selected = to_int(state.get(kind))
        if selected is not None and path.get(kind) != selected:
            return False
    return True


def geography_rules(geo=None) -> list[ValidationRule]:
    return [
        required('region', 'Region is required'),
        required('city', 'City is required'),
        required('barangay', 'Barangay is required'),
        required('location', 'Location is required'),
        check(
            'location',
            lambda state: not location_matches_chain(state, geo),
            'Location does not belong to the selected barangay',
        ),
    ]


# ---------------------------------------------------------------------------
# Job order assignment
# ---------------------------------------------------------------------------

def job_order_assign_rules(context: ModalContext, geo=None, **kwargs) -> list[ValidationRule]:
    billing_day_max = context.billing_day_max

    def billing_day_too_low(state):
        day = to_int(state.get('billing_day'))
        return day is None or day < 1

    def billing_day_too_high(state):
        day = to_int(state.get('billing_day'))
        return day is not None and day > billing_day_max

    not_last_day = lambda state: not is_truthy(state.get('is_last_day_of_month'))  # noqa: E731
    confirmed = field_equals('status', 'Confirmed')

    return [
        required('timestamp', 'Timestamp is required'),
        required('status', 'Status is required'),
        required('first_name', 'First Name is required'),
        required('last_name', 'Last Name is required'),
        required('contact_number', 'Contact Number is required'),
        matches('contact_number', CONTACT_NUMBER_PATTERN, 'Please enter a valid contact number'),
        required('email', 'Email is required'),
        matches('email', EMAIL_PATTERN, 'Please enter a valid email address'),
        required('address', 'Address is required'),
        *geography_rules(geo),
        required('choose_plan', 'Choose Plan is required'),
        check(
            'installation_fee',
            lambda state: (to_decimal(state.get('installation_fee')) or 0) < 0,
            'Installation fee cannot be negative',
        ),
        required('contract_template', 'Contract Template is required'),
        *when(
            not_last_day,
            check('billing_day', billing_day_too_low, 'Billing Day must be at least 1'),
            check('billing_day', billing_day_too_high, f'Billing Day cannot exceed {billing_day_max}'),
        ),
        *when(
            confirmed,
            required('onsite_status', 'Onsite Status is required when status is Confirmed'),
            check(
                'assigned_email',
                lambda state: text(state, 'onsite_status') != 'Failed' and is_blank(state.get('assigned_email')),
                'Assigned Email is required when onsite status is not Failed',
            ),
        ),
    ]


# ---------------------------------------------------------------------------
# Application visit status
# ---------------------------------------------------------------------------

def application_visit_status_rules(context: ModalContext, **kwargs) -> list[ValidationRule]:
    if context.is_technician:
        return [
            required('image1', 'Image is required'),
            required('visit_by', 'Visit By is required'),
            required('visit_with', 'Visit With is required'),
            required('visit_with_other', 'Visit With (Other) is required'),
        ]
    return [
        required('assigned_email', 'Assigned Email is required'),
    ]


# ---------------------------------------------------------------------------
# Service order edit
# ---------------------------------------------------------------------------

def port_taken(state, ports) -> bool:
    if ports is None:
        return False
    node_id = to_int(state.get('lcpnap'))
    port_number = to_int(state.get('port'))
    if node_id is None or port_number is None or ports.get(node_id) is None:
        return False
    return not ports.is_available(node_id, port_number)


def occupancy_unknown(state, ports) -> bool:
    if ports is None:
        return False
    node_id = to_int(state.get('lcpnap'))
    if node_id is None or ports.get(node_id) is None:
        return False
    return not ports.occupancy_known(node_id)


def unknown_node(state, ports) -> bool:
    node_id = to_int(state.get('lcpnap'))
    return ports is not None and node_id is not None and ports.get(node_id) is None


def service_order_edit_rules(context: ModalContext, ports=None, **kwargs) -> list[ValidationRule]:
    for_visit = field_equals('support_status', SUPPORT_STATUS_FOR_VISIT)

    def transfers_port(state):
        return for_visit(state) and state.get('repair_category') in PORT_TRANSFER_CATEGORIES

    def category(*names):
        wanted = field_in('repair_category', names)
        return lambda state: for_visit(state) and wanted(state)

    return [
        required('support_status', 'Support Status is required'),
        *when(
            for_visit,
            required('assigned_email', 'Assigned Email is required for a visit'),
            required('repair_category', 'Repair Category is required for a visit'),
        ),
        *when(
            transfers_port,
            required('lcpnap', 'LCP-NAP is required'),
            check('lcpnap', lambda state: unknown_node(state, ports), 'LCP-NAP not found'),
            required('port', 'Port is required'),
            check(
                'port', lambda state: occupancy_unknown(state, ports),
                'Port availability could not be loaded',
            ),
            check('port', lambda state: port_taken(state, ports), 'Port is already in use'),
        ),
        *when(
            category('Migrate', 'Replace Router'),
            required('new_router_sn', 'New Router SN is required'),
        ),
        *when(
            category('Update Vlan'),
            required('new_vlan', 'New VLAN is required'),
        ),
    ]


# ---------------------------------------------------------------------------
# LCP-NAP location
# ---------------------------------------------------------------------------

def lcpnap_location_rules(context: ModalContext, geo=None, **kwargs) -> list[ValidationRule]:
    allowed = context.port_totals
    allowed_label = ', '.join(str(total) for total in allowed)

    def geo_present(state):
        return any(not is_blank(state.get(kind)) for kind in (*GEO_FIELDS, 'location'))

    return [
        required('lcp_name', 'LCP is required'),
        required('nap_name', 'NAP is required'),
        required('port_total', 'PORT TOTAL is required'),
        check(
            'port_total',
            lambda state: to_int(state.get('port_total')) not in allowed,
            f'PORT TOTAL must be one of {allowed_label}',
        ),
        required('lcpnap_name', 'LCPNAP is required'),
        required('coordinates', 'Coordinates is required'),
        matches('coordinates', COORDINATES_PATTERN, 'Coordinates must be "latitude, longitude"'),
        *when(geo_present, *geography_rules(geo)),
    ]


# ---------------------------------------------------------------------------
# Discounts & rebates
# ---------------------------------------------------------------------------

def discount_rules(context: ModalContext, **kwargs) -> list[ValidationRule]:
    def remaining_missing(state):
        remaining = to_int(state.get('remaining'))
        return remaining is None or remaining <= 0

    return [
        required('account_no', 'Account No. is required'),
        required('discount_amount', 'Discount Amount is required'),
        check(
            'discount_amount',
            lambda state: (to_decimal(state.get('discount_amount')) or 0) <= 0,
            'Discount Amount must be greater than 0',
        ),
        required('processed_by', 'Processed By is required'),
        required('approved_by', 'Approved By is required'),
        *when(
            field_equals('status', 'Monthly'),
            check('remaining', remaining_missing, 'Remaining cycles must be greater than 0 for Monthly discounts'),
        ),
    ]


def rebate_rules(context: ModalContext, **kwargs) -> list[ValidationRule]:
    return [
        check(
            'number_of_days',
            lambda state: (to_int(state.get('number_of_days')) or 0) <= 0,
            'Number of Days must be greater than 0',
        ),
        required('rebate_type', 'Please select a rebate type'),
        *when(
            lambda state: not is_blank(state.get('rebate_type')),
            required('selected_id', 'Please select an item from the dropdown'),
        ),
        required('month', 'Please select a month'),
        required('approved_by', 'Approved By is required'),
    ]


FORM_RULESETS = {
    'job_order_assign': job_order_assign_rules,
    'application_visit_status': application_visit_status_rules,
    'service_order_edit': service_order_edit_rules,
    'lcpnap_location': lcpnap_location_rules,
    'discount': discount_rules,
    'rebate': rebate_rules,
}


def get_ruleset(name: str):
    return FORM_RULESETS.get(name)
