"""
Modal Forms — Rule Set Tests

@file modal_forms/tests/test_rulesets.py
"""

import pytest

from cascade.context import ModalContext
from cascade.hierarchy import GeoEntity, HierarchyIndex
from cascade.ports import PortAllocationIndex, PortNode, PortSlot
from cascade.validation import ValidationEngine
from modal_forms.rulesets import (
    application_visit_status_rules,
    discount_rules,
    get_ruleset,
    job_order_assign_rules,
    lcpnap_location_rules,
    rebate_rules,
    service_order_edit_rules,
)


@pytest.fixture
def geo():
    return HierarchyIndex.build([
        GeoEntity(1, 'NCR', 'region'),
        GeoEntity(10, 'Quezon City', 'city', 1),
        GeoEntity(11, 'Makati', 'city', 1),
        GeoEntity(100, 'Bagumbayan', 'barangay', 10),
        GeoEntity(110, 'Poblacion', 'barangay', 11),
        GeoEntity(1000, 'Purok 1', 'location', 100),
    ])


@pytest.fixture
def job_order():
    return {
        'timestamp': '2026-10-19 09:00',
        'status': 'Pending',
        'first_name': 'Maria',
        'last_name': 'Santos',
        'contact_number': '+63 917 555 0100',
        'email': 'maria@example.com',
        'address': '12 Mabini St.',
        'region': 1,
        'city': 10,
        'barangay': 100,
        'location': 1000,
        'choose_plan': 'Fiber 100',
        'installation_fee': '1500',
        'contract_template': 'Standard',
        'billing_day': '15',
        'is_last_day_of_month': False,
    }


def validate(rules, state):
    return ValidationEngine.validate(state, rules)


class TestJobOrderAssign:
    def test_complete_form_is_valid(self, geo, job_order):
        assert validate(job_order_assign_rules(ModalContext(), geo=geo), job_order) == {}

    def test_confirmed_needs_onsite_status_and_assignee(self, geo, job_order):
        job_order.update(status='Confirmed', onsite_status='', assigned_email='')
        errors = validate(job_order_assign_rules(ModalContext(), geo=geo), job_order)
        assert set(errors) == {'onsite_status', 'assigned_email'}

    def test_failed_onsite_needs_no_assignee(self, geo, job_order):
        job_order.update(status='Confirmed', onsite_status='Failed', assigned_email='')
        assert validate(job_order_assign_rules(ModalContext(), geo=geo), job_order) == {}

    @pytest.mark.parametrize('day, message', [
        ('0', 'Billing Day must be at least 1'),
        ('', 'Billing Day must be at least 1'),
        ('31', 'Billing Day cannot exceed 30'),
    ])
    def test_billing_day_bounds(self, geo, job_order, day, message):
        job_order['billing_day'] = day
        errors = validate(job_order_assign_rules(ModalContext(), geo=geo), job_order)
        assert errors == {'billing_day': message}

    def test_last_day_of_month_waives_billing_day(self, geo, job_order):
        job_order.update(billing_day='', is_last_day_of_month='true')
        assert validate(job_order_assign_rules(ModalContext(), geo=geo), job_order) == {}

    def test_billing_day_max_comes_from_context(self, geo, job_order):
        job_order['billing_day'] = '29'
        errors = validate(job_order_assign_rules(ModalContext(billing_day_max=28), geo=geo), job_order)
        assert errors == {'billing_day': 'Billing Day cannot exceed 28'}

    def test_required_before_format(self, geo, job_order):
        job_order.update(email='', contact_number='call me')
        errors = validate(job_order_assign_rules(ModalContext(), geo=geo), job_order)
        assert errors == {
            'email': 'Email is required',
            'contact_number': 'Please enter a valid contact number',
        }

    def test_location_must_follow_chain(self, geo, job_order):
        job_order.update(city=11, barangay=110)
        errors = validate(job_order_assign_rules(ModalContext(), geo=geo), job_order)
        assert errors == {'location': 'Location does not belong to the selected barangay'}

    def test_negative_installation_fee(self, geo, job_order):
        job_order['installation_fee'] = '-1'
        errors = validate(job_order_assign_rules(ModalContext(), geo=geo), job_order)
        assert list(errors) == ['installation_fee']


class TestApplicationVisitStatus:
    def test_technician_fields(self):
        errors = validate(application_visit_status_rules(ModalContext(user_role='Technician')), {})
        assert set(errors) == {'image1', 'visit_by', 'visit_with', 'visit_with_other'}

    def test_office_staff_assigns(self):
        errors = validate(application_visit_status_rules(ModalContext(user_role='staff')), {})
        assert errors == {'assigned_email': 'Assigned Email is required'}


class TestServiceOrderEdit:
    @pytest.fixture
    def ports(self):
        node = PortNode(id=7, lcp_name='LCP-01', nap_name='NAP-03', port_total=8)
        slots = [
            PortSlot(node_id=7, port_number=1, occupant_service_order_id=901),
            PortSlot(node_id=7, port_number=4, occupant_service_order_id=42),
        ]
        return PortAllocationIndex([node], slots, editing_service_order_id=42)

    def visit(self, **fields):
        state = {
            'support_status': 'For Visit',
            'repair_category': 'Transfer LCP/NAP/PORT',
            'assigned_email': 'tech@isp.test',
        }
        state.update(fields)
        return state

    def test_own_port_is_fine(self, ports):
        rules = service_order_edit_rules(ModalContext(editing_record_id=42), ports=ports)
        assert validate(rules, self.visit(lcpnap=7, port=4)) == {}

    def test_taken_port(self, ports):
        rules = service_order_edit_rules(ModalContext(editing_record_id=42), ports=ports)
        assert validate(rules, self.visit(lcpnap=7, port=1)) == {'port': 'Port is already in use'}

    def test_unknown_occupancy_blocks_every_port(self, ports):
        unloaded = ports.without_occupancy(7)
        rules = service_order_edit_rules(ModalContext(editing_record_id=42), ports=unloaded)
        assert validate(rules, self.visit(lcpnap=7, port=5)) == {
            'port': 'Port availability could not be loaded',
        }

    def test_transfer_requires_node_and_port(self, ports):
        rules = service_order_edit_rules(ModalContext(), ports=ports)
        assert set(validate(rules, self.visit())) == {'lcpnap', 'port'}

    def test_non_transfer_category_ignores_port(self, ports):
        rules = service_order_edit_rules(ModalContext(), ports=ports)
        assert validate(rules, self.visit(repair_category='Resplice', port=1, lcpnap=7)) == {}

    def test_update_vlan(self):
        errors = validate(service_order_edit_rules(ModalContext()), self.visit(repair_category='Update Vlan'))
        assert errors == {'new_vlan': 'New VLAN is required'}

    def test_status_required(self):
        assert validate(service_order_edit_rules(ModalContext()), {}) == {
            'support_status': 'Support Status is required',
        }


class TestLcpNapLocation:
    def test_allowed_totals_come_from_context(self):
        state = {
            'lcp_name': 'LCP-01', 'nap_name': 'NAP-01', 'lcpnap_name': 'LCP-01 NAP-01',
            'port_total': '24', 'coordinates': '14.5, 121.0',
        }
        assert validate(lcpnap_location_rules(ModalContext()), state) == {
            'port_total': 'PORT TOTAL must be one of 8, 16, 32',
        }
        assert validate(lcpnap_location_rules(ModalContext(port_totals=(24,))), state) == {}


class TestDiscountAndRebate:
    def test_monthly_discount_needs_remaining_cycles(self):
        state = {
            'account_no': 'ACC-1', 'discount_amount': '100', 'processed_by': 'a',
            'approved_by': 'b', 'status': 'Monthly', 'remaining': '0',
        }
        assert list(validate(discount_rules(ModalContext()), state)) == ['remaining']

    def test_zero_discount(self):
        state = {'account_no': 'ACC-1', 'discount_amount': '0', 'processed_by': 'a', 'approved_by': 'b'}
        assert validate(discount_rules(ModalContext()), state) == {
            'discount_amount': 'Discount Amount must be greater than 0',
        }

    def test_rebate_selection_depends_on_type(self):
        state = {'number_of_days': '3', 'rebate_type': 'lcpnap', 'month': 'October', 'approved_by': 'b'}
        assert validate(rebate_rules(ModalContext()), state) == {
            'selected_id': 'Please select an item from the dropdown',
        }


class TestRegistry:
    def test_lookup(self):
        assert get_ruleset('service_order_edit') is service_order_edit_rules
        assert get_ruleset('nope') is None
