"""
Service Orders — API Tests

@file service_orders/tests/test_views.py
"""

import pytest
from django.urls import reverse

from tests.factories import LcpNapNodeFactory, ServiceOrderFactory

LIST_URL = reverse('api-v1:service_orders:service-order-list')


def detail_url(order):
    return reverse('api-v1:service_orders:service-order-detail', args=[order.pk])


@pytest.fixture
def node(db):
    return LcpNapNodeFactory(lcp_name='LCP-01', nap_name='NAP-03')


@pytest.fixture
def order(node):
    ServiceOrderFactory(lcpnap=node, port_number=1)
    return ServiceOrderFactory(lcpnap=node, port_number=2, account_no='ACC-777')


@pytest.mark.django_db
class TestServiceOrderAPI:
    def test_requires_authentication(self, api_client):
        assert api_client.get(LIST_URL).status_code == 401

    def test_list_and_search(self, authenticated_client, order):
        response = authenticated_client.get(LIST_URL, {'search': 'ACC-777'})
        body = response.json()
        assert body['meta']['count'] == 1
        assert body['data'][0]['lcpnap_name'] == 'LCP-01 NAP-03'

    def test_patch_transfer_to_free_port(self, authenticated_client, node, order):
        response = authenticated_client.patch(detail_url(order), {
            'support_status': 'For Visit',
            'repair_category': 'Transfer LCP/NAP/PORT',
            'assigned_email': 'tech@isp.test',
            'lcpnap': node.pk,
            'port': 5,
        }, format='json')
        assert response.status_code == 200
        assert response.json()['data']['port_number'] == 5

    def test_patch_keeping_own_port(self, authenticated_client, node, order):
        response = authenticated_client.patch(detail_url(order), {
            'support_status': 'For Visit',
            'repair_category': 'Relocate',
            'assigned_email': 'tech@isp.test',
            'port': 2,
        }, format='json')
        assert response.status_code == 200

    def test_patch_to_taken_port(self, authenticated_client, node, order):
        response = authenticated_client.patch(detail_url(order), {
            'support_status': 'For Visit',
            'repair_category': 'Migrate',
            'assigned_email': 'tech@isp.test',
            'port': 1,
        }, format='json')
        body = response.json()
        assert response.status_code == 400
        assert body['errors'] == {
            'port': ['Port is already in use'],
            'new_router_sn': ['New Router SN is required'],
        }

    def test_patch_invalid_type(self, authenticated_client, order):
        response = authenticated_client.patch(detail_url(order), {'port': 'abc'}, format='json')
        assert response.status_code == 400

    def test_delete_not_routed(self, authenticated_client, order):
        assert authenticated_client.delete(detail_url(order)).status_code == 405
