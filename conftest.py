"""
ISP Forms — Root conftest for pytest

Shared fixtures available to all test modules.

@file conftest.py
"""

import pytest
from django.core.cache import cache
from rest_framework.test import APIClient

from tests.factories import (
    BarangayFactory,
    CityFactory,
    LocationFactory,
    RegionFactory,
    StaffUserFactory,
    SuperuserFactory,
    TechnicianFactory,
    UserFactory,
)


@pytest.fixture(autouse=True)
def clear_cache():
    """Geography reference data is cached; start every test cold."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def api_client():
    """Unauthenticated DRF test client."""
    return APIClient()


@pytest.fixture
def user(db):
    """Active user with default password TestPass2026!"""
    return UserFactory()


@pytest.fixture
def staff_user(db):
    return StaffUserFactory()


@pytest.fixture
def technician(db):
    """User in the ``technician`` group."""
    return TechnicianFactory()


@pytest.fixture
def admin_user(db):
    """Superuser with default password TestPass2026!"""
    return SuperuserFactory()


@pytest.fixture
def authenticated_client(api_client, user):
    """API client authenticated as a regular user."""
    api_client.force_authenticate(user=user)
    return api_client


@pytest.fixture
def staff_client(api_client, staff_user):
    api_client.force_authenticate(user=staff_user)
    return api_client


@pytest.fixture
def admin_client(api_client, admin_user):
    """API client authenticated as a superuser."""
    api_client.force_authenticate(user=admin_user)
    return api_client


@pytest.fixture
def geo_chain(db):
    """
    One region → city → barangay → location chain plus a sibling city
    with its own barangay, for cross-branch checks.
    """
    region = RegionFactory(name='NCR')
    city = CityFactory(name='Quezon City', parent=region)
    barangay = BarangayFactory(name='Bagumbayan', parent=city)
    location = LocationFactory(name='Purok 1', parent=barangay)
    other_city = CityFactory(name='Makati', parent=region)
    other_barangay = BarangayFactory(name='Poblacion', parent=other_city)
    return {
        'region': region,
        'city': city,
        'barangay': barangay,
        'location': location,
        'other_city': other_city,
        'other_barangay': other_barangay,
    }
