# vt_core/conftest.py
import pytest
from rest_framework.test import APIClient

from vt_core.buildings.models import Building
from vt_core.iam.models import Role
from vt_core.iam.services.users import UserService
from vt_core.patients.models import Patient
from vt_core.sites.models import Site
from vt_core.tests.helpers import client_for


@pytest.fixture
def site_north(db):
    return Site.objects.create(name="North Clinic", city="Springfield", state="IL")


@pytest.fixture
def site_south(db):
    return Site.objects.create(name="South Clinic", city="Shelbyville", state="IL")


@pytest.fixture
def wing_a(site_north):
    return Building.objects.create(site=site_north, name="Wing A")


@pytest.fixture
def make_user(db):
    """
    Factory for app users (auth_user + UserProfile) created through the
    same service the API uses.
    """
    counter = {"n": 0}

    def _make(role=Role.NURSE, *, primary_site=None, assigned_sites=(), email=None, password="Pass@12345", **kwargs):
        counter["n"] += 1
        return UserService.create(
            email=email or f"{role}{counter['n']}@example.com",
            password=password,
            first_name=kwargs.pop("first_name", "Test"),
            last_name=kwargs.pop("last_name", f"User{counter['n']}"),
            role=role,
            primary_site_id=primary_site.id if primary_site else None,
            assigned_site_ids=[s.id for s in assigned_sites],
            **kwargs,
        )

    return _make


@pytest.fixture
def admin_user(make_user):
    return make_user(Role.ADMIN, email="admin@example.com", first_name="Ada", last_name="Admin")


@pytest.fixture
def nurse_user(make_user, site_north):
    return make_user(Role.NURSE, primary_site=site_north, email="nurse@example.com", first_name="Nina", last_name="Nurse")


@pytest.fixture
def admin_client(admin_user):
    return client_for(admin_user)


@pytest.fixture
def nurse_client(nurse_user):
    return client_for(nurse_user)


@pytest.fixture
def anon_client():
    return APIClient()


@pytest.fixture
def make_patient(db):
    def _make(site, first_name="Test", last_name="Patient", **kwargs):
        return Patient.objects.create(site=site, first_name=first_name, last_name=last_name, **kwargs)

    return _make
