# vt_core/tests/test_scope_enforcement.py
import pytest

from vt_core.iam.models import Role
from vt_core.iam.scope import ALL_SITES, effective_scope, scope_for_claims
from vt_core.patients.models import Patient
from vt_core.tests.helpers import client_for

pytestmark = pytest.mark.django_db


def test_admin_scope_is_unrestricted(admin_user):
    assert effective_scope(admin_user) == ALL_SITES


def test_primary_site_is_always_in_scope(make_user, site_north, site_south):
    user = make_user(Role.PHARMACIST, primary_site=site_north, assigned_sites=[site_south])
    scope = effective_scope(user)
    assert scope.site_ids == frozenset({site_north.id, site_south.id})

    # even when the assignment list does not repeat it
    scope = scope_for_claims(role="nurse", primary_site_id=7, assigned_site_ids=[])
    assert scope.allows(7)
    assert not scope.allows(8)


def test_empty_scope_lists_nothing():
    scope = scope_for_claims(role="nurse", primary_site_id=None, assigned_site_ids=[])
    assert scope.filter(Patient.objects.all()).count() == 0


def test_nurse_lists_only_scoped_patients(nurse_client, make_patient, site_north, site_south):
    mine = make_patient(site_north, first_name="Mine")
    make_patient(site_south, first_name="Theirs")

    body = nurse_client.get("/api/v1/patients/").json()
    assert [p["id"] for p in body["items"]] == [mine.id]
    assert body["total"] == 1


def test_out_of_scope_patient_is_404_not_403(nurse_client, make_patient, site_south):
    other = make_patient(site_south)

    url = f"/api/v1/patients/{other.id}/"
    responses = [
        nurse_client.get(url),
        nurse_client.patch(url, {"first_name": "X"}, format="json"),
        nurse_client.delete(url),
    ]
    for res in responses:
        assert res.status_code == 404
        assert res.json()["error"]["code"] == "not_found"

    assert Patient.objects.filter(id=other.id, first_name="Test").exists()


def test_out_of_scope_and_absent_look_identical(nurse_client, make_patient, site_south):
    other = make_patient(site_south)
    hidden = nurse_client.get(f"/api/v1/patients/{other.id}/").json()["error"]
    absent = nurse_client.get("/api/v1/patients/999999/").json()["error"]
    assert (hidden["code"], hidden["message"]) == (absent["code"], absent["message"])


def test_scope_follows_assignment_claims(make_user, make_patient, site_north, site_south):
    south_patient = make_patient(site_south)
    user = make_user(Role.NURSE, primary_site=site_north, assigned_sites=[site_south])

    res = client_for(user).get(f"/api/v1/patients/{south_patient.id}/")
    assert res.status_code == 200


def test_unknown_and_out_of_scope_site_look_identical_on_create(nurse_client, site_south):
    payload = {"first_name": "A", "last_name": "B"}
    hidden = nurse_client.post("/api/v1/patients/", {**payload, "site_id": site_south.id}, format="json")
    absent = nurse_client.post("/api/v1/patients/", {**payload, "site_id": 999999}, format="json")

    assert hidden.status_code == absent.status_code == 404
    assert hidden.json()["error"]["message"] == absent.json()["error"]["message"]
    assert not Patient.objects.exists()
