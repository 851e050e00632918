# vt_core/buildings/tests/test_buildings_api.py
import pytest

from vt_core.buildings.models import Building
from vt_core.patients.models import Patient

pytestmark = pytest.mark.django_db


def test_admin_creates_building(admin_client, site_north):
    res = admin_client.post("/api/v1/buildings/", {"name": "Wing B", "site_id": site_north.id}, format="json")
    assert res.status_code == 201, res.json()
    body = res.json()
    assert body["site_id"] == site_north.id
    assert body["site_name"] == "North Clinic"


def test_building_name_unique_per_site(admin_client, wing_a, site_north, site_south):
    dup = admin_client.post("/api/v1/buildings/", {"name": "Wing A", "site_id": site_north.id}, format="json")
    assert dup.status_code == 409

    other_site = admin_client.post("/api/v1/buildings/", {"name": "Wing A", "site_id": site_south.id}, format="json")
    assert other_site.status_code == 201


def test_building_for_unknown_site_is_400(admin_client):
    res = admin_client.post("/api/v1/buildings/", {"name": "Nowhere", "site_id": 424242}, format="json")
    assert res.status_code == 400


def test_nurse_cannot_write_buildings(nurse_client, wing_a):
    res = nurse_client.patch(f"/api/v1/buildings/{wing_a.id}/", {"name": "Renamed"}, format="json")
    assert res.status_code == 403


def test_buildings_by_site(nurse_client, site_north, site_south, wing_a):
    Building.objects.create(site=site_north, name="Annex")
    Building.objects.create(site=site_south, name="South Wing")

    res = nurse_client.get(f"/api/v1/buildings/site/{site_north.id}/")
    assert res.status_code == 200
    assert [b["name"] for b in res.json()] == ["Annex", "Wing A"]

    assert nurse_client.get(f"/api/v1/buildings/site/{site_south.id}/").status_code == 404


def test_delete_building_nulls_patient_building(admin_client, site_north, wing_a, make_patient):
    patient = make_patient(site_north, building=wing_a)

    res = admin_client.delete(f"/api/v1/buildings/{wing_a.id}/")
    assert res.status_code == 200

    patient.refresh_from_db()
    assert patient.building_id is None
    assert Patient.objects.filter(id=patient.id).exists()


def test_building_list_filters_by_site(admin_client, site_north, site_south, wing_a):
    Building.objects.create(site=site_south, name="South Wing")
    items = admin_client.get("/api/v1/buildings/", {"site": site_north.id}).json()["items"]
    assert [b["id"] for b in items] == [wing_a.id]
