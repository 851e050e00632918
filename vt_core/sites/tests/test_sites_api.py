# vt_core/sites/tests/test_sites_api.py
import pytest

from vt_core.buildings.models import Building
from vt_core.sites.models import Site

pytestmark = pytest.mark.django_db


def test_admin_creates_site(admin_client):
    res = admin_client.post("/api/v1/sites/", {"name": "East Clinic", "city": "Ogdenville"}, format="json")
    assert res.status_code == 201, res.json()

    body = res.json()
    assert body["name"] == "East Clinic"
    assert body["is_active"] is True
    assert Site.objects.filter(id=body["id"]).exists()


def test_nurse_cannot_create_site(nurse_client):
    res = nurse_client.post("/api/v1/sites/", {"name": "Rogue Site"}, format="json")
    assert res.status_code == 403
    assert res.json()["error"]["code"] == "permission_denied"
    assert not Site.objects.filter(name="Rogue Site").exists()


def test_duplicate_site_name_is_409(admin_client, site_north):
    res = admin_client.post("/api/v1/sites/", {"name": "north clinic"}, format="json")
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "duplicate"


def test_nurse_lists_only_scoped_sites(nurse_client, site_north, site_south):
    body = nurse_client.get("/api/v1/sites/").json()
    assert [s["id"] for s in body["items"]] == [site_north.id]


def test_nurse_gets_404_for_site_outside_scope(nurse_client, site_south):
    assert nurse_client.get(f"/api/v1/sites/{site_south.id}/").status_code == 404


def test_site_status_and_search_filters(admin_client, site_north, site_south):
    site_south.is_active = False
    site_south.save()

    active = admin_client.get("/api/v1/sites/", {"status": "active"}).json()["items"]
    assert [s["id"] for s in active] == [site_north.id]

    everything = admin_client.get("/api/v1/sites/", {"status": "all"}).json()
    assert everything["total"] == 2

    found = admin_client.get("/api/v1/sites/", {"search": "shelby"}).json()["items"]
    assert [s["id"] for s in found] == [site_south.id]


def test_single_field_patch_changes_only_that_field(admin_client, site_north):
    res = admin_client.patch(f"/api/v1/sites/{site_north.id}/", {"is_active": False}, format="json")
    assert res.status_code == 200

    site_north.refresh_from_db()
    assert site_north.is_active is False
    assert site_north.name == "North Clinic"
    assert site_north.city == "Springfield"


def test_empty_patch_is_rejected(admin_client, site_north):
    res = admin_client.put(f"/api/v1/sites/{site_north.id}/", {}, format="json")
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "nothing_to_update"


def test_delete_site_with_users_is_409_and_mutates_nothing(admin_client, site_north, wing_a, nurse_user):
    res = admin_client.delete(f"/api/v1/sites/{site_north.id}/")
    assert res.status_code == 409

    err = res.json()["error"]
    assert err["code"] == "in_use"
    assert err["details"] == {"users": 1, "patients": 0}

    assert Site.objects.filter(id=site_north.id).exists()
    assert Building.objects.filter(id=wing_a.id).exists()


def test_delete_site_with_patients_is_409(admin_client, site_south, make_patient):
    make_patient(site_south)
    res = admin_client.delete(f"/api/v1/sites/{site_south.id}/")
    assert res.status_code == 409
    assert res.json()["error"]["details"]["patients"] == 1


def test_delete_unreferenced_site_cascades_buildings(admin_client, site_south):
    b = Building.objects.create(site=site_south, name="Annex")
    res = admin_client.delete(f"/api/v1/sites/{site_south.id}/")
    assert res.status_code == 200
    assert res.json() == {"detail": "Site deleted."}
    assert not Building.objects.filter(id=b.id).exists()


def test_sites_and_buildings_nests_buildings(nurse_client, site_north, site_south, wing_a):
    Building.objects.create(site=site_south, name="Hidden")

    res = nurse_client.get("/api/v1/sites/sites-and-buildings/")
    assert res.status_code == 200
    assert res.json() == [
        {
            "id": site_north.id,
            "name": "North Clinic",
            "city": "Springfield",
            "state": "IL",
            "is_active": True,
            "buildings": [{"id": wing_a.id, "name": "Wing A", "is_active": True}],
        }
    ]
