# vt_core/tests/test_pagination.py
import pytest

pytestmark = pytest.mark.django_db


@pytest.fixture
def seven_patients(make_patient, site_north):
    return [make_patient(site_north, first_name=f"P{i}", last_name="Paged") for i in range(7)]


def test_default_page_shape(admin_client, seven_patients):
    res = admin_client.get("/api/v1/patients/")
    assert res.status_code == 200

    body = res.json()
    assert set(body) == {"items", "total", "page", "limit", "totalPages"}
    assert body["total"] == 7
    assert body["page"] == 1
    assert body["limit"] == 50
    assert body["totalPages"] == 1
    assert len(body["items"]) == 7


def test_total_pages_is_ceiling(admin_client, seven_patients):
    body = admin_client.get("/api/v1/patients/", {"limit": 3, "page": 3}).json()
    assert body["totalPages"] == 3
    assert len(body["items"]) == 1


def test_page_beyond_range_is_empty_with_same_total(admin_client, seven_patients):
    res = admin_client.get("/api/v1/patients/", {"limit": 3, "page": 9})
    assert res.status_code == 200
    body = res.json()
    assert body["items"] == []
    assert body["total"] == 7


def test_limit_is_capped(admin_client, seven_patients):
    body = admin_client.get("/api/v1/patients/", {"limit": 10_000}).json()
    assert body["limit"] == 500


@pytest.mark.parametrize("params", [{"page": 0}, {"page": "x"}, {"limit": -1}])
def test_invalid_page_params_are_400(admin_client, params):
    res = admin_client.get("/api/v1/patients/", params)
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "validation_error"


def test_pages_do_not_overlap(admin_client, seven_patients):
    first = admin_client.get("/api/v1/patients/", {"limit": 4, "page": 1}).json()["items"]
    second = admin_client.get("/api/v1/patients/", {"limit": 4, "page": 2}).json()["items"]
    ids = [p["id"] for p in first + second]
    assert len(ids) == len(set(ids)) == 7
