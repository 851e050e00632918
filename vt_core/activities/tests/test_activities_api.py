# vt_core/activities/tests/test_activities_api.py
from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model

from vt_core.activities.models import Activity
from vt_core.tests.helpers import client_for

pytestmark = pytest.mark.django_db


@pytest.fixture
def maria(make_patient, site_north, wing_a):
    return make_patient(site_north, first_name="Maria", last_name="Lopez", building=wing_a)


def test_create_records_actor_and_keeps_fractional_minutes(nurse_client, nurse_user, maria):
    res = nurse_client.post(
        "/api/v1/activities/",
        {
            "patient_id": maria.id,
            "activity_type": "Medication review",
            "duration_minutes": 1.5,
            "pharm_flag": True,
            "notes": "Checked dosage",
            "service_datetime": "2024-05-01T10:00:00Z",
            "service_endtime": "2024-05-01T10:30:00Z",
            # the payload cannot pick the author
            "user_id": 999,
        },
        format="json",
    )
    assert res.status_code == 201, res.json()

    body = res.json()
    assert body["duration_minutes"] == 1.5
    assert body["user_id"] == nurse_user.id
    assert body["user_initials"] == "NN"
    assert body["patient_name"] == "Maria Lopez"
    assert body["site_name"] == "North Clinic"
    assert body["building_name"] == "Wing A"

    stored = Activity.objects.get(id=body["id"])
    assert stored.duration_minutes == Decimal("1.50")
    assert nurse_client.get(f"/api/v1/activities/{stored.id}/").json()["duration_minutes"] == 1.5


def test_extra_minute_decimals_are_rounded(nurse_client, maria):
    res = nurse_client.post(
        "/api/v1/activities/",
        {"patient_id": maria.id, "activity_type": "Visit", "duration_minutes": 1.6667},
        format="json",
    )
    assert res.status_code == 201, res.json()
    assert res.json()["duration_minutes"] == 1.67
    assert Activity.objects.get(id=res.json()["id"]).duration_minutes == Decimal("1.67")

    res = nurse_client.post(
        "/api/v1/activities/",
        {"patient_id": maria.id, "activity_type": "Visit", "duration_minutes": "2.005"},
        format="json",
    )
    assert res.status_code == 201, res.json()
    assert res.json()["duration_minutes"] == 2.01


def test_end_before_start_is_400(nurse_client, maria):
    res = nurse_client.post(
        "/api/v1/activities/",
        {
            "patient_id": maria.id,
            "activity_type": "Visit",
            "service_datetime": "2024-05-01T10:00:00Z",
            "service_endtime": "2024-05-01T09:00:00Z",
        },
        format="json",
    )
    assert res.status_code == 400
    assert not Activity.objects.exists()


def test_negative_duration_is_400(nurse_client, maria):
    res = nurse_client.post(
        "/api/v1/activities/",
        {"patient_id": maria.id, "activity_type": "Visit", "duration_minutes": -3},
        format="json",
    )
    assert res.status_code == 400


def test_patch_end_before_existing_start_is_400(nurse_client, nurse_user, maria):
    activity = Activity.objects.create(
        patient=maria,
        user=nurse_user,
        activity_type="Visit",
        service_datetime="2024-05-01T10:00:00Z",
    )
    res = nurse_client.patch(
        f"/api/v1/activities/{activity.id}/",
        {"service_endtime": "2024-05-01T08:00:00Z"},
        format="json",
    )
    assert res.status_code == 400

    activity.refresh_from_db()
    assert activity.service_endtime is None


def test_form_patch_keeps_pharm_flag(nurse_client, nurse_user, maria):
    activity = Activity.objects.create(patient=maria, user=nurse_user, activity_type="Visit", pharm_flag=True)

    res = nurse_client.patch(f"/api/v1/activities/{activity.id}/", {"notes": "x"}, format="multipart")
    assert res.status_code == 200

    activity.refresh_from_db()
    assert (activity.notes, activity.pharm_flag) == ("x", True)


def test_activity_for_patient_outside_scope_is_404(nurse_client, make_patient, site_south):
    stranger = make_patient(site_south)
    res = nurse_client.post(
        "/api/v1/activities/",
        {"patient_id": stranger.id, "activity_type": "Visit"},
        format="json",
    )
    assert res.status_code == 404


def test_token_for_deleted_account_cannot_record(make_user, site_north, maria):
    ghost = make_user(primary_site=site_north)
    c = client_for(ghost)
    get_user_model().objects.filter(id=ghost.id).delete()

    res = c.post("/api/v1/activities/", {"patient_id": maria.id, "activity_type": "Visit"}, format="json")
    assert res.status_code == 401
    assert not Activity.objects.exists()


def test_list_is_scoped_and_filterable(admin_client, nurse_client, nurse_user, maria, make_patient, site_south):
    other = make_patient(site_south, first_name="Sam", last_name="South")
    mine = Activity.objects.create(patient=maria, user=nurse_user, activity_type="Visit", pharm_flag=True)
    Activity.objects.create(patient=maria, user=nurse_user, activity_type="Call")
    Activity.objects.create(patient=other, user=nurse_user, activity_type="Visit")

    assert nurse_client.get("/api/v1/activities/").json()["total"] == 2
    assert admin_client.get("/api/v1/activities/").json()["total"] == 3

    flagged = nurse_client.get("/api/v1/activities/", {"pharm_flag": "true"}).json()["items"]
    assert [a["id"] for a in flagged] == [mine.id]

    visits = admin_client.get("/api/v1/activities/", {"activity_type": "visit", "site": maria.site_id}).json()
    assert [a["id"] for a in visits["items"]] == [mine.id]

    by_name = admin_client.get("/api/v1/activities/", {"search": "aria lop"}).json()
    assert by_name["total"] == 2


def test_activities_by_patient_newest_first(nurse_client, nurse_user, maria):
    old = Activity.objects.create(patient=maria, user=nurse_user, activity_type="A", service_datetime="2024-01-01T00:00:00Z")
    new = Activity.objects.create(patient=maria, user=nurse_user, activity_type="B", service_datetime="2024-06-01T00:00:00Z")

    res = nurse_client.get(f"/api/v1/activities/patient/{maria.id}/")
    assert res.status_code == 200
    assert [a["id"] for a in res.json()] == [new.id, old.id]


def test_batch_only_returns_patients_in_scope(nurse_client, nurse_user, maria, make_patient, site_north, site_south):
    quiet = make_patient(site_north, first_name="Quiet")
    stranger = make_patient(site_south)
    visit = Activity.objects.create(patient=maria, user=nurse_user, activity_type="Visit")
    Activity.objects.create(patient=stranger, user=nurse_user, activity_type="Visit")

    res = nurse_client.post(
        "/api/v1/activities/batch/",
        {"patient_ids": [maria.id, quiet.id, stranger.id, 999999]},
        format="json",
    )
    assert res.status_code == 200

    body = res.json()
    assert set(body) == {str(maria.id), str(quiet.id)}
    assert [a["id"] for a in body[str(maria.id)]] == [visit.id]
    assert body[str(quiet.id)] == []


def test_delete_activity(nurse_client, nurse_user, maria):
    activity = Activity.objects.create(patient=maria, user=nurse_user, activity_type="Visit")
    res = nurse_client.delete(f"/api/v1/activities/{activity.id}/")
    assert res.status_code == 200
    assert not Activity.objects.filter(id=activity.id).exists()
