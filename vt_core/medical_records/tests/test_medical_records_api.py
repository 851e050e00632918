# vt_core/medical_records/tests/test_medical_records_api.py
import pytest

from vt_core.medical_records.models import MedicalRecord

pytestmark = pytest.mark.django_db


@pytest.fixture
def patient(make_patient, site_north):
    return make_patient(site_north, first_name="Maria", last_name="Lopez")


def test_create_defaults_unspecified_flags_to_false(nurse_client, patient):
    res = nurse_client.post(
        "/api/v1/medical-records/",
        {"patient_id": patient.id, "records_reviewed": True, "opioids": True},
        format="json",
    )
    assert res.status_code == 201, res.json()

    body = res.json()
    assert body["records_reviewed"] is True
    assert body["opioids"] is True
    assert body["bp_at_goal"] is False
    assert body["fall_since_last_visit"] is False
    assert body["patient_name"] == "Maria Lopez"


def test_latest_for_patient(nurse_client, patient):
    MedicalRecord.objects.create(patient=patient, bp_at_goal=False)
    newest = MedicalRecord.objects.create(patient=patient, bp_at_goal=True)

    res = nurse_client.get(f"/api/v1/medical-records/patient/{patient.id}/latest/")
    assert res.status_code == 200
    assert res.json()["id"] == newest.id


def test_latest_without_records_is_404(nurse_client, patient):
    res = nurse_client.get(f"/api/v1/medical-records/patient/{patient.id}/latest/")
    assert res.status_code == 404


def test_records_by_patient_and_scope(nurse_client, patient, make_patient, site_south):
    first = MedicalRecord.objects.create(patient=patient)
    second = MedicalRecord.objects.create(patient=patient)
    stranger = make_patient(site_south)
    hidden = MedicalRecord.objects.create(patient=stranger)

    res = nurse_client.get(f"/api/v1/medical-records/patient/{patient.id}/")
    assert [r["id"] for r in res.json()] == [second.id, first.id]

    assert nurse_client.get(f"/api/v1/medical-records/patient/{stranger.id}/").status_code == 404
    assert nurse_client.get(f"/api/v1/medical-records/{hidden.id}/").status_code == 404
    assert nurse_client.get("/api/v1/medical-records/").json()["total"] == 2


def test_patch_false_is_an_update(nurse_client, patient):
    record = MedicalRecord.objects.create(patient=patient, records_reviewed=True, a1c_at_goal=True)

    res = nurse_client.patch(f"/api/v1/medical-records/{record.id}/", {"records_reviewed": False}, format="json")
    assert res.status_code == 200

    record.refresh_from_db()
    assert record.records_reviewed is False
    assert record.a1c_at_goal is True


def test_form_patch_touches_one_flag(nurse_client, patient):
    record = MedicalRecord.objects.create(patient=patient, records_reviewed=True, a1c_at_goal=True)

    res = nurse_client.patch(f"/api/v1/medical-records/{record.id}/", {"bp_at_goal": True}, format="multipart")
    assert res.status_code == 200

    record.refresh_from_db()
    assert (record.records_reviewed, record.a1c_at_goal, record.bp_at_goal) == (True, True, True)


def test_empty_patch_is_rejected(nurse_client, patient):
    record = MedicalRecord.objects.create(patient=patient)
    res = nurse_client.patch(f"/api/v1/medical-records/{record.id}/", {}, format="json")
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "nothing_to_update"


def test_filter_by_patient(admin_client, patient, make_patient, site_north):
    other = make_patient(site_north)
    mine = MedicalRecord.objects.create(patient=patient)
    MedicalRecord.objects.create(patient=other)

    items = admin_client.get("/api/v1/medical-records/", {"patient": patient.id}).json()["items"]
    assert [r["id"] for r in items] == [mine.id]


def test_delete_record(nurse_client, patient):
    record = MedicalRecord.objects.create(patient=patient)
    assert nurse_client.delete(f"/api/v1/medical-records/{record.id}/").status_code == 200
    assert not MedicalRecord.objects.exists()
