# vt_core/tests/test_patch.py
from vt_core.common.patch import UNSET
from vt_core.patients.services import PatientPatch


def test_presence_not_truthiness():
    patch = PatientPatch.from_data({"is_active": False, "insurance": "", "unknown": "x"})
    assert patch.changes() == {"is_active": False, "insurance": ""}
    assert patch.has("is_active")
    assert not patch.has("first_name")
    assert patch.first_name is UNSET


def test_explicit_null_is_a_change():
    patch = PatientPatch.from_data({"building_id": None})
    assert patch.changes() == {"building_id": None}


def test_empty_payload_has_no_changes():
    assert PatientPatch.from_data({}).changes() == {}
