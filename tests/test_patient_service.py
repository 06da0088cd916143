from datetime import date, datetime, timezone

from services.patient_service import get_all_patients, get_patient, get_practitioners, list_patients
from services.visit_service import get_visit_by_id, get_visits_for_patient

DELETED = datetime(2026, 2, 1, tzinfo=timezone.utc)


def test_patients_exclude_deleted_and_sort_by_name(db, make_patient):
    make_patient("Zoe", "Brown")
    make_patient("Mia", "Adams")
    gone = make_patient("Old", "Aaron", deleted_at=DELETED)

    assert [p.last_name for p in get_all_patients(db)] == ["Adams", "Brown"]
    assert [p.last_name for p in list_patients(db)] == ["Adams", "Brown"]
    assert get_patient(db, gone.id) is None


def test_practitioners_are_live_and_active(db, make_practitioner):
    make_practitioner("Dr. Warren")
    make_practitioner("Dr. Away", is_active=False)
    make_practitioner("Dr. Gone", deleted_at=DELETED)

    assert [u.name for u in get_practitioners(db)] == ["Dr. Warren"]


def test_visits_for_patient_newest_first(db, make_patient, make_visit):
    patient = make_patient()
    early = make_visit(patient, visit_date=date(2026, 1, 1))
    late = make_visit(patient, visit_date=date(2026, 5, 1))
    gone = make_visit(patient, visit_date=date(2026, 6, 1), deleted_at=DELETED)

    assert [v.id for v in get_visits_for_patient(patient.id, db=db)] == [late.id, early.id]
    assert get_visit_by_id(early.id, db=db).id == early.id
    assert get_visit_by_id(gone.id, db=db) is None
