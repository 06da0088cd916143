from typing import List, Optional

from sqlalchemy.orm import Session

from core.database import get_db_context
from models.visit import Visit


# -----------------------------
# Get visit by ID
# -----------------------------
def get_visit_by_id(visit_id: str, db: Session = None) -> Optional[Visit]:
    if db is None:
        with get_db_context() as db:
            return get_visit_by_id(visit_id, db=db)

    return (
        db.query(Visit)
        .filter(Visit.id == visit_id, Visit.not_deleted())
        .first()
    )


# -----------------------------
# Get all visits for a patient, newest first
# -----------------------------
def get_visits_for_patient(patient_id: str, db: Session = None) -> List[Visit]:
    if db is None:
        with get_db_context() as db:
            return get_visits_for_patient(patient_id, db=db)

    return (
        db.query(Visit)
        .filter(Visit.patient_id == patient_id, Visit.not_deleted())
        .order_by(Visit.date.desc(), Visit.created_at.desc())
        .all()
    )
