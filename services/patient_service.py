from typing import List, Optional

from sqlalchemy.orm import Session

from core.database import get_db_context
from models.patient import Patient
from models.user import User


# ------------------------------------------
# Fetch live patients, alphabetical
# ------------------------------------------
def get_all_patients(db: Session) -> List[Patient]:
    return (
        db.query(Patient)
        .filter(Patient.not_deleted())
        .order_by(Patient.last_name, Patient.first_name)
        .all()
    )


# ------------------------------------------
# Fetch patient by id
# ------------------------------------------
def get_patient(db: Session, patient_id: str) -> Optional[Patient]:
    return (
        db.query(Patient)
        .filter(Patient.id == patient_id, Patient.not_deleted())
        .first()
    )


# ------------------------------------------
# Practitioners for the search picker
# ------------------------------------------
def get_practitioners(db: Session) -> List[User]:
    return (
        db.query(User)
        .filter(User.not_deleted(), User.is_active.is_(True))
        .order_by(User.name)
        .all()
    )


# -----------------------------
# Convenience functions (no-db parameter)
# -----------------------------
def list_patients(db: Session = None):
    if db is None:
        with get_db_context() as db:
            return get_all_patients(db)
    return get_all_patients(db)


def list_practitioners(db: Session = None):
    if db is None:
        with get_db_context() as db:
            return get_practitioners(db)
    return get_practitioners(db)
