# models/visit.py

from sqlalchemy import Column, String, Date, Text, ForeignKey
from sqlalchemy.orm import relationship

from core.database import Base
from models.mixins import SoftDeleteMixin, TimestampMixin, new_id


class Visit(SoftDeleteMixin, TimestampMixin, Base):
    __tablename__ = "visits"

    id = Column(String, primary_key=True, default=new_id)

    # Link to patient
    patient_id = Column(String, ForeignKey("patients.id"), nullable=False, index=True)

    # Practitioner who saw the patient, if recorded
    practitioner_id = Column(String, ForeignKey("users.id"), nullable=True)

    date = Column(Date, nullable=False)
    time = Column(String, nullable=True)
    clinical_notes = Column(Text, nullable=True)

    # ORM relationships
    patient = relationship("Patient", back_populates="visits")
    practitioner = relationship("User")
    treatments = relationship("Treatment", back_populates="visit")
    photos = relationship("Photo", back_populates="visit")

    def __repr__(self):
        return f"<Visit {self.id} on {self.date} for Patient {self.patient_id}>"
