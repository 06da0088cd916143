# models/patient.py

from sqlalchemy import Column, String, Date
from sqlalchemy.orm import relationship

from core.database import Base
from models.mixins import SoftDeleteMixin, TimestampMixin, new_id


class Patient(SoftDeleteMixin, TimestampMixin, Base):
    __tablename__ = "patients"

    id = Column(String, primary_key=True, default=new_id)

    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)

    # Demographics
    sex = Column(String, nullable=True)
    birthday = Column(Date, nullable=True)
    ethnicity = Column(String, nullable=True)

    # Contact / location
    email = Column(String, nullable=True)
    cell_phone = Column(String, nullable=True)
    city = Column(String, nullable=True)
    province = Column(String, nullable=True)
    postal_code = Column(String, nullable=True)

    # ORM relationships (unfiltered; readers add not_deleted() themselves)
    visits = relationship("Visit", back_populates="patient")
    consents = relationship("Consent", back_populates="patient")

    def __repr__(self):
        return f"<Patient {self.id} - {self.last_name}, {self.first_name}>"
