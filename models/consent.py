from sqlalchemy import Column, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from core.database import Base
from core.time_utils import now_utc
from models.mixins import new_id

CONSENT_BOTULINUM = "botulinum"
CONSENT_FILLER = "filler"
CONSENT_PHOTO = "photo"


class Consent(Base):
    __tablename__ = "consents"

    id = Column(String, primary_key=True, default=new_id)
    patient_id = Column(String, ForeignKey("patients.id"), nullable=False, index=True)
    visit_id = Column(String, ForeignKey("visits.id"), nullable=True)

    # 'botulinum' | 'filler' | 'photo'
    type = Column(String, nullable=False)
    consent_text = Column(Text, nullable=True)
    signed_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=now_utc, nullable=False)

    patient = relationship("Patient", back_populates="consents")

    def __repr__(self):
        return f"<Consent {self.type} for Patient {self.patient_id}>"
