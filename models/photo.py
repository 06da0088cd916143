# models/photo.py

from sqlalchemy import Column, String, Integer, Boolean, ForeignKey
from sqlalchemy.orm import relationship

from core.database import Base
from models.mixins import SoftDeleteMixin, TimestampMixin, new_id


class Photo(SoftDeleteMixin, TimestampMixin, Base):
    __tablename__ = "photos"

    id = Column(String, primary_key=True, default=new_id)

    visit_id = Column(String, ForeignKey("visits.id"), nullable=False, index=True)
    # Copy of the visit's patient, kept for per-patient galleries
    patient_id = Column(String, ForeignKey("patients.id"), nullable=False)

    # Opaque file locations; resolving them is the viewer's job
    original_path = Column(String, nullable=False)
    thumbnail_path = Column(String, nullable=True)

    # Anatomical position ("forehead", "chin") and clinical state ("relaxed", "active")
    photo_position = Column(String, nullable=True)
    photo_state = Column(String, nullable=True)

    is_marked = Column(Boolean, default=False)
    marked_path = Column(String, nullable=True)
    width = Column(Integer, nullable=True)
    height = Column(Integer, nullable=True)
    sort_order = Column(Integer, default=0, nullable=False)

    visit = relationship("Visit", back_populates="photos")

    def __repr__(self):
        return f"<Photo {self.id} {self.photo_position}/{self.photo_state} for Visit {self.visit_id}>"
