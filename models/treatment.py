from sqlalchemy import Column, String, Float, Date, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from core.database import Base
from core.time_utils import now_utc
from models.mixins import SoftDeleteMixin, TimestampMixin, new_id


class Treatment(SoftDeleteMixin, TimestampMixin, Base):
    __tablename__ = "treatments"

    id = Column(String, primary_key=True, default=new_id)
    visit_id = Column(String, ForeignKey("visits.id"), nullable=False, index=True)

    # Category slug, e.g. "neurotoxin" or "filler"
    treatment_type = Column(String, nullable=True)
    product_id = Column(String, ForeignKey("products.id"), nullable=True)

    lot_number = Column(String, nullable=True)
    expiry_date = Column(Date, nullable=True)
    total_units = Column(Float, nullable=True)
    total_cost = Column(Float, nullable=True)

    visit = relationship("Visit", back_populates="treatments")
    product = relationship("Product")
    areas = relationship(
        "TreatmentArea",
        back_populates="treatment",
        cascade="all, delete-orphan",
    )

    def __repr__(self):
        return f"<Treatment {self.id} ({self.treatment_type}) for Visit {self.visit_id}>"


class TreatmentArea(Base):
    """Join row between a treatment and a treated area.

    Hard-deleted together with its treatment.
    """

    __tablename__ = "treatment_areas"

    id = Column(String, primary_key=True, default=new_id)
    treatment_id = Column(String, ForeignKey("treatments.id"), nullable=False, index=True)
    treated_area_id = Column(String, ForeignKey("treated_areas.id"), nullable=False)
    units = Column(Float, nullable=True)
    cost = Column(Float, nullable=True)
    created_at = Column(DateTime, default=now_utc, nullable=False)

    treatment = relationship("Treatment", back_populates="areas")
    treated_area = relationship("TreatedArea")
