from sqlalchemy import Column, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from core.database import Base
from core.time_utils import now_utc
from models.mixins import SoftDeleteMixin, TimestampMixin, new_id


class Portfolio(SoftDeleteMixin, TimestampMixin, Base):
    """A curated before/after collection for presentations."""

    __tablename__ = "portfolios"

    id = Column(String, primary_key=True, default=new_id)
    title = Column(String, nullable=False)
    category = Column(String, nullable=True)
    demographics_filter = Column(Text, nullable=True)  # JSON
    owner_id = Column(String, ForeignKey("users.id"), nullable=True)

    items = relationship("PortfolioItem", back_populates="portfolio")

    def __repr__(self):
        return f"<Portfolio {self.title}>"


class PortfolioItem(Base):
    __tablename__ = "portfolio_items"

    id = Column(String, primary_key=True, default=new_id)
    portfolio_id = Column(String, ForeignKey("portfolios.id"), nullable=False, index=True)
    patient_id = Column(String, ForeignKey("patients.id"), nullable=False)
    before_visit_id = Column(String, ForeignKey("visits.id"), nullable=True)
    after_visit_id = Column(String, ForeignKey("visits.id"), nullable=True)

    # The one (position, state) key the curator picked for this item
    photo_position = Column(String, nullable=True)
    photo_state = Column(String, nullable=True)

    created_at = Column(DateTime, default=now_utc, nullable=False)

    portfolio = relationship("Portfolio", back_populates="items")

    def __repr__(self):
        return f"<PortfolioItem {self.id} {self.photo_position}/{self.photo_state}>"
