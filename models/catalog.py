from sqlalchemy import Column, String, Float, Integer, Boolean

from core.database import Base
from models.mixins import TimestampMixin, new_id


class Product(TimestampMixin, Base):
    """Injectable / dental product in the clinic catalog."""

    __tablename__ = "products"

    id = Column(String, primary_key=True, default=new_id)
    name = Column(String, nullable=False)
    brand = Column(String, nullable=True)
    # Matches a TreatmentCategory slug
    category = Column(String, nullable=False)
    unit_type = Column(String, default="units")
    default_cost = Column(Float, nullable=True)
    color = Column(String, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)

    def __repr__(self):
        return f"<Product {self.name} ({self.category})>"


class TreatedArea(TimestampMixin, Base):
    __tablename__ = "treated_areas"

    id = Column(String, primary_key=True, default=new_id)
    name = Column(String, nullable=False)
    color = Column(String, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)

    def __repr__(self):
        return f"<TreatedArea {self.name}>"


class TreatmentCategory(TimestampMixin, Base):
    __tablename__ = "treatment_categories"

    id = Column(String, primary_key=True, default=new_id)
    name = Column(String, nullable=False)
    slug = Column(String, nullable=False, unique=True)
    # 'facial' | 'dental'
    type = Column(String, nullable=False, default="facial")
    color = Column(String, nullable=True)
    icon = Column(String, nullable=True)
    sort_order = Column(Integer, default=0)
    is_active = Column(Boolean, nullable=False, default=True)

    def __repr__(self):
        return f"<TreatmentCategory {self.slug}>"
