from typing import List, Optional

from sqlalchemy.orm import Session

from core.database import get_db_context
from models.catalog import Product, TreatedArea, TreatmentCategory


# -----------------------------
# Products
# -----------------------------
def list_products(db: Session) -> List[Product]:
    return (
        db.query(Product)
        .filter(Product.is_active.is_(True))
        .order_by(Product.name)
        .all()
    )


def list_all_products(db: Session) -> List[Product]:
    return db.query(Product).order_by(Product.name).all()


# -----------------------------
# Treated areas
# -----------------------------
def list_treated_areas(db: Session) -> List[TreatedArea]:
    return (
        db.query(TreatedArea)
        .filter(TreatedArea.is_active.is_(True))
        .order_by(TreatedArea.name)
        .all()
    )


def list_all_treated_areas(db: Session) -> List[TreatedArea]:
    return db.query(TreatedArea).order_by(TreatedArea.name).all()


# -----------------------------
# Treatment categories
# -----------------------------
def list_treatment_categories(db: Session) -> List[TreatmentCategory]:
    return (
        db.query(TreatmentCategory)
        .filter(TreatmentCategory.is_active.is_(True))
        .order_by(TreatmentCategory.sort_order, TreatmentCategory.name)
        .all()
    )


def list_all_treatment_categories(db: Session) -> List[TreatmentCategory]:
    return (
        db.query(TreatmentCategory)
        .order_by(TreatmentCategory.sort_order, TreatmentCategory.name)
        .all()
    )


def get_treatment_category_by_slug(db: Session, slug: str) -> Optional[TreatmentCategory]:
    return db.query(TreatmentCategory).filter(TreatmentCategory.slug == slug).first()


def search_filter_options() -> dict:
    """Active catalog entries for the case search pickers, as (id, label) pairs."""
    with get_db_context() as db:
        return {
            "products": [(p.id, p.name) for p in list_products(db)],
            "treated_areas": [(a.id, a.name) for a in list_treated_areas(db)],
            "treatment_categories": [(c.slug, c.name) for c in list_treatment_categories(db)],
        }
