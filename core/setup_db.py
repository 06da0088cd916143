# core/setup_db.py

import logging

from sqlalchemy.orm import Session

from core.config import LOG_LEVEL
from core.database import Base, engine, get_db_context
from core.logging_config import setup_logging
import models  # noqa: F401  (registers every table on Base.metadata)
from models.catalog import Product, TreatedArea, TreatmentCategory

logger = logging.getLogger(__name__)

# (name, slug, type, color, sort_order)
DEFAULT_CATEGORIES = [
    ("Neurotoxin", "neurotoxin", "facial", "#3B82F6", 1),
    ("Filler", "filler", "facial", "#EC4899", 2),
    ("Microneedling", "microneedling", "facial", "#F59E0B", 3),
    ("Whitening", "whitening", "dental", "#FBBF24", 10),
    ("Veneer", "veneer", "dental", "#F0FDFA", 11),
    ("Bonding", "bonding", "dental", "#A78BFA", 12),
    ("Crowns & Bridges", "crowns-bridges", "dental", "#D4A574", 13),
    ("Orthodontics / Aligners", "orthodontics", "dental", "#60A5FA", 14),
    ("Implants", "implants", "dental", "#94A3B8", 15),
]

# (name, brand, category slug, unit type)
DEFAULT_PRODUCTS = [
    ("Botox", "Allergan", "neurotoxin", "units"),
    ("Dysport", "Galderma", "neurotoxin", "units"),
    ("Xeomin", "Merz", "neurotoxin", "units"),
    ("Belotero", "Merz", "filler", "ml"),
    ("Juvederm Ultra", "Allergan", "filler", "ml"),
    ("Restylane", "Galderma", "filler", "ml"),
    ("Sculptra", "Galderma", "filler", "vial"),
    ("Invisalign", "Align Technology", "orthodontics", "tray"),
    ("ZOOM", "Philips", "whitening", "session"),
]

DEFAULT_TREATED_AREAS = [
    "Brow Lift",
    "Crow's Feet",
    "Frontalis",
    "Glabella",
    "Lower Face",
    "Mid Face",
    "Platysma",
]


def seed_catalog(db: Session) -> dict:
    """Insert the default catalog; entries that already exist are left alone.

    Returns the number of rows added per table.
    """
    added = {"treatment_categories": 0, "products": 0, "treated_areas": 0}

    existing_slugs = {slug for (slug,) in db.query(TreatmentCategory.slug).all()}
    for name, slug, kind, color, sort_order in DEFAULT_CATEGORIES:
        if slug in existing_slugs:
            continue
        db.add(TreatmentCategory(name=name, slug=slug, type=kind, color=color, sort_order=sort_order))
        added["treatment_categories"] += 1

    existing_products = {name for (name,) in db.query(Product.name).all()}
    for name, brand, category, unit_type in DEFAULT_PRODUCTS:
        if name in existing_products:
            continue
        db.add(Product(name=name, brand=brand, category=category, unit_type=unit_type))
        added["products"] += 1

    existing_areas = {name for (name,) in db.query(TreatedArea.name).all()}
    for name in DEFAULT_TREATED_AREAS:
        if name in existing_areas:
            continue
        db.add(TreatedArea(name=name))
        added["treated_areas"] += 1

    db.commit()
    return added


def main():
    setup_logging(LOG_LEVEL)
    logger.info("Creating database tables...")

    # Create all SQLAlchemy tables
    Base.metadata.create_all(bind=engine)

    with get_db_context() as db:
        added = seed_catalog(db)
    logger.info("Catalog seeded: %s", added)

    logger.info("Database initialized successfully.")


if __name__ == "__main__":
    main()
