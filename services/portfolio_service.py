"""
Portfolio read side.

Each portfolio item names exactly one (position, state) key. Unlike visit
comparison, only that key is resolved on each side: the first live photo in
the visit with the item's position and, when the item has a state, that
state. With no state on the item the state is not filtered at all.
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from core.database import get_db_context
from models.patient import Patient
from models.photo import Photo
from models.portfolio import Portfolio, PortfolioItem
from models.visit import Visit

logger = logging.getLogger(__name__)

UNKNOWN_FIRST_NAME = "Unknown"


@dataclass
class PortfolioSummary:
    id: str
    title: str
    category: Optional[str]
    item_count: int

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "category": self.category,
            "itemCount": self.item_count,
        }


@dataclass
class PortfolioItemWithDetails:
    id: str
    portfolio_id: str
    patient_id: str
    before_visit_id: Optional[str]
    after_visit_id: Optional[str]
    photo_position: Optional[str]
    photo_state: Optional[str]
    patient_first_name: str
    patient_last_name: str
    before_date: Optional[date]
    after_date: Optional[date]
    before_photo_path: Optional[str]
    after_photo_path: Optional[str]
    before_thumbnail_path: Optional[str]
    after_thumbnail_path: Optional[str]

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "portfolioId": self.portfolio_id,
            "patientId": self.patient_id,
            "beforeVisitId": self.before_visit_id,
            "afterVisitId": self.after_visit_id,
            "photoPosition": self.photo_position,
            "photoState": self.photo_state,
            "patientFirstName": self.patient_first_name,
            "patientLastName": self.patient_last_name,
            "beforeDate": self.before_date.isoformat() if self.before_date else None,
            "afterDate": self.after_date.isoformat() if self.after_date else None,
            "beforePhotoPath": self.before_photo_path,
            "afterPhotoPath": self.after_photo_path,
            "beforeThumbnailPath": self.before_thumbnail_path,
            "afterThumbnailPath": self.after_thumbnail_path,
        }


# ---------------------------------------------------------
# Portfolios
# ---------------------------------------------------------
def get_portfolio(db: Session, portfolio_id: str) -> Optional[Portfolio]:
    return (
        db.query(Portfolio)
        .filter(Portfolio.id == portfolio_id, Portfolio.not_deleted())
        .first()
    )


def list_portfolios(db: Session) -> List[PortfolioSummary]:
    """Live portfolios, most recently updated first, with their item counts."""
    item_count = (
        db.query(PortfolioItem.portfolio_id, func.count(PortfolioItem.id).label("n"))
        .group_by(PortfolioItem.portfolio_id)
        .subquery()
    )
    rows = (
        db.query(Portfolio, func.coalesce(item_count.c.n, 0))
        .outerjoin(item_count, item_count.c.portfolio_id == Portfolio.id)
        .filter(Portfolio.not_deleted())
        .order_by(Portfolio.updated_at.desc())
        .all()
    )
    return [
        PortfolioSummary(id=p.id, title=p.title, category=p.category, item_count=int(n))
        for p, n in rows
    ]


# ---------------------------------------------------------
# Item resolution
# ---------------------------------------------------------
def find_position_photo(
    db: Session,
    visit_id: Optional[str],
    position: Optional[str],
    state: Optional[str] = None,
) -> Optional[Photo]:
    """First live photo in a live visit at ``position`` (and ``state`` if given)."""
    if not visit_id or not position:
        return None

    query = (
        db.query(Photo)
        .join(Visit, Visit.id == Photo.visit_id)
        .filter(
            Photo.visit_id == visit_id,
            Photo.photo_position == position,
            Photo.not_deleted(),
            Visit.not_deleted(),
        )
    )
    if state:
        query = query.filter(Photo.photo_state == state)

    return query.order_by(Photo.sort_order.asc(), Photo.created_at.asc()).first()


def _visit_date(db: Session, visit_id: Optional[str]) -> Optional[date]:
    if not visit_id:
        return None
    row = (
        db.query(Visit.date)
        .filter(Visit.id == visit_id, Visit.not_deleted())
        .first()
    )
    return row.date if row else None


def resolve_portfolio_item(db: Session, item: PortfolioItem) -> PortfolioItemWithDetails:
    patient = (
        db.query(Patient.first_name, Patient.last_name)
        .filter(Patient.id == item.patient_id, Patient.not_deleted())
        .first()
    )
    if patient is None:
        logger.debug("Portfolio item %s references a missing patient", item.id)

    before = find_position_photo(db, item.before_visit_id, item.photo_position, item.photo_state)
    after = find_position_photo(db, item.after_visit_id, item.photo_position, item.photo_state)

    return PortfolioItemWithDetails(
        id=item.id,
        portfolio_id=item.portfolio_id,
        patient_id=item.patient_id,
        before_visit_id=item.before_visit_id,
        after_visit_id=item.after_visit_id,
        photo_position=item.photo_position,
        photo_state=item.photo_state,
        patient_first_name=(patient.first_name if patient else None) or UNKNOWN_FIRST_NAME,
        patient_last_name=(patient.last_name if patient else None) or "",
        before_date=_visit_date(db, item.before_visit_id),
        after_date=_visit_date(db, item.after_visit_id),
        before_photo_path=before.original_path if before else None,
        after_photo_path=after.original_path if after else None,
        before_thumbnail_path=before.thumbnail_path if before else None,
        after_thumbnail_path=after.thumbnail_path if after else None,
    )


def list_portfolio_items(db: Session, portfolio_id: str) -> List[PortfolioItemWithDetails]:
    """Items of a portfolio, newest first, each resolved to its two photos."""
    items = (
        db.query(PortfolioItem)
        .filter(PortfolioItem.portfolio_id == portfolio_id)
        .order_by(PortfolioItem.created_at.desc())
        .all()
    )
    return [resolve_portfolio_item(db, item) for item in items]


# -----------------------------
# Convenience functions (no-db parameter)
# -----------------------------
def run_list_portfolios() -> List[dict]:
    with get_db_context() as db:
        return [p.to_dict() for p in list_portfolios(db)]


def run_list_portfolio_items(portfolio_id: str) -> List[dict]:
    with get_db_context() as db:
        return [i.to_dict() for i in list_portfolio_items(db, portfolio_id)]
