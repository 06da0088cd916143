from datetime import datetime, timezone
from typing import Iterator, List

from sqlalchemy.orm import Session

from core.database import get_db_context
from models.photo import Photo
from models.visit import Visit
from services.photo_matching import ComparePhotoPair, iter_photo_pairs

_EPOCH_START = datetime.min.replace(tzinfo=timezone.utc)


def _as_aware(dt):
    # SQLite hands back naive datetimes; they were written as UTC
    if dt is None:
        return _EPOCH_START
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def photo_sort_key(photo):
    """(sort_order, created_at) ascending; missing values sort first."""
    return (photo.sort_order or 0, _as_aware(photo.created_at))


def get_visit_photos(db: Session, visit_id: str) -> List[Photo]:
    """Non-deleted photos of a non-deleted visit, in display order."""
    return (
        db.query(Photo)
        .join(Visit, Visit.id == Photo.visit_id)
        .filter(Photo.visit_id == visit_id, Photo.not_deleted(), Visit.not_deleted())
        .order_by(Photo.sort_order.asc(), Photo.created_at.asc())
        .all()
    )


def iter_compare_visit_photos(db: Session, before_visit_id: str, after_visit_id: str) -> Iterator[ComparePhotoPair]:
    before = get_visit_photos(db, before_visit_id)
    after = get_visit_photos(db, after_visit_id)
    return iter_photo_pairs(before, after, order_by=photo_sort_key)


def compare_visit_photos(db: Session, before_visit_id: str, after_visit_id: str) -> List[ComparePhotoPair]:
    """Pair up the photos of two visits by position and state.

    Unknown or deleted visits contribute no photos; nothing is raised.
    """
    return list(iter_compare_visit_photos(db, before_visit_id, after_visit_id))


def run_compare_visit_photos(before_visit_id: str, after_visit_id: str) -> List[dict]:
    """Convenience wrapper for pages; returns plain dicts."""
    with get_db_context() as db:
        return [p.to_dict() for p in compare_visit_photos(db, before_visit_id, after_visit_id)]
