# models/mixins.py

import uuid

from sqlalchemy import Column, DateTime

from core.time_utils import now_utc


def new_id() -> str:
    return str(uuid.uuid4())


class SoftDeleteMixin:
    """Rows are retired by stamping deleted_at, never physically removed."""

    deleted_at = Column(DateTime, nullable=True)

    @classmethod
    def not_deleted(cls):
        """Clause every read path must include for this model."""
        return cls.deleted_at.is_(None)


class TimestampMixin:
    created_at = Column(DateTime, default=now_utc, nullable=False)
    updated_at = Column(DateTime, default=now_utc, onupdate=now_utc, nullable=False)
