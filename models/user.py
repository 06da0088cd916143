from sqlalchemy import Column, String, Boolean

from core.database import Base
from models.mixins import SoftDeleteMixin, TimestampMixin, new_id


class User(SoftDeleteMixin, TimestampMixin, Base):
    """A practitioner who can be recorded against a visit."""

    __tablename__ = "users"

    id = Column(String, primary_key=True, default=new_id)

    name = Column(String, nullable=False)
    email = Column(String, nullable=True)
    role = Column(String, nullable=False, default="practitioner")
    is_active = Column(Boolean, nullable=False, default=True)

    def __repr__(self):
        return f"<User {self.name} ({self.role})>"
