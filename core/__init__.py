from .database import get_db, get_db_context, engine, SessionLocal, Base
from .time_utils import now_utc, today_utc

__all__ = [
    "get_db",
    "get_db_context",
    "engine",
    "SessionLocal",
    "Base",
    "now_utc",
    "today_utc",
]
