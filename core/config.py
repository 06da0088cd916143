import logging
import os

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

load_dotenv()

# Path: project_root/data/clinic.db
BASE_DIR = os.path.dirname(os.path.dirname(__file__))
DEFAULT_DB_PATH = os.path.join(BASE_DIR, "data", "clinic.db")

DEFAULT_CASE_SEARCH_LIMIT = 200


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring non-integer %s=%r, using %s", name, raw, default)
        return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    logger.warning("Ignoring non-boolean %s=%r, using %s", name, raw, default)
    return default


DATABASE_URL = os.getenv("CLINIC_DATABASE_URL") or f"sqlite:///{DEFAULT_DB_PATH}"
SQL_ECHO = _env_bool("CLINIC_SQL_ECHO", False)
CASE_SEARCH_LIMIT = _env_int("CLINIC_CASE_SEARCH_LIMIT", DEFAULT_CASE_SEARCH_LIMIT)
LOG_LEVEL = os.getenv("CLINIC_LOG_LEVEL", "INFO")
