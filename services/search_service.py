"""
Clinical case search.

Turns an open-ended set of optional filters into one bounded query over
patients. Each filter is compiled on its own into a SQLAlchemy clause; the
clauses are AND-ed together, with the soft-delete clause always first.

Visit- and treatment-level filters are independent existence checks against
the patient: a patient matches ``lot_number`` and ``product_ids`` even when
two different treatments satisfy them.
"""

import logging
from dataclasses import dataclass, field, fields
from datetime import date, datetime
from typing import Callable, Dict, List, Optional

from sqlalchemy import and_, func, select
from sqlalchemy.orm import Session

from core.config import CASE_SEARCH_LIMIT
from core.database import get_db_context
from core.time_utils import parse_iso_date, today_utc, years_before
from models.consent import CONSENT_BOTULINUM, CONSENT_FILLER, CONSENT_PHOTO, Consent
from models.patient import Patient
from models.treatment import Treatment, TreatmentArea
from models.visit import Visit

logger = logging.getLogger(__name__)

_TRUE_STRINGS = {"1", "true", "yes", "on"}


def lenient_date(value, name: str = "date") -> Optional[date]:
    """Parse a date bound without ever raising.

    Accepts ISO dates and unpadded ``YYYY-M-D``; anything else drops the
    bound (None) with a warning.
    """
    try:
        return parse_iso_date(value)
    except (TypeError, ValueError):
        pass
    try:
        return datetime.strptime(str(value).strip(), "%Y-%m-%d").date()
    except ValueError:
        logger.warning("Ignoring unparseable %s=%r in case search", name, value)
        return None


def consent_flag(value) -> bool:
    """True only for real true values; the string "false" stays False."""
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_STRINGS
    return value is True or value == 1


# ---------------------------------------------------------
# Inputs / outputs
# ---------------------------------------------------------
@dataclass
class SearchCriteria:
    # Patient demographics
    ethnicity: Optional[str] = None
    sex: Optional[str] = None
    age_min: Optional[int] = None
    age_max: Optional[int] = None
    min_visits: Optional[int] = None
    # Consent status
    has_botulinum_consent: bool = False
    has_filler_consent: bool = False
    has_photo_consent: bool = False
    # Visit filters
    visit_date_from: Optional[date] = None
    visit_date_to: Optional[date] = None
    lot_number: Optional[str] = None
    practitioner_id: Optional[str] = None
    # Treatment filters
    product_ids: List[str] = field(default_factory=list)
    treatment_category_slugs: List[str] = field(default_factory=list)
    treated_area_ids: List[str] = field(default_factory=list)

    # camelCase names used by the call layer
    _ALIASES = {
        "ageMin": "age_min",
        "ageMax": "age_max",
        "minVisits": "min_visits",
        "hasBotulinumConsent": "has_botulinum_consent",
        "hasFillerConsent": "has_filler_consent",
        "hasPhotoConsent": "has_photo_consent",
        "visitDateFrom": "visit_date_from",
        "visitDateTo": "visit_date_to",
        "lotNumber": "lot_number",
        "practitionerId": "practitioner_id",
        "productIds": "product_ids",
        "treatmentCategorySlugs": "treatment_category_slugs",
        "treatedAreaIds": "treated_area_ids",
    }

    @classmethod
    def from_mapping(cls, data: Optional[dict]) -> "SearchCriteria":
        """Build criteria from a plain dict (camelCase or snake_case keys).

        Unknown keys are ignored and ``None`` values mean "not set".
        """
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in (data or {}).items():
            name = cls._ALIASES.get(key, key)
            if name not in known or value is None:
                continue
            kwargs[name] = value

        for name in ("visit_date_from", "visit_date_to"):
            if name in kwargs:
                kwargs[name] = lenient_date(kwargs[name], name)
        for name in ("product_ids", "treatment_category_slugs", "treated_area_ids"):
            if name in kwargs:
                kwargs[name] = list(kwargs[name])
        for name in ("has_botulinum_consent", "has_filler_consent", "has_photo_consent"):
            if name in kwargs:
                kwargs[name] = consent_flag(kwargs[name])

        return cls(**kwargs)


@dataclass
class CaseSearchResult:
    patient_id: str
    first_name: str
    last_name: str
    sex: Optional[str]
    birthday: Optional[date]
    ethnicity: Optional[str]
    city: Optional[str]
    province: Optional[str]
    visit_count: int
    treatment_count: int

    def to_dict(self) -> dict:
        return {
            "patientId": self.patient_id,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "sex": self.sex,
            "birthday": self.birthday.isoformat() if self.birthday else None,
            "ethnicity": self.ethnicity,
            "city": self.city,
            "province": self.province,
            "visitCount": self.visit_count,
            "treatmentCount": self.treatment_count,
        }


@dataclass
class CaseSearchPage:
    results: List[CaseSearchResult]
    truncated: bool


# ---------------------------------------------------------
# Reusable clauses
# ---------------------------------------------------------
def _live_visit_of_patient():
    return and_(Visit.patient_id == Patient.id, Visit.not_deleted())


def visit_count_expr():
    """Correlated count of the patient's non-deleted visits."""
    return (
        select(func.count(Visit.id))
        .where(_live_visit_of_patient())
        .correlate(Patient)
        .scalar_subquery()
    )


def treatment_count_expr():
    """Correlated count of non-deleted treatments on non-deleted visits."""
    return (
        select(func.count(Treatment.id))
        .join(Visit, Visit.id == Treatment.visit_id)
        .where(_live_visit_of_patient(), Treatment.not_deleted())
        .correlate(Patient)
        .scalar_subquery()
    )


def _has_visit(*conditions):
    """Patient owns at least one non-deleted visit matching ``conditions``."""
    return Patient.visits.any(and_(Visit.not_deleted(), *conditions))


def _has_treatment(*conditions):
    """Patient owns a non-deleted treatment, on a non-deleted visit, matching ``conditions``."""
    return _has_visit(Visit.treatments.any(and_(Treatment.not_deleted(), *conditions)))


def _has_consent(consent_type: str):
    return Patient.consents.any(Consent.type == consent_type)


# ---------------------------------------------------------
# One compiler per filter. Each returns a clause or None when unset.
# ---------------------------------------------------------
def _ethnicity(c: SearchCriteria, today: date):
    if c.ethnicity:
        return Patient.ethnicity == c.ethnicity


def _sex(c: SearchCriteria, today: date):
    if c.sex:
        return Patient.sex == c.sex


def _age_min(c: SearchCriteria, today: date):
    # age >= n  <=>  born on or before today minus n years
    if c.age_min is not None:
        return Patient.birthday <= years_before(today, int(c.age_min))


def _age_max(c: SearchCriteria, today: date):
    # age <= n  <=>  born after today minus (n + 1) years
    if c.age_max is not None:
        return Patient.birthday > years_before(today, int(c.age_max) + 1)


def _min_visits(c: SearchCriteria, today: date):
    if c.min_visits is not None:
        return visit_count_expr() >= int(c.min_visits)


def _botulinum_consent(c: SearchCriteria, today: date):
    if consent_flag(c.has_botulinum_consent):
        return _has_consent(CONSENT_BOTULINUM)


def _filler_consent(c: SearchCriteria, today: date):
    if consent_flag(c.has_filler_consent):
        return _has_consent(CONSENT_FILLER)


def _photo_consent(c: SearchCriteria, today: date):
    if consent_flag(c.has_photo_consent):
        return _has_consent(CONSENT_PHOTO)


def _visit_date_from(c: SearchCriteria, today: date):
    day = lenient_date(c.visit_date_from, "visit_date_from")
    if day:
        return _has_visit(Visit.date >= day)


def _visit_date_to(c: SearchCriteria, today: date):
    day = lenient_date(c.visit_date_to, "visit_date_to")
    if day:
        return _has_visit(Visit.date <= day)


def _practitioner(c: SearchCriteria, today: date):
    if c.practitioner_id:
        return _has_visit(Visit.practitioner_id == c.practitioner_id)


def _lot_number(c: SearchCriteria, today: date):
    if c.lot_number:
        return _has_treatment(Treatment.lot_number.icontains(c.lot_number, autoescape=True))


def _products(c: SearchCriteria, today: date):
    if c.product_ids:
        return _has_treatment(Treatment.product_id.in_(c.product_ids))


def _treatment_categories(c: SearchCriteria, today: date):
    if c.treatment_category_slugs:
        return _has_treatment(Treatment.treatment_type.in_(c.treatment_category_slugs))


def _treated_areas(c: SearchCriteria, today: date):
    if c.treated_area_ids:
        return _has_treatment(
            Treatment.areas.any(TreatmentArea.treated_area_id.in_(c.treated_area_ids))
        )


FILTERS: Dict[str, Callable] = {
    "ethnicity": _ethnicity,
    "sex": _sex,
    "age_min": _age_min,
    "age_max": _age_max,
    "min_visits": _min_visits,
    "has_botulinum_consent": _botulinum_consent,
    "has_filler_consent": _filler_consent,
    "has_photo_consent": _photo_consent,
    "visit_date_from": _visit_date_from,
    "visit_date_to": _visit_date_to,
    "practitioner_id": _practitioner,
    "lot_number": _lot_number,
    "product_ids": _products,
    "treatment_category_slugs": _treatment_categories,
    "treated_area_ids": _treated_areas,
}


# ---------------------------------------------------------
# Compilation
# ---------------------------------------------------------
def compile_criteria(criteria: SearchCriteria, today: Optional[date] = None) -> list:
    """Return the WHERE clauses for ``criteria``.

    The soft-delete clause is always the first element; the rest follow in
    FILTERS order and only for filters that are set.
    """
    today = today or today_utc()
    clauses = [Patient.not_deleted()]
    for build in FILTERS.values():
        clause = build(criteria, today)
        if clause is not None:
            clauses.append(clause)
    return clauses


def build_case_query(criteria: SearchCriteria, today: Optional[date] = None, limit: int = CASE_SEARCH_LIMIT):
    clauses = compile_criteria(criteria, today)
    logger.debug("Case search compiled %d clause(s)", len(clauses))
    return (
        select(
            Patient.id,
            Patient.first_name,
            Patient.last_name,
            Patient.sex,
            Patient.birthday,
            Patient.ethnicity,
            Patient.city,
            Patient.province,
            func.coalesce(visit_count_expr(), 0).label("visit_count"),
            func.coalesce(treatment_count_expr(), 0).label("treatment_count"),
        )
        .where(and_(*clauses))
        .order_by(Patient.last_name, Patient.first_name)
        .limit(limit)
    )


def _row_to_result(row) -> CaseSearchResult:
    return CaseSearchResult(
        patient_id=row.id,
        first_name=row.first_name,
        last_name=row.last_name,
        sex=row.sex,
        birthday=row.birthday,
        ethnicity=row.ethnicity,
        city=row.city,
        province=row.province,
        visit_count=int(row.visit_count or 0),
        treatment_count=int(row.treatment_count or 0),
    )


# ---------------------------------------------------------
# Public API
# ---------------------------------------------------------
def search_cases_page(
    db: Session,
    criteria: Optional[SearchCriteria] = None,
    *,
    today: Optional[date] = None,
    limit: int = CASE_SEARCH_LIMIT,
) -> CaseSearchPage:
    """Run the search and report whether rows beyond ``limit`` were cut off."""
    criteria = criteria or SearchCriteria()
    rows = db.execute(build_case_query(criteria, today, limit + 1)).all()

    truncated = len(rows) > limit
    if truncated:
        logger.warning("Case search hit the %d row limit; results truncated", limit)
        rows = rows[:limit]

    logger.debug("Case search returned %d case(s)", len(rows))
    return CaseSearchPage(results=[_row_to_result(r) for r in rows], truncated=truncated)


def search_cases(
    db: Session,
    criteria: Optional[SearchCriteria] = None,
    *,
    today: Optional[date] = None,
    limit: int = CASE_SEARCH_LIMIT,
) -> List[CaseSearchResult]:
    """Matching patients ordered by last then first name, at most ``limit`` of them."""
    return search_cases_page(db, criteria, today=today, limit=limit).results


def run_case_search(filters: Optional[dict] = None) -> List[dict]:
    """Convenience wrapper for pages: plain dict in, list of plain dicts out."""
    criteria = SearchCriteria.from_mapping(filters)
    with get_db_context() as db:
        return [r.to_dict() for r in search_cases(db, criteria)]
