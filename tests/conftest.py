from datetime import date, datetime, timedelta, timezone
from itertools import count

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from core.database import Base
import models  # noqa: F401
from models import (
    Consent,
    Patient,
    Photo,
    Portfolio,
    PortfolioItem,
    Product,
    TreatedArea,
    Treatment,
    TreatmentArea,
    User,
    Visit,
)

TODAY = date(2026, 6, 15)
_BASE_TIME = datetime(2026, 1, 1, tzinfo=timezone.utc)


@pytest.fixture(scope="function")
def test_engine():
    """Fresh in-memory SQLite database per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db(test_engine):
    TestingSessionLocal = sessionmaker(bind=test_engine, autocommit=False, autoflush=False)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def tick():
    """Strictly increasing timestamps so created_at ordering is deterministic."""
    seq = count()
    return lambda: _BASE_TIME + timedelta(seconds=next(seq))


@pytest.fixture
def make_patient(db, tick):
    def _make(first_name="Jane", last_name="Doe", **kwargs):
        kwargs.setdefault("created_at", tick())
        patient = Patient(first_name=first_name, last_name=last_name, **kwargs)
        db.add(patient)
        db.flush()
        return patient
    return _make


@pytest.fixture
def make_practitioner(db):
    def _make(name="Dr. Warren", **kwargs):
        user = User(name=name, **kwargs)
        db.add(user)
        db.flush()
        return user
    return _make


@pytest.fixture
def make_visit(db, tick):
    def _make(patient, visit_date=date(2026, 3, 1), **kwargs):
        kwargs.setdefault("created_at", tick())
        visit = Visit(patient_id=patient.id, date=visit_date, **kwargs)
        db.add(visit)
        db.flush()
        return visit
    return _make


@pytest.fixture
def make_treatment(db, tick):
    def _make(visit, area_ids=(), **kwargs):
        kwargs.setdefault("created_at", tick())
        treatment = Treatment(visit_id=visit.id, **kwargs)
        treatment.areas = [TreatmentArea(treated_area_id=a) for a in area_ids]
        db.add(treatment)
        db.flush()
        return treatment
    return _make


@pytest.fixture
def make_consent(db):
    def _make(patient, consent_type, **kwargs):
        consent = Consent(patient_id=patient.id, type=consent_type, **kwargs)
        db.add(consent)
        db.flush()
        return consent
    return _make


@pytest.fixture
def make_photo(db, tick):
    def _make(visit, position=None, state=None, **kwargs):
        kwargs.setdefault("created_at", tick())
        kwargs.setdefault("original_path", f"/photos/{visit.id}/{position}-{state}.jpg")
        photo = Photo(
            visit_id=visit.id,
            patient_id=visit.patient_id,
            photo_position=position,
            photo_state=state,
            **kwargs,
        )
        db.add(photo)
        db.flush()
        return photo
    return _make


@pytest.fixture
def make_product(db):
    def _make(name="Botox", category="neurotoxin", **kwargs):
        product = Product(name=name, category=category, **kwargs)
        db.add(product)
        db.flush()
        return product
    return _make


@pytest.fixture
def make_area(db):
    def _make(name="Glabella", **kwargs):
        area = TreatedArea(name=name, **kwargs)
        db.add(area)
        db.flush()
        return area
    return _make


@pytest.fixture
def make_portfolio(db, tick):
    def _make(title="Glabella results", **kwargs):
        kwargs.setdefault("updated_at", tick())
        portfolio = Portfolio(title=title, **kwargs)
        db.add(portfolio)
        db.flush()
        return portfolio
    return _make


@pytest.fixture
def make_portfolio_item(db, tick):
    def _make(portfolio, patient_id, **kwargs):
        kwargs.setdefault("created_at", tick())
        item = PortfolioItem(portfolio_id=portfolio.id, patient_id=patient_id, **kwargs)
        db.add(item)
        db.flush()
        return item
    return _make
