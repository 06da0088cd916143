"""Tests for portfolio listing and per-item photo resolution."""

from contextlib import contextmanager
from datetime import date, datetime, timezone

from services import portfolio_service
from services.portfolio_service import (
    find_position_photo,
    get_portfolio,
    list_portfolio_items,
    list_portfolios,
    run_list_portfolio_items,
)

DELETED = datetime(2026, 2, 1, tzinfo=timezone.utc)


def test_item_resolves_before_and_after_photos(
    db, make_patient, make_visit, make_photo, make_portfolio, make_portfolio_item
):
    patient = make_patient("Jane", "Doe")
    before_visit = make_visit(patient, visit_date=date(2026, 1, 5))
    after_visit = make_visit(patient, visit_date=date(2026, 3, 5))
    before = make_photo(before_visit, "glabella", "active", thumbnail_path="/t/before.jpg")
    after = make_photo(after_visit, "glabella", "active")
    make_photo(after_visit, "glabella", "relaxed")
    portfolio = make_portfolio()
    make_portfolio_item(
        portfolio,
        patient.id,
        before_visit_id=before_visit.id,
        after_visit_id=after_visit.id,
        photo_position="glabella",
        photo_state="active",
    )

    [item] = list_portfolio_items(db, portfolio.id)

    assert item.patient_first_name == "Jane"
    assert item.patient_last_name == "Doe"
    assert item.before_date == date(2026, 1, 5)
    assert item.after_date == date(2026, 3, 5)
    assert item.before_photo_path == before.original_path
    assert item.before_thumbnail_path == "/t/before.jpg"
    assert item.after_photo_path == after.original_path
    assert item.after_thumbnail_path is None


def test_item_without_state_does_not_filter_state(db, make_patient, make_visit, make_photo):
    visit = make_visit(make_patient())
    stated = make_photo(visit, "chin", "relaxed", sort_order=0)
    make_photo(visit, "chin", None, sort_order=1)

    assert find_position_photo(db, visit.id, "chin", None).id == stated.id
    assert find_position_photo(db, visit.id, "chin", "active") is None


def test_find_position_photo_needs_visit_and_position(db, make_patient, make_visit, make_photo):
    visit = make_visit(make_patient())
    make_photo(visit, "chin")

    assert find_position_photo(db, None, "chin") is None
    assert find_position_photo(db, visit.id, None) is None


def test_deleted_photos_and_visits_resolve_nothing(db, make_patient, make_visit, make_photo):
    patient = make_patient()
    visit = make_visit(patient)
    gone_visit = make_visit(patient, deleted_at=DELETED)
    make_photo(visit, "chin", deleted_at=DELETED)
    make_photo(gone_visit, "chin")

    assert find_position_photo(db, visit.id, "chin") is None
    assert find_position_photo(db, gone_visit.id, "chin") is None


def test_missing_or_deleted_patient_defaults_to_unknown(db, make_patient, make_portfolio, make_portfolio_item):
    deleted = make_patient("Old", "Record", deleted_at=DELETED)
    portfolio = make_portfolio()
    make_portfolio_item(portfolio, "no-such-patient", photo_position="chin")
    make_portfolio_item(portfolio, deleted.id, photo_position="chin")

    items = list_portfolio_items(db, portfolio.id)

    assert [(i.patient_first_name, i.patient_last_name) for i in items] == [
        ("Unknown", ""),
        ("Unknown", ""),
    ]
    assert all(i.before_photo_path is None and i.after_date is None for i in items)


def test_items_listed_newest_first(db, make_patient, make_portfolio, make_portfolio_item):
    patient = make_patient()
    portfolio = make_portfolio()
    first = make_portfolio_item(portfolio, patient.id, photo_position="a")
    second = make_portfolio_item(portfolio, patient.id, photo_position="b")

    assert [i.id for i in list_portfolio_items(db, portfolio.id)] == [second.id, first.id]


def test_list_portfolios_counts_items_and_skips_deleted(db, make_patient, make_portfolio, make_portfolio_item):
    patient = make_patient()
    older = make_portfolio("Older")
    newer = make_portfolio("Newer")
    make_portfolio("Removed", deleted_at=DELETED)
    make_portfolio_item(older, patient.id)
    make_portfolio_item(older, patient.id)

    summaries = list_portfolios(db)

    assert [(s.title, s.item_count) for s in summaries] == [("Newer", 0), ("Older", 2)]
    assert get_portfolio(db, newer.id).title == "Newer"


def test_get_portfolio_ignores_deleted(db, make_portfolio):
    removed = make_portfolio("Removed", deleted_at=DELETED)

    assert get_portfolio(db, removed.id) is None


def test_run_list_portfolio_items_returns_dicts(
    db, make_patient, make_visit, make_portfolio, make_portfolio_item, monkeypatch
):
    patient = make_patient("Jane", "Doe")
    visit = make_visit(patient, visit_date=date(2026, 4, 1))
    portfolio = make_portfolio()
    make_portfolio_item(portfolio, patient.id, before_visit_id=visit.id, photo_position="chin")

    @contextmanager
    def fake_context():
        yield db

    monkeypatch.setattr(portfolio_service, "get_db_context", fake_context)

    [item] = run_list_portfolio_items(portfolio.id)

    assert item["patientFirstName"] == "Jane"
    assert item["beforeDate"] == "2026-04-01"
    assert item["afterDate"] is None
    assert item["beforePhotoPath"] is None
