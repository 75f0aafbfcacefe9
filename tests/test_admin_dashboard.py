from datetime import datetime, timezone

import pytest

from conftest import make_submission
from versoforms.services.admin_setup import ensure_admin
from versoforms.services.backend import QueryError
from versoforms.services.search import filter_submissions
from versoforms.ui.admin_dashboard import AdminDashboard
from versoforms.ui.admin_session import AdminSession
from versoforms.ui.submission_detail import format_timestamp, render_detail
from versoforms.ui.submission_card import render_card


@pytest.fixture
def seeded(backend):
    rows = [
        make_submission("Alpha", "Red barn near the river", datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc),
                        location_city="Springfield", location_state="Illinois"),
        make_submission("Bravo", "Lighthouse at DUSK", datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc),
                        location_city="Portland"),
        make_submission("Charlie", "City skyline", datetime(2024, 2, 1, 9, 0, tzinfo=timezone.utc)),
    ]
    for row in rows:
        backend.insert_submission(row)
    return backend


@pytest.fixture
def dashboard(seeded):
    session = AdminSession(seeded)
    ensure_admin(seeded, "admin@example.com", "s3cret-pass")
    assert session.sign_in("admin@example.com", "s3cret-pass")
    board = AdminDashboard(seeded, session)
    board.load()
    return board


def test_load_orders_newest_first(dashboard):
    assert [s.name for s in dashboard.submissions] == ["Bravo", "Charlie", "Alpha"]
    assert dashboard.summary == "Showing 3 of 3 submissions"
    assert dashboard.empty_message is None


def test_search_matches_description_case_insensitively(dashboard):
    assert [s.name for s in dashboard.search("dusk")] == ["Bravo"]
    assert dashboard.summary == "Showing 1 of 3 submissions"


def test_search_covers_city_and_state(dashboard):
    assert [s.name for s in dashboard.search("ILLINOIS")] == ["Alpha"]
    assert [s.name for s in dashboard.search("portland")] == ["Bravo"]
    # "city" only appears in Charlie's description; Charlie has no city value
    assert [s.name for s in dashboard.search("city")] == ["Charlie"]


def test_blank_search_and_empty_states(dashboard):
    dashboard.search("zebra")
    assert dashboard.filtered == []
    assert dashboard.empty_message == "No matching submissions"

    dashboard.clear_search()
    assert len(dashboard.filtered) == 3
    assert len(dashboard.search("   ")) == 3


def test_refresh_picks_up_new_rows(dashboard, seeded):
    dashboard.search("delta")
    seeded.insert_submission(make_submission("Delta", "Fresh", datetime(2024, 4, 1, tzinfo=timezone.utc)))
    dashboard.refresh()
    assert [s.name for s in dashboard.filtered] == ["Delta"]
    assert dashboard.submissions[0].name == "Delta"


def test_empty_store(backend):
    board = AdminDashboard(backend, AdminSession(backend))
    board.load()
    assert board.empty_message == "No submissions yet"


def test_fetch_failure_is_surfaced(backend, monkeypatch):
    def fail():
        raise QueryError("permission denied for table submissions")

    monkeypatch.setattr(backend, "list_submissions", fail)
    board = AdminDashboard(backend, AdminSession(backend))
    board.load()
    assert board.submissions == []
    assert board.error_message == "permission denied for table submissions"
    assert board.toaster.latest.title == "Could not load submissions"
    assert not board.is_loading


def test_detail_open_close(dashboard):
    target = dashboard.submissions[2]
    dashboard.open_detail(target)
    assert dashboard.detail.title == "Alpha"
    assert dashboard.detail.location == "Springfield, Illinois"

    dashboard.close_detail()
    assert dashboard.detail is None
    assert dashboard.selected is target


def test_sign_out_clears_session(dashboard):
    assert dashboard.session.is_authenticated
    dashboard.sign_out()
    assert not dashboard.session.is_authenticated
    assert dashboard.session.user_id is None


def test_sign_in_requires_admin_role(backend):
    backend.create_user("viewer@example.com", "pw")
    session = AdminSession(backend)
    assert not session.sign_in("viewer@example.com", "pw")
    assert not session.sign_in("nobody@example.com", "pw")
    assert not session.is_authenticated


def test_detail_view_formats_coordinates_and_timestamp():
    submission = make_submission(
        "Equator", "On the line", datetime(2026, 10, 18, 15, 5, tzinfo=timezone.utc),
        latitude=0.0, longitude=-78.4678
    )
    detail = render_detail(submission)
    assert detail.coordinates == "0.000000, -78.467800"
    assert detail.location is None
    assert detail.no_location is None
    assert detail.submitted_on == "Submitted on October 18, 2026 at 3:05 PM"
    assert render_detail(submission, open=False) is None
    assert render_detail(None) is None


def test_timestamp_midnight_and_card():
    assert format_timestamp(datetime(2025, 1, 2, 0, 7)) == "January 2, 2025 at 12:07 AM"

    card = render_card(make_submission(
        "Card", "x" * 300, datetime(2026, 10, 18, 8, 0), location_state="Texas"
    ))
    assert card.created == "Oct 18, 2026"
    assert card.location == "Texas"
    assert card.description.endswith("…") and len(card.description) == 121


def test_filter_ignores_missing_location_fields():
    rows = [make_submission("One", "first"), make_submission("Two", "second", location_city="Oslo")]
    assert [s.name for s in filter_submissions(rows, "OSLO")] == ["Two"]
