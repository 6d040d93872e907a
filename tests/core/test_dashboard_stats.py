"""
Test suite for dashboard statistics.

System role: Verification of dashboard aggregation
"""

from datetime import date, datetime, timedelta, timezone

from jobtracker.boundary.db.models.application_model import ApplicationStatus
from jobtracker.core.dashboard_stats import compute_stats, recent_applications, upcoming_events

NOW = datetime(2024, 1, 20, 12, 0, tzinfo=timezone.utc)


def _app(status, applied_day, next_in_days=None, naive=False) -> dict:
    next_date = None
    if next_in_days is not None:
        next_date = NOW + timedelta(days=next_in_days)
        if naive:
            next_date = next_date.replace(tzinfo=None)
    return {"status": status, "applied_date": date(2024, 1, applied_day), "next_date": next_date}


def test_compute_stats_should_count_by_stage() -> None:
    apps = [
        _app(ApplicationStatus.APPLIED, 1),
        _app(ApplicationStatus.ASSESSMENT, 2),
        _app(ApplicationStatus.INTERVIEW, 3),
        _app(ApplicationStatus.INTERVIEW, 4),
        _app(ApplicationStatus.REJECTED, 5),
        _app(ApplicationStatus.OFFER, 6),
        _app(ApplicationStatus.WITHDRAWN, 7),
    ]

    assert compute_stats(apps) == {
        "total": 7,
        "pending": 4,
        "interviews": 2,
        "rejections": 1,
        "offers": 1,
    }


def test_compute_stats_should_handle_no_applications() -> None:
    assert compute_stats([])["total"] == 0


def test_upcoming_events_should_keep_future_dates_soonest_first() -> None:
    apps = [
        _app(ApplicationStatus.INTERVIEW, 1, next_in_days=3),
        _app(ApplicationStatus.INTERVIEW, 2, next_in_days=-1),
        _app(ApplicationStatus.INTERVIEW, 3, next_in_days=1, naive=True),
        _app(ApplicationStatus.APPLIED, 4),
    ]

    upcoming = upcoming_events(apps, now=NOW)

    assert [a["applied_date"].day for a in upcoming] == [3, 1]


def test_upcoming_events_should_cap_at_five() -> None:
    apps = [_app(ApplicationStatus.INTERVIEW, day, next_in_days=day) for day in range(1, 9)]

    assert len(upcoming_events(apps, now=NOW)) == 5


def test_recent_applications_should_sort_by_applied_date_desc() -> None:
    apps = [_app(ApplicationStatus.APPLIED, day) for day in (5, 20, 1, 12, 7, 3)]

    recent = recent_applications(apps)

    assert [a["applied_date"].day for a in recent] == [20, 12, 7, 5, 3]
