"""
Dashboard statistics.

Dependencies: None (pure domain layer)
System role: Aggregates application rows into dashboard counters and lists
"""

from datetime import datetime, timezone
from typing import Any, Mapping, Sequence

PENDING_STATUSES = frozenset({"applied", "assessment", "interview"})
DASHBOARD_LIST_SIZE = 5


def _status(application: Mapping[str, Any]) -> str:
    status = application.get("status")
    return getattr(status, "value", status)


def _aware(value: datetime) -> datetime:
    # SQLite returns naive datetimes even for timezone-aware columns
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def compute_stats(applications: Sequence[Mapping[str, Any]]) -> dict[str, int]:
    """
    Count applications by pipeline stage.

    Args:
        applications: Application dicts

    Returns:
        dict: total, pending (applied + assessment + interview), interviews,
            rejections and offers
    """
    statuses = [_status(app) for app in applications]
    return {
        "total": len(statuses),
        "pending": sum(1 for s in statuses if s in PENDING_STATUSES),
        "interviews": statuses.count("interview"),
        "rejections": statuses.count("rejected"),
        "offers": statuses.count("offer"),
    }


def upcoming_events(
    applications: Sequence[Mapping[str, Any]],
    now: datetime | None = None,
    limit: int = DASHBOARD_LIST_SIZE,
) -> list[Mapping[str, Any]]:
    """Applications whose next_date is in the future, soonest first."""
    now = _aware(now or datetime.now(timezone.utc))
    upcoming = [
        app for app in applications
        if app.get("next_date") is not None and _aware(app["next_date"]) > now
    ]
    upcoming.sort(key=lambda app: _aware(app["next_date"]))
    return upcoming[:limit]


def recent_applications(
    applications: Sequence[Mapping[str, Any]],
    limit: int = DASHBOARD_LIST_SIZE,
) -> list[Mapping[str, Any]]:
    """Most recently applied-to applications first."""
    return sorted(applications, key=lambda app: app["applied_date"], reverse=True)[:limit]
