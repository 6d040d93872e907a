"""
Dashboard schemas.

Dependencies: pydantic
System role: Dashboard API contracts
"""

from jobtracker.models.application import ApplicationResponse
from jobtracker.models.common import CamelModel


class DashboardStats(CamelModel):
    """Application counters."""

    total: int
    pending: int
    interviews: int
    rejections: int
    offers: int


class DashboardResponse(CamelModel):
    """Everything the dashboard page renders."""

    applications: list[ApplicationResponse]
    stats: DashboardStats
    upcoming_events: list[ApplicationResponse]
    recent_applications: list[ApplicationResponse]
