"""
Dashboard service.

Dependencies: jobtracker.application.services.application_service, jobtracker.core.dashboard_stats
System role: Dashboard aggregation use case
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from jobtracker.application.services.application_service import ApplicationService
from jobtracker.core.dashboard_stats import compute_stats, recent_applications, upcoming_events


class DashboardService:
    """Builds the dashboard view from the user's applications."""

    def __init__(self, db: AsyncSession) -> None:
        self.applications = ApplicationService(db)

    async def get_dashboard(self, user_id: UUID, now: datetime | None = None) -> dict:
        """
        Aggregate the user's applications for the dashboard.

        Args:
            user_id: Owner UUID
            now: Reference time for upcoming events

        Returns:
            dict: applications, stats, upcoming_events (next 5) and
                recent_applications (last 5 applied)
        """
        applications = await self.applications.export_applications(user_id)
        return {
            "applications": applications,
            "stats": compute_stats(applications),
            "upcoming_events": upcoming_events(applications, now=now),
            "recent_applications": recent_applications(applications),
        }
