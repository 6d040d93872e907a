"""
Test suite for ApplicationService and DashboardService.

System role: Verification of application tracking use cases
"""

import uuid
from datetime import date, datetime, timedelta, timezone

import pytest

from jobtracker.application.services.application_service import ApplicationService
from jobtracker.application.services.dashboard_service import DashboardService
from jobtracker.boundary.db.models import ApplicationStatus
from jobtracker.core.exceptions import NotFoundError


@pytest.fixture
def application_service(test_async_db) -> ApplicationService:
    return ApplicationService(db=test_async_db)


async def _create(service, user_id, company, **fields):
    return await service.create_application(
        user_id,
        company=company,
        position=fields.pop("position", "Engineer"),
        applied_date=fields.pop("applied_date", date(2024, 1, 15)),
        **fields,
    )


class TestApplicationService:
    """CRUD and paging through the service layer."""

    @pytest.mark.asyncio
    async def test_create_should_default_status_to_applied(self, application_service, user) -> None:
        created = await _create(application_service, user.id, "TechCorp")

        assert created["status"] == ApplicationStatus.APPLIED
        assert created["user_id"] == user.id

    @pytest.mark.asyncio
    async def test_list_should_page_and_report_total(self, application_service, user) -> None:
        for company in ("A", "B", "C"):
            await _create(application_service, user.id, company)

        page, total = await application_service.list_applications(
            user.id, page=2, limit=2, sort_by="company", sort_order="asc"
        )

        assert total == 3
        assert [a["company"] for a in page] == ["C"]

    @pytest.mark.asyncio
    async def test_update_should_change_only_given_fields(self, application_service, user) -> None:
        created = await _create(application_service, user.id, "TechCorp", notes="keep me")

        updated = await application_service.update_application(
            user.id, created["id"], status=ApplicationStatus.INTERVIEW
        )

        assert updated["status"] == ApplicationStatus.INTERVIEW
        assert updated["notes"] == "keep me"

    @pytest.mark.asyncio
    async def test_update_of_other_users_application_should_be_not_found(
        self, application_service, user, other_user
    ) -> None:
        created = await _create(application_service, user.id, "TechCorp")

        with pytest.raises(NotFoundError):
            await application_service.update_application(other_user.id, created["id"], company="X")

    @pytest.mark.asyncio
    async def test_delete_twice_should_be_not_found(self, application_service, user) -> None:
        created = await _create(application_service, user.id, "TechCorp")
        await application_service.delete_application(user.id, created["id"])

        with pytest.raises(NotFoundError):
            await application_service.delete_application(user.id, created["id"])

    @pytest.mark.asyncio
    async def test_get_missing_should_be_not_found(self, application_service, user) -> None:
        with pytest.raises(NotFoundError):
            await application_service.get_application(user.id, uuid.uuid4())


class TestDashboardService:
    """DashboardService.get_dashboard()."""

    @pytest.mark.asyncio
    async def test_should_aggregate_stats_and_events(self, test_async_db, application_service, user) -> None:
        now = datetime(2024, 3, 1, tzinfo=timezone.utc)
        await _create(application_service, user.id, "A", status=ApplicationStatus.INTERVIEW,
                      next_date=now + timedelta(days=2), next_event="Onsite")
        await _create(application_service, user.id, "B", status=ApplicationStatus.REJECTED,
                      next_date=now - timedelta(days=2))
        await _create(application_service, user.id, "C", status=ApplicationStatus.OFFER,
                      applied_date=date(2024, 2, 1))

        dashboard = await DashboardService(test_async_db).get_dashboard(user.id, now=now)

        assert dashboard["stats"] == {"total": 3, "pending": 1, "interviews": 1, "rejections": 1, "offers": 1}
        assert [a["company"] for a in dashboard["upcoming_events"]] == ["A"]
        assert dashboard["recent_applications"][0]["company"] == "C"
