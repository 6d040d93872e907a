"""
Test suite for ApplicationCRUD against an in-memory database.

Tests owner scoping, filtering, search, sorting, paging and cascade deletes.

System role: Verification of application persistence
"""

from datetime import date

import pytest

from jobtracker.boundary.db.CRUD.application_crud import application_crud
from jobtracker.boundary.db.CRUD.document_crud import document_crud
from jobtracker.boundary.db.models import ApplicationStatus, DocumentModel


@pytest.fixture
async def applications(test_async_db, user):
    """Three applications owned by user."""
    rows = []
    for company, position, status, day, notes in [
        ("TechCorp", "Frontend Developer", ApplicationStatus.INTERVIEW, 15, "React heavy"),
        ("BigTech Inc", "Software Engineer", ApplicationStatus.APPLIED, 20, None),
        ("DataDriven Co", "Frontend Architect", ApplicationStatus.OFFER, 5, "Great TEAM"),
    ]:
        rows.append(
            await application_crud.create(
                test_async_db,
                user_id=user.id,
                company=company,
                position=position,
                status=status,
                applied_date=date(2024, 1, day),
                notes=notes,
            )
        )
    await test_async_db.commit()
    return rows


class TestApplicationCRUDOwnership:
    """Owner-scoped lookups behave like missing rows for other users."""

    @pytest.mark.asyncio
    async def test_get_for_user_should_hide_other_users_rows(self, test_async_db, applications, other_user) -> None:
        target = applications[0]

        assert await application_crud.get_for_user(test_async_db, target.id, target.user_id) is not None
        assert await application_crud.get_for_user(test_async_db, target.id, other_user.id) is None

    @pytest.mark.asyncio
    async def test_update_for_user_should_not_touch_other_users_rows(self, test_async_db, applications, other_user) -> None:
        target = applications[0]

        updated = await application_crud.update_for_user(test_async_db, target.id, other_user.id, company="Hacked")

        assert updated is None
        assert (await application_crud.get_by_id(test_async_db, target.id)).company == "TechCorp"

    @pytest.mark.asyncio
    async def test_delete_for_user_should_report_missing(self, test_async_db, applications, other_user) -> None:
        assert await application_crud.delete_for_user(test_async_db, applications[0].id, other_user.id) is False


class TestApplicationCRUDListing:
    """Filtering, search, sorting and paging."""

    @pytest.mark.asyncio
    async def test_status_filter(self, test_async_db, applications, user) -> None:
        rows = await application_crud.list_for_user(test_async_db, user.id, status=ApplicationStatus.OFFER)

        assert [r.company for r in rows] == ["DataDriven Co"]

    @pytest.mark.asyncio
    async def test_search_should_match_company_position_or_notes_case_insensitively(
        self, test_async_db, applications, user
    ) -> None:
        by_position = await application_crud.list_for_user(test_async_db, user.id, search="frontend")
        by_notes = await application_crud.list_for_user(test_async_db, user.id, search="team")

        assert {r.company for r in by_position} == {"TechCorp", "DataDriven Co"}
        assert [r.company for r in by_notes] == ["DataDriven Co"]

    @pytest.mark.asyncio
    async def test_search_should_treat_wildcards_literally(self, test_async_db, applications, user) -> None:
        percent = await application_crud.list_for_user(test_async_db, user.id, search="%")
        underscore = await application_crud.list_for_user(test_async_db, user.id, search="tech_orp")
        count = await application_crud.count_for_user(test_async_db, user.id, search="_")

        assert percent == []
        assert underscore == []
        assert count == 0

    @pytest.mark.asyncio
    async def test_sort_by_applied_date_ascending(self, test_async_db, applications, user) -> None:
        rows = await application_crud.list_for_user(
            test_async_db, user.id, sort_by="appliedDate", sort_order="asc"
        )

        assert [r.applied_date.day for r in rows] == [5, 15, 20]

    @pytest.mark.asyncio
    async def test_paging_and_count(self, test_async_db, applications, user) -> None:
        page = await application_crud.list_for_user(
            test_async_db, user.id, sort_by="company", sort_order="asc", limit=2, offset=2
        )
        total = await application_crud.count_for_user(test_async_db, user.id)

        assert [r.company for r in page] == ["TechCorp"]
        assert total == 3

    @pytest.mark.asyncio
    async def test_count_should_apply_filters(self, test_async_db, applications, user) -> None:
        assert await application_crud.count_for_user(test_async_db, user.id, search="frontend") == 2


class TestCascadeDeletes:
    """Deleting a parent removes its children."""

    @pytest.mark.asyncio
    async def test_deleting_application_should_delete_documents(self, test_async_db, applications, user) -> None:
        target = applications[0]
        document = await document_crud.create(
            test_async_db,
            user_id=user.id,
            application_id=target.id,
            name="cv.pdf",
            size=10,
            mime_type="application/pdf",
            storage_path="k",
        )
        await test_async_db.commit()

        await application_crud.delete_for_user(test_async_db, target.id, user.id)
        await test_async_db.commit()
        test_async_db.expunge_all()

        assert await test_async_db.get(DocumentModel, document.id) is None
