"""
Application CRUD operations.

Provides owner-scoped operations for ApplicationModel with filtered,
sorted and paginated listing.

Dependencies: sqlalchemy, jobtracker.boundary.db.models
System role: Application persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from jobtracker.boundary.db.CRUD.base_crud import LIKE_ESCAPE, UserOwnedCRUD, like_pattern
from jobtracker.boundary.db.models.application_model import ApplicationModel, ApplicationStatus

SORT_COLUMNS = {
    "createdAt": ApplicationModel.created_at,
    "appliedDate": ApplicationModel.applied_date,
    "company": ApplicationModel.company,
    "position": ApplicationModel.position,
}


class ApplicationCRUD(UserOwnedCRUD[ApplicationModel]):
    """
    CRUD operations for ApplicationModel.

    Extends UserOwnedCRUD with filtered listing used by the applications
    table, the export endpoint and the dashboard.
    """

    def __init__(self) -> None:
        """Initialize ApplicationCRUD with ApplicationModel."""
        super().__init__(ApplicationModel)

    @staticmethod
    def _filters(
        user_id: UUID,
        status: ApplicationStatus | None,
        search: str | None,
    ) -> list:
        conditions = [ApplicationModel.user_id == user_id]
        if status is not None:
            conditions.append(ApplicationModel.status == status)
        if search:
            pattern = like_pattern(search)
            conditions.append(
                or_(
                    func.lower(ApplicationModel.company).like(pattern, escape=LIKE_ESCAPE),
                    func.lower(ApplicationModel.position).like(pattern, escape=LIKE_ESCAPE),
                    func.lower(ApplicationModel.notes).like(pattern, escape=LIKE_ESCAPE),
                )
            )
        return conditions

    async def list_for_user(
        self,
        session: AsyncSession,
        user_id: UUID,
        status: ApplicationStatus | None = None,
        search: str | None = None,
        sort_by: str = "createdAt",
        sort_order: str = "desc",
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[ApplicationModel]:
        """
        Retrieve a user's applications with filtering, sorting and paging.

        Args:
            session: Async database session
            user_id: Owner UUID
            status: Only this pipeline stage
            search: Case-insensitive substring of company, position or notes
            sort_by: createdAt, appliedDate, company or position
            sort_order: asc or desc
            limit: Maximum rows (None for all)
            offset: Rows to skip

        Returns:
            Sequence of ApplicationModels
        """
        column = SORT_COLUMNS.get(sort_by, ApplicationModel.created_at)
        ordering = column.asc() if sort_order == "asc" else column.desc()

        stmt = (
            select(ApplicationModel)
            .where(*self._filters(user_id, status, search))
            .order_by(ordering, ApplicationModel.id)
            .offset(offset)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def count_for_user(
        self,
        session: AsyncSession,
        user_id: UUID,
        status: ApplicationStatus | None = None,
        search: str | None = None,
    ) -> int:
        """
        Count a user's applications matching the same filters as list_for_user.

        Returns:
            int: Number of matching rows
        """
        stmt = (
            select(func.count())
            .select_from(ApplicationModel)
            .where(*self._filters(user_id, status, search))
        )
        result = await session.execute(stmt)
        return result.scalar_one()


application_crud = ApplicationCRUD()
