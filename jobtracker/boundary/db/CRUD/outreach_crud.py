"""
Outreach CRUD operations.

Contacts (get-or-create by URL), message templates (upsert per
application) and actions (logging and status updates).

Dependencies: sqlalchemy, jobtracker.boundary.db.models
System role: Outreach persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from jobtracker.boundary.db.CRUD.base_crud import LIKE_ESCAPE, UserOwnedCRUD, like_pattern
from jobtracker.boundary.db.models.outreach_model import (
    OutreachActionModel,
    OutreachContactModel,
    OutreachMessageModel,
    OutreachStatus,
)
from jobtracker.boundary.db.upsert import upsert


class OutreachContactCRUD(UserOwnedCRUD[OutreachContactModel]):
    """CRUD operations for OutreachContactModel."""

    def __init__(self) -> None:
        """Initialize OutreachContactCRUD with OutreachContactModel."""
        super().__init__(OutreachContactModel)

    async def get_by_url(
        self,
        session: AsyncSession,
        user_id: UUID,
        linkedin_url: str,
    ) -> OutreachContactModel | None:
        """Retrieve a user's contact by profile URL."""
        stmt = select(OutreachContactModel).where(
            OutreachContactModel.user_id == user_id,
            OutreachContactModel.linkedin_url == linkedin_url,
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_or_create(
        self,
        session: AsyncSession,
        user_id: UUID,
        linkedin_url: str,
    ) -> OutreachContactModel:
        """
        Return the user's contact for a URL, creating it when missing.

        Args:
            session: Async database session
            user_id: Owner UUID
            linkedin_url: Profile URL (unique per user)

        Returns:
            OutreachContactModel: Existing or newly flushed contact
        """
        existing = await self.get_by_url(session, user_id, linkedin_url)
        if existing is not None:
            return existing
        return await self.create(session, user_id=user_id, linkedin_url=linkedin_url)


class OutreachMessageCRUD(UserOwnedCRUD[OutreachMessageModel]):
    """CRUD operations for OutreachMessageModel."""

    def __init__(self) -> None:
        """Initialize OutreachMessageCRUD with OutreachMessageModel."""
        super().__init__(OutreachMessageModel)

    async def upsert_for_application(
        self,
        session: AsyncSession,
        user_id: UUID,
        application_id: UUID,
        body: str,
    ) -> OutreachMessageModel:
        """
        Insert the application's message template or replace its body.

        Returns:
            OutreachMessageModel: The single template for the application
        """
        return await upsert(
            session,
            OutreachMessageModel,
            {"user_id": user_id, "application_id": application_id, "body": body},
            conflict_columns=["application_id"],
            update_columns=["body"],
        )

    async def get_for_application(
        self,
        session: AsyncSession,
        user_id: UUID,
        application_id: UUID,
    ) -> OutreachMessageModel | None:
        """Retrieve the template for an application, if any."""
        stmt = select(OutreachMessageModel).where(
            OutreachMessageModel.user_id == user_id,
            OutreachMessageModel.application_id == application_id,
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()


class OutreachActionCRUD(UserOwnedCRUD[OutreachActionModel]):
    """CRUD operations for OutreachActionModel; contacts are eager-loaded."""

    def __init__(self) -> None:
        """Initialize OutreachActionCRUD with OutreachActionModel."""
        super().__init__(OutreachActionModel)

    async def list_for_user(
        self,
        session: AsyncSession,
        user_id: UUID,
        status: OutreachStatus | None = None,
        company: str | None = None,
        application_id: UUID | None = None,
    ) -> Sequence[OutreachActionModel]:
        """
        Retrieve a user's outreach actions, most recent first.

        Args:
            session: Async database session
            user_id: Owner UUID
            status: Only this response state
            company: Case-insensitive substring of the company name
            application_id: Only actions for this application

        Returns:
            Sequence of OutreachActionModels with contact loaded
        """
        stmt = select(OutreachActionModel).where(OutreachActionModel.user_id == user_id)
        if status is not None:
            stmt = stmt.where(OutreachActionModel.status == status)
        if company:
            stmt = stmt.where(
                func.lower(OutreachActionModel.company).like(like_pattern(company), escape=LIKE_ESCAPE)
            )
        if application_id is not None:
            stmt = stmt.where(OutreachActionModel.application_id == application_id)
        stmt = stmt.order_by(OutreachActionModel.sent_at.desc())
        result = await session.execute(stmt)
        return result.unique().scalars().all()


outreach_contact_crud = OutreachContactCRUD()
outreach_message_crud = OutreachMessageCRUD()
outreach_action_crud = OutreachActionCRUD()
