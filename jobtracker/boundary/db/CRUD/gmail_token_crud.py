"""
Gmail token CRUD operations.

Dependencies: sqlalchemy, jobtracker.boundary.db.models
System role: Encrypted Gmail credential persistence
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from jobtracker.boundary.db.CRUD.base_crud import BaseCRUD
from jobtracker.boundary.db.models.gmail_token_model import GmailTokenModel
from jobtracker.boundary.db.upsert import upsert


class GmailTokenCRUD(BaseCRUD[GmailTokenModel]):
    """CRUD operations for GmailTokenModel (one row per user)."""

    def __init__(self) -> None:
        """Initialize GmailTokenCRUD with GmailTokenModel."""
        super().__init__(GmailTokenModel)

    async def get_by_user_id(self, session: AsyncSession, user_id: UUID) -> GmailTokenModel | None:
        """Retrieve the user's stored tokens, if connected."""
        stmt = select(GmailTokenModel).where(GmailTokenModel.user_id == user_id)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def store(
        self,
        session: AsyncSession,
        user_id: UUID,
        access_token_encrypted: str,
        refresh_token_encrypted: str | None,
        scope: str | None,
        expires_at: datetime | None,
        connected_at: datetime,
    ) -> GmailTokenModel:
        """
        Save (or replace) the user's encrypted tokens.

        A reconnect without a refresh token keeps the stored one.

        Returns:
            GmailTokenModel: Stored token row
        """
        values = {
            "user_id": user_id,
            "access_token_encrypted": access_token_encrypted,
            "refresh_token_encrypted": refresh_token_encrypted,
            "scope": scope,
            "expires_at": expires_at,
            "connected_at": connected_at,
        }
        update_columns = ["access_token_encrypted", "scope", "expires_at", "connected_at"]
        if refresh_token_encrypted is not None:
            update_columns.append("refresh_token_encrypted")
        return await upsert(
            session,
            GmailTokenModel,
            values,
            conflict_columns=["user_id"],
            update_columns=update_columns,
        )

    async def delete_by_user_id(self, session: AsyncSession, user_id: UUID) -> bool:
        """Delete the user's tokens; True if a row was removed."""
        result = await session.execute(delete(GmailTokenModel).where(GmailTokenModel.user_id == user_id))
        return result.rowcount > 0


gmail_token_crud = GmailTokenCRUD()
