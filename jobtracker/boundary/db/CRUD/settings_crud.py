"""
User settings CRUD operations.

Dependencies: sqlalchemy, jobtracker.boundary.db.models
System role: Preference persistence operations
"""

from typing import Any
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from jobtracker.boundary.db.CRUD.base_crud import BaseCRUD
from jobtracker.boundary.db.models.settings_model import UserSettingsModel
from jobtracker.boundary.db.upsert import upsert


class SettingsCRUD(BaseCRUD[UserSettingsModel]):
    """CRUD operations for UserSettingsModel (one row per user)."""

    def __init__(self) -> None:
        """Initialize SettingsCRUD with UserSettingsModel."""
        super().__init__(UserSettingsModel)

    async def get_by_user_id(self, session: AsyncSession, user_id: UUID) -> UserSettingsModel | None:
        """Retrieve the user's settings row, if any."""
        stmt = select(UserSettingsModel).where(UserSettingsModel.user_id == user_id)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def upsert_for_user(
        self,
        session: AsyncSession,
        user_id: UUID,
        **fields: Any,
    ) -> UserSettingsModel:
        """
        Create the user's settings or update only the given fields.

        Fields not provided keep their stored value, or take the column
        default on first insert.

        Args:
            session: Async database session
            user_id: Owner UUID
            **fields: Settings columns to write

        Returns:
            UserSettingsModel: Stored settings
        """
        return await upsert(
            session,
            UserSettingsModel,
            {"user_id": user_id, **fields},
            conflict_columns=["user_id"],
            update_columns=list(fields),
        )


settings_crud = SettingsCRUD()
