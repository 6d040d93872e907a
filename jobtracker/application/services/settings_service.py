"""
Settings service.

Reads and writes per-user preferences. The database row is the only
source of truth; updates are a single insert-or-update keyed on user_id.

Dependencies: jobtracker.boundary.db.CRUD
System role: Preference use cases
"""

import logging
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from jobtracker.boundary.db.CRUD.settings_crud import settings_crud
from jobtracker.core.exceptions import ValidationError

logger = logging.getLogger(__name__)

SETTINGS_FIELDS = frozenset({
    "notifications",
    "auto_sync",
    "dark_mode",
    "email_reminders",
    "export_format",
    "data_retention",
})


def settings_to_dict(settings) -> dict:
    return {
        "id": settings.id,
        "user_id": settings.user_id,
        "notifications": settings.notifications,
        "auto_sync": settings.auto_sync,
        "dark_mode": settings.dark_mode,
        "email_reminders": settings.email_reminders,
        "export_format": settings.export_format,
        "data_retention": settings.data_retention,
        "created_at": settings.created_at,
        "updated_at": settings.updated_at,
    }


class SettingsService:
    """User settings service."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_settings(self, user_id: UUID) -> dict | None:
        """
        Get the user's stored settings.

        Returns:
            dict | None: Settings, None if the user never saved any
        """
        settings = await settings_crud.get_by_user_id(self.db, user_id)
        return settings_to_dict(settings) if settings else None

    async def upsert_settings(self, user_id: UUID, **fields: Any) -> dict:
        """
        Save the given settings fields.

        Args:
            user_id: Owner UUID
            **fields: Settings columns; None values are ignored

        Returns:
            dict: Stored settings

        Raises:
            ValidationError: On unknown fields
        """
        unknown = sorted(set(fields) - SETTINGS_FIELDS)
        if unknown:
            raise ValidationError(
                f"Unknown settings fields: {', '.join(unknown)}",
                field=unknown[0],
            )

        values = {key: value for key, value in fields.items() if value is not None}
        try:
            settings = await settings_crud.upsert_for_user(self.db, user_id, **values)
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error("Failed to save settings", extra={"error": str(e), "user_id": str(user_id)})
            raise

        logger.info("Settings saved", extra={"user_id": str(user_id), "fields": sorted(values)})
        return settings_to_dict(settings)
