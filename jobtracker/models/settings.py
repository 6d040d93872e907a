"""
User settings schemas.

Dependencies: pydantic
System role: Preference API contracts
"""

import uuid
from datetime import datetime

from pydantic import Field

from jobtracker.boundary.db.models.settings_model import ExportFormat
from jobtracker.models.common import CamelModel, StrictCamelModel


class UserSettingsResponse(CamelModel):
    """Stored preferences."""

    id: uuid.UUID
    user_id: uuid.UUID
    notifications: bool
    auto_sync: bool
    dark_mode: bool
    email_reminders: bool
    export_format: ExportFormat
    data_retention: int
    created_at: datetime
    updated_at: datetime


class UpdateSettingsRequest(StrictCamelModel):
    """Partial preferences update; unknown keys are rejected."""

    notifications: bool | None = None
    auto_sync: bool | None = None
    dark_mode: bool | None = None
    email_reminders: bool | None = None
    export_format: ExportFormat | None = None
    data_retention: int | None = Field(None, ge=1, le=3650)
