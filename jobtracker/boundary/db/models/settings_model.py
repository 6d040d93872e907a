"""
User settings ORM model.

One row per user holding UI and export preferences.

Dependencies: sqlalchemy, jobtracker.boundary.db.base
System role: Preference persistence
"""

import enum
from uuid import UUID

from sqlalchemy import Boolean, CheckConstraint, Enum, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship

from jobtracker.boundary.db.base import Base, UUIDMixin, TimestampMixin


class ExportFormat(str, enum.Enum):
    """Preferred export file format."""

    JSON = "json"
    CSV = "csv"


class UserSettingsModel(Base, UUIDMixin, TimestampMixin):
    """
    User settings ORM model.

    Constraints:
        user_id: UNIQUE; settings are upserted per user
        data_retention: between 1 and 3650 days
    """

    __tablename__ = "user_settings"
    __table_args__ = (
        CheckConstraint("data_retention BETWEEN 1 AND 3650", name="ck_user_settings_data_retention"),
    )

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    notifications: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    auto_sync: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    dark_mode: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    email_reminders: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    export_format: Mapped[ExportFormat] = mapped_column(
        Enum(
            ExportFormat,
            native_enum=False,
            length=10,
            values_callable=lambda e: [member.value for member in e],
        ),
        nullable=False,
        default=ExportFormat.JSON,
    )
    data_retention: Mapped[int] = mapped_column(Integer, nullable=False, default=365)

    user = relationship("UserModel", back_populates="settings")
