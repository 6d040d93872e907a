"""
User ORM model.

A person who signed in with Google. Owns every other row in the schema.

Dependencies: sqlalchemy, jobtracker.boundary.db.base
System role: Identity for ownership scoping
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from jobtracker.boundary.db.base import Base, UUIDMixin, TimestampMixin


class UserModel(Base, UUIDMixin, TimestampMixin):
    """
    User ORM model keyed by unique email.

    Attributes:
        id: UUID primary key (auto-generated)
        email: Google account email (unique)
        name: Display name from the identity provider
        image: Avatar URL from the identity provider

    Relationships:
        applications: One-to-many, cascade delete
        settings: One-to-one, cascade delete
        gmail_token: One-to-one, cascade delete
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    image: Mapped[str | None] = mapped_column(String(2048), nullable=True)

    applications = relationship(
        "ApplicationModel",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    settings = relationship(
        "UserSettingsModel",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
        uselist=False,
    )
    gmail_token = relationship(
        "GmailTokenModel",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
        uselist=False,
    )
