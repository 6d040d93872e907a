"""
Gmail token ORM model.

Encrypted OAuth tokens linking a user to the Gmail account they connected.

Dependencies: sqlalchemy, jobtracker.boundary.db.base
System role: Encrypted credential storage for the Gmail integration
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from jobtracker.boundary.db.base import Base, UUIDMixin, TimestampMixin, utc_now


class GmailTokenModel(Base, UUIDMixin, TimestampMixin):
    """
    Gmail token ORM model; at most one connection per user.

    Attributes:
        user_id: Owner (unique, cascade delete)
        access_token_encrypted: AES-GCM ciphertext of the access token
        refresh_token_encrypted: AES-GCM ciphertext of the refresh token
        scope: Scopes granted by the user
        expires_at: Access token expiry
        connected_at: When the account was (re)connected
        last_accessed: Last time emails were read with these tokens
    """

    __tablename__ = "gmail_tokens"

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    access_token_encrypted: Mapped[str] = mapped_column(Text, nullable=False)
    refresh_token_encrypted: Mapped[str | None] = mapped_column(Text, nullable=True)
    scope: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    expires_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    connected_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utc_now)
    last_accessed: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    user = relationship("UserModel", back_populates="gmail_token")
