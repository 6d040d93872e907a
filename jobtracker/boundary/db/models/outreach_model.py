"""
Outreach ORM models.

LinkedIn contacts, per-application message templates and the log of
connection requests sent to contacts.

Dependencies: sqlalchemy, jobtracker.boundary.db.base
System role: Outreach tracking persistence
"""

import enum
from datetime import datetime
from uuid import UUID

from sqlalchemy import DateTime, Enum, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from jobtracker.boundary.db.base import Base, UUIDMixin, TimestampMixin, utc_now


class OutreachStatus(str, enum.Enum):
    """Response state of a connection request."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    IGNORED = "ignored"
    OTHER = "other"


class OutreachContactModel(Base, UUIDMixin, TimestampMixin):
    """
    A LinkedIn profile the user reached out to.

    Unique per (user_id, linkedin_url) so repeated batches reuse the contact.
    """

    __tablename__ = "outreach_contacts"
    __table_args__ = (
        UniqueConstraint("user_id", "linkedin_url", name="uq_outreach_contacts_user_url"),
    )

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    full_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    headline: Mapped[str | None] = mapped_column(String(255), nullable=True)
    linkedin_url: Mapped[str] = mapped_column(String(2048), nullable=False)
    avatar_url: Mapped[str | None] = mapped_column(String(2048), nullable=True)

    actions = relationship(
        "OutreachActionModel",
        back_populates="contact",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class OutreachMessageModel(Base, UUIDMixin, TimestampMixin):
    """Message template sent for an application; at most one per application."""

    __tablename__ = "outreach_messages"

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    application_id: Mapped[UUID] = mapped_column(
        ForeignKey("applications.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    body: Mapped[str] = mapped_column(Text, nullable=False)


class OutreachActionModel(Base, UUIDMixin, TimestampMixin):
    """
    One connection request sent to one contact.

    Attributes:
        contact_id: Contact reached (cascade delete)
        application_id: Related application, if any (cascade delete)
        message_id: Template used, if any (set null when the template goes)
        company: Company the outreach targets
        status: Response state (default PENDING)
        sent_at: When the request was sent
        responded_at: When the contact responded
        notes: Free text
    """

    __tablename__ = "outreach_actions"

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    contact_id: Mapped[UUID] = mapped_column(
        ForeignKey("outreach_contacts.id", ondelete="CASCADE"),
        nullable=False,
    )
    application_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("applications.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    message_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("outreach_messages.id", ondelete="SET NULL"),
        nullable=True,
    )
    company: Mapped[str | None] = mapped_column(String(100), nullable=True)
    status: Mapped[OutreachStatus] = mapped_column(
        Enum(
            OutreachStatus,
            native_enum=False,
            length=20,
            values_callable=lambda e: [member.value for member in e],
        ),
        nullable=False,
        default=OutreachStatus.PENDING,
    )
    sent_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utc_now)
    responded_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    contact = relationship("OutreachContactModel", back_populates="actions", lazy="joined")
