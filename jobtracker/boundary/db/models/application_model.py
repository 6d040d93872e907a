"""
Application ORM model.

One job application tracked by a user, with its pipeline status and the
next scheduled event.

Dependencies: sqlalchemy, jobtracker.boundary.db.base
System role: Core tracked entity
"""

import enum
from datetime import date, datetime
from uuid import UUID

from sqlalchemy import Date, DateTime, Enum, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from jobtracker.boundary.db.base import Base, UUIDMixin, TimestampMixin


class ApplicationStatus(str, enum.Enum):
    """
    Pipeline stage of an application.

    APPLIED, ASSESSMENT and INTERVIEW count as pending on the dashboard.
    """

    APPLIED = "applied"
    ASSESSMENT = "assessment"
    INTERVIEW = "interview"
    OFFER = "offer"
    REJECTED = "rejected"
    WITHDRAWN = "withdrawn"


class ApplicationModel(Base, UUIDMixin, TimestampMixin):
    """
    Application ORM model.

    Attributes:
        user_id: Owner (cascade delete with user)
        company: Company name
        position: Role applied for
        status: Pipeline stage (default APPLIED)
        applied_date: Date the application was sent
        next_date: When the next event happens (optional)
        next_event: Label of the next event, e.g. "Technical Interview"
        cv_version: Which CV variant was sent
        notes: Free text
        job_url: Link to the posting

    Relationships:
        documents: One-to-many with DocumentModel (cascade delete)
    """

    __tablename__ = "applications"

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    company: Mapped[str] = mapped_column(String(100), nullable=False)
    position: Mapped[str] = mapped_column(String(100), nullable=False)
    status: Mapped[ApplicationStatus] = mapped_column(
        Enum(
            ApplicationStatus,
            native_enum=False,
            length=20,
            values_callable=lambda e: [member.value for member in e],
        ),
        nullable=False,
        default=ApplicationStatus.APPLIED,
        index=True,
    )
    applied_date: Mapped[date] = mapped_column(Date, nullable=False)
    next_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    next_event: Mapped[str | None] = mapped_column(String(100), nullable=True)
    cv_version: Mapped[str | None] = mapped_column(String(50), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    job_url: Mapped[str | None] = mapped_column(String(2048), nullable=True)

    user = relationship("UserModel", back_populates="applications")
    documents = relationship(
        "DocumentModel",
        back_populates="application",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
