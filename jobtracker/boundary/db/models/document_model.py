"""
Document ORM model.

Metadata for a file (CV, cover letter, ...) attached to an application.
The bytes live in object storage under storage_path.

Dependencies: sqlalchemy, jobtracker.boundary.db.base
System role: Document metadata persistence
"""

import enum
from datetime import datetime
from uuid import UUID

from sqlalchemy import DateTime, Enum, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from jobtracker.boundary.db.base import Base, UUIDMixin, TimestampMixin, utc_now


class DocumentType(str, enum.Enum):
    """Kind of document attached to an application."""

    CV = "cv"
    COVER_LETTER = "cover-letter"
    PORTFOLIO = "portfolio"
    OTHER = "other"


class DocumentModel(Base, UUIDMixin, TimestampMixin):
    """
    Document ORM model.

    Attributes:
        user_id: Owner (cascade delete with user)
        application_id: Parent application (cascade delete)
        name: Display name, editable
        type: Document kind (default OTHER)
        size: File size in bytes
        mime_type: Content type recorded at upload
        storage_path: Object key written at upload; downloads read the same key
        upload_date: When the file was stored
    """

    __tablename__ = "documents"

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    application_id: Mapped[UUID] = mapped_column(
        ForeignKey("applications.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[DocumentType] = mapped_column(
        Enum(
            DocumentType,
            native_enum=False,
            length=20,
            values_callable=lambda e: [member.value for member in e],
        ),
        nullable=False,
        default=DocumentType.OTHER,
    )
    size: Mapped[int] = mapped_column(Integer, nullable=False)
    mime_type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    storage_path: Mapped[str | None] = mapped_column(
        String(1024),
        nullable=True,
        doc="Object storage key; set once the upload succeeds",
    )
    upload_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
    )

    application = relationship("ApplicationModel", back_populates="documents")
