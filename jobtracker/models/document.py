"""
Document schemas.

Request/response schemas for document upload, metadata and signed URLs.

Dependencies: pydantic
System role: Document API contracts
"""

import uuid
from datetime import datetime

from pydantic import Field, model_validator

from jobtracker.boundary.db.models.document_model import DocumentType
from jobtracker.models.common import CamelModel, StrictCamelModel


class DocumentResponse(CamelModel):
    """Response schema for document metadata."""

    id: uuid.UUID
    user_id: uuid.UUID
    application_id: uuid.UUID
    name: str
    type: DocumentType
    size: int
    mime_type: str | None = None
    upload_date: datetime
    created_at: datetime
    updated_at: datetime


class SignedDocumentResponse(DocumentResponse):
    """Document metadata with a time-limited download URL."""

    signed_url: str
    expires_at: datetime


class ApplicationDocumentsResponse(CamelModel):
    """Documents attached to one application."""

    application_id: uuid.UUID
    documents: list[DocumentResponse]


class UpdateDocumentRequest(StrictCamelModel):
    """Request schema for renaming or retyping a document."""

    name: str | None = Field(None, min_length=1, max_length=255)
    type: DocumentType | None = None

    @model_validator(mode="after")
    def at_least_one_field(self) -> "UpdateDocumentRequest":
        if self.name is None and self.type is None:
            raise ValueError("At least one of name or type must be provided")
        return self


class UploadValidationResponse(CamelModel):
    """Result of validating an upload without storing it."""

    file_name: str
    file_size: int
    mime_type: str | None = None
    application_id: uuid.UUID | None = None
    is_valid: bool
    errors: list[str] = Field(default_factory=list)
