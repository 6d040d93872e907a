"""
Application schemas.

Request/response schemas for application CRUD and export.

Dependencies: pydantic
System role: Application API contracts
"""

import uuid
from datetime import date, datetime

from pydantic import Field, field_validator

from jobtracker.boundary.db.models.application_model import ApplicationStatus
from jobtracker.models.common import CamelModel, StrictCamelModel

URL_PATTERN = r"^https?://\S+$"


class CreateApplicationRequest(CamelModel):
    """Request schema for creating an application."""

    company: str = Field(..., min_length=1, max_length=100, description="Company name")
    position: str = Field(..., min_length=1, max_length=100, description="Role applied for")
    status: ApplicationStatus = Field(default=ApplicationStatus.APPLIED)
    applied_date: date
    next_date: datetime | None = None
    next_event: str | None = Field(None, max_length=100)
    cv_version: str | None = Field(None, max_length=50)
    notes: str | None = Field(None, max_length=2000)
    job_url: str | None = Field(None, max_length=2048, pattern=URL_PATTERN)


class UpdateApplicationRequest(StrictCamelModel):
    """
    Request schema for updating an application.

    Every field is optional; only fields present in the body are written.
    Nullable columns accept null to clear them.
    """

    company: str | None = Field(None, min_length=1, max_length=100)
    position: str | None = Field(None, min_length=1, max_length=100)
    status: ApplicationStatus | None = None
    applied_date: date | None = None
    next_date: datetime | None = None
    next_event: str | None = Field(None, max_length=100)
    cv_version: str | None = Field(None, max_length=50)
    notes: str | None = Field(None, max_length=2000)
    job_url: str | None = Field(None, max_length=2048, pattern=URL_PATTERN)

    @field_validator("company", "position", "status", "applied_date")
    @classmethod
    def required_fields_not_null(cls, value):
        if value is None:
            raise ValueError("Field cannot be null")
        return value


class ApplicationResponse(CamelModel):
    """Response schema for application operations."""

    id: uuid.UUID
    user_id: uuid.UUID
    company: str
    position: str
    status: ApplicationStatus
    applied_date: date
    next_date: datetime | None = None
    next_event: str | None = None
    cv_version: str | None = None
    notes: str | None = None
    job_url: str | None = None
    created_at: datetime
    updated_at: datetime


class ApplicationExportResponse(CamelModel):
    """JSON export payload."""

    export_date: datetime
    total_applications: int
    applications: list[ApplicationResponse]
