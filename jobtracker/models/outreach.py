"""
Outreach schemas.

Request/response schemas for logging LinkedIn outreach and tracking
responses.

Dependencies: pydantic
System role: Outreach API contracts
"""

import uuid
from datetime import datetime

from pydantic import Field, HttpUrl, model_validator

from jobtracker.boundary.db.models.outreach_model import OutreachStatus
from jobtracker.models.common import CamelModel


class LogOutreachRequest(CamelModel):
    """Request schema for logging a batch of connection requests."""

    application_id: uuid.UUID | None = None
    company: str | None = Field(None, max_length=100)
    message_body: str = Field(..., min_length=1, max_length=1000)
    contacts: list[HttpUrl] = Field(..., min_length=1, max_length=20)

    @model_validator(mode="after")
    def application_or_company(self) -> "LogOutreachRequest":
        if self.application_id is None and not (self.company and self.company.strip()):
            raise ValueError("Either applicationId or company must be provided")
        return self


class UpdateOutreachStatusRequest(CamelModel):
    """Request schema for recording a contact's response."""

    status: OutreachStatus
    responded_at: datetime | None = None


class OutreachContactResponse(CamelModel):
    """Contact details."""

    id: uuid.UUID
    full_name: str | None = None
    headline: str | None = None
    linkedin_url: str
    avatar_url: str | None = None


class OutreachActionResponse(CamelModel):
    """One logged connection request with its contact."""

    id: uuid.UUID
    contact_id: uuid.UUID
    application_id: uuid.UUID | None = None
    message_id: uuid.UUID | None = None
    company: str | None = None
    status: OutreachStatus
    sent_at: datetime
    responded_at: datetime | None = None
    notes: str | None = None
    contact: OutreachContactResponse | None = None


class OutreachMessageResponse(CamelModel):
    """Message template for an application."""

    id: uuid.UUID
    application_id: uuid.UUID
    body: str
    created_at: datetime
    updated_at: datetime
