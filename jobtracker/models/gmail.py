"""
Gmail integration schemas.

Dependencies: pydantic
System role: Gmail API contracts
"""

from datetime import datetime

from pydantic import Field

from jobtracker.core.email_classifier import JobEmailCategory
from jobtracker.models.common import CamelModel
from jobtracker.models.user import UserResponse


class GmailConnectResponse(CamelModel):
    """Consent URL for granting Gmail read access."""

    auth_url: str


class GmailStatusResponse(CamelModel):
    """Connection state of the user's Gmail account."""

    is_connected: bool
    connected_at: datetime | None = None
    last_accessed: datetime | None = None
    user: UserResponse


class JobEmailResponse(CamelModel):
    """A categorized job email."""

    id: str
    thread_id: str
    subject: str
    sender: str = Field(alias="from")
    to: str
    date: datetime
    snippet: str
    body: str
    labels: list[str]
    category: JobEmailCategory
    company: str | None = None
    job_title: str | None = None
    confidence: float


class EmailDateRange(CamelModel):
    """Window covered by the fetched emails."""

    days_back: int = Field(alias="from")
    oldest: datetime | None = None
    newest: datetime | None = None


class EmailSummary(CamelModel):
    """Aggregate statistics over fetched emails."""

    total_emails: int
    category_counts: dict[str, int]
    average_confidence: float
    date_range: EmailDateRange


class EmailFetchOptions(CamelModel):
    """Effective options after caps were applied."""

    max_results: int
    days_back: int
    include_spam: bool
    include_trash: bool


class GmailEmailsResponse(CamelModel):
    """Job emails with summary and per-category grouping."""

    success: bool = True
    summary: EmailSummary
    emails: list[JobEmailResponse]
    emails_by_category: dict[str, list[JobEmailResponse]]
    options: EmailFetchOptions


class GmailSearchResponse(CamelModel):
    """Messages matching a free-form Gmail query."""

    success: bool = True
    query: str
    count: int
    emails: list[JobEmailResponse]


class GmailProfileResponse(CamelModel):
    """Mailbox profile."""

    email_address: str
    messages_total: int | None = None
    threads_total: int | None = None
    history_id: str | None = None
