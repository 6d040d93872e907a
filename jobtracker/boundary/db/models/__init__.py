"""
Database models package.

Exports:
  - UserModel: Signed-in user
  - ApplicationModel, ApplicationStatus: Job application and pipeline stage
  - DocumentModel, DocumentType: Application document metadata
  - OutreachContactModel, OutreachMessageModel, OutreachActionModel, OutreachStatus
  - UserSettingsModel, ExportFormat: Per-user preferences
  - GmailTokenModel: Encrypted Gmail OAuth tokens

Dependencies: sqlalchemy, jobtracker.boundary.db.base
System role: Database model definitions for domain entities
"""

from jobtracker.boundary.db.models.user_model import UserModel
from jobtracker.boundary.db.models.application_model import ApplicationModel, ApplicationStatus
from jobtracker.boundary.db.models.document_model import DocumentModel, DocumentType
from jobtracker.boundary.db.models.outreach_model import (
    OutreachActionModel,
    OutreachContactModel,
    OutreachMessageModel,
    OutreachStatus,
)
from jobtracker.boundary.db.models.settings_model import ExportFormat, UserSettingsModel
from jobtracker.boundary.db.models.gmail_token_model import GmailTokenModel

__all__ = [
    "UserModel",
    "ApplicationModel",
    "ApplicationStatus",
    "DocumentModel",
    "DocumentType",
    "OutreachActionModel",
    "OutreachContactModel",
    "OutreachMessageModel",
    "OutreachStatus",
    "ExportFormat",
    "UserSettingsModel",
    "GmailTokenModel",
]
