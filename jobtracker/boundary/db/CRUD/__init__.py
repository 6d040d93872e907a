"""
CRUD operations for database models.

Exports base CRUD classes and model-specific CRUD implementations
with pre-instantiated singletons for direct use.

Usage:
    from jobtracker.boundary.db.CRUD import application_crud

    application = await application_crud.get_for_user(db, application_id, user_id)
"""

from jobtracker.boundary.db.CRUD.base_crud import BaseCRUD, UserOwnedCRUD
from jobtracker.boundary.db.CRUD.user_crud import UserCRUD, user_crud
from jobtracker.boundary.db.CRUD.application_crud import ApplicationCRUD, application_crud
from jobtracker.boundary.db.CRUD.document_crud import DocumentCRUD, document_crud
from jobtracker.boundary.db.CRUD.outreach_crud import (
    OutreachActionCRUD,
    OutreachContactCRUD,
    OutreachMessageCRUD,
    outreach_action_crud,
    outreach_contact_crud,
    outreach_message_crud,
)
from jobtracker.boundary.db.CRUD.settings_crud import SettingsCRUD, settings_crud
from jobtracker.boundary.db.CRUD.gmail_token_crud import GmailTokenCRUD, gmail_token_crud

__all__ = [
    "BaseCRUD",
    "UserOwnedCRUD",
    "UserCRUD",
    "user_crud",
    "ApplicationCRUD",
    "application_crud",
    "DocumentCRUD",
    "document_crud",
    "OutreachActionCRUD",
    "OutreachContactCRUD",
    "OutreachMessageCRUD",
    "outreach_action_crud",
    "outreach_contact_crud",
    "outreach_message_crud",
    "SettingsCRUD",
    "settings_crud",
    "GmailTokenCRUD",
    "gmail_token_crud",
]
