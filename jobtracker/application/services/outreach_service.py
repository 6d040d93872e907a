"""
Outreach service orchestrator.

Logs batches of LinkedIn connection requests and tracks contact responses.
A batch (message template, contacts and actions) is written in a single
transaction.

Dependencies: jobtracker.boundary.db.CRUD
System role: Outreach use case orchestration
"""

import logging
from datetime import datetime, timezone
from typing import Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from jobtracker.boundary.db.CRUD.application_crud import application_crud
from jobtracker.boundary.db.CRUD.outreach_crud import (
    outreach_action_crud,
    outreach_contact_crud,
    outreach_message_crud,
)
from jobtracker.boundary.db.models.outreach_model import OutreachStatus
from jobtracker.core.exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def contact_to_dict(contact) -> dict:
    return {
        "id": contact.id,
        "full_name": contact.full_name,
        "headline": contact.headline,
        "linkedin_url": contact.linkedin_url,
        "avatar_url": contact.avatar_url,
    }


def action_to_dict(action, contact=None) -> dict:
    """Map an OutreachActionModel row (and its contact) to a dict."""
    contact = contact if contact is not None else action.contact
    return {
        "id": action.id,
        "contact_id": action.contact_id,
        "application_id": action.application_id,
        "message_id": action.message_id,
        "company": action.company,
        "status": action.status,
        "sent_at": action.sent_at,
        "responded_at": action.responded_at,
        "notes": action.notes,
        "contact": contact_to_dict(contact) if contact is not None else None,
    }


def message_to_dict(message) -> dict:
    return {
        "id": message.id,
        "application_id": message.application_id,
        "body": message.body,
        "created_at": message.created_at,
        "updated_at": message.updated_at,
    }


def dedupe_urls(urls: Sequence[str]) -> list[str]:
    """Drop repeated URLs, keeping first-seen order."""
    return list(dict.fromkeys(str(url) for url in urls))


class OutreachService:
    """Outreach service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize outreach service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def log_outreach_batch(
        self,
        user_id: UUID,
        message_body: str,
        contact_urls: Sequence[str],
        application_id: UUID | None = None,
        company: str | None = None,
    ) -> list[dict]:
        """
        Record connection requests sent to a set of profiles.

        Steps, all in one transaction:
            1. Upsert the application's message template (when an application is given)
            2. Get or create one contact per distinct URL
            3. Insert one pending action per contact

        Args:
            user_id: Owner UUID
            message_body: Message sent with the requests
            contact_urls: Profile URLs; duplicates are collapsed
            application_id: Related application
            company: Target company (defaults to the application's company)

        Returns:
            list[dict]: Created actions with their contacts

        Raises:
            ValidationError: If neither application_id nor company is given
            NotFoundError: If the application does not exist or is not owned
        """
        company = company.strip() if company else None
        if application_id is None and not company:
            raise ValidationError("Either applicationId or company must be provided", field="company")

        urls = dedupe_urls(contact_urls)
        if not urls:
            raise ValidationError("At least one contact is required", field="contacts")

        message_id = None
        if application_id is not None:
            application = await application_crud.get_for_user(self.db, application_id, user_id)
            if not application:
                raise NotFoundError("Application", application_id)
            company = company or application.company

        try:
            if application_id is not None:
                message = await outreach_message_crud.upsert_for_application(
                    self.db, user_id, application_id, message_body
                )
                message_id = message.id

            created = []
            for url in urls:
                contact = await outreach_contact_crud.get_or_create(self.db, user_id, url)
                action = await outreach_action_crud.create(
                    self.db,
                    user_id=user_id,
                    contact_id=contact.id,
                    application_id=application_id,
                    message_id=message_id,
                    company=company,
                    status=OutreachStatus.PENDING,
                )
                created.append(action_to_dict(action, contact))

            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(
                "Failed to log outreach batch",
                extra={"error": str(e), "user_id": str(user_id), "contacts": len(urls)}
            )
            raise

        logger.info(
            "Outreach batch logged",
            extra={
                "user_id": str(user_id),
                "application_id": str(application_id) if application_id else None,
                "actions": len(created),
            }
        )
        return created

    async def list_outreach(
        self,
        user_id: UUID,
        status: OutreachStatus | None = None,
        company: str | None = None,
    ) -> list[dict]:
        """
        List the user's outreach actions with contacts, most recent first.

        Args:
            user_id: Owner UUID
            status: Only this response state
            company: Case-insensitive company substring
        """
        actions = await outreach_action_crud.list_for_user(
            self.db, user_id, status=status, company=company
        )
        return [action_to_dict(a) for a in actions]

    async def list_application_outreach(self, user_id: UUID, application_id: UUID) -> list[dict]:
        """
        List outreach actions for one application.

        Raises:
            NotFoundError: If the application does not exist or is not owned
        """
        if not await application_crud.get_for_user(self.db, application_id, user_id):
            raise NotFoundError("Application", application_id)
        actions = await outreach_action_crud.list_for_user(
            self.db, user_id, application_id=application_id
        )
        return [action_to_dict(a) for a in actions]

    async def get_application_message(self, user_id: UUID, application_id: UUID) -> dict | None:
        """
        Get the message template of an application.

        Returns:
            dict | None: Template, None if none was logged yet

        Raises:
            NotFoundError: If the application does not exist or is not owned
        """
        if not await application_crud.get_for_user(self.db, application_id, user_id):
            raise NotFoundError("Application", application_id)
        message = await outreach_message_crud.get_for_application(self.db, user_id, application_id)
        return message_to_dict(message) if message else None

    async def update_outreach_status(
        self,
        user_id: UUID,
        action_id: UUID,
        status: OutreachStatus,
        responded_at: datetime | None = None,
    ) -> dict:
        """
        Record a contact's response.

        responded_at is the given value; otherwise now for any non-pending
        status, and cleared when moving back to pending.

        Args:
            user_id: Owner UUID
            action_id: Outreach action UUID
            status: New response state
            responded_at: Explicit response time

        Returns:
            dict: Updated action with contact

        Raises:
            NotFoundError: If the action does not exist or is not owned
        """
        action = await outreach_action_crud.get_for_user(self.db, action_id, user_id)
        if not action:
            raise NotFoundError("Outreach action", action_id)

        if responded_at is None and status != OutreachStatus.PENDING:
            responded_at = datetime.now(timezone.utc)

        try:
            action.status = status
            action.responded_at = responded_at
            await self.db.flush()
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(
                "Failed to update outreach status",
                extra={"error": str(e), "action_id": str(action_id)}
            )
            raise

        logger.info(
            "Outreach status updated",
            extra={"action_id": str(action_id), "status": status.value}
        )
        return action_to_dict(action)
