"""
Application service orchestrator.

Coordinates job application lifecycle operations: paginated listing,
CRUD, export and per-application views. Every operation is scoped to
the requesting user.

Dependencies: jobtracker.boundary.db.CRUD, jobtracker.boundary.db.models
System role: Application use case orchestration
"""

import logging
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from jobtracker.boundary.db.CRUD.application_crud import application_crud
from jobtracker.boundary.db.models.application_model import ApplicationStatus
from jobtracker.core.exceptions import NotFoundError

logger = logging.getLogger(__name__)


def application_to_dict(application) -> dict:
    """Map an ApplicationModel row to the dict returned by the service."""
    return {
        "id": application.id,
        "user_id": application.user_id,
        "company": application.company,
        "position": application.position,
        "status": application.status,
        "applied_date": application.applied_date,
        "next_date": application.next_date,
        "next_event": application.next_event,
        "cv_version": application.cv_version,
        "notes": application.notes,
        "job_url": application.job_url,
        "created_at": application.created_at,
        "updated_at": application.updated_at,
    }


class ApplicationService:
    """Application service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize application service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def list_applications(
        self,
        user_id: UUID,
        page: int = 1,
        limit: int = 20,
        status: ApplicationStatus | None = None,
        search: str | None = None,
        sort_by: str = "createdAt",
        sort_order: str = "desc",
    ) -> tuple[list[dict], int]:
        """
        List a page of the user's applications.

        Args:
            user_id: Owner UUID
            page: 1-based page number
            limit: Page size
            status: Only this pipeline stage
            search: Case-insensitive match on company, position or notes
            sort_by: createdAt, appliedDate, company or position
            sort_order: asc or desc

        Returns:
            tuple[list[dict], int]: Page of application dicts and total matches
        """
        try:
            total = await application_crud.count_for_user(
                self.db, user_id, status=status, search=search
            )
            applications = await application_crud.list_for_user(
                self.db,
                user_id,
                status=status,
                search=search,
                sort_by=sort_by,
                sort_order=sort_order,
                limit=limit,
                offset=(page - 1) * limit,
            )
            return [application_to_dict(a) for a in applications], total
        except Exception as e:
            logger.error(
                "Failed to list applications",
                extra={"error": str(e), "user_id": str(user_id)}
            )
            raise

    async def export_applications(
        self,
        user_id: UUID,
        status: ApplicationStatus | None = None,
    ) -> list[dict]:
        """
        Get every application of the user, newest first.

        Args:
            user_id: Owner UUID
            status: Only this pipeline stage

        Returns:
            list[dict]: Application dicts
        """
        applications = await application_crud.list_for_user(self.db, user_id, status=status)
        return [application_to_dict(a) for a in applications]

    async def get_application(self, user_id: UUID, application_id: UUID) -> dict:
        """
        Get application by ID.

        Args:
            user_id: Owner UUID
            application_id: Application UUID

        Returns:
            dict: Application data

        Raises:
            NotFoundError: If the application does not exist or is not owned
        """
        application = await application_crud.get_for_user(self.db, application_id, user_id)
        if not application:
            raise NotFoundError("Application", application_id)
        return application_to_dict(application)

    async def ensure_owned(self, user_id: UUID, application_id: UUID) -> None:
        """
        Check that an application belongs to the user.

        Raises:
            NotFoundError: If the application does not exist or is not owned
        """
        if not await application_crud.get_for_user(self.db, application_id, user_id):
            raise NotFoundError("Application", application_id)

    async def create_application(self, user_id: UUID, **fields: Any) -> dict:
        """
        Create new application.

        Args:
            user_id: Owner UUID
            **fields: Validated application fields

        Returns:
            dict: Created application
        """
        try:
            application = await application_crud.create(self.db, user_id=user_id, **fields)
            await self.db.commit()
            logger.info(
                "Application created",
                extra={"application_id": str(application.id), "company": application.company}
            )
            return application_to_dict(application)
        except Exception as e:
            await self.db.rollback()
            logger.error(
                "Failed to create application",
                extra={"error": str(e), "user_id": str(user_id)}
            )
            raise

    async def update_application(
        self,
        user_id: UUID,
        application_id: UUID,
        **fields: Any,
    ) -> dict:
        """
        Update the given fields of an application.

        Args:
            user_id: Owner UUID
            application_id: Application UUID
            **fields: Fields present in the request (None clears nullable columns)

        Returns:
            dict: Updated application

        Raises:
            NotFoundError: If the application does not exist or is not owned
        """
        if not fields:
            return await self.get_application(user_id, application_id)

        try:
            application = await application_crud.update_for_user(
                self.db, application_id, user_id, **fields
            )
            if not application:
                raise NotFoundError("Application", application_id)
            await self.db.commit()
        except NotFoundError:
            await self.db.rollback()
            raise
        except Exception as e:
            await self.db.rollback()
            logger.error(
                "Failed to update application",
                extra={"error": str(e), "application_id": str(application_id)}
            )
            raise

        logger.info(
            "Application updated",
            extra={"application_id": str(application_id), "fields": sorted(fields)}
        )
        return application_to_dict(application)

    async def delete_application(self, user_id: UUID, application_id: UUID) -> None:
        """
        Delete an application; documents and outreach rows cascade.

        Raises:
            NotFoundError: If the application does not exist or is not owned
        """
        deleted = await application_crud.delete_for_user(self.db, application_id, user_id)
        if not deleted:
            await self.db.rollback()
            raise NotFoundError("Application", application_id)
        await self.db.commit()
        logger.info("Application deleted", extra={"application_id": str(application_id)})
