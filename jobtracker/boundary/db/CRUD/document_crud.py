"""
Document CRUD operations.

Provides owner-scoped operations for DocumentModel with filtering by
application and type.

Dependencies: sqlalchemy, jobtracker.boundary.db.models
System role: Document metadata persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from jobtracker.boundary.db.CRUD.base_crud import UserOwnedCRUD
from jobtracker.boundary.db.models.document_model import DocumentModel, DocumentType


class DocumentCRUD(UserOwnedCRUD[DocumentModel]):
    """CRUD operations for DocumentModel."""

    def __init__(self) -> None:
        """Initialize DocumentCRUD with DocumentModel."""
        super().__init__(DocumentModel)

    async def list_for_user(
        self,
        session: AsyncSession,
        user_id: UUID,
        application_id: UUID | None = None,
        document_type: DocumentType | None = None,
    ) -> Sequence[DocumentModel]:
        """
        Retrieve a user's documents, newest upload first.

        Args:
            session: Async database session
            user_id: Owner UUID
            application_id: Only documents of this application
            document_type: Only documents of this type

        Returns:
            Sequence of DocumentModels
        """
        stmt = select(DocumentModel).where(DocumentModel.user_id == user_id)
        if application_id is not None:
            stmt = stmt.where(DocumentModel.application_id == application_id)
        if document_type is not None:
            stmt = stmt.where(DocumentModel.type == document_type)
        stmt = stmt.order_by(DocumentModel.upload_date.desc())
        result = await session.execute(stmt)
        return result.scalars().all()


document_crud = DocumentCRUD()
