"""
Document service orchestrator.

Coordinates document storage and metadata: validated uploads, signed
URLs, downloads, renames and deletion. Object keys are derived once at
upload and stored on the row.

Dependencies: jobtracker.boundary.db.CRUD, jobtracker.boundary.storage, jobtracker.core
System role: Document use case orchestration
"""

import asyncio
import logging
from uuid import UUID, uuid4

from sqlalchemy.ext.asyncio import AsyncSession

from jobtracker.boundary.db.CRUD.application_crud import application_crud
from jobtracker.boundary.db.CRUD.document_crud import document_crud
from jobtracker.boundary.db.models.document_model import DocumentType
from jobtracker.boundary.storage.s3_client import S3DocumentClient
from jobtracker.configs.storage import StorageSettings
from jobtracker.core.exceptions import NotFoundError, StorageError, ValidationError
from jobtracker.core.file_validation import generate_document_path, validate_file

logger = logging.getLogger(__name__)


def document_to_dict(document) -> dict:
    """Map a DocumentModel row to the dict returned by the service."""
    return {
        "id": document.id,
        "user_id": document.user_id,
        "application_id": document.application_id,
        "name": document.name,
        "type": document.type,
        "size": document.size,
        "mime_type": document.mime_type,
        "storage_path": document.storage_path,
        "upload_date": document.upload_date,
        "created_at": document.created_at,
        "updated_at": document.updated_at,
    }


class DocumentService:
    """Document service orchestrator."""

    def __init__(
        self,
        db: AsyncSession,
        storage: S3DocumentClient,
        settings: StorageSettings,
    ) -> None:
        """
        Initialize document service.

        Args:
            db: Async SQLAlchemy session
            storage: S3 document client
            settings: Storage limits and signed URL bounds
        """
        self.db = db
        self.storage = storage
        self.settings = settings

    async def _get_owned(self, user_id: UUID, document_id: UUID):
        document = await document_crud.get_for_user(self.db, document_id, user_id)
        if not document:
            raise NotFoundError("Document", document_id)
        return document

    async def list_documents(
        self,
        user_id: UUID,
        application_id: UUID | None = None,
        document_type: DocumentType | None = None,
    ) -> list[dict]:
        """
        List the user's documents.

        Args:
            user_id: Owner UUID
            application_id: Only documents of this application
            document_type: Only documents of this type

        Returns:
            list[dict]: Document dicts, newest upload first
        """
        documents = await document_crud.list_for_user(
            self.db, user_id, application_id=application_id, document_type=document_type
        )
        return [document_to_dict(d) for d in documents]

    async def list_application_documents(self, user_id: UUID, application_id: UUID) -> list[dict]:
        """
        List documents attached to one application.

        Raises:
            NotFoundError: If the application does not exist or is not owned
        """
        if not await application_crud.get_for_user(self.db, application_id, user_id):
            raise NotFoundError("Application", application_id)
        return await self.list_documents(user_id, application_id=application_id)

    async def get_document(self, user_id: UUID, document_id: UUID) -> dict:
        """
        Get document metadata.

        Raises:
            NotFoundError: If the document does not exist or is not owned
        """
        return document_to_dict(await self._get_owned(user_id, document_id))

    def clamp_expiry(self, expires_in: int | None) -> int:
        """Bound a requested signed URL lifetime to the configured range."""
        if expires_in is None:
            return self.settings.presigned_url_expiry
        return max(
            self.settings.min_presigned_url_expiry,
            min(expires_in, self.settings.max_presigned_url_expiry),
        )

    async def get_signed_url(
        self,
        user_id: UUID,
        document_id: UUID,
        expires_in: int | None = None,
        download: bool = False,
    ) -> dict:
        """
        Get document metadata with a time-limited URL to its bytes.

        Args:
            user_id: Owner UUID
            document_id: Document UUID
            expires_in: URL lifetime in seconds (clamped to the allowed range)
            download: Force a download instead of inline display

        Returns:
            dict: Document dict plus signed_url and expires_at

        Raises:
            NotFoundError: If the document does not exist, is not owned,
                or has no stored file
        """
        document = await self._get_owned(user_id, document_id)
        if not document.storage_path:
            raise NotFoundError("File", document_id)

        url, expires_at = await asyncio.to_thread(
            self.storage.generate_presigned_download_url,
            document.storage_path,
            self.clamp_expiry(expires_in),
            document.name,
            not download,
        )
        return {**document_to_dict(document), "signed_url": url, "expires_at": expires_at}

    def validate_upload(
        self,
        filename: str,
        size: int,
        mime_type: str | None,
        application_id: UUID | None = None,
    ) -> dict:
        """
        Check an upload against the file rules without storing it.

        Returns:
            dict: file_name, file_size, mime_type, application_id, is_valid, errors
        """
        result = validate_file(filename, size, mime_type, max_size=self.settings.max_file_size)
        return {
            "file_name": filename,
            "file_size": size,
            "mime_type": mime_type,
            "application_id": application_id,
            "is_valid": result.is_valid,
            "errors": result.errors,
        }

    async def create_document(
        self,
        user_id: UUID,
        application_id: UUID,
        filename: str,
        content: bytes,
        mime_type: str | None,
        name: str | None = None,
        document_type: DocumentType = DocumentType.OTHER,
    ) -> dict:
        """
        Store a file and record its metadata.

        The row is flushed first, then the file is uploaded under a key
        derived from the row ID, then both are committed. An upload failure
        rolls the row back so no metadata points at a missing file.

        Args:
            user_id: Owner UUID
            application_id: Parent application UUID
            filename: Original filename
            content: File bytes
            mime_type: Declared content type
            name: Display name (defaults to filename)
            document_type: Document kind

        Returns:
            dict: Created document

        Raises:
            ValidationError: If the file breaks size, type or name rules
            NotFoundError: If the application does not exist or is not owned
            StorageError: If the upload fails
        """
        result = validate_file(filename, len(content), mime_type, max_size=self.settings.max_file_size)
        if not result.is_valid:
            raise ValidationError("; ".join(result.errors), field="file", errors=result.errors)

        if not await application_crud.get_for_user(self.db, application_id, user_id):
            raise NotFoundError("Application", application_id)

        document_id = uuid4()
        storage_path = generate_document_path(user_id, application_id, document_id, filename)

        try:
            document = await document_crud.create(
                self.db,
                id=document_id,
                user_id=user_id,
                application_id=application_id,
                name=name or filename,
                type=document_type,
                size=len(content),
                mime_type=mime_type,
                storage_path=storage_path,
            )
            await asyncio.to_thread(self.storage.upload_file, storage_path, content, mime_type)
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(
                "Failed to create document",
                extra={"error": str(e), "application_id": str(application_id)}
            )
            raise

        logger.info(
            "Document uploaded",
            extra={"document_id": str(document_id), "size": len(content), "type": document_type.value}
        )
        return document_to_dict(document)

    async def update_document(
        self,
        user_id: UUID,
        document_id: UUID,
        name: str | None = None,
        document_type: DocumentType | None = None,
    ) -> dict:
        """
        Rename or retype a document. The stored file is untouched.

        Raises:
            ValidationError: If neither field is given
            NotFoundError: If the document does not exist or is not owned
        """
        fields = {}
        if name is not None:
            fields["name"] = name
        if document_type is not None:
            fields["type"] = document_type
        if not fields:
            raise ValidationError("At least one of name or type must be provided")

        document = await document_crud.update_for_user(self.db, document_id, user_id, **fields)
        if not document:
            await self.db.rollback()
            raise NotFoundError("Document", document_id)
        await self.db.commit()
        return document_to_dict(document)

    async def delete_document(self, user_id: UUID, document_id: UUID) -> None:
        """
        Delete a document row, then its file.

        File removal is best-effort: a storage failure after the row is
        gone is logged and does not fail the request.

        Raises:
            NotFoundError: If the document does not exist or is not owned
        """
        document = await self._get_owned(user_id, document_id)
        storage_path = document.storage_path

        await document_crud.delete_for_user(self.db, document_id, user_id)
        await self.db.commit()

        if storage_path:
            try:
                await asyncio.to_thread(self.storage.delete_file, storage_path)
            except StorageError as e:
                logger.warning(
                    "Document row deleted but file removal failed",
                    extra={"document_id": str(document_id), "s3_key": storage_path, "error": str(e)}
                )

        logger.info("Document deleted", extra={"document_id": str(document_id)})

    async def download_document(self, user_id: UUID, document_id: UUID) -> tuple[dict, bytes]:
        """
        Read a document's bytes from the key it was uploaded to.

        Returns:
            tuple[dict, bytes]: Document dict and file content

        Raises:
            NotFoundError: If the document or its file is missing
        """
        document = await self._get_owned(user_id, document_id)
        if not document.storage_path:
            raise NotFoundError("File", document_id)
        content, _, _ = await asyncio.to_thread(self.storage.download_file, document.storage_path)
        return document_to_dict(document), content
