"""
Document API endpoints.

Routes:
- GET /documents - List documents
- POST /documents - Upload a document (multipart)
- POST /documents/upload - Validate an upload without storing it
- GET /documents/{id} - Metadata with a signed URL
- PUT /documents/{id} - Rename or retype
- DELETE /documents/{id} - Delete row, then file
- GET /documents/{id}/download - Stream the file bytes

Dependencies: jobtracker.application.services, jobtracker.models
System role: Document HTTP API
"""

import logging
from urllib.parse import quote
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, Query, Response, UploadFile, status

from jobtracker.api.deps import get_current_user, get_document_service
from jobtracker.application.services.document_service import DocumentService
from jobtracker.boundary.db.models.document_model import DocumentType
from jobtracker.models.common import DeletedResponse, SuccessResponse
from jobtracker.models.document import (
    DocumentResponse,
    SignedDocumentResponse,
    UpdateDocumentRequest,
    UploadValidationResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/documents", tags=["documents"])

DOWNLOAD_CACHE_CONTROL = "private, max-age=3600"


def content_disposition(filename: str, inline: bool) -> str:
    """Build a Content-Disposition value that survives non-ASCII names."""
    disposition = "inline" if inline else "attachment"
    fallback = filename.encode("ascii", "replace").decode("ascii").replace('"', "_")
    return f"{disposition}; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename)}"


@router.get("", response_model=SuccessResponse[list[DocumentResponse]])
async def list_documents(
    application_id: UUID | None = Query(None, alias="applicationId"),
    document_type: DocumentType | None = Query(None, alias="type"),
    user: dict = Depends(get_current_user),
    service: DocumentService = Depends(get_document_service),
) -> SuccessResponse[list[DocumentResponse]]:
    """List the user's documents, optionally by application and type."""
    documents = await service.list_documents(
        user["id"], application_id=application_id, document_type=document_type
    )
    return SuccessResponse[list[DocumentResponse]](
        data=[DocumentResponse.model_validate(d) for d in documents]
    )


@router.post(
    "",
    response_model=SuccessResponse[DocumentResponse],
    status_code=status.HTTP_201_CREATED,
)
async def upload_document(
    file: UploadFile = File(...),
    application_id: UUID = Form(..., alias="applicationId"),
    name: str | None = Form(None, max_length=255),
    document_type: DocumentType = Form(DocumentType.OTHER, alias="type"),
    user: dict = Depends(get_current_user),
    service: DocumentService = Depends(get_document_service),
) -> SuccessResponse[DocumentResponse]:
    """
    Upload a document for an application.

    Raises:
        ValidationError(400): File is empty, too large, of a disallowed type,
            or has an unsafe name
        NotFoundError(404): Application missing or not owned
    """
    content = await file.read()
    logger.info(
        "Document upload received",
        extra={"application_id": str(application_id), "file_name": file.filename, "size": len(content)},
    )
    document = await service.create_document(
        user["id"],
        application_id,
        filename=file.filename or "",
        content=content,
        mime_type=file.content_type,
        name=name,
        document_type=document_type,
    )
    return SuccessResponse[DocumentResponse](
        message="Document uploaded successfully",
        data=DocumentResponse.model_validate(document),
    )


@router.post("/upload", response_model=SuccessResponse[UploadValidationResponse])
async def validate_upload(
    file: UploadFile = File(...),
    application_id: UUID | None = Query(None, alias="applicationId"),
    validate: bool = Query(True),
    _user: dict = Depends(get_current_user),
    service: DocumentService = Depends(get_document_service),
) -> SuccessResponse[UploadValidationResponse]:
    """Check a file against the upload rules; nothing is stored."""
    content = await file.read()
    filename = file.filename or ""

    if validate:
        result = service.validate_upload(filename, len(content), file.content_type, application_id)
    else:
        result = {
            "file_name": filename,
            "file_size": len(content),
            "mime_type": file.content_type,
            "application_id": application_id,
            "is_valid": True,
            "errors": [],
        }
    return SuccessResponse[UploadValidationResponse](data=UploadValidationResponse.model_validate(result))


@router.get("/{document_id}", response_model=SuccessResponse[SignedDocumentResponse])
async def get_document(
    document_id: UUID,
    download: bool = Query(False),
    expires_in: int = Query(3600, ge=300, le=86400, alias="expiresIn"),
    user: dict = Depends(get_current_user),
    service: DocumentService = Depends(get_document_service),
) -> SuccessResponse[SignedDocumentResponse]:
    """Get document metadata with a time-limited URL to its file."""
    document = await service.get_signed_url(
        user["id"], document_id, expires_in=expires_in, download=download
    )
    return SuccessResponse[SignedDocumentResponse](data=SignedDocumentResponse.model_validate(document))


@router.put("/{document_id}", response_model=SuccessResponse[DocumentResponse])
async def update_document(
    document_id: UUID,
    request: UpdateDocumentRequest,
    user: dict = Depends(get_current_user),
    service: DocumentService = Depends(get_document_service),
) -> SuccessResponse[DocumentResponse]:
    """Rename or retype a document."""
    document = await service.update_document(
        user["id"], document_id, name=request.name, document_type=request.type
    )
    return SuccessResponse[DocumentResponse](
        message="Document updated successfully",
        data=DocumentResponse.model_validate(document),
    )


@router.delete("/{document_id}", response_model=SuccessResponse[DeletedResponse])
async def delete_document(
    document_id: UUID,
    user: dict = Depends(get_current_user),
    service: DocumentService = Depends(get_document_service),
) -> SuccessResponse[DeletedResponse]:
    """Delete a document; file removal from storage is best-effort."""
    await service.delete_document(user["id"], document_id)
    return SuccessResponse[DeletedResponse](
        message="Document deleted successfully",
        data=DeletedResponse(id=document_id),
    )


@router.get("/{document_id}/download")
async def download_document(
    document_id: UUID,
    inline: bool = Query(False),
    user: dict = Depends(get_current_user),
    service: DocumentService = Depends(get_document_service),
) -> Response:
    """Return the stored file bytes."""
    document, content = await service.download_document(user["id"], document_id)
    return Response(
        content=content,
        media_type=document["mime_type"] or "application/octet-stream",
        headers={
            "Content-Length": str(len(content)),
            "Content-Disposition": content_disposition(document["name"], inline),
            "Cache-Control": DOWNLOAD_CACHE_CONTROL,
            "X-Content-Type-Options": "nosniff",
        },
    )
