"""
Application API endpoints.

Routes:
- GET /applications - Paginated, filterable list
- POST /applications - Create application
- GET /applications/export - Export as JSON or CSV
- GET/PUT/DELETE /applications/{id} - Single application
- GET /applications/{id}/documents - Attached documents
- GET /applications/{id}/outreach - Outreach actions
- GET /applications/{id}/outreach/message - Outreach message template

Dependencies: jobtracker.application.services, jobtracker.models
System role: Application HTTP API
"""

import logging
from datetime import datetime, timezone
from typing import Literal
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from jobtracker.api.deps import (
    get_application_service,
    get_current_user,
    get_document_service,
    get_outreach_service,
)
from jobtracker.application.services.application_service import ApplicationService
from jobtracker.application.services.document_service import DocumentService
from jobtracker.application.services.outreach_service import OutreachService
from jobtracker.boundary.db.models.application_model import ApplicationStatus
from jobtracker.core.csv_export import applications_to_csv, export_filename
from jobtracker.models.application import (
    ApplicationExportResponse,
    ApplicationResponse,
    CreateApplicationRequest,
    UpdateApplicationRequest,
)
from jobtracker.models.common import (
    DeletedResponse,
    PaginatedResponse,
    Pagination,
    SuccessResponse,
)
from jobtracker.models.document import ApplicationDocumentsResponse, DocumentResponse
from jobtracker.models.outreach import OutreachActionResponse, OutreachMessageResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/applications", tags=["applications"])

SortField = Literal["createdAt", "appliedDate", "company", "position"]


@router.get("", response_model=PaginatedResponse[ApplicationResponse])
async def list_applications(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    status_filter: ApplicationStatus | None = Query(None, alias="status"),
    search: str | None = Query(None, max_length=100),
    sort_by: SortField = Query("createdAt", alias="sortBy"),
    sort_order: Literal["asc", "desc"] = Query("desc", alias="sortOrder"),
    user: dict = Depends(get_current_user),
    service: ApplicationService = Depends(get_application_service),
) -> PaginatedResponse[ApplicationResponse]:
    """
    List the user's applications.

    Args:
        page: 1-based page number
        limit: Page size (1-100)
        status_filter: Only this pipeline stage
        search: Case-insensitive match on company, position or notes
        sort_by: Sort column
        sort_order: asc or desc

    Returns:
        PaginatedResponse[ApplicationResponse]: Page and pagination metadata
    """
    items, total = await service.list_applications(
        user["id"],
        page=page,
        limit=limit,
        status=status_filter,
        search=search,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    return PaginatedResponse[ApplicationResponse](
        data=[ApplicationResponse.model_validate(item) for item in items],
        pagination=Pagination.build(page, limit, total),
    )


@router.post(
    "",
    response_model=SuccessResponse[ApplicationResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_application(
    request: CreateApplicationRequest,
    user: dict = Depends(get_current_user),
    service: ApplicationService = Depends(get_application_service),
) -> SuccessResponse[ApplicationResponse]:
    """Create an application."""
    application = await service.create_application(user["id"], **request.model_dump())
    return SuccessResponse[ApplicationResponse](
        message="Application created successfully",
        data=ApplicationResponse.model_validate(application),
    )


@router.get("/export")
async def export_applications(
    export_format: Literal["json", "csv"] = Query("json", alias="format"),
    status_filter: ApplicationStatus | None = Query(None, alias="status"),
    user: dict = Depends(get_current_user),
    service: ApplicationService = Depends(get_application_service),
):
    """
    Export the user's applications.

    CSV is returned as a file attachment named applications-YYYY-MM-DD.csv;
    JSON is wrapped in the success envelope.
    """
    applications = await service.export_applications(user["id"], status=status_filter)
    now = datetime.now(timezone.utc)

    logger.info(
        "Applications exported",
        extra={"user_id": str(user["id"]), "format": export_format, "count": len(applications)},
    )

    if export_format == "csv":
        return Response(
            content=applications_to_csv(applications),
            media_type="text/csv",
            headers={"Content-Disposition": f'attachment; filename="{export_filename(now.date())}"'},
        )

    payload = SuccessResponse[ApplicationExportResponse](
        message="Applications exported successfully",
        data=ApplicationExportResponse(
            export_date=now,
            total_applications=len(applications),
            applications=[ApplicationResponse.model_validate(a) for a in applications],
        ),
    )
    return payload.model_dump(by_alias=True, mode="json")


@router.get("/{application_id}", response_model=SuccessResponse[ApplicationResponse])
async def get_application(
    application_id: UUID,
    user: dict = Depends(get_current_user),
    service: ApplicationService = Depends(get_application_service),
) -> SuccessResponse[ApplicationResponse]:
    """Get one application; 404 when missing or owned by someone else."""
    application = await service.get_application(user["id"], application_id)
    return SuccessResponse[ApplicationResponse](data=ApplicationResponse.model_validate(application))


@router.put("/{application_id}", response_model=SuccessResponse[ApplicationResponse])
async def update_application(
    application_id: UUID,
    request: UpdateApplicationRequest,
    user: dict = Depends(get_current_user),
    service: ApplicationService = Depends(get_application_service),
) -> SuccessResponse[ApplicationResponse]:
    """Update the fields present in the body; null clears optional fields."""
    application = await service.update_application(
        user["id"],
        application_id,
        **request.model_dump(exclude_unset=True),
    )
    return SuccessResponse[ApplicationResponse](
        message="Application updated successfully",
        data=ApplicationResponse.model_validate(application),
    )


@router.delete("/{application_id}", response_model=SuccessResponse[DeletedResponse])
async def delete_application(
    application_id: UUID,
    user: dict = Depends(get_current_user),
    service: ApplicationService = Depends(get_application_service),
) -> SuccessResponse[DeletedResponse]:
    """Delete an application with its documents and outreach."""
    await service.delete_application(user["id"], application_id)
    return SuccessResponse[DeletedResponse](
        message="Application deleted successfully",
        data=DeletedResponse(id=application_id),
    )


@router.get(
    "/{application_id}/documents",
    response_model=SuccessResponse[ApplicationDocumentsResponse],
)
async def list_application_documents(
    application_id: UUID,
    user: dict = Depends(get_current_user),
    service: DocumentService = Depends(get_document_service),
) -> SuccessResponse[ApplicationDocumentsResponse]:
    """List documents attached to an application."""
    documents = await service.list_application_documents(user["id"], application_id)
    return SuccessResponse[ApplicationDocumentsResponse](
        data=ApplicationDocumentsResponse(
            application_id=application_id,
            documents=[DocumentResponse.model_validate(d) for d in documents],
        )
    )


@router.get(
    "/{application_id}/outreach",
    response_model=SuccessResponse[list[OutreachActionResponse]],
)
async def list_application_outreach(
    application_id: UUID,
    user: dict = Depends(get_current_user),
    service: OutreachService = Depends(get_outreach_service),
) -> SuccessResponse[list[OutreachActionResponse]]:
    """List outreach actions (with contacts) logged for an application."""
    actions = await service.list_application_outreach(user["id"], application_id)
    return SuccessResponse[list[OutreachActionResponse]](
        data=[OutreachActionResponse.model_validate(a) for a in actions]
    )


@router.get(
    "/{application_id}/outreach/message",
    response_model=SuccessResponse[OutreachMessageResponse | None],
)
async def get_application_message(
    application_id: UUID,
    user: dict = Depends(get_current_user),
    service: OutreachService = Depends(get_outreach_service),
) -> SuccessResponse[OutreachMessageResponse | None]:
    """Get the outreach message template of an application, or null."""
    message = await service.get_application_message(user["id"], application_id)
    return SuccessResponse[OutreachMessageResponse | None](
        data=OutreachMessageResponse.model_validate(message) if message else None
    )
