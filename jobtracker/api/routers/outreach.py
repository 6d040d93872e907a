"""
Outreach API endpoints.

Routes:
- POST /outreach - Log a batch of connection requests
- GET /outreach - List outreach actions
- PATCH /outreach/{id} - Record a response

Dependencies: jobtracker.application.services, jobtracker.models
System role: Outreach HTTP API
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from jobtracker.api.deps import get_current_user, get_outreach_service
from jobtracker.application.services.outreach_service import OutreachService
from jobtracker.boundary.db.models.outreach_model import OutreachStatus
from jobtracker.models.common import SuccessResponse
from jobtracker.models.outreach import (
    LogOutreachRequest,
    OutreachActionResponse,
    UpdateOutreachStatusRequest,
)

router = APIRouter(prefix="/outreach", tags=["outreach"])


@router.post(
    "",
    response_model=SuccessResponse[list[OutreachActionResponse]],
    status_code=status.HTTP_201_CREATED,
)
async def log_outreach(
    request: LogOutreachRequest,
    user: dict = Depends(get_current_user),
    service: OutreachService = Depends(get_outreach_service),
) -> SuccessResponse[list[OutreachActionResponse]]:
    """
    Log connection requests sent to up to 20 profiles.

    The message template, contacts and actions are written atomically.
    """
    actions = await service.log_outreach_batch(
        user["id"],
        message_body=request.message_body,
        contact_urls=[str(url) for url in request.contacts],
        application_id=request.application_id,
        company=request.company,
    )
    return SuccessResponse[list[OutreachActionResponse]](
        message=f"Logged {len(actions)} outreach actions",
        data=[OutreachActionResponse.model_validate(a) for a in actions],
    )


@router.get("", response_model=SuccessResponse[list[OutreachActionResponse]])
async def list_outreach(
    status_filter: OutreachStatus | None = Query(None, alias="status"),
    company: str | None = Query(None, max_length=100),
    user: dict = Depends(get_current_user),
    service: OutreachService = Depends(get_outreach_service),
) -> SuccessResponse[list[OutreachActionResponse]]:
    """List outreach actions with their contacts."""
    actions = await service.list_outreach(user["id"], status=status_filter, company=company)
    return SuccessResponse[list[OutreachActionResponse]](
        data=[OutreachActionResponse.model_validate(a) for a in actions]
    )


@router.patch("/{action_id}", response_model=SuccessResponse[OutreachActionResponse])
async def update_outreach_status(
    action_id: UUID,
    request: UpdateOutreachStatusRequest,
    user: dict = Depends(get_current_user),
    service: OutreachService = Depends(get_outreach_service),
) -> SuccessResponse[OutreachActionResponse]:
    """Record whether a contact accepted, ignored or otherwise responded."""
    action = await service.update_outreach_status(
        user["id"], action_id, request.status, responded_at=request.responded_at
    )
    return SuccessResponse[OutreachActionResponse](
        message="Outreach status updated",
        data=OutreachActionResponse.model_validate(action),
    )
