"""
Dashboard API endpoint.

Routes: GET /dashboard

Dependencies: jobtracker.application.services, jobtracker.models
System role: Dashboard HTTP API
"""

from fastapi import APIRouter, Depends

from jobtracker.api.deps import get_current_user, get_dashboard_service
from jobtracker.application.services.dashboard_service import DashboardService
from jobtracker.models.common import SuccessResponse
from jobtracker.models.dashboard import DashboardResponse

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("", response_model=SuccessResponse[DashboardResponse])
async def get_dashboard(
    user: dict = Depends(get_current_user),
    service: DashboardService = Depends(get_dashboard_service),
) -> SuccessResponse[DashboardResponse]:
    """Applications, counters, upcoming events and recent applications."""
    dashboard = await service.get_dashboard(user["id"])
    return SuccessResponse[DashboardResponse](data=DashboardResponse.model_validate(dashboard))
