"""
User settings API endpoints.

Routes: GET /settings, PUT /settings

Dependencies: jobtracker.application.services, jobtracker.models
System role: Preference HTTP API
"""

from fastapi import APIRouter, Depends

from jobtracker.api.deps import get_current_user, get_user_settings_service
from jobtracker.application.services.settings_service import SettingsService
from jobtracker.models.common import SuccessResponse
from jobtracker.models.settings import UpdateSettingsRequest, UserSettingsResponse

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("", response_model=SuccessResponse[UserSettingsResponse | None])
async def get_settings(
    user: dict = Depends(get_current_user),
    service: SettingsService = Depends(get_user_settings_service),
) -> SuccessResponse[UserSettingsResponse | None]:
    """Get stored settings; data is null until the user saves some."""
    settings = await service.get_settings(user["id"])
    return SuccessResponse[UserSettingsResponse | None](
        data=UserSettingsResponse.model_validate(settings) if settings else None
    )


@router.put("", response_model=SuccessResponse[UserSettingsResponse])
async def update_settings(
    request: UpdateSettingsRequest,
    user: dict = Depends(get_current_user),
    service: SettingsService = Depends(get_user_settings_service),
) -> SuccessResponse[UserSettingsResponse]:
    """Create or update settings; unknown fields are rejected with 400."""
    settings = await service.upsert_settings(user["id"], **request.model_dump(exclude_unset=True))
    return SuccessResponse[UserSettingsResponse](
        message="Settings saved",
        data=UserSettingsResponse.model_validate(settings),
    )
