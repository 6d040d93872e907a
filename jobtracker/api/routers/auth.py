"""
Authentication API endpoints.

Routes:
- GET /auth/login - Redirect to the Google consent screen
- GET /auth/callback - Complete sign-in and set the session cookie
- POST /auth/logout - Clear the session cookie
- GET /auth/me - Current user

Dependencies: jobtracker.application.services, jobtracker.boundary.google
System role: Sign-in HTTP API
"""

import logging
import secrets
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, RedirectResponse

from jobtracker.api.deps import (
    get_auth_service,
    get_current_user,
    get_oauth_client,
    get_settings_dependency,
)
from jobtracker.application.services.auth_service import AuthService
from jobtracker.boundary.google.oauth_client import LOGIN_SCOPES, GoogleOAuthClient
from jobtracker.configs import Settings
from jobtracker.models.common import SuccessResponse
from jobtracker.models.user import UserResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

STATE_COOKIE_MAX_AGE = 600


def _frontend_redirect(settings: Settings, path: str, **params: str) -> RedirectResponse:
    url = f"{settings.google.frontend_url.rstrip('/')}{path}"
    if params:
        url = f"{url}?{urlencode(params)}"
    return RedirectResponse(url, status_code=302)


@router.get("/login")
async def login(
    oauth_client: GoogleOAuthClient = Depends(get_oauth_client),
    settings: Settings = Depends(get_settings_dependency),
) -> RedirectResponse:
    """
    Start Google sign-in.

    A random state value is stored in a short-lived cookie and checked on
    the callback.
    """
    state = secrets.token_urlsafe(32)
    url = oauth_client.build_authorization_url(
        LOGIN_SCOPES,
        settings.google.login_redirect_uri,
        state=state,
    )
    response = RedirectResponse(url, status_code=302)
    response.set_cookie(
        settings.auth.state_cookie_name,
        state,
        max_age=STATE_COOKIE_MAX_AGE,
        httponly=True,
        secure=settings.auth.cookie_secure,
        samesite="lax",
    )
    return response


@router.get("/callback")
async def callback(
    request: Request,
    code: str | None = None,
    state: str | None = None,
    error: str | None = None,
    oauth_client: GoogleOAuthClient = Depends(get_oauth_client),
    auth_service: AuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_settings_dependency),
) -> RedirectResponse:
    """
    Complete Google sign-in.

    Exchanges the code, provisions the user, sets the session cookie and
    redirects to the frontend. Failures redirect to the frontend login page
    with an error flag.
    """
    if error:
        return _frontend_redirect(settings, "/auth", error=error)
    if not code:
        return _frontend_redirect(settings, "/auth", error="no_code")

    expected_state = request.cookies.get(settings.auth.state_cookie_name)
    if not expected_state or not state or not secrets.compare_digest(expected_state, state):
        logger.warning("OAuth state mismatch on sign-in callback")
        return _frontend_redirect(settings, "/auth", error="invalid_state")

    try:
        tokens = await oauth_client.exchange_code(code, settings.google.login_redirect_uri)
        profile = await oauth_client.fetch_userinfo(tokens.access_token)
        user = await auth_service.ensure_user_exists(profile.email, profile.name, profile.picture)
    except Exception:
        logger.exception("Sign-in callback failed")
        return _frontend_redirect(settings, "/auth", error="callback_failed")

    response = _frontend_redirect(settings, "/")
    response.set_cookie(
        settings.auth.session_cookie_name,
        auth_service.issue_session_token(user),
        max_age=settings.auth.session_max_age,
        httponly=True,
        secure=settings.auth.cookie_secure,
        samesite="lax",
    )
    response.delete_cookie(settings.auth.state_cookie_name)
    return response


@router.post("/logout", response_model=SuccessResponse[None])
async def logout(
    _user: dict = Depends(get_current_user),
    settings: Settings = Depends(get_settings_dependency),
):
    """Clear the session cookie."""
    response = SuccessResponse[None](message="Signed out", data=None)
    json_response = JSONResponse(content=response.model_dump(by_alias=True))
    json_response.delete_cookie(settings.auth.session_cookie_name)
    return json_response


@router.get("/me", response_model=SuccessResponse[UserResponse])
async def me(user: dict = Depends(get_current_user)) -> SuccessResponse[UserResponse]:
    """Return the signed-in user."""
    return SuccessResponse[UserResponse](data=UserResponse.model_validate(user))
