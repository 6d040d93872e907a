"""
Gmail integration API endpoints.

Routes:
- GET /gmail/connect - Consent URL for read-only Gmail access
- GET /gmail/callback - OAuth callback, stores encrypted tokens
- GET /gmail/status - Connection state
- POST /gmail/disconnect - Revoke and forget tokens
- GET /gmail/emails - Classified job emails
- GET /gmail/search - Free-form search
- GET /gmail/profile - Mailbox profile

Dependencies: jobtracker.application.services, jobtracker.models
System role: Gmail HTTP API
"""

import logging
import secrets
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse, RedirectResponse

from jobtracker.api.deps import (
    get_current_user,
    get_gmail_service,
    get_optional_user,
    get_settings_dependency,
)
from jobtracker.application.services.gmail_service import GmailService
from jobtracker.configs import Settings
from jobtracker.models.common import SuccessResponse
from jobtracker.models.gmail import (
    EmailDateRange,
    EmailFetchOptions,
    EmailSummary,
    GmailConnectResponse,
    GmailEmailsResponse,
    GmailProfileResponse,
    GmailSearchResponse,
    GmailStatusResponse,
    JobEmailResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/gmail", tags=["gmail"])

STATE_COOKIE_MAX_AGE = 600


def _gmail_page_redirect(settings: Settings, **params: str) -> RedirectResponse:
    base = settings.google.frontend_url.rstrip("/")
    return RedirectResponse(f"{base}/gmail?{urlencode(params)}", status_code=302)


def _summary_response(summary: dict) -> EmailSummary:
    date_range = summary["dateRange"]
    return EmailSummary(
        total_emails=summary["totalEmails"],
        category_counts=summary["categoryCounts"],
        average_confidence=summary["averageConfidence"],
        date_range=EmailDateRange(
            days_back=date_range["from"],
            oldest=date_range["oldest"],
            newest=date_range["newest"],
        ),
    )


@router.get("/connect")
async def connect(
    _user: dict = Depends(get_current_user),
    service: GmailService = Depends(get_gmail_service),
    settings: Settings = Depends(get_settings_dependency),
) -> JSONResponse:
    """Return the consent URL; the frontend navigates to it."""
    state = secrets.token_urlsafe(32)
    body = GmailConnectResponse(auth_url=service.create_connect_url(state))
    response = JSONResponse(content=body.model_dump(by_alias=True))
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
    user: dict | None = Depends(get_optional_user),
    service: GmailService = Depends(get_gmail_service),
    settings: Settings = Depends(get_settings_dependency),
) -> RedirectResponse:
    """
    Finish the Gmail grant and redirect back to the frontend Gmail page.

    Outcomes: ?success=true, or ?error=<provider error | no_code | callback_failed>.
    Without a session the browser is sent to the sign-in page.
    """
    if user is None:
        return RedirectResponse(f"{settings.google.frontend_url.rstrip('/')}/auth", status_code=302)
    if error:
        return _gmail_page_redirect(settings, error=error)
    if not code:
        return _gmail_page_redirect(settings, error="no_code")

    expected_state = request.cookies.get(settings.auth.state_cookie_name)
    if not expected_state or not state or not secrets.compare_digest(expected_state, state):
        logger.warning("OAuth state mismatch on Gmail callback", extra={"user_id": str(user["id"])})
        return _gmail_page_redirect(settings, error="callback_failed")

    try:
        await service.handle_callback(user["id"], code)
    except Exception:
        logger.exception("Gmail callback failed", extra={"user_id": str(user["id"])})
        return _gmail_page_redirect(settings, error="callback_failed")

    response = _gmail_page_redirect(settings, success="true")
    response.delete_cookie(settings.auth.state_cookie_name)
    return response


@router.get("/status", response_model=GmailStatusResponse)
async def status(
    user: dict = Depends(get_current_user),
    service: GmailService = Depends(get_gmail_service),
) -> GmailStatusResponse:
    """Report whether Gmail is connected, when, and when it was last read."""
    return GmailStatusResponse.model_validate(await service.get_status(user))


@router.post("/disconnect", response_model=SuccessResponse[None])
async def disconnect(
    user: dict = Depends(get_current_user),
    service: GmailService = Depends(get_gmail_service),
) -> SuccessResponse[None]:
    """Revoke the Gmail grant and delete the stored tokens."""
    existed = await service.disconnect(user["id"])
    message = "Gmail disconnected successfully" if existed else "Gmail was not connected"
    return SuccessResponse[None](message=message, data=None)


@router.get("/emails", response_model=GmailEmailsResponse)
async def fetch_emails(
    max_results: int = Query(50, ge=1, alias="maxResults"),
    days_back: int = Query(30, ge=1, alias="daysBack"),
    include_spam: bool = Query(False, alias="includeSpam"),
    include_trash: bool = Query(False, alias="includeTrash"),
    user: dict = Depends(get_current_user),
    service: GmailService = Depends(get_gmail_service),
) -> GmailEmailsResponse:
    """
    Fetch and classify job-related emails.

    Raises:
        GmailNotConnectedError(401): No Gmail connection
        GmailPermissionError(403): Grant lacks read scope or was revoked
        GmailQuotaError(429): Gmail rate limit hit
    """
    result = await service.fetch_job_emails(
        user["id"],
        max_results=max_results,
        days_back=days_back,
        include_spam=include_spam,
        include_trash=include_trash,
    )
    return GmailEmailsResponse(
        summary=_summary_response(result["summary"]),
        emails=[JobEmailResponse.model_validate(e) for e in result["emails"]],
        emails_by_category={
            category: [JobEmailResponse.model_validate(e) for e in emails]
            for category, emails in result["emails_by_category"].items()
        },
        options=EmailFetchOptions.model_validate(result["options"]),
    )


@router.get("/search", response_model=GmailSearchResponse)
async def search(
    q: str = Query(..., min_length=1, max_length=500),
    max_results: int = Query(20, ge=1, le=50, alias="maxResults"),
    user: dict = Depends(get_current_user),
    service: GmailService = Depends(get_gmail_service),
) -> GmailSearchResponse:
    """Search the mailbox with a Gmail query and classify the matches."""
    result = await service.search_emails(user["id"], q, max_results=max_results)
    return GmailSearchResponse(
        query=result["query"],
        count=result["count"],
        emails=[JobEmailResponse.model_validate(e) for e in result["emails"]],
    )


@router.get("/profile", response_model=SuccessResponse[GmailProfileResponse])
async def profile(
    user: dict = Depends(get_current_user),
    service: GmailService = Depends(get_gmail_service),
) -> SuccessResponse[GmailProfileResponse]:
    """Get the connected mailbox's address and message counts."""
    return SuccessResponse[GmailProfileResponse](
        data=GmailProfileResponse.model_validate(await service.get_profile(user["id"]))
    )
