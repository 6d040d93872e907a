"""
Dependency injection container.

Factory functions for FastAPI dependencies: settings, shared clients,
per-request services and the authenticated user.

Dependencies: jobtracker.configs, jobtracker.application, jobtracker.boundary
System role: DI container for service injection
"""

from functools import lru_cache
from uuid import UUID

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from jobtracker.application.services import (
    ApplicationService,
    AuthService,
    DashboardService,
    DocumentService,
    GmailService,
    OutreachService,
    SettingsService,
)
from jobtracker.boundary.db import get_async_db
from jobtracker.boundary.google.oauth_client import GoogleOAuthClient
from jobtracker.boundary.storage.s3_client import S3DocumentClient
from jobtracker.configs import Settings, get_settings
from jobtracker.core.encryption import TokenCipher
from jobtracker.core.exceptions import AuthenticationError


class ServiceCache:
    """Container for cached client instances."""

    def __init__(self):
        self._s3_client = None
        self._oauth_client = None

    @property
    def s3_client(self) -> S3DocumentClient:
        """Get cached S3 document client."""
        if self._s3_client is None:
            settings = get_settings()
            self._s3_client = S3DocumentClient(
                bucket=settings.storage.bucket,
                region=settings.storage.region,
                endpoint_url=settings.storage.endpoint_url,
            )
        return self._s3_client

    @property
    def oauth_client(self) -> GoogleOAuthClient:
        """Get cached Google OAuth client."""
        if self._oauth_client is None:
            self._oauth_client = GoogleOAuthClient(get_settings().google)
        return self._oauth_client

    def clear(self) -> None:
        """Clear all cached instances."""
        self._s3_client = None
        self._oauth_client = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


@lru_cache
def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_s3_document_client() -> S3DocumentClient:
    """Get cached S3 document client."""
    return get_service_cache().s3_client


def get_oauth_client() -> GoogleOAuthClient:
    """Get cached Google OAuth client."""
    return get_service_cache().oauth_client


def get_token_cipher(settings: Settings = Depends(get_settings_dependency)) -> TokenCipher:
    """
    Get cipher for tokens at rest.

    Raises:
        EncryptionError: If ENCRYPTION_KEY is missing or malformed
    """
    return TokenCipher(settings.encryption.key)


def get_auth_service(
    db: AsyncSession = Depends(get_async_db),
    settings: Settings = Depends(get_settings_dependency),
) -> AuthService:
    """
    Get auth service instance.

    Args:
        db: Async database session (injected via Depends)
        settings: Application settings (injected via Depends)

    Returns:
        AuthService: Auth service instance
    """
    return AuthService(db=db, settings=settings.auth)


async def get_current_user(
    request: Request,
    auth_service: AuthService = Depends(get_auth_service),
) -> dict:
    """
    Resolve the signed-in user from the session cookie.

    Returns:
        dict: User data

    Raises:
        AuthenticationError: If the cookie is missing, invalid, expired,
            or names a user that no longer exists
    """
    token = request.cookies.get(auth_service.settings.session_cookie_name)
    if not token:
        raise AuthenticationError()

    user_id: UUID = auth_service.decode_session_token(token)
    user = await auth_service.get_user(user_id)
    if user is None:
        raise AuthenticationError("User not found")
    return user


def get_application_service(db: AsyncSession = Depends(get_async_db)) -> ApplicationService:
    """
    Get application service instance.

    Args:
        db: Async database session (injected via Depends)

    Returns:
        ApplicationService: Application service instance
    """
    return ApplicationService(db=db)


def get_document_service(
    db: AsyncSession = Depends(get_async_db),
    s3_client: S3DocumentClient = Depends(get_s3_document_client),
    settings: Settings = Depends(get_settings_dependency),
) -> DocumentService:
    """
    Get document service instance.

    Args:
        db: Async database session (injected via Depends)
        s3_client: Shared S3 client (injected via Depends)
        settings: Application settings (injected via Depends)

    Returns:
        DocumentService: Document service instance
    """
    return DocumentService(db=db, storage=s3_client, settings=settings.storage)


def get_outreach_service(db: AsyncSession = Depends(get_async_db)) -> OutreachService:
    """Get outreach service instance."""
    return OutreachService(db=db)


def get_user_settings_service(db: AsyncSession = Depends(get_async_db)) -> SettingsService:
    """Get user settings service instance."""
    return SettingsService(db=db)


def get_dashboard_service(db: AsyncSession = Depends(get_async_db)) -> DashboardService:
    """Get dashboard service instance."""
    return DashboardService(db=db)


def get_gmail_service(
    db: AsyncSession = Depends(get_async_db),
    oauth_client: GoogleOAuthClient = Depends(get_oauth_client),
    cipher: TokenCipher = Depends(get_token_cipher),
    settings: Settings = Depends(get_settings_dependency),
) -> GmailService:
    """
    Get Gmail service instance.

    Args:
        db: Async database session (injected via Depends)
        oauth_client: Shared Google OAuth client (injected via Depends)
        cipher: Token cipher (injected via Depends)
        settings: Application settings (injected via Depends)

    Returns:
        GmailService: Gmail service instance
    """
    return GmailService(db=db, oauth_client=oauth_client, settings=settings.google, cipher=cipher)


async def get_optional_user(
    request: Request,
    auth_service: AuthService = Depends(get_auth_service),
) -> dict | None:
    """Resolve the signed-in user, or None when there is no valid session."""
    try:
        return await get_current_user(request, auth_service)
    except AuthenticationError:
        return None
