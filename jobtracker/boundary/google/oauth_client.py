"""
Google OAuth 2.0 client.

Builds consent URLs and talks to Google's token, userinfo and revoke
endpoints. Used for sign-in (openid email profile) and, separately, for
granting Gmail read-only access.

Dependencies: httpx, pydantic
System role: OAuth provider adapter
"""

import logging
from datetime import datetime, timedelta, timezone
from urllib.parse import urlencode

import httpx
from pydantic import BaseModel

from jobtracker.configs.google import GoogleOAuthSettings
from jobtracker.core.exceptions import OAuthError

logger = logging.getLogger(__name__)

LOGIN_SCOPES = ("openid", "email", "profile")
GMAIL_READONLY_SCOPE = "https://www.googleapis.com/auth/gmail.readonly"


class OAuthTokens(BaseModel):
    """Tokens returned by the authorization code exchange."""

    access_token: str
    refresh_token: str | None = None
    expires_in: int | None = None
    scope: str | None = None
    token_type: str | None = None
    id_token: str | None = None

    def expires_at(self, now: datetime | None = None) -> datetime | None:
        """Absolute expiry of the access token."""
        if self.expires_in is None:
            return None
        return (now or datetime.now(timezone.utc)) + timedelta(seconds=self.expires_in)


class GoogleUserInfo(BaseModel):
    """OpenID Connect userinfo claims used to provision users."""

    email: str
    name: str | None = None
    picture: str | None = None


class GoogleOAuthClient:
    """Async Google OAuth client."""

    def __init__(
        self,
        settings: GoogleOAuthSettings,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize OAuth client.

        Args:
            settings: Google OAuth settings
            http_client: Shared httpx client (a short-lived one is created per call otherwise)
        """
        self._settings = settings
        self._http_client = http_client

    def build_authorization_url(
        self,
        scopes: tuple[str, ...] | list[str],
        redirect_uri: str,
        state: str | None = None,
        offline: bool = False,
    ) -> str:
        """
        Build the Google consent screen URL.

        Args:
            scopes: OAuth scopes to request
            redirect_uri: Callback URL registered with Google
            state: Opaque CSRF token echoed back on the callback
            offline: Request a refresh token (forces the consent prompt)

        Returns:
            str: Authorization URL

        Raises:
            OAuthError: If client credentials are not configured
        """
        if not self._settings.is_configured:
            raise OAuthError("Google OAuth not configured")

        params = {
            "client_id": self._settings.client_id,
            "redirect_uri": redirect_uri,
            "response_type": "code",
            "scope": " ".join(scopes),
        }
        if offline:
            params["access_type"] = "offline"
            params["prompt"] = "consent"
            params["include_granted_scopes"] = "true"
        if state:
            params["state"] = state
        return f"{self._settings.authorize_url}?{urlencode(params)}"

    async def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        try:
            if self._http_client is not None:
                return await self._http_client.request(method, url, **kwargs)
            async with httpx.AsyncClient(timeout=self._settings.request_timeout) as client:
                return await client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.error("OAuth request failed", extra={"url": url, "error": str(e)})
            raise OAuthError("Failed to reach Google OAuth endpoint") from e

    async def exchange_code(self, code: str, redirect_uri: str) -> OAuthTokens:
        """
        Exchange an authorization code for tokens.

        Args:
            code: Authorization code from the callback
            redirect_uri: The redirect URI used to obtain the code

        Returns:
            OAuthTokens: Access token, refresh token and expiry

        Raises:
            OAuthError: If Google rejects the exchange
        """
        response = await self._request(
            "POST",
            self._settings.token_url,
            data={
                "client_id": self._settings.client_id,
                "client_secret": self._settings.client_secret,
                "code": code,
                "grant_type": "authorization_code",
                "redirect_uri": redirect_uri,
            },
        )
        if response.status_code != 200:
            logger.warning(
                "Token exchange rejected",
                extra={"status_code": response.status_code, "body": response.text[:200]},
            )
            raise OAuthError("Failed to exchange authorization code", provider_status=response.status_code)
        return OAuthTokens.model_validate(response.json())

    async def fetch_userinfo(self, access_token: str) -> GoogleUserInfo:
        """
        Fetch the signed-in user's profile.

        Args:
            access_token: Token from exchange_code

        Returns:
            GoogleUserInfo: Email, name and avatar

        Raises:
            OAuthError: If the userinfo call fails
        """
        response = await self._request(
            "GET",
            self._settings.userinfo_url,
            headers={"Authorization": f"Bearer {access_token}"},
        )
        if response.status_code != 200:
            raise OAuthError("Failed to get user info", provider_status=response.status_code)
        return GoogleUserInfo.model_validate(response.json())

    async def revoke_token(self, token: str) -> bool:
        """
        Revoke an access or refresh token.

        Args:
            token: Token to revoke

        Returns:
            bool: True if Google accepted the revocation
        """
        response = await self._request(
            "POST",
            self._settings.revoke_url,
            data={"token": token},
            headers={"Content-Type": "application/x-www-form-urlencoded"},
        )
        return response.status_code == 200
