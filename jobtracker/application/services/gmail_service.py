"""
Gmail integration service.

Connects a user's Gmail account with a read-only OAuth grant, keeps the
tokens encrypted at rest, and reads job-related email through the Gmail
API for status detection.

Dependencies: jobtracker.boundary.google, jobtracker.boundary.db.CRUD, jobtracker.core
System role: Gmail use case orchestration
"""

import logging
from datetime import datetime, timezone
from typing import Any, Callable
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from jobtracker.boundary.db.CRUD.gmail_token_crud import gmail_token_crud
from jobtracker.boundary.google.gmail_client import GmailClient
from jobtracker.boundary.google.oauth_client import GMAIL_READONLY_SCOPE, GoogleOAuthClient
from jobtracker.configs.google import GoogleOAuthSettings
from jobtracker.core.email_classifier import (
    build_job_search_query,
    classify_messages,
    process_message,
    summarize_emails,
)
from jobtracker.core.encryption import TokenCipher
from jobtracker.core.exceptions import EncryptionError, GmailNotConnectedError, OAuthError

logger = logging.getLogger(__name__)

MAX_FETCH_RESULTS = 100
MAX_DAYS_BACK = 365
MAX_SEARCH_RESULTS = 50


def _aware(value: datetime | None) -> datetime | None:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class GmailService:
    """Gmail integration service orchestrator."""

    def __init__(
        self,
        db: AsyncSession,
        oauth_client: GoogleOAuthClient,
        settings: GoogleOAuthSettings,
        cipher: TokenCipher,
        client_factory: Callable[..., GmailClient] = GmailClient,
    ) -> None:
        """
        Initialize Gmail service.

        Args:
            db: Async SQLAlchemy session
            oauth_client: Google OAuth client for code exchange and revocation
            settings: Google OAuth settings (client credentials, redirect URIs)
            cipher: Cipher for tokens at rest
            client_factory: Builds a GmailClient from decrypted credentials
        """
        self.db = db
        self.oauth_client = oauth_client
        self.settings = settings
        self.cipher = cipher
        self.client_factory = client_factory

    def create_connect_url(self, state: str | None = None) -> str:
        """
        Build the consent URL for Gmail read-only access.

        Offline access is requested so a refresh token is issued.
        """
        return self.oauth_client.build_authorization_url(
            [GMAIL_READONLY_SCOPE],
            self.settings.gmail_redirect_uri,
            state=state,
            offline=True,
        )

    async def handle_callback(self, user_id: UUID, code: str) -> None:
        """
        Exchange the authorization code and store the tokens encrypted.

        Reconnecting replaces the stored tokens.

        Raises:
            OAuthError: If the code exchange fails
        """
        tokens = await self.oauth_client.exchange_code(code, self.settings.gmail_redirect_uri)
        now = datetime.now(timezone.utc)

        try:
            await gmail_token_crud.store(
                self.db,
                user_id=user_id,
                access_token_encrypted=self.cipher.encrypt(tokens.access_token),
                refresh_token_encrypted=(
                    self.cipher.encrypt(tokens.refresh_token) if tokens.refresh_token else None
                ),
                scope=tokens.scope,
                expires_at=tokens.expires_at(now),
                connected_at=now,
            )
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error("Failed to store Gmail tokens", extra={"error": str(e), "user_id": str(user_id)})
            raise

        logger.info(
            "Gmail connected",
            extra={"user_id": str(user_id), "has_refresh_token": tokens.refresh_token is not None}
        )

    async def get_status(self, user: dict) -> dict:
        """
        Report whether the user has a Gmail connection.

        Args:
            user: Current user dict

        Returns:
            dict: is_connected, connected_at, last_accessed, user
        """
        token = await gmail_token_crud.get_by_user_id(self.db, user["id"])
        return {
            "is_connected": token is not None,
            "connected_at": token.connected_at if token else None,
            "last_accessed": token.last_accessed if token else None,
            "user": user,
        }

    async def disconnect(self, user_id: UUID) -> bool:
        """
        Revoke and delete the user's Gmail tokens.

        Revocation at Google is best-effort; the stored row is removed
        regardless.

        Returns:
            bool: True if a connection existed
        """
        token = await gmail_token_crud.get_by_user_id(self.db, user_id)
        if token is None:
            return False

        try:
            revoked = await self.oauth_client.revoke_token(
                self.cipher.decrypt(token.refresh_token_encrypted or token.access_token_encrypted)
            )
            if not revoked:
                logger.warning("Google rejected token revocation", extra={"user_id": str(user_id)})
        except (OAuthError, EncryptionError) as e:
            logger.warning("Token revocation failed", extra={"user_id": str(user_id), "error": str(e)})

        await gmail_token_crud.delete_by_user_id(self.db, user_id)
        await self.db.commit()
        logger.info("Gmail disconnected", extra={"user_id": str(user_id)})
        return True

    async def _client_for(self, user_id: UUID):
        token = await gmail_token_crud.get_by_user_id(self.db, user_id)
        if token is None:
            raise GmailNotConnectedError()

        client = self.client_factory(
            access_token=self.cipher.decrypt(token.access_token_encrypted),
            refresh_token=(
                self.cipher.decrypt(token.refresh_token_encrypted)
                if token.refresh_token_encrypted else None
            ),
            client_id=self.settings.client_id,
            client_secret=self.settings.client_secret,
            token_uri=self.settings.token_url,
            expires_at=_aware(token.expires_at),
        )
        return token, client

    async def _record_access(self, token, client: GmailClient) -> None:
        """Stamp last_accessed and persist an access token renewed during the call."""
        fields: dict[str, Any] = {"last_accessed": datetime.now(timezone.utc)}
        if client.token_refreshed:
            fields["access_token_encrypted"] = self.cipher.encrypt(client.credentials.token)
            fields["expires_at"] = _aware(client.credentials.expiry)
            logger.info("Gmail access token refreshed", extra={"user_id": str(token.user_id)})

        await gmail_token_crud.update_by_id(self.db, token.id, **fields)
        await self.db.commit()

    async def fetch_job_emails(
        self,
        user_id: UUID,
        max_results: int = 50,
        days_back: int = 30,
        include_spam: bool = False,
        include_trash: bool = False,
    ) -> dict:
        """
        Fetch and classify job-related emails.

        Args:
            user_id: Owner UUID
            max_results: Messages to inspect (capped at 100)
            days_back: Search window in days (capped at 365)
            include_spam: Search the spam folder too
            include_trash: Search the trash too

        Returns:
            dict: emails (relevant, newest first), summary, emails_by_category
                and the effective options

        Raises:
            GmailNotConnectedError: If the user has no stored tokens
            GmailPermissionError: If the grant lacks the read scope or was revoked
            GmailQuotaError: If the Gmail API rate limit was hit
        """
        max_results = min(max_results, MAX_FETCH_RESULTS)
        days_back = min(days_back, MAX_DAYS_BACK)

        token, client = await self._client_for(user_id)
        query = build_job_search_query(days_back, include_spam, include_trash)
        messages = await client.search(query, max_results)

        emails = classify_messages(messages)
        grouped = summarize_emails(emails, days_back)
        await self._record_access(token, client)

        logger.info(
            "Fetched job emails",
            extra={"user_id": str(user_id), "messages": len(messages), "relevant": len(emails)}
        )
        return {
            "emails": emails,
            "summary": grouped["summary"],
            "emails_by_category": grouped["emails_by_category"],
            "options": {
                "max_results": max_results,
                "days_back": days_back,
                "include_spam": include_spam,
                "include_trash": include_trash,
            },
        }

    async def search_emails(self, user_id: UUID, query: str, max_results: int = 20) -> dict:
        """
        Run a free-form Gmail search and classify every match.

        Returns:
            dict: query, count and emails (newest first)
        """
        max_results = min(max_results, MAX_SEARCH_RESULTS)
        token, client = await self._client_for(user_id)

        messages = await client.search(query, max_results)
        emails = sorted((process_message(m) for m in messages), key=lambda e: e.date, reverse=True)
        await self._record_access(token, client)

        return {"query": query, "count": len(emails), "emails": emails}

    async def get_profile(self, user_id: UUID) -> dict:
        """
        Get the connected mailbox profile.

        Returns:
            dict: emailAddress, messagesTotal, threadsTotal, historyId
        """
        token, client = await self._client_for(user_id)
        profile = await client.get_profile()
        await self._record_access(token, client)
        return profile
