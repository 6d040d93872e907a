"""
Gmail API client.

Read-only access to a user's mailbox through google-api-python-client.
Calls are blocking, so each one runs in a worker thread; message details
are fetched with Gmail batch requests of 10 with a short pause between
batches to stay under per-user rate limits.

Dependencies: google-api-python-client, google-auth
System role: Gmail adapter for job email detection
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Sequence

from google.auth.exceptions import RefreshError
from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from jobtracker.boundary.google.oauth_client import GMAIL_READONLY_SCOPE
from jobtracker.core.exceptions import (
    GmailPermissionError,
    GmailQuotaError,
    GmailServiceError,
)

logger = logging.getLogger(__name__)

BATCH_SIZE = 10
BATCH_DELAY_SECONDS = 0.1


def translate_gmail_error(error: Exception) -> Exception:
    """
    Map a Google client error to the matching domain exception.

    Args:
        error: HttpError, RefreshError or other failure

    Returns:
        Exception: GmailPermissionError, GmailQuotaError or GmailServiceError
    """
    if isinstance(error, RefreshError):
        return GmailPermissionError("Gmail authorization expired or was revoked")

    message = str(error).lower()
    status = getattr(getattr(error, "resp", None), "status", None)

    if "insufficient authentication scopes" in message or "insufficientpermissions" in message:
        return GmailPermissionError()
    if status == 429 or "quota" in message or "ratelimitexceeded" in message:
        return GmailQuotaError()
    return GmailServiceError("Failed to fetch emails from Gmail", {"status": status})


class GmailClient:
    """Async facade over the Gmail v1 API for one user's credentials."""

    def __init__(
        self,
        access_token: str,
        refresh_token: str | None,
        client_id: str,
        client_secret: str,
        token_uri: str,
        expires_at: datetime | None = None,
        service=None,
    ) -> None:
        """
        Initialize Gmail client.

        Args:
            access_token: Current access token
            refresh_token: Refresh token, enables transparent renewal
            client_id: OAuth client ID (needed to refresh)
            client_secret: OAuth client secret (needed to refresh)
            token_uri: Token endpoint used for refresh
            expires_at: Access token expiry
            service: Pre-built Gmail resource (tests)
        """
        expiry = None
        if expires_at is not None:
            # google-auth compares against naive UTC
            expiry = expires_at.astimezone(timezone.utc).replace(tzinfo=None)

        self.credentials = Credentials(
            token=access_token,
            refresh_token=refresh_token,
            token_uri=token_uri,
            client_id=client_id,
            client_secret=client_secret,
            scopes=[GMAIL_READONLY_SCOPE],
            expiry=expiry,
        )
        self._initial_token = access_token
        self._service = service

    @property
    def service(self):
        """Lazily built Gmail API resource."""
        if self._service is None:
            self._service = build("gmail", "v1", credentials=self.credentials, cache_discovery=False)
        return self._service

    @property
    def token_refreshed(self) -> bool:
        """True when google-auth renewed the access token during a call."""
        return self.credentials.token != self._initial_token

    async def _run(self, request) -> Any:
        try:
            return await asyncio.to_thread(request.execute)
        except (HttpError, RefreshError) as e:
            logger.warning("Gmail API call failed", extra={"error": str(e)})
            raise translate_gmail_error(e) from e

    async def list_message_ids(self, query: str, max_results: int) -> list[str]:
        """
        Search the mailbox.

        Args:
            query: Gmail search expression
            max_results: Maximum number of message IDs

        Returns:
            list[str]: Matching message IDs, newest first
        """
        request = self.service.users().messages().list(userId="me", q=query, maxResults=max_results)
        response = await self._run(request)
        return [message["id"] for message in response.get("messages", [])]

    def _execute_batch(self, message_ids: Sequence[str]) -> list[dict[str, Any]]:
        results: dict[str, dict[str, Any]] = {}

        def on_response(request_id: str, response: dict[str, Any], exception: Exception | None) -> None:
            if exception is not None:
                logger.warning(
                    "Failed to fetch message",
                    extra={"message_id": request_id, "error": str(exception)},
                )
                return
            results[request_id] = response

        batch = self.service.new_batch_http_request(callback=on_response)
        for message_id in message_ids:
            batch.add(
                self.service.users().messages().get(userId="me", id=message_id, format="full"),
                request_id=message_id,
            )
        batch.execute()
        return [results[message_id] for message_id in message_ids if message_id in results]

    async def get_messages(self, message_ids: Sequence[str]) -> list[dict[str, Any]]:
        """
        Fetch full message resources in rate-limited batches.

        Messages that fail individually are logged and skipped.

        Args:
            message_ids: IDs from list_message_ids

        Returns:
            list[dict]: Message resources in input order
        """
        messages: list[dict[str, Any]] = []
        for start in range(0, len(message_ids), BATCH_SIZE):
            chunk = message_ids[start:start + BATCH_SIZE]
            try:
                messages.extend(await asyncio.to_thread(self._execute_batch, chunk))
            except (HttpError, RefreshError) as e:
                raise translate_gmail_error(e) from e

            if start + BATCH_SIZE < len(message_ids):
                await asyncio.sleep(BATCH_DELAY_SECONDS)
        return messages

    async def search(self, query: str, max_results: int) -> list[dict[str, Any]]:
        """Run a search and fetch every matching message."""
        message_ids = await self.list_message_ids(query, max_results)
        if not message_ids:
            return []
        return await self.get_messages(message_ids)

    async def get_profile(self) -> dict[str, Any]:
        """
        Fetch the mailbox profile.

        Returns:
            dict: emailAddress, messagesTotal, threadsTotal, historyId
        """
        return await self._run(self.service.users().getProfile(userId="me"))
