"""
Test suite for GmailService.

Tests token storage on connect, the not-connected path, classification
of fetched mail, refreshed token persistence and best-effort revocation.
Uses the in-memory database, a real TokenCipher and a fake Gmail client.

System role: Verification of Gmail use case orchestration
"""

import base64
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from jobtracker.application.services.gmail_service import GmailService
from jobtracker.boundary.db.CRUD.gmail_token_crud import gmail_token_crud
from jobtracker.boundary.google.oauth_client import GMAIL_READONLY_SCOPE, OAuthTokens
from jobtracker.configs.google import GoogleOAuthSettings
from jobtracker.core.email_classifier import JobEmailCategory
from jobtracker.core.encryption import TokenCipher, generate_encryption_key
from jobtracker.core.exceptions import GmailNotConnectedError, OAuthError


def _message(message_id: str, subject: str, sender: str, millis: int, body: str = "") -> dict:
    return {
        "id": message_id,
        "threadId": f"t-{message_id}",
        "snippet": subject,
        "internalDate": str(millis),
        "labelIds": ["INBOX"],
        "payload": {
            "headers": [
                {"name": "Subject", "value": subject},
                {"name": "From", "value": sender},
                {"name": "To", "value": "ada@example.com"},
            ],
            "body": {"data": base64.urlsafe_b64encode(body.encode()).decode()},
        },
    }


MESSAGES = [
    _message("m1", "Interview invitation", "Talent <talent@acme.com>", 1_700_000_000_000),
    _message("m2", "Weekly newsletter", "news@shop.com", 1_700_100_000_000),
    _message("m3", "Thank you for applying", "careers@globex.com", 1_700_200_000_000),
]


class FakeGmailClient:
    """Stands in for GmailClient; records construction arguments."""

    instances: list["FakeGmailClient"] = []

    def __init__(self, refreshed: bool = False, **kwargs) -> None:
        self.kwargs = kwargs
        self.queries: list[tuple[str, int]] = []
        self.credentials = MagicMock(token="renewed-access", expiry=None)
        self.token_refreshed = refreshed
        FakeGmailClient.instances.append(self)

    async def search(self, query: str, max_results: int) -> list[dict]:
        self.queries.append((query, max_results))
        return MESSAGES

    async def get_profile(self) -> dict:
        return {"emailAddress": "ada@example.com", "messagesTotal": 10}


@pytest.fixture
def cipher() -> TokenCipher:
    return TokenCipher(generate_encryption_key())


@pytest.fixture
def oauth_client() -> AsyncMock:
    client = AsyncMock()
    client.build_authorization_url = MagicMock(return_value="https://accounts.google.com/consent")
    client.exchange_code.return_value = OAuthTokens(
        access_token="access-1", refresh_token="refresh-1", expires_in=3600, scope=GMAIL_READONLY_SCOPE
    )
    client.revoke_token.return_value = True
    return client


@pytest.fixture
def gmail_settings() -> GoogleOAuthSettings:
    return GoogleOAuthSettings(client_id="cid", client_secret="secret", app_base_url="http://api.test")


@pytest.fixture
def make_service(test_async_db, oauth_client, gmail_settings, cipher):
    FakeGmailClient.instances = []

    def _make(refreshed: bool = False) -> GmailService:
        return GmailService(
            db=test_async_db,
            oauth_client=oauth_client,
            settings=gmail_settings,
            cipher=cipher,
            client_factory=lambda **kwargs: FakeGmailClient(refreshed=refreshed, **kwargs),
        )

    return _make


class TestConnect:
    """Test suite for create_connect_url() and handle_callback()."""

    def test_connect_url_should_request_offline_readonly_access(self, make_service, oauth_client) -> None:
        url = make_service().create_connect_url(state="abc")

        assert url == "https://accounts.google.com/consent"
        oauth_client.build_authorization_url.assert_called_once_with(
            [GMAIL_READONLY_SCOPE], "http://api.test/api/gmail/callback", state="abc", offline=True
        )

    @pytest.mark.asyncio
    async def test_callback_should_store_tokens_encrypted(self, test_async_db, make_service, cipher, user) -> None:
        await make_service().handle_callback(user.id, "auth-code")

        token = await gmail_token_crud.get_by_user_id(test_async_db, user.id)
        assert token.access_token_encrypted != "access-1"
        assert cipher.decrypt(token.access_token_encrypted) == "access-1"
        assert cipher.decrypt(token.refresh_token_encrypted) == "refresh-1"
        assert token.expires_at is not None

    @pytest.mark.asyncio
    async def test_status_should_reflect_connection(self, make_service, user, user_dict) -> None:
        service = make_service()
        user_dict["id"] = user.id

        before = await service.get_status(user_dict)
        await service.handle_callback(user.id, "auth-code")
        after = await service.get_status(user_dict)

        assert before["is_connected"] is False
        assert after["is_connected"] is True
        assert after["connected_at"] is not None


class TestFetchJobEmails:
    """Test suite for fetch_job_emails(), search_emails() and get_profile()."""

    @pytest.mark.asyncio
    async def test_should_require_connection(self, make_service, user) -> None:
        with pytest.raises(GmailNotConnectedError):
            await make_service().fetch_job_emails(user.id)

    @pytest.mark.asyncio
    async def test_should_classify_and_drop_irrelevant_mail(self, make_service, user) -> None:
        service = make_service()
        await service.handle_callback(user.id, "auth-code")

        result = await service.fetch_job_emails(user.id, max_results=500, days_back=1000)

        assert [e.id for e in result["emails"]] == ["m3", "m1"]
        assert result["emails"][1].category == JobEmailCategory.INTERVIEW_INVITATION
        assert result["summary"]["totalEmails"] == 2
        assert result["options"]["max_results"] == 100
        assert result["options"]["days_back"] == 365

        client = FakeGmailClient.instances[-1]
        assert client.kwargs["access_token"] == "access-1"
        assert client.kwargs["refresh_token"] == "refresh-1"
        assert "newer_than:365d" in client.queries[0][0]

    @pytest.mark.asyncio
    async def test_should_persist_refreshed_access_token(
        self, test_async_db, make_service, cipher, user
    ) -> None:
        await make_service().handle_callback(user.id, "auth-code")

        await make_service(refreshed=True).get_profile(user.id)

        token = await gmail_token_crud.get_by_user_id(test_async_db, user.id)
        assert cipher.decrypt(token.access_token_encrypted) == "renewed-access"
        assert token.last_accessed is not None

    @pytest.mark.asyncio
    async def test_search_should_keep_every_match(self, make_service, user) -> None:
        service = make_service()
        await service.handle_callback(user.id, "auth-code")

        result = await service.search_emails(user.id, "from:acme", max_results=80)

        assert result["count"] == 3
        assert result["emails"][0].id == "m3"
        assert FakeGmailClient.instances[-1].queries == [("from:acme", 50)]


class TestDisconnect:
    """Test suite for disconnect()."""

    @pytest.mark.asyncio
    async def test_should_return_false_when_not_connected(self, make_service, user) -> None:
        assert await make_service().disconnect(user.id) is False

    @pytest.mark.asyncio
    async def test_should_revoke_refresh_token_and_delete(
        self, test_async_db, make_service, oauth_client, user
    ) -> None:
        service = make_service()
        await service.handle_callback(user.id, "auth-code")

        assert await service.disconnect(user.id) is True
        oauth_client.revoke_token.assert_awaited_once_with("refresh-1")
        assert await gmail_token_crud.get_by_user_id(test_async_db, user.id) is None

    @pytest.mark.asyncio
    async def test_revocation_failure_should_not_block_delete(
        self, test_async_db, make_service, oauth_client, user
    ) -> None:
        service = make_service()
        await service.handle_callback(user.id, "auth-code")
        oauth_client.revoke_token.side_effect = OAuthError("Failed to reach Google OAuth endpoint")

        assert await service.disconnect(user.id) is True
        assert await gmail_token_crud.get_by_user_id(test_async_db, user.id) is None
