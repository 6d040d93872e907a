"""
Test suite for the sign-in API.

System role: Verification of authentication HTTP API
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from jobtracker.api.deps import get_auth_service, get_oauth_client
from jobtracker.boundary.google.oauth_client import GoogleUserInfo, OAuthTokens
from jobtracker.core.exceptions import OAuthError

FRONTEND = "http://localhost:3000"


@pytest.fixture
def oauth_client(app):
    client = AsyncMock()
    client.build_authorization_url = MagicMock(return_value="https://accounts.google.com/consent?x=1")
    client.exchange_code.return_value = OAuthTokens(access_token="at")
    client.fetch_userinfo.return_value = GoogleUserInfo(email="ada@example.com", name="Ada")
    app.dependency_overrides[get_oauth_client] = lambda: client
    return client


@pytest.fixture
def auth_service(app, user_dict):
    service = AsyncMock()
    service.ensure_user_exists.return_value = user_dict
    service.issue_session_token = MagicMock(return_value="session-jwt")
    app.dependency_overrides[get_auth_service] = lambda: service
    return service


def test_login_redirects_with_state_cookie(anonymous_client, oauth_client):
    response = anonymous_client.get("/api/auth/login", follow_redirects=False)

    assert response.status_code == 302
    assert response.headers["location"].startswith("https://accounts.google.com/consent")
    state = response.cookies["jobtracker_oauth_state"]
    assert oauth_client.build_authorization_url.call_args.kwargs["state"] == state


def test_callback_sets_session_cookie(anonymous_client, oauth_client, auth_service):
    anonymous_client.cookies.set("jobtracker_oauth_state", "s1")

    response = anonymous_client.get("/api/auth/callback?code=abc&state=s1", follow_redirects=False)

    assert response.headers["location"] == f"{FRONTEND}/"
    assert response.cookies["jobtracker_session"] == "session-jwt"
    auth_service.ensure_user_exists.assert_awaited_once_with("ada@example.com", "Ada", None)


@pytest.mark.parametrize(
    "query,cookie,expected",
    [
        ("code=abc&state=s1", "other", "invalid_state"),
        ("state=s1", "s1", "no_code"),
        ("error=access_denied", None, "access_denied"),
    ],
)
def test_callback_failures_redirect_with_error(anonymous_client, oauth_client, auth_service, query, cookie, expected):
    if cookie:
        anonymous_client.cookies.set("jobtracker_oauth_state", cookie)

    response = anonymous_client.get(f"/api/auth/callback?{query}", follow_redirects=False)

    assert response.headers["location"] == f"{FRONTEND}/auth?error={expected}"
    auth_service.ensure_user_exists.assert_not_called()


def test_callback_exchange_failure(anonymous_client, oauth_client, auth_service):
    anonymous_client.cookies.set("jobtracker_oauth_state", "s1")
    oauth_client.exchange_code.side_effect = OAuthError("Failed to exchange authorization code")

    response = anonymous_client.get("/api/auth/callback?code=abc&state=s1", follow_redirects=False)

    assert response.headers["location"] == f"{FRONTEND}/auth?error=callback_failed"


def test_callback_database_failure_still_redirects(anonymous_client, oauth_client, auth_service):
    anonymous_client.cookies.set("jobtracker_oauth_state", "s1")
    auth_service.ensure_user_exists.side_effect = OperationalError("INSERT", {}, Exception("db down"))

    response = anonymous_client.get("/api/auth/callback?code=abc&state=s1", follow_redirects=False)

    assert response.status_code == 302
    assert response.headers["location"] == f"{FRONTEND}/auth?error=callback_failed"
    assert "jobtracker_session" not in response.cookies


def test_me(client, user_dict):
    response = client.get("/api/auth/me")

    assert response.status_code == 200
    assert response.json()["data"]["email"] == user_dict["email"]


def test_logout_clears_cookie(client):
    response = client.post("/api/auth/logout")

    assert response.status_code == 200
    assert 'jobtracker_session=""' in response.headers["set-cookie"]
