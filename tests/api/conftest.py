"""
API test fixtures.

Provides: app with dependency overrides, TestClient, sample response dicts
Dependencies: fastapi, pytest
System role: HTTP layer test infrastructure
"""

import uuid
from datetime import date, datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from jobtracker.api.deps import (
    get_application_service,
    get_current_user,
    get_dashboard_service,
    get_document_service,
    get_gmail_service,
    get_outreach_service,
    get_user_settings_service,
)
from jobtracker.api.main import create_app
from jobtracker.boundary.db import get_async_db

NOW = datetime(2024, 1, 20, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def services():
    """One AsyncMock per service dependency."""
    documents = AsyncMock()
    documents.validate_upload = MagicMock()
    gmail = AsyncMock()
    gmail.create_connect_url = MagicMock(return_value="https://accounts.google.com/consent")
    return {
        get_application_service: AsyncMock(),
        get_document_service: documents,
        get_outreach_service: AsyncMock(),
        get_user_settings_service: AsyncMock(),
        get_dashboard_service: AsyncMock(),
        get_gmail_service: gmail,
    }


def _provide(service):
    def _dependency():
        return service
    return _dependency


@pytest.fixture
def app(services):
    """App whose database session and services are mocked."""
    application = create_app()

    async def _db():
        yield AsyncMock()

    application.dependency_overrides[get_async_db] = _db
    for dependency, service in services.items():
        application.dependency_overrides[dependency] = _provide(service)
    return application


@pytest.fixture
def client(app, user_dict):
    """Client signed in as user_dict."""
    app.dependency_overrides[get_current_user] = lambda: user_dict
    return TestClient(app)


@pytest.fixture
def anonymous_client(app):
    """Client without a session cookie."""
    return TestClient(app)


@pytest.fixture
def application_dict(user_dict):
    return {
        "id": uuid.uuid4(),
        "user_id": user_dict["id"],
        "company": "TechCorp",
        "position": "Frontend Developer",
        "status": "interview",
        "applied_date": date(2024, 1, 15),
        "next_date": None,
        "next_event": None,
        "cv_version": "v2",
        "notes": "Referred, by Jane",
        "job_url": None,
        "created_at": NOW,
        "updated_at": NOW,
    }


@pytest.fixture
def document_dict(user_dict):
    return {
        "id": uuid.uuid4(),
        "user_id": user_dict["id"],
        "application_id": uuid.uuid4(),
        "name": "Lebenslauf Müller.pdf",
        "type": "cv",
        "size": 9,
        "mime_type": "application/pdf",
        "storage_path": "k",
        "upload_date": NOW,
        "created_at": NOW,
        "updated_at": NOW,
    }
