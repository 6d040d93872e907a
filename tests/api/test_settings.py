"""
Test suite for the settings API.

System role: Verification of preference HTTP API
"""

import uuid
from datetime import datetime, timezone

from jobtracker.api.deps import get_user_settings_service


def _settings(user_id) -> dict:
    now = datetime(2024, 1, 20, tzinfo=timezone.utc)
    return {
        "id": uuid.uuid4(),
        "user_id": user_id,
        "notifications": True,
        "auto_sync": False,
        "dark_mode": False,
        "email_reminders": True,
        "export_format": "csv",
        "data_retention": 365,
        "created_at": now,
        "updated_at": now,
    }


def test_get_before_first_save_returns_null(client, services):
    services[get_user_settings_service].get_settings.return_value = None

    response = client.get("/api/settings")

    assert response.status_code == 200
    assert response.json()["data"] is None


def test_put_forwards_only_sent_fields(client, services, user_dict):
    service = services[get_user_settings_service]
    service.upsert_settings.return_value = _settings(user_dict["id"])

    response = client.put("/api/settings", json={"darkMode": False, "exportFormat": "csv"})

    assert response.status_code == 200
    assert response.json()["data"]["darkMode"] is False
    assert set(service.upsert_settings.await_args.kwargs) == {"dark_mode", "export_format"}


def test_put_rejects_unknown_fields(client, services):
    response = client.put("/api/settings", json={"theme": "dark"})

    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "theme"
    services[get_user_settings_service].upsert_settings.assert_not_called()


def test_put_rejects_out_of_range_retention(client):
    assert client.put("/api/settings", json={"dataRetention": 0}).status_code == 400
