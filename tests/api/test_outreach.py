"""
Test suite for the outreach API.

System role: Verification of outreach HTTP API
"""

import uuid
from datetime import datetime, timezone

from jobtracker.api.deps import get_outreach_service

SENT_AT = datetime(2024, 1, 20, tzinfo=timezone.utc)


def _action(status: str = "pending") -> dict:
    contact_id = uuid.uuid4()
    return {
        "id": uuid.uuid4(),
        "contact_id": contact_id,
        "application_id": None,
        "message_id": None,
        "company": "Acme",
        "status": status,
        "sent_at": SENT_AT,
        "responded_at": None,
        "notes": None,
        "contact": {
            "id": contact_id,
            "full_name": None,
            "headline": None,
            "linkedin_url": "https://www.linkedin.com/in/jane-doe",
            "avatar_url": None,
        },
    }


class TestLogOutreach:
    """POST /api/outreach."""

    def test_should_log_batch_with_201(self, client, services):
        service = services[get_outreach_service]
        service.log_outreach_batch.return_value = [_action()]

        response = client.post(
            "/api/outreach",
            json={
                "company": "Acme",
                "messageBody": "Hi!",
                "contacts": ["https://www.linkedin.com/in/jane-doe"],
            },
        )

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Logged 1 outreach actions"
        assert body["data"][0]["contact"]["linkedinUrl"] == "https://www.linkedin.com/in/jane-doe"
        assert service.log_outreach_batch.await_args.kwargs["contact_urls"] == [
            "https://www.linkedin.com/in/jane-doe"
        ]

    def test_should_require_application_or_company(self, client):
        response = client.post(
            "/api/outreach",
            json={"messageBody": "Hi!", "contacts": ["https://www.linkedin.com/in/jane-doe"]},
        )

        assert response.status_code == 400

    def test_should_cap_batch_at_twenty(self, client):
        contacts = [f"https://www.linkedin.com/in/p{i}" for i in range(21)]

        response = client.post("/api/outreach", json={"company": "Acme", "messageBody": "Hi", "contacts": contacts})

        assert response.status_code == 400


class TestUpdateStatus:
    """PATCH /api/outreach/{id}."""

    def test_should_forward_status(self, client, services):
        service = services[get_outreach_service]
        service.update_outreach_status.return_value = _action("accepted")

        response = client.patch(f"/api/outreach/{uuid.uuid4()}", json={"status": "accepted"})

        assert response.status_code == 200
        assert response.json()["data"]["status"] == "accepted"

    def test_unknown_status_should_be_400(self, client):
        response = client.patch(f"/api/outreach/{uuid.uuid4()}", json={"status": "maybe"})

        assert response.status_code == 400
