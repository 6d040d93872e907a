"""
Test suite for the applications API.

Tests envelopes, camelCase serialization, query aliases, validation
errors, 404 mapping, the 401 guard and CSV export headers.

System role: Verification of application HTTP API
"""

import uuid

from jobtracker.api.deps import get_application_service, get_outreach_service
from jobtracker.core.exceptions import NotFoundError


class TestListApplications:
    """GET /api/applications."""

    def test_should_require_session(self, anonymous_client):
        response = anonymous_client.get("/api/applications")

        assert response.status_code == 401
        assert response.json() == {
            "success": False,
            "error": "Unauthorized",
            "message": "Authentication required",
        }

    def test_should_return_page_with_camel_case_fields(self, client, services, application_dict, user_dict):
        service = services[get_application_service]
        service.list_applications.return_value = ([application_dict], 41)

        response = client.get(
            "/api/applications",
            params={"page": 2, "limit": 20, "status": "interview", "sortBy": "company", "sortOrder": "asc"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["data"][0]["appliedDate"] == "2024-01-15"
        assert body["data"][0]["cvVersion"] == "v2"
        assert body["pagination"] == {
            "page": 2, "limit": 20, "total": 41, "totalPages": 3, "hasNext": True, "hasPrev": True,
        }
        kwargs = service.list_applications.await_args.kwargs
        assert kwargs["sort_by"] == "company"
        assert kwargs["status"].value == "interview"

    def test_invalid_query_should_be_400_with_field_details(self, client):
        response = client.get("/api/applications", params={"limit": 500, "sortBy": "salary"})

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "Validation failed"
        assert {d["field"] for d in body["details"]} == {"limit", "sortBy"}


class TestCreateApplication:
    """POST /api/applications."""

    def test_should_create_with_201(self, client, services, application_dict):
        service = services[get_application_service]
        service.create_application.return_value = application_dict

        response = client.post(
            "/api/applications",
            json={"company": "TechCorp", "position": "Frontend Developer", "appliedDate": "2024-01-15"},
        )

        assert response.status_code == 201
        assert response.json()["data"]["company"] == "TechCorp"
        assert service.create_application.await_args.kwargs["status"].value == "applied"

    def test_missing_company_should_be_400(self, client):
        response = client.post("/api/applications", json={"position": "Dev", "appliedDate": "2024-01-15"})

        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == "company"

    def test_bad_job_url_should_be_400(self, client):
        response = client.post(
            "/api/applications",
            json={"company": "A", "position": "B", "appliedDate": "2024-01-15", "jobUrl": "not a url"},
        )

        assert response.status_code == 400


class TestSingleApplication:
    """GET/PUT/DELETE /api/applications/{id}."""

    def test_missing_should_be_404(self, client, services):
        services[get_application_service].get_application.side_effect = NotFoundError("Application", "x")

        response = client.get(f"/api/applications/{uuid.uuid4()}")

        assert response.status_code == 404
        assert response.json()["error"] == "Not found"

    def test_malformed_id_should_be_400(self, client):
        assert client.get("/api/applications/not-a-uuid").status_code == 400

    def test_update_should_pass_only_sent_fields(self, client, services, application_dict):
        service = services[get_application_service]
        service.update_application.return_value = application_dict

        response = client.put(f"/api/applications/{application_dict['id']}", json={"notes": None, "status": "offer"})

        assert response.status_code == 200
        assert set(service.update_application.await_args.kwargs) == {"notes", "status"}

    def test_update_should_reject_unknown_fields(self, client):
        response = client.put(f"/api/applications/{uuid.uuid4()}", json={"salary": 1})

        assert response.status_code == 400

    def test_update_should_reject_null_company(self, client):
        response = client.put(f"/api/applications/{uuid.uuid4()}", json={"company": None})

        assert response.status_code == 400

    def test_delete_should_return_id(self, client, services):
        application_id = uuid.uuid4()

        response = client.delete(f"/api/applications/{application_id}")

        assert response.status_code == 200
        assert response.json()["data"] == {"id": str(application_id)}


class TestExport:
    """GET /api/applications/export."""

    def test_csv_should_be_attachment(self, client, services, application_dict):
        application_dict["company"] = "Acme, Inc."
        services[get_application_service].export_applications.return_value = [application_dict]

        response = client.get("/api/applications/export", params={"format": "csv"})

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert response.headers["content-disposition"].startswith('attachment; filename="applications-')
        lines = response.text.splitlines()
        assert lines[0].startswith("ID,Company,Position,Status")
        assert '"Acme, Inc."' in lines[1]

    def test_json_should_be_enveloped(self, client, services, application_dict):
        services[get_application_service].export_applications.return_value = [application_dict]

        response = client.get("/api/applications/export")

        data = response.json()["data"]
        assert data["totalApplications"] == 1
        assert data["applications"][0]["company"] == "TechCorp"
        assert "exportDate" in data


class TestApplicationOutreach:
    """GET /api/applications/{id}/outreach/message."""

    def test_message_should_be_null_when_none_logged(self, client, services):
        services[get_outreach_service].get_application_message.return_value = None

        response = client.get(f"/api/applications/{uuid.uuid4()}/outreach/message")

        assert response.status_code == 200
        assert response.json()["data"] is None
