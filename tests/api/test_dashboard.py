from jobtracker.api.deps import get_dashboard_service


def test_dashboard(client, services, application_dict):
    services[get_dashboard_service].get_dashboard.return_value = {
        "applications": [application_dict],
        "stats": {"total": 1, "pending": 1, "interviews": 1, "rejections": 0, "offers": 0},
        "upcoming_events": [],
        "recent_applications": [application_dict],
    }

    response = client.get("/api/dashboard")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["stats"]["interviews"] == 1
    assert data["upcomingEvents"] == []
    assert data["recentApplications"][0]["company"] == "TechCorp"


def test_dashboard_requires_session(anonymous_client):
    assert anonymous_client.get("/api/dashboard").status_code == 401
