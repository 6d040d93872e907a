from unittest.mock import AsyncMock

from sqlalchemy.exc import OperationalError

from jobtracker.boundary.db import get_async_db


def test_health_check(anonymous_client):
    response = anonymous_client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "message": "Server Healthy"}


def test_health_check_db(anonymous_client):
    response = anonymous_client.get("/api/health/db")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "message": "Database connection OK"}


def test_health_check_db_unreachable(app, anonymous_client):
    async def _broken_db():
        session = AsyncMock()
        session.execute.side_effect = OperationalError("SELECT 1", {}, Exception("refused"))
        yield session

    app.dependency_overrides[get_async_db] = _broken_db

    response = anonymous_client.get("/api/health/db")

    assert response.status_code == 503
    assert response.json()["status"] == "unhealthy"


def test_correlation_id_is_echoed(anonymous_client):
    response = anonymous_client.get("/api/health", headers={"X-Correlation-ID": "abc-123"})
    assert response.headers["X-Correlation-ID"] == "abc-123"


def test_correlation_id_is_generated(anonymous_client):
    response = anonymous_client.get("/api/health")
    assert response.headers["X-Correlation-ID"]
