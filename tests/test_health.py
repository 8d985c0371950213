"""Health endpoint tests."""

from sqlalchemy.exc import OperationalError

from emergency_sos.db.session import get_db
from emergency_sos.main import app


def test_health_returns_ok(client):
    """GET /api/health reports status and database connectivity."""
    response = client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["database"] == "connected"
    assert "timestamp" in data


def test_health_reports_disconnected_database(client):
    """A failing store still answers 200 but flags the database."""

    class _BrokenSession:
        def execute(self, *args, **kwargs):
            raise OperationalError("SELECT 1", {}, Exception("unable to open database file"))

    app.dependency_overrides[get_db] = lambda: _BrokenSession()
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["database"] == "disconnected"
