"""Health check tests."""

from conftest import FakeStorageDriver
from marketplace.api.deps import get_storage
from marketplace.main import app


def test_health_endpoint(client):
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data == {"status": "ok", "db": "connected", "storage": "connected"}


def test_health_reports_unreachable_storage(client):
    app.dependency_overrides[get_storage] = lambda: FakeStorageDriver(connected=False)

    data = client.get("/health").json()
    assert data["status"] == "degraded"
    assert data["db"] == "connected"
    assert data["storage"].startswith("error:")


def test_healthz_needs_no_token(client):
    response = client.get("/v1/healthz")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
