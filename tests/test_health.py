# File: tests/test_health.py

import pytest
from fastapi.testclient import TestClient

from app.core.middleware import SECURITY_HEADERS
from app.main import create_application


def test_health_endpoint(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "healthy"
    assert data["environment"] == "test"
    assert data["version"] == "1.0.0"
    assert data["timestamp"].endswith("Z")


def test_ready_when_database_is_up(client):
    resp = client.get("/ready")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "ready"
    assert data["database"] == "connected"
    assert "timestamp" in data


def test_health_ok_when_database_is_unreachable(unreachable_client):
    resp = unreachable_client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"


def test_ready_reports_unavailable_when_database_is_unreachable(unreachable_client):
    resp = unreachable_client.get("/ready")
    assert resp.status_code == 503
    data = resp.json()
    assert data["status"] == "not ready"
    assert data["database"] == "disconnected"
    assert "unable to open database file" in data["error"]


def test_root_lists_endpoints(client):
    resp = client.get("/")
    assert resp.status_code == 200
    data = resp.json()
    assert data["version"] == "1.0.0"
    assert data["environment"] == "test"
    assert data["endpoints"]["users"] == "/api/users"
    assert data["endpoints"]["user_by_id"] == "/api/users/:id"


def test_database_status(client):
    resp = client.get("/api/status")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "Database connected"
    assert data["database_version"]
    assert data["database_time"]
    assert data["environment"] == "test"


def test_database_status_echoes_backend_error(unreachable_client):
    resp = unreachable_client.get("/api/status")
    assert resp.status_code == 500
    data = resp.json()
    assert data["status"] == "error"
    assert data["error"] == "Database connection failed"
    assert "unable to open database file" in data["message"]


def test_unmatched_route_returns_json_404(client):
    resp = client.get("/does/not/exist")
    assert resp.status_code == 404
    assert resp.json() == {
        "error": "Not found",
        "message": "The requested resource was not found",
    }


def test_unsupported_method_is_unmatched(client):
    resp = client.delete("/api/users/1")
    assert resp.status_code == 404
    assert resp.json()["error"] == "Not found"


def test_security_headers_present(client):
    resp = client.get("/health")
    for name, value in SECURITY_HEADERS.items():
        assert resp.headers[name] == value


def test_unexpected_error_message_hidden_outside_development(app, monkeypatch):
    def boom():
        raise RuntimeError("boom")

    monkeypatch.setattr(app.state.store, "list_users", boom)
    unsafe_client = TestClient(app, raise_server_exceptions=False)

    resp = unsafe_client.get("/api/users")
    assert resp.status_code == 500
    assert resp.json() == {"error": "Internal server error", "message": "Something went wrong"}
    for name, value in SECURITY_HEADERS.items():
        assert resp.headers[name] == value


def test_unexpected_error_message_shown_in_development(settings_factory, monkeypatch):
    app = create_application(settings_factory(development_mode=True))

    def boom():
        raise RuntimeError("boom")

    monkeypatch.setattr(app.state.store, "list_users", boom)
    with TestClient(app, raise_server_exceptions=False) as client:
        resp = client.get("/api/users")

    assert resp.status_code == 500
    assert resp.json() == {"error": "Internal server error", "message": "boom"}


def test_startup_fails_when_bootstrap_fails(unreachable_settings):
    app = create_application(unreachable_settings)
    with pytest.raises(Exception):
        with TestClient(app):
            pass
    assert app.state.store.state.value == "failed"
