"""Test health check endpoint and app-level error handling."""

from fastapi.testclient import TestClient

from app.core.error_messages import GENERAL_ERRORS
from app.core.session import SESSION_COOKIE
from app.main import app

client = TestClient(app)


def test_health_check():
    """Test that /health returns 200 with status ok."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_health_needs_no_configuration(monkeypatch):
    monkeypatch.delenv("SESSION_SECRET")
    monkeypatch.delenv("SUPABASE_URL")

    assert TestClient(app).get("/health").status_code == 200


def test_missing_session_secret_is_generic_500(monkeypatch):
    """A deployment error never leaks configuration names to the browser."""
    monkeypatch.delenv("SESSION_SECRET")
    local = TestClient(app)
    local.cookies.set(SESSION_COOKIE, "some.token")

    response = local.get("/api/auth/session")

    assert response.status_code == 500
    assert response.json() == {"detail": GENERAL_ERRORS.UNKNOWN}
