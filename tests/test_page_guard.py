"""Tests for the page-guard middleware and role dependencies."""

import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from app.core.auth_middleware import (
    page_guard,
    require_deck_or_admin,
    required_roles,
)
from app.core.schemas_auth import SessionPayload, SessionRole
from app.core.session import SESSION_COOKIE, create_session_token


def _build_app() -> FastAPI:
    app = FastAPI()
    app.middleware("http")(page_guard)

    @app.get("/")
    async def portal():
        return {"page": "portal"}

    @app.get("/admin")
    async def admin_page():
        return {"page": "admin"}

    @app.get("/admin/bos")
    async def admin_bos_page():
        return {"page": "admin-bos"}

    @app.get("/pitch-deck")
    async def deck_page():
        return {"page": "deck"}

    @app.get("/administrators")
    async def lookalike_page():
        return {"page": "public"}

    @app.get("/deck-data")
    async def deck_data(session: SessionPayload = Depends(require_deck_or_admin)):
        return {"slug": session.slug}

    return app


@pytest.fixture
def client():
    return TestClient(_build_app(), follow_redirects=False)


def _as(client, slug: str, role: SessionRole) -> TestClient:
    client.cookies.set(SESSION_COOKIE, create_session_token(slug, role))
    return client


class TestRequiredRoles:
    def test_admin_pages(self):
        assert required_roles("/admin") == (SessionRole.ADMIN,)
        assert required_roles("/admin/update-schedule") == (SessionRole.ADMIN,)

    def test_deck_pages(self):
        assert required_roles("/pitch-deck") == (SessionRole.DECK, SessionRole.ADMIN)

    def test_public_pages(self):
        assert required_roles("/") is None
        assert required_roles("/administrators") is None
        assert required_roles("/api/admin/update") is None


class TestPageGuard:
    def test_public_page_passes(self, client):
        assert client.get("/").json() == {"page": "portal"}

    def test_prefix_lookalike_is_public(self, client):
        assert client.get("/administrators").status_code == 200

    def test_no_cookie_redirects_with_auth_required(self, client):
        response = client.get("/admin")

        assert response.status_code == 307
        assert response.headers["location"] == "/?auth=required"

    def test_invalid_cookie_redirects_and_clears(self, client):
        client.cookies.set(SESSION_COOKIE, "garbage.value")

        response = client.get("/admin/bos")

        assert response.status_code == 307
        assert response.headers["location"] == "/"
        assert "max-age=0" in response.headers["set-cookie"].lower()

    def test_wrong_role_redirects_and_clears(self, client):
        _as(client, "acme-capital", SessionRole.INVESTOR)

        response = client.get("/admin")

        assert response.status_code == 307
        assert response.headers["location"] == "/"
        assert "max-age=0" in response.headers["set-cookie"].lower()

    def test_admin_reaches_admin_pages(self, client):
        _as(client, "chase-admin", SessionRole.ADMIN)

        assert client.get("/admin").json() == {"page": "admin"}
        assert client.get("/admin/bos").json() == {"page": "admin-bos"}

    @pytest.mark.parametrize(
        "slug,role",
        [("pre-pitch-deck", SessionRole.DECK), ("sheldon-admin", SessionRole.ADMIN)],
    )
    def test_deck_and_admin_reach_pitch_deck(self, client, slug, role):
        _as(client, slug, role)

        assert client.get("/pitch-deck").json() == {"page": "deck"}

    def test_investor_cannot_reach_pitch_deck(self, client):
        _as(client, "acme-capital", SessionRole.INVESTOR)

        assert client.get("/pitch-deck").status_code == 307


class TestRoleChecker:
    def test_deck_or_admin_allows_deck(self, client):
        _as(client, "pre-pitch-deck", SessionRole.DECK)

        assert client.get("/deck-data").json() == {"slug": "pre-pitch-deck"}

    def test_deck_or_admin_rejects_investor(self, client):
        _as(client, "acme-capital", SessionRole.INVESTOR)

        response = client.get("/deck-data")

        assert response.status_code == 403
        assert response.json()["detail"] == "deck or admin access required"

    def test_unauthenticated(self, client):
        assert client.get("/deck-data").status_code == 401
