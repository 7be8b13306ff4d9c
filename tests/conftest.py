"""Pytest configuration and fixtures."""

import os
from unittest.mock import patch

import pytest

# Set before app modules are imported during collection; settings are cached
os.environ["SUPABASE_URL"] = "https://test.supabase.co"
os.environ["SUPABASE_SERVICE_ROLE_KEY"] = "test-key"
os.environ["SESSION_SECRET"] = "test-session-secret"
os.environ["ADMIN_PIN_CHASE"] = "1111"
os.environ["ADMIN_PIN_SHELDON"] = "2222"
os.environ["APP_ENV"] = "test"

from app.core import rate_limiter  # noqa: E402
from app.core.config import get_settings  # noqa: E402
from tests.fakes.fake_supabase import FakeSupabase  # noqa: E402

SUPABASE_CONSUMERS = (
    "app.db.versioned_documents.get_supabase",
    "app.db.investor_sessions.get_supabase",
    "app.db.investor_agreements.get_supabase",
)


@pytest.fixture(autouse=True)
def reset_app_state():
    """Fresh settings and login limiter for every test."""
    get_settings.cache_clear()
    rate_limiter._login_rate_limiter = None
    yield
    get_settings.cache_clear()
    rate_limiter._login_rate_limiter = None


@pytest.fixture
def fake_supabase():
    """In-memory Supabase client patched into every db module."""
    fake = FakeSupabase()
    patchers = [patch(target, return_value=fake) for target in SUPABASE_CONSUMERS]
    for patcher in patchers:
        patcher.start()
    yield fake
    for patcher in patchers:
        patcher.stop()
