"""
Pytest fixtures and test configuration
"""
import os

import pytest
from fastapi.testclient import TestClient

# Set testing environment variables BEFORE importing app modules
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("SUPABASE_URL", "https://fake.supabase.co")
os.environ.setdefault("SUPABASE_KEY", "test-anon-key")

from rateam.database.supabase_client import get_supabase, get_admin_supabase
from rateam.main import app
from rateam.modules.auth.service import clear_auth_cache
from tests.fakes import FakeSupabase


@pytest.fixture
def fake_db():
    return FakeSupabase()


@pytest.fixture
def client(fake_db):
    """TestClient wired to an in-memory Supabase for both the anon and service clients."""
    app.dependency_overrides[get_supabase] = lambda: fake_db
    app.dependency_overrides[get_admin_supabase] = lambda: fake_db
    clear_auth_cache()
    yield TestClient(app)
    app.dependency_overrides.clear()
    clear_auth_cache()


@pytest.fixture
def make_account(fake_db):
    """Create a signed-in account and return (user_id, auth headers)."""
    counter = {"n": 0}

    def _make(role="user", full_name="Test User", email=None):
        counter["n"] += 1
        email = email or f"{role}{counter['n']}@example.com"
        user_id, token = fake_db.add_user(email, full_name=full_name, role=role)
        return user_id, {"Authorization": f"Bearer {token}"}

    return _make


@pytest.fixture
def admin_headers(make_account):
    return make_account("admin")[1]


@pytest.fixture
def approved_vendor(fake_db, make_account):
    """An approved vendor owned by a vendor account; returns (vendor row, owner headers)."""
    owner_id, headers = make_account("vendor", full_name="Mama Put")
    vendor = fake_db.seed(
        "vendors",
        user_id=owner_id,
        business_name="Mama Put Kitchen",
        description="Jollof and suya",
        category="Food",
        status="approved",
        rating=4.5,
        review_count=10,
    )
    return vendor, headers
