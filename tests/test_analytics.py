"""
Tests for admin dashboard analytics
"""
from datetime import datetime, timedelta, timezone

import pytest

from rateam.modules.analytics.service import compute_analytics

NOW = datetime(2026, 6, 30, 12, 0, tzinfo=timezone.utc)


def _ago(days):
    return (NOW - timedelta(days=days)).isoformat()


def test_compute_analytics():
    users = [{"id": "u1", "created_at": _ago(2)}, {"id": "u2", "created_at": _ago(45)}, {"id": "u3", "created_at": None}]
    vendors = [
        {"id": "v1", "status": "approved", "created_at": _ago(10)},
        {"id": "v2", "status": "pending", "created_at": _ago(1)},
        {"id": "v3", "status": "suspended", "created_at": _ago(90)},
    ]
    reviews = [
        {"id": "r1", "status": "approved", "rating": 5, "created_at": _ago(3)},
        {"id": "r2", "status": "pending", "rating": 2, "created_at": _ago(31)},
    ]
    categories = [{"id": "c1"}, {"id": "c2"}]

    result = compute_analytics(users, vendors, reviews, categories, now=NOW)

    assert result.total_users == 3
    assert result.total_vendors == 3
    assert result.approved_vendors == 1
    assert result.pending_vendors == 1
    assert result.total_reviews == 2
    assert result.approved_reviews == 1
    assert result.average_rating == pytest.approx(3.5)
    assert result.total_categories == 2
    assert result.new_users_this_month == 1
    assert result.new_vendors_this_month == 2
    assert result.new_reviews_this_month == 1


def test_empty_tables():
    result = compute_analytics([], [], [], [], now=NOW)
    assert result.total_users == 0
    assert result.average_rating == 0.0
    assert result.new_reviews_this_month == 0


def test_unparsable_timestamps_are_skipped():
    users = [{"id": "u1", "created_at": "yesterday"}, {"id": "u2", "created_at": "2026-06-29T00:00:00"}]
    result = compute_analytics(users, [], [], [], now=NOW)
    assert result.total_users == 2
    assert result.new_users_this_month == 1


def test_analytics_route(client, fake_db, admin_headers):
    fake_db.seed("vendors", business_name="Shop", status="approved")
    fake_db.seed("reviews", vendor_id="v", rating=4, status="approved")
    fake_db.seed("categories", name="Food")

    response = client.get("/api/v1/analytics", headers=admin_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["total_users"] == 1
    assert body["approved_vendors"] == 1
    assert body["average_rating"] == 4.0
    assert body["total_categories"] == 1


def test_analytics_requires_admin(client, make_account):
    _, headers = make_account("vendor")
    assert client.get("/api/v1/analytics", headers=headers).status_code == 403
