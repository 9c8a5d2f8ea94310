"""
Tests for profiles and the admin user list
"""
from rateam.modules.users.service import clean_optional


def test_clean_optional():
    assert clean_optional(None) is None
    assert clean_optional("   ") is None
    assert clean_optional(" +234 800 ") == "+234 800"


def test_get_my_profile(client, make_account):
    user_id, headers = make_account("user", full_name="Tunde Bello")
    response = client.get("/api/v1/users/me", headers=headers)
    assert response.status_code == 200
    body = response.json()
    assert body["id"] == user_id
    assert body["full_name"] == "Tunde Bello"


def test_profile_not_found(client, fake_db, make_account):
    user_id, headers = make_account("user")
    fake_db.tables["profiles"] = []
    assert client.get("/api/v1/users/me", headers=headers).status_code == 404


def test_update_only_sent_fields(client, fake_db, make_account):
    user_id, headers = make_account("user", full_name="Tunde Bello")
    response = client.put("/api/v1/users/me", json={"whatsapp": " +2348011111111 ", "phone": ""}, headers=headers)
    assert response.status_code == 200
    body = response.json()
    assert body["whatsapp"] == "+2348011111111"
    assert body["phone"] is None
    assert body["full_name"] == "Tunde Bello"
    assert body["updated_at"] is not None


def test_admin_lists_users_with_roles(client, make_account, admin_headers):
    vendor_id, _ = make_account("vendor")
    response = client.get("/api/v1/users", headers=admin_headers)
    assert response.status_code == 200
    roles = {u["id"]: u["role"] for u in response.json()}
    assert roles[vendor_id] == "vendor"
    assert sorted(roles.values()) == ["admin", "vendor"]


def test_user_list_requires_admin(client, make_account):
    _, headers = make_account("user")
    assert client.get("/api/v1/users", headers=headers).status_code == 403


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}
    assert response.headers["x-content-type-options"] == "nosniff"
