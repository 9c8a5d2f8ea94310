"""
Tests for registration, sign-in and session context
"""


def _register(client, **overrides):
    payload = {
        "email": "ada@example.com",
        "password": "secret123",
        "full_name": "Ada Obi",
    }
    payload.update(overrides)
    return client.post("/api/v1/auth/register", json=payload)


def test_register_user_records_role(client, fake_db):
    response = _register(client)
    assert response.status_code == 201
    body = response.json()
    assert body["role"] == "user"
    assert "confirm" in body["message"]
    assert fake_db.rows("user_roles", user_id=body["user_id"])[0]["role"] == "user"
    assert fake_db.auth.users["ada@example.com"]["user_metadata"] == {"full_name": "Ada Obi"}


def test_register_vendor_account(client, fake_db):
    response = _register(client, role="vendor")
    assert response.status_code == 201
    assert fake_db.rows("user_roles", user_id=response.json()["user_id"])[0]["role"] == "vendor"


def test_register_cannot_request_admin(client):
    response = _register(client, role="admin")
    assert response.status_code == 422


def test_register_requires_full_name(client):
    response = _register(client, full_name="   ")
    assert response.status_code == 422


def test_register_short_password(client):
    response = _register(client, password="12345")
    assert response.status_code == 422


def test_register_duplicate_email(client):
    assert _register(client).status_code == 201
    response = _register(client)
    assert response.status_code == 400
    assert response.json()["detail"] == "User already exists"


def test_register_survives_role_write_failure(client, fake_db):
    fake_db.fail_on("user_roles", "insert")
    response = _register(client)
    assert response.status_code == 201
    assert fake_db.rows("user_roles") == []


def test_login_returns_role(client, fake_db):
    fake_db.add_user("bola@example.com", password="pass1234", role="vendor")
    response = client.post("/api/v1/auth/login", json={"email": "bola@example.com", "password": "pass1234"})
    assert response.status_code == 200
    body = response.json()
    assert body["role"] == "vendor"
    assert body["token_type"] == "bearer"
    assert body["access_token"]
    assert body["refresh_token"]


def test_login_wrong_password(client, fake_db):
    fake_db.add_user("bola@example.com", password="pass1234")
    response = client.post("/api/v1/auth/login", json={"email": "bola@example.com", "password": "wrong"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid email or password"


def test_refresh_rotates_session(client, fake_db):
    fake_db.add_user("bola@example.com", password="pass1234")
    login = client.post("/api/v1/auth/login", json={"email": "bola@example.com", "password": "pass1234"}).json()

    response = client.post("/api/v1/auth/refresh", json={"refresh_token": login["refresh_token"]})
    assert response.status_code == 200
    assert response.json()["access_token"] != login["access_token"]

    reused = client.post("/api/v1/auth/refresh", json={"refresh_token": login["refresh_token"]})
    assert reused.status_code == 401


def test_me_returns_session_context(client, make_account):
    _, headers = make_account("admin", full_name="Chidi Admin")
    response = client.get("/api/v1/auth/me", headers=headers)
    assert response.status_code == 200
    body = response.json()
    assert body["full_name"] == "Chidi Admin"
    assert body["role"] == "admin"
    assert body["is_admin"] is True
    assert "vendors:moderate" in body["permissions"]


def test_me_defaults_to_user_without_role_row(client, fake_db):
    _, token = fake_db.add_user("norole@example.com")
    response = client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200
    assert response.json()["role"] == "user"


def test_me_requires_authentication(client):
    response = client.get("/api/v1/auth/me")
    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"


def test_logout(client, fake_db, make_account):
    _, headers = make_account("user")
    response = client.post("/api/v1/auth/logout", headers=headers)
    assert response.status_code == 200
    assert fake_db.auth.signed_out == 1
