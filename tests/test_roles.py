"""
Tests for role resolution, permission gating and role assignment
"""
import pytest
from fastapi import HTTPException

from rateam.config.roles_config import get_all_permissions, get_role_permissions, ROLE_PERMISSIONS
from rateam.core.dependencies import get_current_user
from rateam.main import app
from rateam.modules.auth.schemas import CurrentUser
from rateam.modules.roles.schemas import Role
from rateam.modules.roles.service import RoleService, highest_role


class TestRoleResolution:
    def test_no_user_resolves_to_none(self, fake_db):
        assert RoleService(fake_db).get_user_role(None) is None

    def test_missing_row_defaults_to_user(self, fake_db):
        assert RoleService(fake_db).get_user_role("someone") is Role.USER

    def test_stored_role_is_returned(self, fake_db):
        fake_db.seed("user_roles", user_id="u1", role="vendor")
        assert RoleService(fake_db).get_user_role("u1") is Role.VENDOR

    def test_most_privileged_row_wins(self, fake_db):
        fake_db.seed("user_roles", user_id="u1", role="vendor")
        fake_db.seed("user_roles", user_id="u1", role="admin")
        fake_db.seed("user_roles", user_id="u1", role="user")
        assert RoleService(fake_db).get_user_role("u1") is Role.ADMIN

    def test_lookup_failure_defaults_to_user(self, fake_db):
        fake_db.seed("user_roles", user_id="u1", role="admin")
        fake_db.fail_on("user_roles", "select")
        assert RoleService(fake_db).get_user_role("u1") is Role.USER

    def test_unknown_values_are_ignored(self):
        assert highest_role(["moderator", None]) is Role.USER
        assert highest_role(["moderator", "super_admin"]) is Role.SUPER_ADMIN

    def test_roles_for_many_users(self, fake_db):
        fake_db.seed("user_roles", user_id="a", role="vendor")
        fake_db.seed("user_roles", user_id="b", role="super_admin")
        roles = RoleService(fake_db).get_roles_for_users(["a", "b", "c"])
        assert roles == {"a": Role.VENDOR, "b": Role.SUPER_ADMIN, "c": Role.USER}

    def test_set_user_role_leaves_single_row(self, fake_db):
        fake_db.seed("user_roles", user_id="u1", role="user")
        fake_db.seed("user_roles", user_id="u1", role="vendor")
        RoleService(fake_db).set_user_role("u1", Role.ADMIN)
        rows = fake_db.rows("user_roles", user_id="u1")
        assert [r["role"] for r in rows] == ["admin"]


class TestRoleFlags:
    @pytest.mark.parametrize("role,is_admin,is_vendor", [
        (Role.USER, False, False),
        (Role.VENDOR, False, True),
        (Role.ADMIN, True, False),
        (Role.SUPER_ADMIN, True, False),
    ])
    def test_derived_flags(self, role, is_admin, is_vendor):
        assert role.is_admin is is_admin
        assert role.is_vendor is is_vendor

    def test_permissions_are_declared(self):
        declared = set(get_all_permissions())
        for permissions in ROLE_PERMISSIONS.values():
            assert set(permissions) <= declared

    def test_only_super_admin_assigns_admins(self):
        assert "roles:assign_admin" in get_role_permissions(Role.SUPER_ADMIN)
        assert "roles:assign_admin" not in get_role_permissions(Role.ADMIN)
        assert "reviews:reply" in get_role_permissions(Role.VENDOR)
        assert "reviews:reply" not in get_role_permissions(Role.USER)


class TestRoleRoutes:
    def test_my_role(self, client, make_account):
        _, headers = make_account("vendor")
        response = client.get("/api/v1/roles/me", headers=headers)
        assert response.status_code == 200
        body = response.json()
        assert body["role"] == "vendor"
        assert body["is_vendor"] is True
        assert body["is_admin"] is False

    def test_unauthenticated_is_401(self, client):
        response = client.get("/api/v1/roles/me")
        assert response.status_code == 401

    def test_invalid_token_is_401(self, client):
        response = client.get("/api/v1/roles/me", headers={"Authorization": "Bearer nope"})
        assert response.status_code == 401

    def test_plain_user_cannot_assign_roles(self, client, make_account):
        target_id, _ = make_account("user")
        _, headers = make_account("user")
        response = client.put(f"/api/v1/roles/users/{target_id}", json={"role": "vendor"}, headers=headers)
        assert response.status_code == 403

    def test_admin_assigns_vendor_role(self, client, fake_db, make_account, admin_headers):
        target_id, _ = make_account("user")
        response = client.put(f"/api/v1/roles/users/{target_id}", json={"role": "vendor"}, headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["role"] == "vendor"
        assert [r["role"] for r in fake_db.rows("user_roles", user_id=target_id)] == ["vendor"]

    def test_admin_cannot_grant_admin(self, client, make_account, admin_headers):
        target_id, _ = make_account("user")
        response = client.put(f"/api/v1/roles/users/{target_id}", json={"role": "admin"}, headers=admin_headers)
        assert response.status_code == 403

    def test_admin_cannot_demote_admin(self, client, make_account, admin_headers):
        target_id, _ = make_account("admin")
        response = client.put(f"/api/v1/roles/users/{target_id}", json={"role": "user"}, headers=admin_headers)
        assert response.status_code == 403

    def test_super_admin_grants_admin(self, client, make_account):
        target_id, _ = make_account("user")
        _, headers = make_account("super_admin")
        response = client.put(f"/api/v1/roles/users/{target_id}", json={"role": "admin"}, headers=headers)
        assert response.status_code == 200
        assert response.json()["is_admin"] is True

    def test_unknown_role_is_rejected(self, client, make_account, admin_headers):
        target_id, _ = make_account("user")
        response = client.put(f"/api/v1/roles/users/{target_id}", json={"role": "moderator"}, headers=admin_headers)
        assert response.status_code == 422


class TestRoleWriteFailures:
    def test_failed_write_keeps_previous_role(self, fake_db):
        fake_db.seed("user_roles", user_id="u1", role="vendor")
        fake_db.fail_on("user_roles", "insert")

        with pytest.raises(HTTPException) as exc:
            RoleService(fake_db).set_user_role("u1", Role.ADMIN)

        assert exc.value.status_code == 500
        assert [r["role"] for r in fake_db.rows("user_roles", user_id="u1")] == ["vendor"]

    def test_failed_route_write_keeps_previous_role(self, client, fake_db, make_account):
        target_id, _ = make_account("vendor")
        _, headers = make_account("super_admin")
        fake_db.fail_on("user_roles", "insert")

        response = client.put(f"/api/v1/roles/users/{target_id}", json={"role": "admin"}, headers=headers)

        assert response.status_code == 500
        assert [r["role"] for r in fake_db.rows("user_roles", user_id=target_id)] == ["vendor"]

    def test_reassigning_same_role_leaves_single_row(self, fake_db):
        fake_db.seed("user_roles", user_id="u1", role="vendor")
        RoleService(fake_db).set_user_role("u1", Role.VENDOR)
        assert [r["role"] for r in fake_db.rows("user_roles", user_id="u1")] == ["vendor"]

    def test_strict_lookup_raises(self, fake_db):
        fake_db.fail_on("user_roles", "select")
        with pytest.raises(HTTPException) as exc:
            RoleService(fake_db).get_user_role("u1", strict=True)
        assert exc.value.status_code == 500

    def test_target_lookup_failure_blocks_assignment(self, client, fake_db, make_account):
        admin_id, _ = make_account("admin")
        target_id, headers = make_account("admin")
        app.dependency_overrides[get_current_user] = lambda: CurrentUser(id=admin_id, role=Role.ADMIN)
        fake_db.fail_on("user_roles", "select")

        response = client.put(f"/api/v1/roles/users/{target_id}", json={"role": "user"}, headers=headers)

        assert response.status_code == 500
        assert [r["role"] for r in fake_db.rows("user_roles", user_id=target_id)] == ["admin"]
