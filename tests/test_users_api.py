"""
API tests for admin-only user management.
"""

from uuid import uuid4

from app.adapters.configuration.config import settings
from tests.utils import API, bearer, create_product, create_user, login


class TestUserAccessControl:

    async def test_regular_user_is_forbidden(self, client):
        await create_user("alice")
        token = await login(client, "alice")

        response = await client.get(f"{API}/users", headers=bearer(token))

        assert response.status_code == 403
        assert response.json()["error"] == "PERMISSION_DENIED"

    async def test_anonymous_is_unauthorized(self, client):
        response = await client.get(f"{API}/users")
        assert response.status_code == 401


class TestUserAdministration:

    async def test_list_users_newest_first(self, client, admin_token):
        await create_user("alice")
        await create_user("bob")

        response = await client.get(f"{API}/users", headers=bearer(admin_token))

        assert response.status_code == 200
        users = response.json()["data"]
        assert [u["username"] for u in users] == ["bob", "alice", "admin"]
        assert all("password" not in u for u in users)

    async def test_get_user(self, client, admin_token):
        user = await create_user("alice")

        response = await client.get(f"{API}/users/{user.id}", headers=bearer(admin_token))

        assert response.status_code == 200
        assert response.json()["data"]["email"] == "alice@example.com"

    async def test_get_missing_user(self, client, admin_token):
        response = await client.get(f"{API}/users/{uuid4()}", headers=bearer(admin_token))
        assert response.status_code == 404
        assert response.json()["message"] == "User not found"

    async def test_update_role_and_status(self, client, admin_token):
        user = await create_user("alice")

        response = await client.put(
            f"{API}/users/{user.id}",
            json={"role": "admin", "isActive": False},
            headers=bearer(admin_token),
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["role"] == "admin"
        assert data["isActive"] is False

    async def test_update_rejects_unknown_role(self, client, admin_token):
        user = await create_user("alice")
        response = await client.put(
            f"{API}/users/{user.id}", json={"role": "superuser"}, headers=bearer(admin_token)
        )
        assert response.status_code == 400

    async def test_update_rejects_taken_username(self, client, admin_token):
        await create_user("alice")
        bob = await create_user("bob")

        response = await client.put(
            f"{API}/users/{bob.id}", json={"username": "alice"}, headers=bearer(admin_token)
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Username already taken"

    async def test_update_rejects_taken_email(self, client, admin_token):
        await create_user("alice")
        bob = await create_user("bob")

        response = await client.put(
            f"{API}/users/{bob.id}", json={"email": "alice@example.com"}, headers=bearer(admin_token)
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Email already registered"

    async def test_update_keeps_own_username(self, client, admin_token):
        bob = await create_user("bob")

        response = await client.put(
            f"{API}/users/{bob.id}", json={"username": "bob", "email": "new@example.com"},
            headers=bearer(admin_token),
        )

        assert response.status_code == 200
        assert response.json()["data"]["email"] == "new@example.com"

    async def test_admin_cannot_delete_self(self, client, admin_token):
        me = await client.get(f"{API}/auth/me", headers=bearer(admin_token))
        admin_id = me.json()["data"]["id"]

        response = await client.delete(f"{API}/users/{admin_id}", headers=bearer(admin_token))

        assert response.status_code == 400
        assert response.json()["message"] == "Cannot delete your own account"

    async def test_delete_user_removes_their_products(self, client, admin_token):
        user = await create_user("alice")
        token = await login(client, "alice")
        product = await create_product(client, token)

        response = await client.delete(f"{API}/users/{user.id}", headers=bearer(admin_token))

        assert response.status_code == 200
        assert response.json()["message"] == "User deleted successfully"
        assert (await client.get(f"{API}/users/{user.id}", headers=bearer(admin_token))).status_code == 404
        missing = await client.get(f"{API}/products/{product['id']}", headers=bearer(admin_token))
        assert missing.status_code == 404

    async def test_delete_missing_user(self, client, admin_token):
        response = await client.delete(f"{API}/users/{uuid4()}", headers=bearer(admin_token))
        assert response.status_code == 404


class TestRoleFreshness:

    async def test_deactivation_revokes_existing_tokens(self, client, admin_token):
        user = await create_user("alice")
        token = await login(client, "alice")

        await client.put(f"{API}/users/{user.id}", json={"isActive": False}, headers=bearer(admin_token))
        response = await client.get(f"{API}/auth/me", headers=bearer(token))

        assert response.status_code == 401

    async def test_token_role_is_used_by_default(self, client, admin_token):
        user = await create_user("alice")
        token = await login(client, "alice")

        await client.put(f"{API}/users/{user.id}", json={"role": "admin"}, headers=bearer(admin_token))

        assert (await client.get(f"{API}/users", headers=bearer(token))).status_code == 403
        fresh_token = await login(client, "alice")
        assert (await client.get(f"{API}/users", headers=bearer(fresh_token))).status_code == 200

    async def test_stored_role_when_configured(self, client, admin_token, monkeypatch):
        monkeypatch.setattr(settings, "AUTHORIZE_WITH_TOKEN_ROLE", False)
        user = await create_user("alice")
        token = await login(client, "alice")

        await client.put(f"{API}/users/{user.id}", json={"role": "admin"}, headers=bearer(admin_token))

        assert (await client.get(f"{API}/users", headers=bearer(token))).status_code == 200
