"""
API tests for registration, login, profile and password change.
"""

from sqlalchemy import func, select

from app.adapters.outbound.persistence.database import get_db_context
from app.adapters.outbound.persistence.models import User
from tests.utils import API, bearer, create_user, login


async def count_users() -> int:
    async with get_db_context() as db:
        return (await db.execute(select(func.count()).select_from(User))).scalar_one()


class TestRegister:

    async def test_register_returns_token_and_public_user(self, client):
        response = await client.post(
            f"{API}/auth/register",
            json={"username": "alice", "email": "alice@x.com", "password": "secret1"},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "User registered successfully"
        assert body["token"]
        assert body["data"]["username"] == "alice"
        assert body["data"]["role"] == "user"
        assert "password" not in body["data"]

    async def test_role_in_body_is_ignored(self, client):
        response = await client.post(
            f"{API}/auth/register",
            json={"username": "mallory", "email": "m@x.com", "password": "secret1", "role": "admin"},
        )
        assert response.status_code == 201
        assert response.json()["data"]["role"] == "user"

    async def test_duplicate_email_is_rejected_without_creating_a_record(self, client):
        await create_user("alice", email="alice@x.com")

        response = await client.post(
            f"{API}/auth/register",
            json={"username": "alice2", "email": "alice@x.com", "password": "secret1"},
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Email already registered"
        assert await count_users() == 1

    async def test_duplicate_username_is_rejected_without_creating_a_record(self, client):
        await create_user("alice", email="alice@x.com")

        response = await client.post(
            f"{API}/auth/register",
            json={"username": "alice", "email": "other@x.com", "password": "secret1"},
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Username already taken"
        assert await count_users() == 1

    async def test_missing_fields(self, client):
        response = await client.post(f"{API}/auth/register", json={"username": "alice"})
        assert response.status_code == 400
        assert response.json()["message"] == "Please provide username, email and password"

    async def test_invalid_fields_report_first_violation(self, client):
        response = await client.post(
            f"{API}/auth/register",
            json={"username": "al", "email": "bad", "password": "1"},
        )
        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "message": "Username must be between 3 and 50 characters",
            "error": "VALIDATION_ERROR",
        }

    async def test_body_must_be_an_object(self, client):
        response = await client.post(f"{API}/auth/register", json=["alice"])
        assert response.status_code == 400

    async def test_body_must_be_json(self, client):
        response = await client.post(
            f"{API}/auth/register",
            content=b"username=alice",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400

    async def test_email_is_checked_beyond_its_shape(self, client):
        response = await client.post(
            f"{API}/auth/register",
            json={"username": "alice", "email": "alice..b@example.com", "password": "secret1"},
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid value for email"


class TestLogin:

    async def test_login_success(self, client):
        await create_user("alice")

        response = await client.post(f"{API}/auth/login", json={"username": "alice", "password": "secret1"})

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Login successful"
        assert body["token"]
        assert body["data"]["role"] == "user"

    async def test_wrong_password(self, client):
        await create_user("alice")
        response = await client.post(f"{API}/auth/login", json={"username": "alice", "password": "wrong1"})
        assert response.status_code == 401
        assert response.json()["message"] == "Invalid credentials"

    async def test_unknown_user(self, client):
        response = await client.post(f"{API}/auth/login", json={"username": "nobody", "password": "secret1"})
        assert response.status_code == 401
        assert response.json()["message"] == "Invalid credentials"

    async def test_deactivated_account_with_correct_password(self, client):
        await create_user("alice", is_active=False)
        response = await client.post(f"{API}/auth/login", json={"username": "alice", "password": "secret1"})
        assert response.status_code == 403
        assert response.json()["message"] == "Account is deactivated"

    async def test_deactivated_account_with_wrong_password(self, client):
        await create_user("alice", is_active=False)
        response = await client.post(f"{API}/auth/login", json={"username": "alice", "password": "wrong1"})
        assert response.status_code == 401

    async def test_missing_credentials(self, client):
        response = await client.post(f"{API}/auth/login", json={"username": "alice"})
        assert response.status_code == 400
        assert response.json()["message"] == "Please provide username and password"


class TestMe:

    async def test_me_returns_current_user(self, client):
        await create_user("alice")
        token = await login(client, "alice")

        response = await client.get(f"{API}/auth/me", headers=bearer(token))

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["username"] == "alice"
        assert data["isActive"] is True
        assert "createdAt" in data
        assert "password" not in data

    async def test_missing_token(self, client):
        response = await client.get(f"{API}/auth/me")
        assert response.status_code == 401
        assert response.json()["success"] is False

    async def test_invalid_token(self, client):
        response = await client.get(f"{API}/auth/me", headers=bearer("not-a-token"))
        assert response.status_code == 401
        assert response.json()["message"] == "Invalid token"

    async def test_token_of_deleted_user(self, client, admin_token):
        user = await create_user("alice")
        token = await login(client, "alice")

        await client.delete(f"{API}/users/{user.id}", headers=bearer(admin_token))
        response = await client.get(f"{API}/auth/me", headers=bearer(token))

        assert response.status_code == 401


class TestUpdatePassword:

    async def test_change_password(self, client):
        await create_user("alice")
        token = await login(client, "alice")

        response = await client.put(
            f"{API}/auth/updatepassword",
            json={"currentPassword": "secret1", "newPassword": "secret2"},
            headers=bearer(token),
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Password updated successfully"
        assert body["token"]

        old = await client.post(f"{API}/auth/login", json={"username": "alice", "password": "secret1"})
        assert old.status_code == 401
        assert await login(client, "alice", "secret2")

    async def test_new_token_is_usable(self, client):
        await create_user("alice")
        token = await login(client, "alice")
        response = await client.put(
            f"{API}/auth/updatepassword",
            json={"currentPassword": "secret1", "newPassword": "secret2"},
            headers=bearer(token),
        )

        me = await client.get(f"{API}/auth/me", headers=bearer(response.json()["token"]))
        assert me.status_code == 200

    async def test_wrong_current_password(self, client):
        await create_user("alice")
        token = await login(client, "alice")

        response = await client.put(
            f"{API}/auth/updatepassword",
            json={"currentPassword": "nope12", "newPassword": "secret2"},
            headers=bearer(token),
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Current password is incorrect"

    async def test_short_new_password(self, client):
        await create_user("alice")
        token = await login(client, "alice")

        response = await client.put(
            f"{API}/auth/updatepassword",
            json={"currentPassword": "secret1", "newPassword": "123"},
            headers=bearer(token),
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Password must be at least 6 characters long"

    async def test_missing_fields(self, client):
        await create_user("alice")
        token = await login(client, "alice")

        response = await client.put(
            f"{API}/auth/updatepassword",
            json={"currentPassword": "secret1"},
            headers=bearer(token),
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Current password and new password are required"

    async def test_requires_authentication(self, client):
        response = await client.put(
            f"{API}/auth/updatepassword",
            json={"currentPassword": "secret1", "newPassword": "secret2"},
        )
        assert response.status_code == 401
