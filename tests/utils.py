"""Helpers shared by the API tests."""

from typing import Dict, Optional

from app.adapters.configuration.config import settings
from app.adapters.outbound.persistence.database import get_db_context
from app.adapters.outbound.persistence.repositories.user_repository import user_repository

API = settings.API_PREFIX


async def create_user(
        username: str,
        password: str = "secret1",
        role: str = "user",
        email: Optional[str] = None,
        is_active: bool = True,
):
    """Insert a user directly, bypassing the registration endpoint and its rate limit."""
    async with get_db_context() as db:
        return await user_repository.create_with_password(
            db,
            username=username,
            email=email or f"{username}@example.com",
            password=password,
            role=role,
            is_active=is_active,
        )


async def login(client, username: str, password: str = "secret1") -> str:
    response = await client.post(f"{API}/auth/login", json={"username": username, "password": password})
    assert response.status_code == 200, response.text
    return response.json()["token"]


def bearer(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


async def create_product(client, token: str, **fields):
    payload = {"name": "Widget", "price": 9.99, "stock": 5}
    payload.update(fields)
    response = await client.post(f"{API}/products", json=payload, headers=bearer(token))
    assert response.status_code == 201, response.text
    return response.json()["data"]
