"""
Shared pytest fixtures.

The environment is configured before any ``app`` import: settings are read
once at import time, and the engine binds to DATABASE_URL when the
persistence package is first imported.
"""

import os
import tempfile

# Override settings for testing BEFORE any app imports
_TEST_DIR = tempfile.mkdtemp(prefix="rbac_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_TEST_DIR, 'test.db')}"
os.environ["SECRET_KEY"] = "test-secret-key-not-for-production"
os.environ["ENVIRONMENT"] = "testing"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["STORE_BACKEND"] = "memory"
os.environ["RATE_LIMIT_SWEEP_PROBABILITY"] = "0"
os.environ["TRUST_FORWARDED_FOR"] = "false"
for _name in ("ADMIN_USERNAME", "ADMIN_EMAIL", "ADMIN_PASSWORD", "REDIS_URL"):
    os.environ.pop(_name, None)

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from app.adapters.outbound.cache.store import InMemoryStore
from app.adapters.outbound.persistence.database import engine
from app.adapters.outbound.persistence.models import Base
from app.main import create_app


@pytest_asyncio.fixture
async def database():
    """Fresh schema for every test."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def app(database, store):
    return create_app(store=store)


@pytest_asyncio.fixture
async def client(app):
    """
    HTTPX AsyncClient talking to the app through ASGITransport.

    Lifespan does not run here; the ``database`` fixture creates the tables
    and the store is injected directly.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as test_client:
        yield test_client


@pytest_asyncio.fixture
async def admin_token(client):
    from tests.utils import create_user, login

    await create_user("admin", role="admin", password="adminpass")
    return await login(client, "admin", "adminpass")
