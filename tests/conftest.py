"""
Shared test fixtures.

Service tests run against ``InMemoryRideStore``.  API and SQL store tests
use an in-memory SQLite database (via aiosqlite) built from the real ORM
metadata, so they run without Docker / PostgreSQL / Redis.  Redis is an
``AsyncMock``.
"""

from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from campusride.config import settings
from campusride.infrastructure import models  # noqa: F401  (registers tables)
from campusride.infrastructure.database import Base
from campusride.infrastructure.memory_store import InMemoryRideStore

TEST_DB_URL = "sqlite+aiosqlite:///:memory:"

CREATOR = 1
PASSENGER = 2
OTHER = 3


def ride_attributes(**overrides) -> dict:
    attrs = {
        "source": "IIT Indore",
        "destination": "Airport",
        "departure_time": datetime.now(timezone.utc) + timedelta(days=1),
        "available_seats": 3,
        "cost_per_seat": 100,
    }
    attrs.update(overrides)
    return attrs


# ── In-memory store ───────────────────────────────────────────────────


@pytest.fixture
def store() -> InMemoryRideStore:
    return InMemoryRideStore()


# ── SQLite ────────────────────────────────────────────────────────────


@pytest_asyncio.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker, None]:
    """Fresh in-memory database per test."""
    engine = create_async_engine(TEST_DB_URL, echo=False, poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


# ── API ───────────────────────────────────────────────────────────────


@pytest.fixture
def redis_mock() -> AsyncMock:
    redis = AsyncMock()
    redis.set = AsyncMock(return_value=True)
    redis.eval = AsyncMock(return_value=1)
    return redis


@pytest.fixture(autouse=True)
def fast_hashing(monkeypatch):
    monkeypatch.setattr(settings, "bcrypt_rounds", 4)


@pytest_asyncio.fixture
async def client(session_factory, redis_mock) -> AsyncGenerator[AsyncClient, None]:
    """AsyncClient backed by SQLite and a mocked Redis."""
    from campusride.api.app import create_app
    from campusride.api.dependencies import get_db
    from campusride.api.middleware import limiter
    from campusride.infrastructure.redis_client import get_redis

    async def _test_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def _test_redis():
        return redis_mock

    limiter.reset()
    app = create_app()
    app.dependency_overrides[get_db] = _test_db
    app.dependency_overrides[get_redis] = _test_redis

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def login(client):
    """Register a user and return ``(user_id, auth headers)``."""

    async def _login(username: str, password: str = "secret123"):
        resp = await client.post(
            "/api/v1/auth/register",
            json={
                "username": username,
                "password": password,
                "full_name": username.title(),
            },
        )
        assert resp.status_code == 201, resp.text
        resp = await client.post(
            "/api/v1/auth/login",
            json={"username": username, "password": password},
        )
        assert resp.status_code == 200, resp.text
        body = resp.json()
        return body["user"]["id"], {
            "Authorization": f"Bearer {body['access_token']}"
        }

    return _login
