"""Shared fixtures: an in-memory SQLite database behind the FastAPI app."""

import os

# Settings are read at import time; configure them before the app is imported
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET", "test-secret-0123456789abcdefghijklmnopqrstuvwxyz")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from directory_api.database import get_db
from directory_api.main import create_app
from directory_api.models.orm import Base

API = "/api"


@pytest.fixture
async def session_maker() -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Session factory bound to a fresh in-memory database."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest.fixture
async def db_session(session_maker) -> AsyncGenerator[AsyncSession, None]:
    """A session for tests that talk to services directly."""
    async with session_maker() as session:
        yield session


@pytest.fixture
async def client(session_maker) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client for the app, with get_db pointed at the test database."""
    app = create_app()

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except SQLAlchemyError:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
async def auth_headers(client: AsyncClient) -> dict[str, str]:
    """Register an account and return a bearer header for it.

    Cookies set by registration are dropped so that requests without the
    header are anonymous.
    """
    response = await client.post(
        f"{API}/auth/register",
        json={"name": "Dana Admin", "email": "dana@acme.com", "password": "correct-horse"},
    )
    assert response.status_code == 201
    client.cookies.clear()
    return {"Authorization": f"Bearer {response.json()['token']}"}


def employee_payload(**overrides) -> dict:
    """A valid create body; keyword arguments replace fields."""
    payload = {
        "name": "Alice Smith",
        "age": 30,
        "email": "alice@acme.com",
        "position": "Engineer",
        "department": "Engineering",
        "hireDate": "2020-01-01",
    }
    payload.update(overrides)
    return payload
