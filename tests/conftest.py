"""
Pytest fixtures - test DB, client, users, auth.
Challenge: Isolated tests; in-memory SQLite instead of PostgreSQL.
"""

import os

# Must be set before app settings are first read
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from jose import jwt
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.db.base import Base
from app.main import app
from app.db.session import get_db
from app.db.models import User, File
from app.config import get_settings
from app.core.security import hash_password
from app.db import session as db_session

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
TEST_PASSWORD = "password123"


def bearer(user_id: int) -> dict:
    """Authorization header with a token like the auth service issues."""
    settings = get_settings()
    claims = {"sub": str(user_id), "exp": datetime.now(timezone.utc) + timedelta(minutes=5)}
    token = jwt.encode(claims, settings.secret_key, algorithm=settings.jwt_algorithm)
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def engine():
    # StaticPool: every connection sees the same in-memory database
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def session(engine) -> AsyncGenerator[AsyncSession, None]:
    async_session = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )
    async with async_session() as s:
        yield s


@pytest_asyncio.fixture
async def client(session: AsyncSession):
    async def override_get_db():
        yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
    app.dependency_overrides.clear()


async def _make_user(session: AsyncSession, name: str, email: str, phone: str) -> User:
    user = User(
        name=name,
        email=email,
        phone=phone,
        password_hash=hash_password(TEST_PASSWORD),
    )
    session.add(user)
    await session.flush()
    await session.refresh(user)
    return user


@pytest_asyncio.fixture
async def test_user(session: AsyncSession) -> User:
    return await _make_user(session, "Test User", "test@example.com", "11987654321")


@pytest_asyncio.fixture
async def other_user(session: AsyncSession) -> User:
    return await _make_user(session, "Other User", "other@example.com", "11912345678")


@pytest_asyncio.fixture
async def avatar_file(session: AsyncSession) -> File:
    file = File(name="me.png", path="a1b2c3.png")
    session.add(file)
    await session.flush()
    await session.refresh(file)
    return file


@pytest.fixture
def auth_headers(test_user: User) -> dict:
    return bearer(test_user.id)


@pytest_asyncio.fixture
async def committing_client(engine, monkeypatch):
    """Client that goes through the real get_db (commit on success, rollback on error)."""
    monkeypatch.setattr(
        db_session,
        "async_session_maker",
        async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False),
    )
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
def make_bearer():
    return bearer
