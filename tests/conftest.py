"""
Test configuration and shared fixtures.
Every test gets a fresh in-memory SQLite database.
"""
from __future__ import annotations

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

from collections.abc import AsyncGenerator  # noqa: E402

import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

import app.models  # noqa: E402,F401
from app.core.security import SessionInfo, create_session_token  # noqa: E402
from app.crud.repository import Repository  # noqa: E402
from app.db.base import Base  # noqa: E402
from app.db.session import get_db  # noqa: E402
from app.main import app  # noqa: E402
from app.models.task import Task  # noqa: E402
from app.models.user import User  # noqa: E402

# ── Test database ─────────────────────────────────────────────────────────────
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """A private in-memory database with all tables created."""
    test_engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest_asyncio.fixture
async def db(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Provide a test database session that rolls back after each test."""
    session_factory = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
    async with session_factory() as session:
        try:
            yield session
            await session.rollback()
        finally:
            await session.close()


@pytest_asyncio.fixture
async def client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Provide an async HTTP test client with the test DB injected."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


# ── Helper fixtures ───────────────────────────────────────────────────────────

@pytest_asyncio.fixture
async def task_repo(db: AsyncSession) -> Repository[Task]:
    return Repository(Task, db)


@pytest_asyncio.fixture
async def user_repo(db: AsyncSession) -> Repository[User]:
    return Repository(User, db)


@pytest_asyncio.fixture
async def signed_in_user(user_repo: Repository[User]) -> User:
    """A stored user to act as the session owner."""
    return await user_repo.create(
        {"name": "Test User", "email": "testuser@example.com", "email_verified": True}
    )


@pytest_asyncio.fixture
async def session_headers(signed_in_user: User) -> dict[str, str]:
    """Return Authorization headers carrying a session for the signed-in user."""
    token = create_session_token(
        SessionInfo(
            user_id=signed_in_user.id,
            email=signed_in_user.email,
            name=signed_in_user.name,
            email_verified=signed_in_user.email_verified,
        )
    )
    return {"Authorization": f"Bearer {token}"}
