# tests/conftest.py
"""Root pytest configuration and shared fixtures."""

import os

# Settings are read at import time, so this must happen before blog_api is imported
os.environ["ENVIRONMENT"] = "testing"
os.environ["LOG_TO_FILE"] = "false"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["JWT_SECRET"] = "test-secret-key-for-pytest-only"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["DEFAULT_BLOG_STATE"] = "draft"
os.environ["PUBLIC_STATE_FILTER"] = "true"

from collections.abc import AsyncGenerator, Awaitable, Callable  # noqa: E402
from uuid import uuid4  # noqa: E402

import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel import SQLModel  # noqa: E402
from sqlmodel.ext.asyncio.session import AsyncSession  # noqa: E402

from blog_api.models import BlogDB, UserDB  # noqa: E402, F401

type UserFactory = Callable[..., Awaitable[UserDB]]


@pytest.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine]:
    """In-memory SQLite engine shared by every session of one test."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest.fixture
async def db_session(
    session_maker: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession]:
    async with session_maker() as session:
        yield session


@pytest.fixture
def user_factory(db_session: AsyncSession) -> UserFactory:
    """Insert users directly, skipping password hashing."""

    async def create(
        first_name: str = "Ada",
        last_name: str = "Lovelace",
        email: str | None = None,
    ) -> UserDB:
        user = UserDB(
            first_name=first_name,
            last_name=last_name,
            email=email or f"{uuid4().hex[:8]}@example.com",
            password_hash="$argon2id$v=19$m=65536,t=3,p=4$notarealhash",
        )
        db_session.add(user)
        await db_session.flush()
        return user

    return create
