# tests/routes/conftest.py
"""Pytest fixtures for route tests."""

from collections.abc import AsyncGenerator, Generator
from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
from httpx import ASGITransport, AsyncClient

from blog_api.dependencies import get_blog_repository, get_user_repository
from blog_api.main import app
from blog_api.managers.rate_limiter import limiter
from blog_api.managers.token_manager import create_access_token
from blog_api.models import BlogDB, UserDB


@pytest.fixture
def sample_user() -> UserDB:
    """Create a sample user for testing."""
    return UserDB(
        uuid=uuid4(),
        first_name="Test",
        last_name="User",
        email="test@example.com",
        password_hash="$argon2id$v=19$m=65536,t=3,p=4$somehash",
        created_at=datetime(2025, 1, 1, tzinfo=UTC),
    )


@pytest.fixture
def other_user() -> UserDB:
    """Create a second user who owns nothing the sample user wrote."""
    return UserDB(
        uuid=uuid4(),
        first_name="Other",
        last_name="Person",
        email="other@example.com",
        password_hash="$argon2id$v=19$m=65536,t=3,p=4$somehash",
        created_at=datetime(2025, 1, 1, tzinfo=UTC),
    )


@pytest.fixture
def sample_blog(sample_user: UserDB) -> BlogDB:
    """Create a published blog written by the sample user."""
    return BlogDB(
        id=uuid4(),
        author_id=sample_user.uuid,
        title="A Week in Lisbon",
        description="Trams and tiles",
        tags=["travel", "portugal"],
        body="Lisbon is a city of hills",
        state="published",
        read_count=3,
        reading_time=1,
        created_at=datetime(2025, 1, 2, tzinfo=UTC),
    )


@pytest.fixture
def sample_access_token(sample_user: UserDB) -> str:
    """Create a sample access token for testing."""
    return create_access_token(user_id=sample_user.uuid, expires_delta=timedelta(minutes=30))


@pytest.fixture
def auth_headers(sample_access_token: str) -> dict[str, str]:
    """Create auth headers with a valid access token."""
    return {"Authorization": f"Bearer {sample_access_token}"}


@pytest.fixture
def other_auth_headers(other_user: UserDB) -> dict[str, str]:
    token = create_access_token(user_id=other_user.uuid)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def mock_blog_repo(sample_blog: BlogDB, sample_user: UserDB) -> MagicMock:
    """Create a mock blog repository."""
    mock = MagicMock()
    mock.list = AsyncMock(return_value=([(sample_blog, sample_user)], 1))
    mock.read_published = AsyncMock(return_value=(sample_blog, sample_user))
    mock.get_by_id = AsyncMock(return_value=sample_blog)
    mock.create = AsyncMock(return_value=sample_blog)
    mock.update = AsyncMock(return_value=sample_blog)
    mock.set_state = AsyncMock(return_value=sample_blog)
    mock.delete = AsyncMock(return_value=True)
    return mock


@pytest.fixture
def mock_user_repo(sample_user: UserDB) -> MagicMock:
    """Create a mock user repository."""
    mock = MagicMock()
    mock.get_by_id = AsyncMock(return_value=sample_user)
    mock.get_by_email = AsyncMock(return_value=sample_user)
    mock.create = AsyncMock(return_value=sample_user)
    return mock


@pytest.fixture
def override_repos(
    mock_blog_repo: MagicMock,
    mock_user_repo: MagicMock,
) -> Generator[None]:
    app.dependency_overrides[get_blog_repository] = lambda: mock_blog_repo
    app.dependency_overrides[get_user_repository] = lambda: mock_user_repo
    yield
    app.dependency_overrides = {}


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for testing."""
    previous = limiter.enabled
    limiter.enabled = False
    async with AsyncClient(
        base_url="http://test",
        transport=ASGITransport(app=app),
    ) as ac:
        yield ac
    limiter.enabled = previous
