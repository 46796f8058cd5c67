"""Pytest fixtures for testing."""
import os
from collections.abc import AsyncGenerator, Awaitable, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from functools import partial
from uuid import uuid4

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

TEST_DATABASE_URL = "sqlite+aiosqlite://"

# Must be set before any app imports that trigger Settings validation.
# Tests run in dev mode regardless of local .env.
os.environ["DATABASE_URL"] = TEST_DATABASE_URL
os.environ["DEV_MODE"] = "true"
os.environ["SUPPORTED_CONTENT_TYPES"] = ""

from core.config import Settings, get_settings  # noqa: E402
from core.request_cache import RequestCache  # noqa: E402
from db.session import build_engine, get_async_session  # noqa: E402
from models import Base, ContentItem, ContentType, User, UserRole  # noqa: E402

TEST_NONCE_SECRET = "test-nonce-secret"


def make_settings(**overrides: str) -> Settings:
    """Build settings for tests, ignoring any local .env file."""
    values = {
        "database_url": TEST_DATABASE_URL,
        "DEV_MODE": "true",
        "NONCE_SECRET": TEST_NONCE_SECRET,
        "SUPPORTED_CONTENT_TYPES": "",
        "ADMIN_BASE_URL": "http://test/admin/",
        "SITE_URL": "http://test",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings() -> Settings:
    """Settings shared by the services and the app under test."""
    return make_settings()


@pytest.fixture
def settings_factory() -> Callable[..., Settings]:
    """Factory for settings with some values overridden."""
    return make_settings


@pytest.fixture
def cache() -> RequestCache:
    """A fresh request cache, as one request would get."""
    return RequestCache()


@pytest.fixture
async def async_engine() -> AsyncGenerator[AsyncEngine]:
    """Create an in-memory database with the full schema. Each test gets its own."""
    engine = build_engine(TEST_DATABASE_URL)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def db_session(async_engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Create an async session on the test database."""
    session_factory = async_sessionmaker(
        bind=async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with session_factory() as session:
        yield session


@pytest.fixture
def make_user(db_session: AsyncSession) -> Callable[..., Awaitable[User]]:
    """Factory creating users with a role and an optional stored bookmark set."""

    async def _make_user(
        role: UserRole = UserRole.ADMINISTRATOR,
        bookmarks: list[int] | None = None,
    ) -> User:
        user = User(
            auth0_id=f"test|{uuid4()}",
            email=f"{uuid4()}@test.com",
            role=role.value,
        )
        if bookmarks is not None:
            user.admin_bookmarks = {str(item_id): item_id for item_id in bookmarks}
        db_session.add(user)
        await db_session.flush()
        return user

    return _make_user


@pytest.fixture
async def admin_user(make_user: Callable[..., Awaitable[User]]) -> User:
    """An administrator, who may edit every item."""
    return await make_user(UserRole.ADMINISTRATOR)


@pytest.fixture
async def content_types(db_session: AsyncSession) -> dict[str, ContentType]:
    """Registered content types, including one without a label and one without UI."""
    types = {
        "post": ContentType(name="post", label="Posts"),
        "page": ContentType(name="page", label="Pages"),
        "catalog": ContentType(name="catalog", label=None),
        "attachment": ContentType(name="attachment", label="Media", show_ui=False),
    }
    db_session.add_all(types.values())
    await db_session.flush()
    return types


@pytest.fixture
def make_item(
    db_session: AsyncSession,
    content_types: dict[str, ContentType],  # noqa: ARG001
) -> Callable[..., Awaitable[ContentItem]]:
    """Factory creating content items of the registered types."""

    async def _make_item(
        content_type: str = "post",
        title: str = "",
        **kwargs: object,
    ) -> ContentItem:
        item = ContentItem(content_type=content_type, title=title, **kwargs)
        db_session.add(item)
        await db_session.flush()
        return item

    return _make_item


@asynccontextmanager
async def create_client(
    db_session: AsyncSession,
    settings: Settings,
    user: User,
) -> AsyncGenerator[AsyncClient]:
    """
    Create an AsyncClient acting as the given user.

    Overrides the session, settings and current-user dependencies and clears the
    overrides on exit.
    """
    from api.main import app
    from core.auth import get_current_user

    async def override_get_async_session() -> AsyncGenerator[AsyncSession]:
        yield db_session

    async def override_get_current_user() -> User:
        return user

    app.dependency_overrides[get_async_session] = override_get_async_session
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_current_user] = override_get_current_user

    try:
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def client_for(
    db_session: AsyncSession,
    settings: Settings,
) -> Callable[[User], AbstractAsyncContextManager[AsyncClient]]:
    """Factory for clients acting as a specific user: `async with client_for(user) as c`."""
    return partial(create_client, db_session, settings)


@pytest.fixture
async def client(
    db_session: AsyncSession,
    settings: Settings,
    admin_user: User,
) -> AsyncGenerator[AsyncClient]:
    """Create a test client acting as an administrator."""
    async with create_client(db_session, settings, admin_user) as test_client:
        yield test_client
