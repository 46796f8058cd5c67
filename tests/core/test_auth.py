"""Tests for user resolution in the authentication module."""
from collections.abc import Callable

import pytest
from fastapi import HTTPException
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from core.auth import DEV_AUTH0_ID, get_current_user, get_or_create_dev_user, get_or_create_user
from core.config import Settings
from models.user import User, UserRole


async def test__get_or_create_user__creates_subscriber(db_session: AsyncSession) -> None:
    """A first login creates a subscriber without bookmarks."""
    user = await get_or_create_user(db_session, "auth0|new", email="new@test.com")

    assert user.id is not None
    assert user.role == UserRole.SUBSCRIBER.value
    assert user.admin_bookmarks is None


async def test__get_or_create_user__returns_existing_and_updates_email(
    db_session: AsyncSession,
) -> None:
    """A known user is returned, with the email refreshed from the token."""
    first = await get_or_create_user(db_session, "auth0|known", email="old@test.com")
    second = await get_or_create_user(db_session, "auth0|known", email="new@test.com")

    assert second.id == first.id
    assert second.email == "new@test.com"
    count = await db_session.scalar(select(func.count()).select_from(User))
    assert count == 1


async def test__get_or_create_dev_user__is_administrator(db_session: AsyncSession) -> None:
    """The dev-mode user can edit everything."""
    user = await get_or_create_dev_user(db_session)

    assert user.auth0_id == DEV_AUTH0_ID
    assert user.role == UserRole.ADMINISTRATOR.value


async def test__get_current_user__dev_mode_bypasses_token(
    db_session: AsyncSession,
    settings: Settings,
) -> None:
    """In dev mode no credentials are needed."""
    user = await get_current_user(credentials=None, db=db_session, settings=settings)
    assert user.auth0_id == DEV_AUTH0_ID


async def test__get_current_user__requires_credentials_outside_dev_mode(
    db_session: AsyncSession,
    settings_factory: Callable[..., Settings],
) -> None:
    """Without dev mode a missing token is rejected with 401."""
    settings = settings_factory(DEV_MODE="false")

    with pytest.raises(HTTPException) as exc_info:
        await get_current_user(credentials=None, db=db_session, settings=settings)

    assert exc_info.value.status_code == 401
