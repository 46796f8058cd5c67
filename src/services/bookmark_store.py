"""
Per-user bookmark set persistence.

The set lives on the user row as a JSON object keyed by str(item_id). Mutations
are read-modify-write on that object; the user row is locked for the duration so
concurrent toggles from the same user are serialized instead of racing.

Note: Functions here flush but never commit. The session generator commits at
request end.
"""
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.attributes import flag_modified

from models.user import User
from services.exceptions import UserNotFoundError

logger = logging.getLogger(__name__)


def _key(item_id: int) -> str:
    return str(int(item_id))


async def _load_user(db: AsyncSession, user_id: int, for_update: bool = False) -> User:
    """Load a user, optionally locking the row. Raises UserNotFoundError."""
    query = select(User).where(User.id == user_id)
    if for_update:
        # Ignored by SQLite, a row lock on PostgreSQL
        query = query.with_for_update()
    result = await db.execute(query)
    user = result.scalar_one_or_none()
    if user is None:
        raise UserNotFoundError(user_id)
    return user


def bookmarks_of(user: User) -> dict[str, int]:
    """Return a copy of the user's bookmark set. A missing or malformed set is empty."""
    stored = user.admin_bookmarks
    if not isinstance(stored, dict):
        return {}
    return dict(stored)


def bookmarked_ids(user: User) -> list[int]:
    """Return the user's bookmarked item ids in insertion order."""
    return [int(item_id) for item_id in bookmarks_of(user).values()]


def _store(user: User, bookmarks: dict[str, int]) -> None:
    user.admin_bookmarks = bookmarks
    flag_modified(user, "admin_bookmarks")


async def get_bookmarks(db: AsyncSession, user_id: int) -> dict[str, int]:
    """Get the bookmark set of a user, keyed by str(item_id)."""
    user = await _load_user(db, user_id)
    return bookmarks_of(user)


async def is_bookmarked(db: AsyncSession, user_id: int, item_id: int) -> bool:
    """Check whether item_id is in the user's bookmark set."""
    user = await _load_user(db, user_id)
    return _key(item_id) in bookmarks_of(user)


async def add_bookmark(db: AsyncSession, user_id: int, item_id: int) -> None:
    """Add item_id to the user's bookmark set. No-op when already present."""
    user = await _load_user(db, user_id, for_update=True)
    _add(user, item_id)
    await db.flush()


async def remove_bookmark(db: AsyncSession, user_id: int, item_id: int) -> None:
    """Remove item_id from the user's bookmark set. No-op when absent."""
    user = await _load_user(db, user_id, for_update=True)
    _remove(user, item_id)
    await db.flush()


async def toggle_bookmark(db: AsyncSession, user_id: int, item_id: int) -> bool:
    """
    Flip the membership of item_id in the user's bookmark set.

    Membership check and write happen under one row lock.

    Returns:
        True if the item is bookmarked after the call, False if it was removed.

    Raises:
        UserNotFoundError: If user_id does not resolve to a user.
    """
    user = await _load_user(db, user_id, for_update=True)
    if _key(item_id) in bookmarks_of(user):
        _remove(user, item_id)
        bookmarked = False
    else:
        _add(user, item_id)
        bookmarked = True
    await db.flush()
    logger.debug(
        "bookmark_toggled user_id=%s item_id=%s bookmarked=%s",
        user_id,
        item_id,
        bookmarked,
    )
    return bookmarked


def _add(user: User, item_id: int) -> None:
    bookmarks = bookmarks_of(user)
    key = _key(item_id)
    if key in bookmarks:
        return
    bookmarks[key] = int(item_id)
    _store(user, bookmarks)


def _remove(user: User, item_id: int) -> None:
    bookmarks = bookmarks_of(user)
    if bookmarks.pop(_key(item_id), None) is None:
        return
    _store(user, bookmarks)
