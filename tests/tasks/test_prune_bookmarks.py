"""Tests for the bookmark prune task."""
from collections.abc import Awaitable, Callable

from sqlalchemy.ext.asyncio import AsyncSession

from models.content_item import ContentItem
from models.user import User
from services import bookmark_store
from tasks.prune_bookmarks import PruneStats, run_prune


async def test__run_prune__drops_deleted_ids_keeping_order(
    db_session: AsyncSession,
    make_user: Callable[..., Awaitable[User]],
    make_item: Callable[..., Awaitable[ContentItem]],
) -> None:
    """Ids of deleted items are removed; the rest keep their order."""
    a = await make_item("post", "A")
    b = await make_item("page", "B")
    doomed = await make_item("post", "Doomed")
    user = await make_user(bookmarks=[b.id, doomed.id, 99_999, a.id])
    await db_session.delete(doomed)
    await db_session.flush()

    stats = await run_prune(db_session)

    assert stats.to_dict() == {"users_scanned": 1, "users_updated": 1, "ids_removed": 2}
    assert list((await bookmark_store.get_bookmarks(db_session, user.id)).values()) == [b.id, a.id]


async def test__run_prune__leaves_clean_sets_alone(
    db_session: AsyncSession,
    make_user: Callable[..., Awaitable[User]],
    make_item: Callable[..., Awaitable[ContentItem]],
) -> None:
    """Users whose bookmarks all resolve are not updated; users without bookmarks are skipped."""
    post = await make_item("post", "Post")
    await make_user(bookmarks=[post.id])
    await make_user()

    stats = await run_prune(db_session)

    assert stats == PruneStats(users_scanned=1, users_updated=0, ids_removed=0)


async def test__run_prune__empty_database(db_session: AsyncSession) -> None:
    """Nothing to prune is not an error."""
    stats = await run_prune(db_session)
    assert stats.to_dict() == {"users_scanned": 0, "users_updated": 0, "ids_removed": 0}
