"""
Scheduled bookmark pruning task.

Removes ids of content items that no longer exist from every stored bookmark
set. Reads tolerate such ids already; pruning keeps the stored sets from
growing without bound. Designed to run as a cron job.

Usage:
    python -m tasks.prune_bookmarks
"""
import asyncio
import logging
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from db.session import async_session_factory
from models.content_item import ContentItem
from models.user import User
from services.bookmark_store import bookmarks_of

logger = logging.getLogger(__name__)


@dataclass
class PruneStats:
    """Statistics from a prune run."""

    users_scanned: int = 0
    users_updated: int = 0
    ids_removed: int = 0

    def to_dict(self) -> dict[str, int]:
        """Convert to simple dict for logging/return."""
        return {
            "users_scanned": self.users_scanned,
            "users_updated": self.users_updated,
            "ids_removed": self.ids_removed,
        }


async def prune_deleted_items(db: AsyncSession) -> PruneStats:
    """
    Drop ids of deleted content items from every user's bookmark set.

    Remaining ids keep their relative order.

    Returns:
        PruneStats with per-run counts.
    """
    stats = PruneStats()

    result = await db.execute(
        select(User).where(User.admin_bookmarks.is_not(None)).with_for_update(),
    )
    users = result.scalars().all()

    referenced: set[int] = set()
    for user in users:
        referenced.update(bookmarks_of(user).values())

    existing: set[int] = set()
    if referenced:
        rows = await db.execute(
            select(ContentItem.id).where(ContentItem.id.in_(list(referenced))),
        )
        existing = set(rows.scalars().all())

    for user in users:
        stats.users_scanned += 1
        bookmarks = bookmarks_of(user)
        kept = {key: item_id for key, item_id in bookmarks.items() if item_id in existing}
        removed = len(bookmarks) - len(kept)
        if removed == 0:
            continue
        user.admin_bookmarks = kept
        stats.users_updated += 1
        stats.ids_removed += removed
        logger.info("Pruned %d deleted item(s) from bookmarks of user %s", removed, user.id)

    await db.commit()
    return stats


async def run_prune(db: AsyncSession | None = None) -> PruneStats:
    """
    Run the prune task.

    Args:
        db: Database session. If None, creates one from async_session_factory.
    """
    logger.info("Starting bookmark prune task")

    if db is not None:
        stats = await prune_deleted_items(db)
    else:
        async with async_session_factory() as session:
            stats = await prune_deleted_items(session)

    logger.info("Bookmark prune complete: %s", stats.to_dict())
    return stats


def main() -> None:
    """Entry point for running the prune task as a script."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    asyncio.run(run_prune())


if __name__ == "__main__":
    main()
