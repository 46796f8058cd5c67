"""
Grouping of a user's bookmarks by content type.

Groups are derived data: bookmark set + live content rows. They are memoized in
the request cache and recomputed whenever a toggle invalidates the cache.
"""
import logging
from dataclasses import dataclass, field
from urllib.parse import urlencode

from sqlalchemy.ext.asyncio import AsyncSession

from core.config import Settings
from core.request_cache import RequestCache
from models.content_item import ContentItem
from services import bookmark_store, content_service

logger = logging.getLogger(__name__)

# Query-string flag that scopes a listing to bookmarked items
BOOKMARK_FILTER_PARAM = "admin_bookmarks"


@dataclass
class BookmarkGroup:
    """Bookmarked items of one content type with their navigation metadata."""

    content_type: str
    label: str
    handle: str
    href: str
    items: list[ContentItem] = field(default_factory=list)


def admin_url(settings: Settings, path: str) -> str:
    """Join an admin-relative path onto the configured admin base URL."""
    return settings.admin_base_url.rstrip("/") + "/" + path.lstrip("/")


def edit_list_url(content_type: str) -> str:
    """Admin-relative listing path of a content type, used as its navigation handle."""
    return f"content/{content_type}"


def bookmarks_list_url(content_type: str) -> str:
    """Admin-relative listing path filtered to bookmarked items."""
    return f"{edit_list_url(content_type)}?{urlencode({BOOKMARK_FILTER_PARAM: 1})}"


def build_edit_url(item: ContentItem) -> str:
    """Admin-relative edit path of a content item."""
    return f"content/{item.content_type}/{item.id}/edit"


def build_view_url(settings: Settings, item: ContentItem) -> str:
    """Public URL of a content item."""
    return f"{settings.site_url.rstrip('/')}/?{urlencode({'p': item.id})}"


def resolve_label(item: ContentItem, settings: Settings) -> str:
    """
    Label of an item in bookmark menus.

    The custom bookmark title wins over the item title; an item with neither
    is labelled with the untitled pattern.
    """
    for candidate in (item.bookmark_title, item.title):
        if candidate and candidate.strip():
            return candidate.strip()
    return settings.untitled_label_pattern % item.id


def _cache_key(user_id: int) -> str:
    return f"bookmark_groups:{user_id}"


async def compute_groups(
    db: AsyncSession,
    user_id: int,
    cache: RequestCache,
    settings: Settings,
) -> dict[str, BookmarkGroup]:
    """
    Get the user's bookmarks grouped by content type.

    Every bookmarked id that resolves to an item of a supported content type lands
    in exactly one group. Items keep bookmark insertion order inside a group and
    types with no resolvable items get no group.

    Raises:
        UserNotFoundError: If user_id does not resolve to a user.
    """

    async def compute() -> dict[str, BookmarkGroup]:
        return await _compute_groups(db, user_id, settings)

    return await cache.get_or_compute(_cache_key(user_id), compute)


def invalidate_groups(cache: RequestCache, user_id: int) -> None:
    """Drop the memoized groups of a user."""
    cache.invalidate(_cache_key(user_id))


async def _compute_groups(
    db: AsyncSession,
    user_id: int,
    settings: Settings,
) -> dict[str, BookmarkGroup]:
    bookmarks = await bookmark_store.get_bookmarks(db, user_id)
    if not bookmarks:
        return {}

    ids = [int(item_id) for item_id in bookmarks.values()]
    supported = await content_service.get_supported_content_types(db, settings)
    items = await content_service.get_items_by_ids(db, ids, list(supported))

    missing = len(ids) - len(items)
    if missing:
        # Deleted items and items of unsupported types are skipped
        logger.debug("bookmark_groups_skipped user_id=%s count=%s", user_id, missing)

    position = {item_id: index for index, item_id in enumerate(ids)}
    items.sort(key=lambda item: position[item.id])

    groups: dict[str, BookmarkGroup] = {}
    for item in items:
        group = groups.get(item.content_type)
        if group is None:
            group = BookmarkGroup(
                content_type=item.content_type,
                label=content_service.type_label(supported[item.content_type]),
                handle=edit_list_url(item.content_type),
                href=bookmarks_list_url(item.content_type),
            )
            groups[item.content_type] = group
        group.items.append(item)
    return groups


async def get_bookmarked_item_ids(
    db: AsyncSession,
    user_id: int,
    content_type: str,
    cache: RequestCache,
    settings: Settings,
) -> list[int]:
    """Get the ids of the user's bookmarked items of one type, in insertion order."""
    groups = await compute_groups(db, user_id, cache, settings)
    group = groups.get(content_type)
    if group is None:
        return []
    return [item.id for item in group.items]
