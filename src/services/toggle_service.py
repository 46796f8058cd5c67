"""Service layer for the bookmark toggle request."""
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from core.config import Settings
from core.request_cache import RequestCache
from models.user import User
from schemas.admin_bookmark import (
    ToggledItem,
    ToggleAddedResponse,
    ToggleRemovedResponse,
    ToggleResponse,
)
from services import bookmark_store, content_service
from services.bookmark_grouper import (
    BookmarkGroup,
    admin_url,
    bookmarks_list_url,
    build_edit_url,
    compute_groups,
    edit_list_url,
    invalidate_groups,
    resolve_label,
)

logger = logging.getLogger(__name__)


def parse_item_id(raw: str | None) -> int:
    """Resolve a submitted item id. Missing or non-integer values resolve to 0."""
    if raw is None:
        return 0
    try:
        return int(raw.strip())
    except ValueError:
        return 0


async def toggle_and_describe(
    db: AsyncSession,
    user: User,
    item_id: int,
    cache: RequestCache,
    settings: Settings,
) -> ToggleResponse:
    """
    Toggle one bookmark and describe the change for the client.

    The memoized groups are dropped before the response is built, so group handles
    and hrefs describe the state after the toggle.
    """
    bookmarked = await bookmark_store.toggle_bookmark(db, user.id, item_id)
    invalidate_groups(cache, user.id)
    groups = await compute_groups(db, user.id, cache, settings)

    logger.info(
        "admin_bookmark_toggled user_id=%s item_id=%s bookmarked=%s",
        user.id,
        item_id,
        bookmarked,
    )

    if bookmarked:
        return _added(user, item_id, groups, settings)
    return await _removed(db, item_id, settings)


def _find_in_groups(
    groups: dict[str, BookmarkGroup],
    item_id: int,
) -> tuple[BookmarkGroup, int] | None:
    for group in groups.values():
        for index, item in enumerate(group.items):
            if item.id == item_id:
                return group, index
    return None


def _added(
    user: User,
    item_id: int,
    groups: dict[str, BookmarkGroup],
    settings: Settings,
) -> ToggleAddedResponse:
    found = _find_in_groups(groups, item_id)
    if found is None:
        # Deleted item, id 0, or an unsupported type: stored but not shown anywhere
        return ToggleAddedResponse(item_id=item_id, item=None)

    group, index = found
    item = group.items[index]
    if not content_service.can_edit_item(user, item):
        # Stored, but left out of every menu the user sees
        return ToggleAddedResponse(item_id=item_id, item=None)
    return ToggleAddedResponse(
        item_id=item_id,
        item=ToggledItem(
            id=item.id,
            url=admin_url(settings, build_edit_url(item)),
            label=resolve_label(item, settings),
            group_handle=group.handle,
            group_href=group.href,
            content_type=group.content_type,
        ),
    )


async def _removed(
    db: AsyncSession,
    item_id: int,
    settings: Settings,
) -> ToggleRemovedResponse:
    # The item has left its group, so its type comes from the content row
    item = await content_service.get_item(db, item_id)
    if item is None or not await content_service.is_supported_content_type(
        db, settings, item.content_type,
    ):
        return ToggleRemovedResponse(item_id=item_id)
    return ToggleRemovedResponse(
        item_id=item_id,
        group_handle=edit_list_url(item.content_type),
        group_href=bookmarks_list_url(item.content_type),
        content_type=item.content_type,
    )
