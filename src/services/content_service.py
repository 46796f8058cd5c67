"""Service layer for content types, content items and edit permissions."""
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import Settings
from models.content_item import ContentItem
from models.content_type import ContentType
from models.user import User, UserRole

# Roles allowed to edit every content item
EDIT_ANY_ROLES = {UserRole.ADMINISTRATOR.value, UserRole.EDITOR.value}
# Roles allowed to edit the items they authored
EDIT_OWN_ROLES = {UserRole.AUTHOR.value}


def humanize_type_name(name: str) -> str:
    """Turn a machine name like 'product_review' into 'Product Review'."""
    return name.replace("-", " ").replace("_", " ").title()


def type_label(content_type: ContentType) -> str:
    """Display label of a content type, falling back to its humanized machine name."""
    return content_type.label or humanize_type_name(content_type.name)


async def get_content_types(db: AsyncSession) -> dict[str, ContentType]:
    """Get every registered content type keyed by machine name."""
    result = await db.execute(select(ContentType).order_by(ContentType.name))
    return {content_type.name: content_type for content_type in result.scalars().all()}


async def get_supported_content_types(
    db: AsyncSession,
    settings: Settings,
) -> dict[str, ContentType]:
    """
    Get the registered content types bookmarks are enabled for.

    The configured allow-list narrows the registered types; names in the allow-list
    that are not registered are ignored. An empty allow-list allows every type.
    """
    registered = await get_content_types(db)
    allowed = settings.supported_content_types
    if not allowed:
        return registered
    return {name: registered[name] for name in allowed if name in registered}


async def is_supported_content_type(
    db: AsyncSession,
    settings: Settings,
    name: str,
) -> bool:
    """Check whether bookmarks are enabled for the content type."""
    return name in await get_supported_content_types(db, settings)


async def get_item(db: AsyncSession, item_id: int) -> ContentItem | None:
    """Get a content item by ID. Returns None if it does not exist."""
    result = await db.execute(select(ContentItem).where(ContentItem.id == item_id))
    return result.scalar_one_or_none()


async def get_items_by_ids(
    db: AsyncSession,
    item_ids: list[int],
    content_types: list[str],
) -> list[ContentItem]:
    """
    Bulk-resolve item ids, keeping only items of the given content types.

    Ids without a matching row are dropped. Result order is unspecified.
    """
    if not item_ids or not content_types:
        return []
    result = await db.execute(
        select(ContentItem).where(
            ContentItem.id.in_(item_ids),
            ContentItem.content_type.in_(content_types),
        ),
    )
    return list(result.scalars().all())


async def list_items(
    db: AsyncSession,
    content_type: str,
    only_ids: list[int] | None = None,
) -> list[ContentItem]:
    """
    List items of a content type for the list table.

    Default order is sticky items first, then newest first. When only_ids is given
    the listing is restricted to those ids, ordered as in only_ids, with sticky
    reordering suppressed.
    """
    query = select(ContentItem).where(ContentItem.content_type == content_type)
    if only_ids is None:
        query = query.order_by(
            ContentItem.is_sticky.desc(),
            ContentItem.created_at.desc(),
            ContentItem.id.desc(),
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    if not only_ids:
        return []
    result = await db.execute(query.where(ContentItem.id.in_(only_ids)))
    position = {item_id: index for index, item_id in enumerate(only_ids)}
    return sorted(result.scalars().all(), key=lambda item: position[item.id])


def can_edit_item(user: User, item: ContentItem) -> bool:
    """
    Check whether the user may edit the item.

    Administrators and editors edit everything, authors edit their own items,
    everyone else edits nothing.
    """
    if user.role in EDIT_ANY_ROLES:
        return True
    if user.role in EDIT_OWN_ROLES:
        return item.author_id is not None and item.author_id == user.id
    return False
