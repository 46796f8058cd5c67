"""Tests for content type lookups, listings and edit permissions."""
from collections.abc import Awaitable, Callable

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import Settings
from models.content_item import ContentItem
from models.content_type import ContentType
from models.user import User, UserRole
from services import content_service


async def test__get_supported_content_types__all_when_unrestricted(
    db_session: AsyncSession,
    content_types: dict[str, ContentType],
    settings: Settings,
) -> None:
    """An empty allow-list supports every registered type."""
    supported = await content_service.get_supported_content_types(db_session, settings)
    assert set(supported) == set(content_types)


async def test__get_supported_content_types__allow_list_order(
    db_session: AsyncSession,
    content_types: dict[str, ContentType],  # noqa: ARG001
    settings_factory: Callable[..., Settings],
) -> None:
    """The allow-list narrows and orders the types; unregistered names are ignored."""
    settings = settings_factory(SUPPORTED_CONTENT_TYPES="page, unknown ,post")

    supported = await content_service.get_supported_content_types(db_session, settings)

    assert list(supported) == ["page", "post"]
    assert await content_service.is_supported_content_type(db_session, settings, "post")
    assert not await content_service.is_supported_content_type(db_session, settings, "catalog")


def test__type_label__falls_back_to_machine_name() -> None:
    """Types without a label are shown by their humanized name."""
    assert content_service.type_label(ContentType(name="product_review", label=None)) == "Product Review"
    assert content_service.type_label(ContentType(name="post", label="Posts")) == "Posts"


async def test__list_items__sticky_first_then_newest(
    db_session: AsyncSession,
    make_item: Callable[..., Awaitable[ContentItem]],
) -> None:
    """Default listing order puts sticky items first, then newer items first."""
    older = await make_item("post", "Older")
    sticky = await make_item("post", "Sticky", is_sticky=True)
    newer = await make_item("post", "Newer")
    await make_item("page", "Other type")

    items = await content_service.list_items(db_session, "post")

    assert [item.id for item in items] == [sticky.id, newer.id, older.id]


async def test__list_items__only_ids_keeps_given_order(
    db_session: AsyncSession,
    make_item: Callable[..., Awaitable[ContentItem]],
) -> None:
    """Restricting to ids keeps the order of the ids, not the default order."""
    a = await make_item("post", "A", is_sticky=True)
    b = await make_item("post", "B")
    page = await make_item("page", "Page")

    items = await content_service.list_items(db_session, "post", only_ids=[b.id, page.id, a.id])

    assert [item.id for item in items] == [b.id, a.id]
    assert await content_service.list_items(db_session, "post", only_ids=[]) == []


@pytest.mark.parametrize(
    ("role", "own", "expected"),
    [
        (UserRole.ADMINISTRATOR, False, True),
        (UserRole.EDITOR, False, True),
        (UserRole.AUTHOR, True, True),
        (UserRole.AUTHOR, False, False),
        (UserRole.CONTRIBUTOR, True, False),
        (UserRole.SUBSCRIBER, True, False),
    ],
)
def test__can_edit_item__by_role(role: UserRole, own: bool, expected: bool) -> None:
    """Editors edit everything, authors their own items, everyone else nothing."""
    user = User(id=1, auth0_id="test|1", role=role.value)
    item = ContentItem(id=10, content_type="post", author_id=1 if own else 2)
    assert content_service.can_edit_item(user, item) is expected
