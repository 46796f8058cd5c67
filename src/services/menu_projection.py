"""
Projection of grouped bookmarks onto admin navigation surfaces.

Every projection applies the same permission gate: items the viewer cannot edit
are left out silently, and a group left with no items is not shown at all.
"""
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import Settings
from core.nonce import QUICK_EDIT_ACTION, TOGGLE_ACTION, create_nonce
from core.request_cache import RequestCache
from models.content_item import ContentItem
from models.user import User
from schemas.admin_bookmark import (
    MENU_LABEL,
    AdminBarNode,
    AdminMenu,
    ClientConfig,
    DashboardRow,
    DashboardSection,
    InlineData,
    ListColumn,
    ListRow,
    ListTableResponse,
    ListView,
    MenuEntry,
)
from services import content_service
from services.bookmark_grouper import (
    BookmarkGroup,
    admin_url,
    bookmarks_list_url,
    build_edit_url,
    build_view_url,
    compute_groups,
    edit_list_url,
    get_bookmarked_item_ids,
    resolve_label,
)
from services.template_renderer import AdminMenuSection

ADMIN_BAR_ROOT_ID = "admin-bookmarks"
BOOKMARK_COLUMN = ListColumn(key="bookmark", label="Bookmark")
BASE_COLUMNS = [
    ListColumn(key="cb", label=""),
    ListColumn(key="title", label="Title"),
    ListColumn(key="status", label="Status"),
    ListColumn(key="date", label="Date"),
]


def _visible_items(group: BookmarkGroup, user: User) -> list[ContentItem]:
    return [item for item in group.items if content_service.can_edit_item(user, item)]


def menu_entry(item: ContentItem, settings: Settings) -> MenuEntry:
    """Client-visible projection of one bookmarked item."""
    return MenuEntry(
        id=item.id,
        label=resolve_label(item, settings),
        url=admin_url(settings, build_edit_url(item)),
    )


def build_admin_menus(
    groups: dict[str, BookmarkGroup],
    user: User,
    settings: Settings,
) -> list[AdminMenu]:
    """Build one primary navigation node per group, with one child per editable item."""
    menus = []
    for group in groups.values():
        items = _visible_items(group, user)
        if not items:
            continue
        menus.append(
            AdminMenu(
                content_type=group.content_type,
                handle=group.handle,
                href=group.href,
                label=MENU_LABEL,
                group_label=group.label,
                items=[menu_entry(item, settings) for item in items],
            ),
        )
    return menus


def build_admin_bar(
    groups: dict[str, BookmarkGroup],
    user: User,
    settings: Settings,
) -> list[AdminBarNode]:
    """
    Build the admin-bar bookmarks menu as a flat list of parent-linked nodes.

    Returns no nodes at all when the viewer has nothing to show.
    """
    nodes: list[AdminBarNode] = []
    for group in groups.values():
        items = _visible_items(group, user)
        if not items:
            continue
        parent_id = f"{ADMIN_BAR_ROOT_ID}-{group.content_type}"
        nodes.append(
            AdminBarNode(
                id=parent_id,
                parent=ADMIN_BAR_ROOT_ID,
                title=group.label,
                href=admin_url(settings, group.href),
            ),
        )
        nodes.extend(
            AdminBarNode(
                id=f"{parent_id}-{item.id}",
                parent=parent_id,
                title=resolve_label(item, settings),
                href=admin_url(settings, build_edit_url(item)),
            )
            for item in items
        )

    if not nodes:
        return []
    root = AdminBarNode(
        id=ADMIN_BAR_ROOT_ID,
        title=MENU_LABEL,
        meta={"class": "admin-bookmarks-adminbar"},
    )
    return [root, *nodes]


def build_dashboard_sections(
    groups: dict[str, BookmarkGroup],
    user: User,
    settings: Settings,
) -> list[DashboardSection]:
    """Flatten groups into dashboard sections sorted by (content type, title, id)."""
    visible = [
        (group, item)
        for group in groups.values()
        for item in _visible_items(group, user)
    ]
    visible.sort(key=lambda pair: (pair[1].content_type, pair[1].title or "", pair[1].id))

    sections: list[DashboardSection] = []
    for group, item in visible:
        if not sections or sections[-1].content_type != item.content_type:
            sections.append(
                DashboardSection(content_type=item.content_type, label=group.label, rows=[]),
            )
        sections[-1].rows.append(
            DashboardRow(
                id=item.id,
                label=resolve_label(item, settings),
                edit_url=admin_url(settings, build_edit_url(item)),
                view_url=build_view_url(settings, item),
            ),
        )
    return sections


def build_client_config(
    groups: dict[str, BookmarkGroup],
    user: User,
    settings: Settings,
    current_handle: str | None = None,
) -> ClientConfig:
    """Build the configuration object the menu synchronizer starts from."""
    return ClientConfig(
        nonce=create_nonce(settings, TOGGLE_ACTION, user.id),
        label=MENU_LABEL,
        untitled=settings.untitled_label_pattern,
        current_handle=current_handle,
        menus=build_admin_menus(groups, user, settings),
    )


def insert_bookmark_column(columns: list[ListColumn]) -> list[ListColumn]:
    """Insert the bookmark column immediately after the selection checkbox column."""
    return [*columns[:1], BOOKMARK_COLUMN, *columns[1:]]


def build_list_views(
    content_type: str,
    total: int,
    bookmarked_count: int,
    bookmark_filter: bool,
) -> list[ListView]:
    """
    Build the view links above a list table.

    The Bookmarks view is shown when there is something bookmarked or when it is
    the active view; while active it is the only view marked current.
    """
    views = [
        ListView(
            key="all",
            label="All",
            href=edit_list_url(content_type),
            count=total,
            current=not bookmark_filter,
        ),
    ]
    if bookmarked_count == 0 and not bookmark_filter:
        return views
    views.append(
        ListView(
            key="admin-bookmarks",
            label=MENU_LABEL,
            href=bookmarks_list_url(content_type),
            count=bookmarked_count,
            current=bookmark_filter,
        ),
    )
    return views


async def get_list_table(
    db: AsyncSession,
    user: User,
    content_type: str,
    bookmark_filter: bool,
    cache: RequestCache,
    settings: Settings,
) -> ListTableResponse:
    """
    Build the listing screen of a content type with bookmark integration.

    Unsupported types get the plain table: no bookmark column, no Bookmarks view,
    and the bookmark filter is ignored.
    """
    supported = await content_service.is_supported_content_type(db, settings, content_type)
    all_items = await content_service.list_items(db, content_type)

    if not supported:
        return ListTableResponse(
            content_type=content_type,
            bookmark_filter=False,
            columns=list(BASE_COLUMNS),
            views=build_list_views(content_type, len(all_items), 0, False),
            rows=[_list_row(item) for item in all_items],
        )

    bookmarked_ids = await get_bookmarked_item_ids(db, user.id, content_type, cache, settings)
    bookmarked = set(bookmarked_ids)
    if bookmark_filter:
        items = await content_service.list_items(db, content_type, only_ids=bookmarked_ids)
    else:
        items = all_items

    return ListTableResponse(
        content_type=content_type,
        bookmark_filter=bookmark_filter,
        columns=insert_bookmark_column(list(BASE_COLUMNS)),
        views=build_list_views(
            content_type, len(all_items), len(bookmarked_ids), bookmark_filter,
        ),
        rows=[
            _list_row(
                item,
                bookmarked=item.id in bookmarked,
                inline_data=InlineData(bookmark_title=item.bookmark_title or ""),
            )
            for item in items
        ],
        quick_edit_nonce=create_nonce(settings, QUICK_EDIT_ACTION, user.id),
    )


def _list_row(
    item: ContentItem,
    bookmarked: bool | None = None,
    inline_data: InlineData | None = None,
) -> ListRow:
    return ListRow(
        id=item.id,
        title=item.title,
        status=item.status,
        is_sticky=item.is_sticky,
        bookmarked=bookmarked,
        inline_data=inline_data,
    )


async def get_admin_menus(
    db: AsyncSession,
    user: User,
    cache: RequestCache,
    settings: Settings,
) -> list[AdminMenu]:
    """Compute groups for the user and project them onto the primary navigation."""
    groups = await compute_groups(db, user.id, cache, settings)
    return build_admin_menus(groups, user, settings)


async def get_admin_menu_sections(
    db: AsyncSession,
    user: User,
    cache: RequestCache,
    settings: Settings,
    current_handle: str | None = None,
) -> list[AdminMenuSection]:
    """
    Build the top-level admin menu: one section per supported content type with UI.

    Sections of types with visible bookmarks carry their bookmarks menu. The section
    whose listing handle is current is marked open.
    """
    content_types = await content_service.get_supported_content_types(db, settings)
    menus = {menu.content_type: menu for menu in await get_admin_menus(db, user, cache, settings)}
    return [
        AdminMenuSection(
            content_type=name,
            label=content_service.type_label(content_type),
            listing_url=admin_url(settings, edit_list_url(name)),
            bookmarks_url=admin_url(settings, bookmarks_list_url(name)),
            menu=menus.get(name),
            is_open=current_handle == edit_list_url(name),
        )
        for name, content_type in content_types.items()
        if content_type.show_ui
    ]
