"""Tests for rendering admin HTML fragments."""
from bs4 import BeautifulSoup

from schemas.admin_bookmark import AdminMenu, DashboardRow, DashboardSection, MenuEntry
from services.template_renderer import (
    EMPTY_DASHBOARD_MESSAGE,
    AdminMenuSection,
    render_admin_menu,
    render_dashboard_widget,
)


def section(content_type: str, label: str, *rows: tuple[int, str]) -> DashboardSection:
    return DashboardSection(
        content_type=content_type,
        label=label,
        rows=[
            DashboardRow(
                id=row_id,
                label=row_label,
                edit_url=f"/admin/content/{content_type}/{row_id}/edit",
                view_url=f"/?p={row_id}",
            )
            for row_id, row_label in rows
        ],
    )


def test__render_dashboard_widget__empty_state() -> None:
    """No sections renders only the empty-state message."""
    html = render_dashboard_widget([])
    assert html == f"<p>{EMPTY_DASHBOARD_MESSAGE}</p>"


def test__render_dashboard_widget__sections_and_links() -> None:
    """Each section has a header and each row its Edit and View links."""
    html = render_dashboard_widget([
        section("page", "Pages", (3, "About")),
        section("post", "Posts", (1, "Hello"), (2, "World")),
    ])

    soup = BeautifulSoup(html, "html.parser")
    assert [h.get_text() for h in soup.find_all("h4")] == ["Pages", "Posts"]
    assert [a["href"] for a in soup.find_all("a", string="Edit")] == [
        "/admin/content/page/3/edit",
        "/admin/content/post/1/edit",
        "/admin/content/post/2/edit",
    ]
    assert [a["href"] for a in soup.find_all("a", string="View")] == ["/?p=3", "/?p=1", "/?p=2"]
    icon = soup.find(id="admin-bookmark-1")
    assert icon["data-admin-bookmark"] == "1"


def test__render_admin_menu__submenu_only_with_bookmarks() -> None:
    """Sections with bookmarks get a Bookmarks link with the items under it."""
    menu = AdminMenu(
        content_type="post",
        handle="content/post",
        href="content/post?admin_bookmarks=1",
        items=[MenuEntry(id=1, label="Hello & welcome", url="/admin/content/post/1/edit")],
    )
    html = render_admin_menu([
        AdminMenuSection(
            content_type="post",
            label="Posts",
            listing_url="/admin/content/post",
            bookmarks_url="/admin/content/post?admin_bookmarks=1",
            menu=menu,
            is_open=True,
        ),
        AdminMenuSection(
            content_type="page",
            label="Pages",
            listing_url="/admin/content/page",
            bookmarks_url="/admin/content/page?admin_bookmarks=1",
        ),
    ])

    soup = BeautifulSoup(html, "html.parser")
    assert "wp-menu-open" in soup.find(id="menu-post")["class"]
    assert soup.select("#menu-page ul.admin-bookmarks-submenu") == []
    entries = soup.select("#menu-post ul.admin-bookmarks-submenu a")
    assert [a.get_text() for a in entries] == ["Hello & welcome"]
    assert "Hello &amp; welcome" in html
