"""Pydantic schemas for admin bookmark navigation and the toggle endpoint."""
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

# Label of the per-type parent navigation node
MENU_LABEL = "Bookmarks"


class _WireModel(BaseModel):
    """Base for models whose wire names are camelCase aliases."""

    model_config = ConfigDict(populate_by_name=True)


# =============================================================================
# Navigation projections
# =============================================================================


class MenuEntry(BaseModel):
    """One bookmarked item as shown in a navigation surface."""

    id: int
    label: str
    url: str


class AdminMenu(BaseModel):
    """
    Primary navigation node for one content type.

    `handle` is the listing the node hangs under, `href` the listing filtered to
    bookmarked items. Clients locate the node's anchor by `href`.
    """

    content_type: str
    handle: str
    href: str
    label: str = MENU_LABEL
    group_label: str | None = None
    items: list[MenuEntry]


class AdminBarNode(BaseModel):
    """A node of the admin-bar bookmarks menu."""

    id: str
    title: str
    parent: str | None = None
    href: str | None = None
    meta: dict[str, str] = {}


class DashboardRow(BaseModel):
    """One item row of the dashboard widget."""

    id: int
    label: str
    edit_url: str
    view_url: str


class DashboardSection(BaseModel):
    """Dashboard rows of one content type, headed by the type label."""

    content_type: str
    label: str
    rows: list[DashboardRow]


class ClientConfig(_WireModel):
    """Configuration handed to the client-side menu synchronizer at page load."""

    nonce: str
    label: str = MENU_LABEL
    untitled: str = Field(description="Label pattern for untitled items, %s is the id")
    current_handle: str | None = Field(default=None, alias="currentHandle")
    menus: list[AdminMenu]


# =============================================================================
# Toggle endpoint
# =============================================================================

TOGGLE_ACTION_NAME = "toggle_admin_bookmark"


class ToggledItem(_WireModel):
    """Descriptor of an item that was just bookmarked."""

    id: int
    url: str
    label: str
    group_handle: str = Field(alias="groupHandle")
    group_href: str = Field(alias="groupHref")
    content_type: str


class ToggleAddedResponse(_WireModel):
    """Toggle result when the item was added. `item` is null for unresolvable ids."""

    item_id: int = Field(alias="itemId")
    removed: Literal[False] = False
    item: ToggledItem | None


class ToggleRemovedResponse(_WireModel):
    """Toggle result when the item was removed. Group fields are null for unresolvable ids."""

    item_id: int = Field(alias="itemId")
    removed: Literal[True] = True
    group_handle: str | None = Field(default=None, alias="groupHandle")
    group_href: str | None = Field(default=None, alias="groupHref")
    content_type: str | None = None


ToggleResponse = ToggleAddedResponse | ToggleRemovedResponse


# =============================================================================
# List table
# =============================================================================


class ListColumn(BaseModel):
    """A list-table column, in display order."""

    key: str
    label: str


class ListView(BaseModel):
    """A status view link above the list table, e.g. "All (12)" or "Bookmarks (3)"."""

    key: str
    label: str
    href: str
    count: int
    current: bool = False


class InlineData(BaseModel):
    """Hidden per-row data the client uses to prefill quick edit."""

    bookmark_title: str = ""


class ListRow(BaseModel):
    """One row of the list table."""

    id: int
    title: str
    status: str
    is_sticky: bool
    bookmarked: bool | None = Field(
        default=None,
        description="Bookmark column state, null when the type has no bookmark column",
    )
    inline_data: InlineData | None = None


class ListTableResponse(BaseModel):
    """A content listing screen with bookmark integration applied."""

    content_type: str
    bookmark_filter: bool
    columns: list[ListColumn]
    views: list[ListView]
    rows: list[ListRow]
    quick_edit_nonce: str | None = Field(
        default=None,
        description="Nonce for the quick-edit bookmark title field, null when not offered",
    )


# =============================================================================
# Quick edit
# =============================================================================


class QuickEditResponse(BaseModel):
    """Outcome of a quick-edit save. `saved` is False when the request was ignored."""

    saved: bool
    bookmark_title: str | None = None
