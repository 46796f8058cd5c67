"""
Client-side mirror of the admin bookmark menus.

Keeps the menu data received at page load in memory, applies the deltas returned
by the toggle endpoint, and re-renders the bookmark submenus of an admin menu
document. When the document lacks an anchor a group needs, the caller should
reload the page instead of showing a menu that disagrees with the server.
"""
import logging

from bs4 import BeautifulSoup, Tag

from schemas.admin_bookmark import (
    MENU_LABEL,
    AdminMenu,
    ClientConfig,
    MenuEntry,
    ToggleAddedResponse,
    ToggleResponse,
)

logger = logging.getLogger(__name__)

GROUP_CLASS = "admin-bookmarks-group"
TOGGLE_CLASS = "admin-bookmarks-group__toggle"
SUBMENU_CLASS = "admin-bookmarks-submenu"


def _classes(tag: Tag) -> list[str]:
    value = tag.get("class") or []
    if isinstance(value, str):
        return value.split()
    return list(value)


def add_class(tag: Tag, name: str) -> None:
    """Add a CSS class to a tag."""
    classes = _classes(tag)
    if name not in classes:
        classes.append(name)
    tag["class"] = classes


def remove_class(tag: Tag, name: str) -> None:
    """Remove a CSS class from a tag, dropping the attribute when it empties."""
    classes = [value for value in _classes(tag) if value != name]
    if classes:
        tag["class"] = classes
    elif tag.has_attr("class"):
        del tag["class"]


class MenuSynchronizer:
    """
    Mirror of the bookmark menus bound to an admin menu document.

    Args:
        config: Client configuration received at page load.
        document: Parsed admin menu HTML. Modified in place by refresh().
        current_item_id: Id of the content item open in the editor, if any.
    """

    def __init__(
        self,
        config: ClientConfig,
        document: BeautifulSoup,
        current_item_id: int | None = None,
    ) -> None:
        self.label = config.label or MENU_LABEL
        self.untitled = config.untitled
        self.document = document
        self.current_item_id = current_item_id
        self.menus: list[AdminMenu] = [menu.model_copy(deep=True) for menu in config.menus]

    # -- mirror ---------------------------------------------------------------

    def find_menu(
        self,
        handle: str | None = None,
        content_type: str | None = None,
    ) -> AdminMenu | None:
        """Find a mirrored group by navigation handle, falling back to content type."""
        for menu in self.menus:
            if handle is not None and menu.handle == handle:
                return menu
        for menu in self.menus:
            if content_type is not None and menu.content_type == content_type:
                return menu
        return None

    def apply(self, result: ToggleResponse) -> None:
        """
        Apply a toggle result to the mirror.

        A removal deletes the entry from its group and drops the group once empty.
        An addition creates the group when needed and replaces any entry with the
        same id instead of appending a duplicate.
        """
        if isinstance(result, ToggleAddedResponse):
            self._apply_added(result)
        else:
            self._apply_removed(result.item_id, result.group_handle, result.content_type)

    def _apply_added(self, result: ToggleAddedResponse) -> None:
        item = result.item
        if item is None:
            # Nothing the menus can show
            return

        menu = self.find_menu(item.group_handle, item.content_type)
        if menu is None:
            menu = AdminMenu(
                content_type=item.content_type,
                handle=item.group_handle,
                href=item.group_href,
                label=self.label,
                items=[],
            )
            self.menus.append(menu)

        label = item.label or self.untitled % item.id
        entry = MenuEntry(id=item.id, label=label, url=item.url)
        for index, existing in enumerate(menu.items):
            if existing.id == item.id:
                menu.items[index] = entry
                break
        else:
            menu.items.append(entry)

    def _apply_removed(
        self,
        item_id: int,
        handle: str | None,
        content_type: str | None,
    ) -> None:
        menu = self.find_menu(handle, content_type)
        candidates = [menu] if menu is not None else list(self.menus)
        for candidate in candidates:
            candidate.items = [entry for entry in candidate.items if entry.id != item_id]
        self.menus = [menu for menu in self.menus if menu.items]

    # -- document -------------------------------------------------------------

    def handle_toggle(self, result: ToggleResponse) -> bool:
        """Apply a toggle result and re-render. Returns False when a reload is needed."""
        self.apply(result)
        return self.refresh()

    def refresh(self) -> bool:
        """
        Re-render every bookmark submenu from the mirror.

        Returns:
            False if the admin menu or the anchor of any group is missing from the
            document, meaning the page must be reloaded. True otherwise.
        """
        admin_menu = self.document.find(id="adminmenu")
        if admin_menu is None:
            logger.debug("Admin menu container not found, reload required")
            return False

        for submenu in admin_menu.select(f"ul.{SUBMENU_CLASS}"):
            if submenu.parent is not None:
                remove_class(submenu.parent, "is-open")
            submenu.decompose()

        # Emptied groups keep their anchor so a later add can render into it
        hrefs = {menu.href for menu in self.menus}
        for group in admin_menu.select(f"li.{GROUP_CLASS}"):
            toggle = group.find("a", class_=TOGGLE_CLASS)
            if toggle is None or not any(toggle.get("href", "").endswith(h) for h in hrefs):
                group["hidden"] = "hidden"

        complete = True
        for menu in self.menus:
            if not self._render_menu(admin_menu, menu):
                logger.debug("No anchor for bookmark group %s, reload required", menu.handle)
                complete = False

        self.highlight_current_item()
        return complete

    def _render_menu(self, admin_menu: Tag, menu: AdminMenu) -> bool:
        toggle = admin_menu.select_one(f'.wp-submenu a[href$="{menu.href}"]')
        if toggle is None or toggle.parent is None:
            return False

        submenu = self._prepare_placeholder(toggle.parent, toggle)
        for entry in menu.items:
            item = self.document.new_tag("li")
            anchor = self.document.new_tag("a", href=entry.url)
            icon = self.document.new_tag(
                "span",
                id=f"admin-bookmark-{entry.id}",
                attrs={
                    "class": "admin-bookmarks-icon bookmarked admin-bookmarks-menu-item",
                    "data-admin-bookmark": str(entry.id),
                },
            )
            anchor.append(icon)
            anchor.append(entry.label)
            item.append(anchor)
            submenu.append(item)
        return True

    def _prepare_placeholder(self, list_item: Tag, toggle: Tag) -> Tag:
        if list_item.has_attr("hidden"):
            del list_item["hidden"]
        add_class(list_item, GROUP_CLASS)
        add_class(toggle, TOGGLE_CLASS)
        toggle["aria-haspopup"] = "true"
        toggle["aria-expanded"] = "false"
        toggle.clear()
        icon = self.document.new_tag(
            "span",
            attrs={
                "class": "admin-bookmarks-icon bookmarked admin-bookmarks-group__icon",
                "aria-hidden": "true",
            },
        )
        label = self.document.new_tag("span", attrs={"class": "admin-bookmarks-group__label"})
        label.string = self.label
        toggle.append(icon)
        toggle.append(label)

        submenu = self.document.new_tag("ul", attrs={"class": SUBMENU_CLASS})
        list_item.append(submenu)
        return submenu

    def highlight_current_item(self) -> None:
        """Mark the menu entry of the open content item, and its group, as current."""
        if self.current_item_id is None:
            return

        for node in self.document.select("[data-admin-bookmark]"):
            item = node.find_parent("li")
            if item is not None:
                remove_class(item, "current")

        for group in self.document.select(f".{GROUP_CLASS}"):
            remove_class(group, "has-current-bookmark")
            toggle = group.select_one(f".{TOGGLE_CLASS}")
            if toggle is not None and toggle.has_attr("aria-current"):
                del toggle["aria-current"]

        selector = f'[data-admin-bookmark="{self.current_item_id}"]'
        for node in self.document.select(selector):
            item = node.find_parent("li")
            if item is None:
                continue
            add_class(item, "current")
            group = item.find_parent("li", class_=GROUP_CLASS)
            if group is not None:
                add_class(group, "has-current-bookmark")
                toggle = group.select_one(f".{TOGGLE_CLASS}")
                if toggle is not None:
                    toggle["aria-current"] = "true"
