"""
Jinja2 rendering of admin HTML fragments.

Renders the dashboard widget and the admin menu the client-side synchronizer
binds to. All values are autoescaped; templates fail loudly on undefined names.
"""
from dataclasses import dataclass

from jinja2 import DictLoader, Environment, StrictUndefined

from schemas.admin_bookmark import AdminMenu, DashboardSection

EMPTY_DASHBOARD_MESSAGE = "You have no saved bookmarks"

_MENU_ITEM_CONTENT = (
    '<span id="admin-bookmark-{{ row.id }}" data-admin-bookmark="{{ row.id }}" '
    'class="admin-bookmarks-icon bookmarked admin-bookmarks-menu-item"></span>{{ row.label }}'
)

_DASHBOARD_TEMPLATE = """\
{%- if sections -%}
<table width="100%">
{%- for section in sections %}
{%- if not loop.first %}
<tr><td><br /></td></tr>
{%- endif %}
<tr><td colspan="3"><h4>{{ section.label }}</h4></td></tr>
{%- for row in section.rows %}
<tr><td>{% include "menu_item_content.html" %}</td>\
<td><a href="{{ row.edit_url }}">Edit</a></td>\
<td><a href="{{ row.view_url }}">View</a></td></tr>
{%- endfor %}
{%- endfor %}
</table>
{%- else -%}
<p>{{ empty_message }}</p>
{%- endif -%}
"""

_ADMIN_MENU_TEMPLATE = """\
<ul id="adminmenu">
{%- for entry in entries %}
<li class="menu-top{% if entry.is_open %} wp-menu-open{% endif %}" \
id="menu-{{ entry.content_type }}">\
<a href="{{ entry.listing_url }}" class="menu-top">{{ entry.label }}</a>
<ul class="wp-submenu">
<li><a href="{{ entry.listing_url }}">All {{ entry.label }}</a></li>
{%- if entry.menu %}
<li><a href="{{ entry.bookmarks_url }}">{{ entry.menu.label }}</a>
<ul class="admin-bookmarks-submenu">
{%- for row in entry.menu.items %}
<li><a href="{{ row.url }}">{% include "menu_item_content.html" %}</a></li>
{%- endfor %}
</ul>
</li>
{%- endif %}
</ul>
</li>
{%- endfor %}
</ul>
"""

_jinja_env = Environment(
    loader=DictLoader({
        "menu_item_content.html": _MENU_ITEM_CONTENT,
        "dashboard_widget.html": _DASHBOARD_TEMPLATE,
        "admin_menu.html": _ADMIN_MENU_TEMPLATE,
    }),
    undefined=StrictUndefined,
    autoescape=True,
)


@dataclass
class AdminMenuSection:
    """One top-level admin menu section: a content type listing and its bookmarks."""

    content_type: str
    label: str
    listing_url: str
    bookmarks_url: str
    menu: AdminMenu | None = None
    is_open: bool = False


def render_dashboard_widget(sections: list[DashboardSection]) -> str:
    """Render the "My Bookmarks" dashboard widget, or its empty state."""
    template = _jinja_env.get_template("dashboard_widget.html")
    return template.render(sections=sections, empty_message=EMPTY_DASHBOARD_MESSAGE)


def render_admin_menu(entries: list[AdminMenuSection]) -> str:
    """
    Render the admin menu.

    Each section with bookmarks gets a "Bookmarks" submenu link pointing at the
    filtered listing; the synchronizer finds it by that href.
    """
    template = _jinja_env.get_template("admin_menu.html")
    return template.render(entries=entries)
