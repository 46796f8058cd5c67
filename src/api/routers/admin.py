"""Admin navigation endpoints: menu, admin bar, dashboard widget, client config."""
from fastapi import APIRouter, Depends, Query
from fastapi.responses import HTMLResponse
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import (
    get_async_session,
    get_current_user,
    get_request_cache,
    get_settings,
)
from core.config import Settings
from core.request_cache import RequestCache
from models.user import User
from schemas.admin_bookmark import (
    AdminBarNode,
    AdminMenu,
    ClientConfig,
    DashboardSection,
)
from services import menu_projection, template_renderer
from services.bookmark_grouper import compute_groups

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/menu", response_model=list[AdminMenu])
async def get_admin_menu(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
    cache: RequestCache = Depends(get_request_cache),
    settings: Settings = Depends(get_settings),
) -> list[AdminMenu]:
    """
    Get the bookmark nodes of the primary admin navigation.

    One node per content type with bookmarks the current user can edit.
    """
    return await menu_projection.get_admin_menus(db, current_user, cache, settings)


@router.get("/menu/html", response_class=HTMLResponse)
async def get_admin_menu_html(
    screen: str | None = Query(default=None, description="Handle of the open listing"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
    cache: RequestCache = Depends(get_request_cache),
    settings: Settings = Depends(get_settings),
) -> HTMLResponse:
    """Render the admin menu with bookmark submenus."""
    sections = await menu_projection.get_admin_menu_sections(
        db, current_user, cache, settings, current_handle=screen,
    )
    return HTMLResponse(template_renderer.render_admin_menu(sections))


@router.get("/admin-bar", response_model=list[AdminBarNode])
async def get_admin_bar(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
    cache: RequestCache = Depends(get_request_cache),
    settings: Settings = Depends(get_settings),
) -> list[AdminBarNode]:
    """Get the admin-bar bookmarks menu as parent-linked nodes. Empty when nothing to show."""
    groups = await compute_groups(db, current_user.id, cache, settings)
    return menu_projection.build_admin_bar(groups, current_user, settings)


@router.get("/dashboard", response_model=list[DashboardSection])
async def get_dashboard(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
    cache: RequestCache = Depends(get_request_cache),
    settings: Settings = Depends(get_settings),
) -> list[DashboardSection]:
    """Get the "My Bookmarks" dashboard widget data, one section per content type."""
    groups = await compute_groups(db, current_user.id, cache, settings)
    return menu_projection.build_dashboard_sections(groups, current_user, settings)


@router.get("/dashboard/html", response_class=HTMLResponse)
async def get_dashboard_html(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
    cache: RequestCache = Depends(get_request_cache),
    settings: Settings = Depends(get_settings),
) -> HTMLResponse:
    """Render the "My Bookmarks" dashboard widget."""
    groups = await compute_groups(db, current_user.id, cache, settings)
    sections = menu_projection.build_dashboard_sections(groups, current_user, settings)
    return HTMLResponse(template_renderer.render_dashboard_widget(sections))


@router.get("/bookmarks/config", response_model=ClientConfig)
async def get_client_config(
    screen: str | None = Query(default=None, description="Handle of the open listing"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
    cache: RequestCache = Depends(get_request_cache),
    settings: Settings = Depends(get_settings),
) -> ClientConfig:
    """
    Get the configuration object for the client-side menu synchronizer.

    Carries a fresh toggle nonce, the untitled label pattern, the open listing
    handle and the full initial menu data.
    """
    groups = await compute_groups(db, current_user.id, cache, settings)
    return menu_projection.build_client_config(
        groups, current_user, settings, current_handle=screen,
    )
