"""Content listing endpoints with bookmark integration."""
from fastapi import APIRouter, Depends, Form, HTTPException, Query
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
from schemas.admin_bookmark import ListTableResponse, QuickEditResponse
from services import content_service, menu_projection, quick_edit_service

router = APIRouter(prefix="/admin/content", tags=["content"])


@router.get("/{content_type}", response_model=ListTableResponse)
async def list_content(
    content_type: str,
    admin_bookmarks: int = Query(
        default=0,
        description="1 restricts the listing to bookmarked items in bookmark order",
    ),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
    cache: RequestCache = Depends(get_request_cache),
    settings: Settings = Depends(get_settings),
) -> ListTableResponse:
    """
    Get the list table of a content type.

    For supported types the bookmark column follows the checkbox column, each row
    carries its bookmark state and quick-edit data, and a "Bookmarks (n)" view is
    offered. `?admin_bookmarks=1` lists only bookmarked items.
    """
    content_types = await content_service.get_content_types(db)
    if content_type not in content_types:
        raise HTTPException(status_code=404, detail="Content type not found")

    return await menu_projection.get_list_table(
        db,
        current_user,
        content_type,
        bookmark_filter=admin_bookmarks == 1,
        cache=cache,
        settings=settings,
    )


@router.post("/{item_id}/quick-edit", response_model=QuickEditResponse)
async def quick_edit(
    item_id: int,
    admin_bookmark_title: str | None = Form(default=None),
    admin_bookmarks_quick_edit_nonce: str | None = Form(default=None),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
    settings: Settings = Depends(get_settings),
) -> QuickEditResponse:
    """
    Save the custom bookmark title from quick edit.

    Requests with a bad nonce, without edit permission, for unsupported types or
    without the title field are ignored and answer `saved: false`. An empty title
    clears the override.
    """
    if await content_service.get_item(db, item_id) is None:
        raise HTTPException(status_code=404, detail="Content item not found")

    saved, bookmark_title = await quick_edit_service.save_bookmark_title(
        db,
        current_user,
        item_id,
        admin_bookmark_title,
        admin_bookmarks_quick_edit_nonce,
        settings,
    )
    return QuickEditResponse(saved=saved, bookmark_title=bookmark_title)
