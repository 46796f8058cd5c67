"""Admin AJAX endpoint (form-encoded, dispatched on the `action` field)."""
from fastapi import APIRouter, Depends, Form
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import (
    get_async_session,
    get_current_user,
    get_request_cache,
    get_settings,
)
from core.config import Settings
from core.nonce import TOGGLE_ACTION, verify_nonce
from core.request_cache import RequestCache
from models.user import User
from schemas.admin_bookmark import (
    TOGGLE_ACTION_NAME,
    ToggleAddedResponse,
    ToggleRemovedResponse,
)
from services import toggle_service
from services.exceptions import InvalidNonceError, UnknownActionError

router = APIRouter(tags=["ajax"])


@router.post(
    "/admin-ajax",
    response_model=ToggleAddedResponse | ToggleRemovedResponse,
)
async def admin_ajax(
    action: str = Form(default=""),
    post_id: str | None = Form(default=None),
    nonce: str | None = Form(default=None),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
    cache: RequestCache = Depends(get_request_cache),
    settings: Settings = Depends(get_settings),
) -> ToggleAddedResponse | ToggleRemovedResponse:
    """
    Handle an admin AJAX request.

    Only `toggle_admin_bookmark` is handled: the nonce is checked first (an invalid
    one ends the request with 403 and nothing changes), then the bookmark of
    `post_id` is flipped for the current user.

    - Added: `{"itemId", "removed": false, "item": {...} | null}`
    - Removed: `{"itemId", "removed": true, "groupHandle", "content_type", "groupHref"}`
    """
    if action != TOGGLE_ACTION_NAME:
        raise UnknownActionError(action)

    if not verify_nonce(settings, nonce, TOGGLE_ACTION, current_user.id):
        raise InvalidNonceError

    item_id = toggle_service.parse_item_id(post_id)
    return await toggle_service.toggle_and_describe(
        db, current_user, item_id, cache, settings,
    )
