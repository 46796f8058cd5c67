"""Service layer for the quick-edit custom bookmark title."""
import logging
import re

from sqlalchemy.ext.asyncio import AsyncSession

from core.config import Settings
from core.nonce import QUICK_EDIT_ACTION, verify_nonce
from models.user import User
from services import content_service

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")
_TAGS = re.compile(r"<[^>]*>")


def sanitize_title(value: str) -> str:
    """Strip markup, collapse whitespace and trim a submitted title."""
    return _WHITESPACE.sub(" ", _TAGS.sub("", value)).strip()


async def save_bookmark_title(
    db: AsyncSession,
    user: User,
    item_id: int,
    title: str | None,
    nonce: str | None,
    settings: Settings,
) -> tuple[bool, str | None]:
    """
    Save the custom bookmark title submitted from quick edit.

    The request is ignored (nothing saved) when the nonce is invalid, the item does
    not exist, the user cannot edit it, its type is not supported, or no title
    field was submitted. An empty title removes the override.

    Returns:
        Tuple of (saved, bookmark_title after the call).

    Note: Does not commit. Caller (session generator) handles commit at request end.
    """
    if not verify_nonce(settings, nonce, QUICK_EDIT_ACTION, user.id):
        logger.info("quick_edit_ignored reason=nonce user_id=%s item_id=%s", user.id, item_id)
        return False, None

    item = await content_service.get_item(db, item_id)
    if item is None:
        return False, None
    if not content_service.can_edit_item(user, item):
        logger.info("quick_edit_ignored reason=permission user_id=%s item_id=%s", user.id, item_id)
        return False, item.bookmark_title
    if not await content_service.is_supported_content_type(db, settings, item.content_type):
        return False, item.bookmark_title
    if title is None:
        return False, item.bookmark_title

    cleaned = sanitize_title(title)
    item.bookmark_title = cleaned or None
    await db.flush()
    return True, item.bookmark_title
