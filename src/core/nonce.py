"""
Anti-forgery tokens (nonces) for admin form and AJAX requests.

A nonce is an HMAC over (tick, action, user id). The tick advances every half
lifetime, and a nonce from the current or previous tick is accepted, so a nonce
stays valid for between half and the full configured lifetime.
"""
import hashlib
import hmac
import math
import time

from core.config import Settings

NONCE_LENGTH = 10

# Action names nonces are scoped to
TOGGLE_ACTION = "admin-bookmarks"
QUICK_EDIT_ACTION = "admin_bookmarks_quick_edit"


def _tick(settings: Settings, now: float | None = None) -> int:
    now = time.time() if now is None else now
    return math.ceil(now / (settings.nonce_lifetime_seconds / 2))


def _digest(settings: Settings, tick: int, action: str, user_id: int) -> str:
    message = f"{tick}|{action}|{user_id}".encode()
    digest = hmac.new(settings.nonce_secret.encode(), message, hashlib.sha256).hexdigest()
    return digest[-NONCE_LENGTH:]


def create_nonce(
    settings: Settings,
    action: str,
    user_id: int,
    now: float | None = None,
) -> str:
    """Create a nonce for the given action and user."""
    return _digest(settings, _tick(settings, now), action, user_id)


def verify_nonce(
    settings: Settings,
    nonce: str | None,
    action: str,
    user_id: int,
    now: float | None = None,
) -> bool:
    """
    Check a nonce against the current and previous tick.

    Returns False for missing, expired, or forged nonces and for nonces created
    for another action or user.
    """
    if not nonce:
        return False
    tick = _tick(settings, now)
    # Compared as bytes: str comparison rejects non-ASCII input with TypeError
    submitted = nonce.encode()
    return any(
        hmac.compare_digest(submitted, _digest(settings, candidate, action, user_id).encode())
        for candidate in (tick, tick - 1)
    )
