"""Tests for anti-forgery nonces."""
from collections.abc import Callable

from core.config import Settings
from core.nonce import NONCE_LENGTH, QUICK_EDIT_ACTION, TOGGLE_ACTION, create_nonce, verify_nonce

NOW = 1_700_000_000.0
DAY = 86_400


def test__create_nonce__fixed_length_and_stable_within_tick(settings: Settings) -> None:
    """A nonce is a short token that does not change within one tick."""
    nonce = create_nonce(settings, TOGGLE_ACTION, 1, now=NOW)
    assert len(nonce) == NONCE_LENGTH
    assert create_nonce(settings, TOGGLE_ACTION, 1, now=NOW + 1) == nonce


def test__verify_nonce__accepts_fresh_nonce(settings: Settings) -> None:
    """A nonce verifies for the action and user it was made for."""
    nonce = create_nonce(settings, TOGGLE_ACTION, 1, now=NOW)
    assert verify_nonce(settings, nonce, TOGGLE_ACTION, 1, now=NOW)


def test__verify_nonce__accepts_previous_tick(settings: Settings) -> None:
    """A nonce stays valid through the following half lifetime."""
    nonce = create_nonce(settings, TOGGLE_ACTION, 1, now=NOW)
    assert verify_nonce(settings, nonce, TOGGLE_ACTION, 1, now=NOW + DAY / 2)


def test__verify_nonce__rejects_expired(settings: Settings) -> None:
    """A nonce older than the full lifetime is rejected."""
    nonce = create_nonce(settings, TOGGLE_ACTION, 1, now=NOW)
    assert not verify_nonce(settings, nonce, TOGGLE_ACTION, 1, now=NOW + DAY + 1)


def test__verify_nonce__scoped_to_action_and_user(settings: Settings) -> None:
    """Nonces do not transfer between actions or users."""
    nonce = create_nonce(settings, TOGGLE_ACTION, 1, now=NOW)
    assert not verify_nonce(settings, nonce, QUICK_EDIT_ACTION, 1, now=NOW)
    assert not verify_nonce(settings, nonce, TOGGLE_ACTION, 2, now=NOW)


def test__verify_nonce__rejects_missing_and_forged(settings: Settings) -> None:
    """Missing, empty and made-up nonces are rejected."""
    assert not verify_nonce(settings, None, TOGGLE_ACTION, 1, now=NOW)
    assert not verify_nonce(settings, "", TOGGLE_ACTION, 1, now=NOW)
    assert not verify_nonce(settings, "0123456789", TOGGLE_ACTION, 1, now=NOW)


def test__verify_nonce__depends_on_secret(
    settings: Settings,
    settings_factory: Callable[..., Settings],
) -> None:
    """A nonce made with another secret does not verify."""
    other = settings_factory(NONCE_SECRET="another-secret")
    nonce = create_nonce(other, TOGGLE_ACTION, 1, now=NOW)
    assert not verify_nonce(settings, nonce, TOGGLE_ACTION, 1, now=NOW)


def test__verify_nonce__rejects_non_ascii(settings: Settings) -> None:
    """Tokens with non-ASCII characters are rejected rather than raising."""
    nonce = create_nonce(settings, TOGGLE_ACTION, 1, now=NOW)
    assert not verify_nonce(settings, "éé", TOGGLE_ACTION, 1, now=NOW)
    assert not verify_nonce(settings, nonce[:-1] + "é", TOGGLE_ACTION, 1, now=NOW)
