"""HTTP client for the admin bookmark toggle, bound to the list-table star controls."""
import logging

import httpx
from bs4 import Tag
from pydantic import TypeAdapter

from admin_client.menu_sync import add_class, remove_class
from schemas.admin_bookmark import (
    TOGGLE_ACTION_NAME,
    ToggleAddedResponse,
    ToggleResponse,
)

logger = logging.getLogger(__name__)

AJAX_PATH = "/admin-ajax"
BUSY_CLASS = "is-busy"
BOOKMARKED_CLASS = "bookmarked"

_toggle_response = TypeAdapter(ToggleResponse)


def _get_headers(token: str | None) -> dict[str, str]:
    headers = {"X-Requested-With": "XMLHttpRequest"}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


async def post_toggle(
    client: httpx.AsyncClient,
    item_id: int | str,
    nonce: str,
    token: str | None = None,
) -> ToggleResponse:
    """
    Send one toggle request and parse the result.

    Raises:
        httpx.HTTPError: On transport errors and non-2xx responses.
        ValueError: If the response body is not a toggle result.
    """
    response = await client.post(
        AJAX_PATH,
        data={
            "action": TOGGLE_ACTION_NAME,
            "post_id": str(item_id),
            "nonce": nonce,
        },
        headers=_get_headers(token),
    )
    response.raise_for_status()
    return _toggle_response.validate_python(response.json())


class AdminBookmarksClient:
    """
    Drives the bookmark star controls of a list table.

    A control is an `<a class="admin-bookmarks-icon" data-post_id="...">` tag.
    Requests are sent once: no retry, no timeout beyond the httpx client's own.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        nonce: str,
        token: str | None = None,
    ) -> None:
        self.client = client
        self.nonce = nonce
        self.token = token

    async def toggle(self, control: Tag) -> ToggleResponse | None:
        """
        Toggle the bookmark behind a star control.

        The control is marked busy while the request runs. On success its
        `bookmarked` class follows the new state and the parsed result is returned.
        On failure the error is logged, the control gets its original classes
        back, and None is returned; local menu data must be left alone.
        """
        original_classes = list(control.get("class") or [])
        add_class(control, BUSY_CLASS)
        control["aria-busy"] = "true"

        try:
            result = await post_toggle(
                self.client, control.get("data-post_id", "0"), self.nonce, self.token,
            )
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Bookmark toggle failed for %s: %s", control.get("data-post_id"), e)
            self._restore(control, original_classes)
            return None

        self._restore(control, original_classes)
        if isinstance(result, ToggleAddedResponse):
            add_class(control, BOOKMARKED_CLASS)
        else:
            remove_class(control, BOOKMARKED_CLASS)
        return result

    @staticmethod
    def _restore(control: Tag, classes: list[str]) -> None:
        if classes:
            control["class"] = classes
        elif control.has_attr("class"):
            del control["class"]
        if control.has_attr("aria-busy"):
            del control["aria-busy"]
