"""Request-scoped memoization for derived bookmark data."""
from collections.abc import Awaitable, Callable
from typing import Any

from fastapi import Request


class RequestCache:
    """
    Memo of values computed while handling one request.

    Values are never shared across requests. Mutating operations call invalidate()
    so later reads in the same request recompute from the database.
    """

    def __init__(self) -> None:
        self._values: dict[str, Any] = {}

    def __contains__(self, key: str) -> bool:
        return key in self._values

    def get(self, key: str) -> Any | None:
        """Return the cached value for key, or None."""
        return self._values.get(key)

    def set(self, key: str, value: Any) -> None:
        """Store value under key."""
        self._values[key] = value

    async def get_or_compute(self, key: str, compute: Callable[[], Awaitable[Any]]) -> Any:
        """Return the cached value for key, computing and storing it on a miss."""
        if key not in self._values:
            self._values[key] = await compute()
        return self._values[key]

    def invalidate(self, key: str | None = None) -> None:
        """Drop one key, or everything when key is None."""
        if key is None:
            self._values.clear()
        else:
            self._values.pop(key, None)


def get_request_cache(request: Request) -> RequestCache:
    """
    Dependency returning the cache bound to the current request.

    Stored on request.state so every dependency of one request sees the same cache.
    """
    cache = getattr(request.state, "bookmark_cache", None)
    if cache is None:
        cache = RequestCache()
        request.state.bookmark_cache = cache
    return cache
