"""Shared exceptions for service layer operations."""


class UserNotFoundError(Exception):
    """Raised when a bookmark operation targets a user id that does not exist."""

    def __init__(self, user_id: int) -> None:
        self.user_id = user_id
        super().__init__(f"User not found: {user_id}")


class InvalidNonceError(Exception):
    """
    Raised when a request's anti-forgery token is missing, expired or forged.

    Fatal for the request: nothing is mutated once this is raised.
    """

    def __init__(self, message: str = "Invalid Admin Bookmark request!") -> None:
        super().__init__(message)


class UnknownActionError(Exception):
    """Raised when an admin-ajax request names an action nobody handles."""

    def __init__(self, action: str) -> None:
        self.action = action
        super().__init__(f"Unknown action: {action!r}")
