"""User model for storing authenticated users and their bookmark sets."""
from enum import StrEnum
from typing import TYPE_CHECKING

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from models.content_item import ContentItem


class UserRole(StrEnum):
    """Admin role of a user. Decides which content items the user may edit."""

    ADMINISTRATOR = "administrator"
    EDITOR = "editor"
    AUTHOR = "author"
    CONTRIBUTOR = "contributor"
    SUBSCRIBER = "subscriber"


class User(Base, TimestampMixin):
    """
    User model - stores Auth0 user info and the user's admin bookmarks.

    Bookmark Set Format:
    --------------------
    admin_bookmarks is a JSON object keyed by the stringified item id, mapping each
    key to the integer id itself:

        {"42": 42, "7": 7}

    Keys keep membership unique and checks O(1). Key order is insertion order and
    is used as the ordering of filtered listings, which is why the column is plain
    JSON and not JSONB (JSONB reorders keys). NULL means the user has never
    bookmarked anything and reads as an empty set.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)
    auth0_id: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        index=True,
        comment="Auth0 'sub' claim - unique identifier from Auth0",
    )
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    role: Mapped[str] = mapped_column(
        String(20),
        default=UserRole.SUBSCRIBER.value,
        server_default=UserRole.SUBSCRIBER.value,
    )
    admin_bookmarks: Mapped[dict | None] = mapped_column(
        JSON(none_as_null=True),
        nullable=True,
        comment="Bookmarked content item ids keyed by str(id). See model docstring.",
    )

    content_items: Mapped[list["ContentItem"]] = relationship(back_populates="author")
