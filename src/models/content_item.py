"""ContentItem model for the posts, pages and custom items users can bookmark."""
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, ForeignKey, String, false
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from models.user import User


class ContentItem(Base, TimestampMixin):
    """An addressable unit of content, typed by content_type."""

    __tablename__ = "content_items"

    id: Mapped[int] = mapped_column(primary_key=True)
    content_type: Mapped[str] = mapped_column(
        ForeignKey("content_types.name"),
        index=True,
    )
    title: Mapped[str] = mapped_column(String(500), default="", server_default="")
    status: Mapped[str] = mapped_column(String(20), default="draft", server_default="draft")
    author_id: Mapped[int | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    is_sticky: Mapped[bool] = mapped_column(Boolean, default=False, server_default=false())
    bookmark_title: Mapped[str | None] = mapped_column(
        String(500),
        nullable=True,
        comment="Custom label used for this item in bookmark menus",
    )

    author: Mapped["User | None"] = relationship(back_populates="content_items")
