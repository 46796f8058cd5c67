"""ContentType model for registered content types (post, page, custom types)."""
from sqlalchemy import Boolean, String, true
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base


class ContentType(Base):
    """A registered content type. Items reference it by machine name."""

    __tablename__ = "content_types"

    name: Mapped[str] = mapped_column(
        String(20),
        primary_key=True,
        comment="Machine name, e.g. 'post', 'page', 'product_review'",
    )
    label: Mapped[str | None] = mapped_column(
        String(100),
        nullable=True,
        comment="Plural display name. Falls back to a humanized machine name.",
    )
    show_ui: Mapped[bool] = mapped_column(Boolean, default=True, server_default=true())
