"""SQLAlchemy models."""
from models.base import Base, TimestampMixin
from models.content_item import ContentItem
from models.content_type import ContentType
from models.user import User, UserRole

__all__ = ["Base", "ContentItem", "ContentType", "TimestampMixin", "User", "UserRole"]
