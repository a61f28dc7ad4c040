"""SQLAlchemy ORM models."""

from ebookshare.models.base import Base
from ebookshare.models.ebook import Ebook
from ebookshare.models.user import ROLE_NAMES, Role, User, user_roles, user_uploaded_books

__all__ = [
    "Base",
    "Ebook",
    "ROLE_NAMES",
    "Role",
    "User",
    "user_roles",
    "user_uploaded_books",
]
