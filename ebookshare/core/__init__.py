"""Core app configuration, database, security and errors."""

from ebookshare.core.config import Settings, get_settings
from ebookshare.core.database import get_db

__all__ = ["Settings", "get_settings", "get_db"]
