"""Core app configuration, database, errors and security."""

from bookstore.core.config import get_settings, settings
from bookstore.core.database import get_db

__all__ = ["get_settings", "settings", "get_db"]
