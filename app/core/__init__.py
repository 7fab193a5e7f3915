"""Core app configuration, database and security components."""

from app.core.config import Settings, get_settings
from app.core.database import get_db, transaction

__all__ = ["Settings", "get_settings", "get_db", "transaction"]
