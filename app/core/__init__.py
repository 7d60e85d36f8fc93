"""Core app configuration, database, errors and security."""

from app.core.config import get_settings, is_database_configured, settings
from app.core.database import get_db

__all__ = ["get_settings", "is_database_configured", "settings", "get_db"]
