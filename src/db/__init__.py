"""Database layer: PostgreSQL models, repositories and session management."""

from src.db.config import DatabaseSettings, get_db_settings
from src.db.database import Base, get_db

__all__ = [
    "Base",
    "get_db",
    "DatabaseSettings",
    "get_db_settings",
]
