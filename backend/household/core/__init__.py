# Household API Core Module
from .config import Settings, get_settings, settings
from .database import Base, Database, get_database, get_db
from .logging import get_logger, setup_logging

__all__ = [
    "settings",
    "Settings",
    "get_settings",
    "setup_logging",
    "get_logger",
    "Base",
    "Database",
    "get_database",
    "get_db",
]
