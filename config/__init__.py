"""
Config Package - Application configuration, database and logging setup.
"""

from config.settings import Settings, get_settings
from config.database import SessionLocal, Base, get_db, get_engine, get_sessionmaker, create_all
from config.log_setup import configure_logging

__all__ = [
    # Settings
    "Settings",
    "get_settings",
    # Database
    "SessionLocal",
    "Base",
    "get_db",
    "get_sessionmaker",
    "get_engine",
    "create_all",
    # Logging
    "configure_logging",
]
