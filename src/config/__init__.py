"""
Configuration package.
"""

from .database import (
    create_engine,
    get_async_session_factory,
    get_database_url,
    get_db_session,
    get_default_session_factory,
)
from .logging import configure_logging, get_logger
from .settings import Settings, settings

__all__ = [
    "Settings",
    "settings",

    # Database
    "create_engine",
    "get_async_session_factory",
    "get_database_url",
    "get_db_session",
    "get_default_session_factory",

    # Logging
    "configure_logging",
    "get_logger",
]
