"""Configuration management for table-query.

Usage:
    >>> from table_query.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.mysql_database)
"""

from table_query.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
