"""Database connectors."""

from .mysql_connector import MySQLConnector, PyMySQLCallbackConnection

__all__ = ["MySQLConnector", "PyMySQLCallbackConnection"]
