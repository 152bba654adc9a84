"""
SQL module for query template generation and rendering.

Templates mark identifiers with ``??`` and values with ``?``; the builders in
``operations`` produce them and ``core.placeholders`` renders them with
MySQL escaping.
"""

from .core.identifier import qualify_table, quote_identifier
from .core.placeholders import escape_identifier, escape_value, format_sql
from .core.statement import Statement
from .operations import (
    delete_by,
    insert_one,
    select_all,
    select_by,
    select_by_ids,
    select_where,
)

__all__ = [
    "quote_identifier",
    "qualify_table",
    "escape_identifier",
    "escape_value",
    "format_sql",
    "Statement",
    "delete_by",
    "insert_one",
    "select_all",
    "select_by",
    "select_by_ids",
    "select_where",
]
