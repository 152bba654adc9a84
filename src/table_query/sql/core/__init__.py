"""Core SQL utilities package."""

from .identifier import qualify_table, quote_identifier
from .placeholders import escape_identifier, escape_value, format_sql, is_value_list
from .statement import Statement

__all__ = [
    "quote_identifier",
    "qualify_table",
    "escape_identifier",
    "escape_value",
    "format_sql",
    "is_value_list",
    "Statement",
]
