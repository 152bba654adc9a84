"""
SQL identifier handling utilities.

Provides MySQL backtick quoting and qualification of SQL identifiers
(database, table and column names) so that they are always emitted as
identifiers and never as literal values.
"""

from typing import Optional


def quote_identifier(name: str, qualified: bool = False) -> str:
    """
    Quote a MySQL identifier with backticks.

    Args:
        name: The identifier to quote
        qualified: If True, dots split the name into separately quoted parts

    Returns:
        Properly quoted identifier

    Examples:
        >>> quote_identifier("users")
        '`users`'
        >>> quote_identifier("col`name")
        '`col``name`'
        >>> quote_identifier("shop.orders", qualified=True)
        '`shop`.`orders`'
    """
    if qualified and "." in name:
        return ".".join(quote_identifier(part) for part in name.split("."))

    escaped = name.replace("`", "``")
    return f"`{escaped}`"


def qualify_table(table: str, schema: Optional[str] = None) -> str:
    """
    Create a fully qualified table name with an optional database prefix.

    Both parts are quoted.

    Examples:
        >>> qualify_table("orders", schema="shop")
        '`shop`.`orders`'
        >>> qualify_table("orders")
        '`orders`'
    """
    quoted_table = quote_identifier(table)
    if schema:
        return f"{quote_identifier(schema)}.{quoted_table}"
    return quoted_table
