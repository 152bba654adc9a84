"""
SQL INSERT statement builders.

Inserts use MySQL's ``INSERT ... SET`` form so the whole column mapping travels
as a single ``?`` argument and is expanded into assignments on render.
"""

from typing import Any, Mapping

from ..core.statement import Statement


def insert_one(database: str, table: str, fields: Mapping[str, Any]) -> Statement:
    """
    Build an INSERT of a single row.

    An empty ``fields`` mapping yields a bare ``INSERT INTO`` with no SET
    clause; whether that is accepted is left to the server.

    Examples:
        >>> insert_one("shop", "orders", {"sku": "A-1"})
        Statement(sql='INSERT INTO ??.?? SET ?', params=['shop', 'orders', {'sku': 'A-1'}])
        >>> insert_one("shop", "orders", {}).sql
        'INSERT INTO ??.??'
    """
    if not fields:
        return Statement(sql="INSERT INTO ??.??", params=[database, table])

    return Statement(
        sql="INSERT INTO ??.?? SET ?",
        params=[database, table, dict(fields)],
    )
