"""SQL DELETE statement builders."""

from typing import Any

from ..core.statement import Statement
from .select import column_condition


def delete_by(database: str, table: str, column: str, value: Any) -> Statement:
    """
    Build a DELETE matching one column against a value or a list of values.

    Examples:
        >>> delete_by("shop", "orders", "id", [4, 5]).sql
        'DELETE FROM ??.?? WHERE ?? IN (?)'
        >>> delete_by("shop", "orders", "id", 4).sql
        'DELETE FROM ??.?? WHERE ?? = ?'
    """
    return Statement(
        sql=f"DELETE FROM ??.?? WHERE {column_condition(value)}",
        params=[database, table, column, value],
    )
