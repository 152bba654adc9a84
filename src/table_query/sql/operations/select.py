"""
SQL SELECT statement builders.

Every builder emits ``??`` placeholders for the database, table and column
names and ``?`` placeholders for values, with arguments in matching order.
Callers are responsible for short-circuiting empty IN-lists before building.
"""

from typing import Any, List, Mapping, Sequence

from ..core.placeholders import is_value_list
from ..core.statement import Statement

SELECT_FROM = "SELECT * FROM ??.??"

# Upper bound on rows returned by select_all; there is no pagination.
SELECT_ALL_LIMIT = 100

# Column select_by_ids matches against. Every target table must have it.
ID_COLUMN = "id"


def column_condition(value: Any) -> str:
    """Return the condition for one column: ``IN`` for lists, ``=`` otherwise."""
    return "?? IN (?)" if is_value_list(value) else "?? = ?"


def select_one_by(database: str, table: str, column: str, value: Any) -> Statement:
    """
    Build a SELECT matching one column by equality.

    The value is always bound to a single ``?``, whatever its type.

    Examples:
        >>> select_one_by("shop", "orders", "id", 42).sql
        'SELECT * FROM ??.?? WHERE ?? = ?'
    """
    return Statement(
        sql=f"{SELECT_FROM} WHERE ?? = ?",
        params=[database, table, column, value],
    )


def select_by(database: str, table: str, column: str, value: Any) -> Statement:
    """
    Build a SELECT matching one column against a value or a list of values.

    Examples:
        >>> select_by("shop", "orders", "status", "open").sql
        'SELECT * FROM ??.?? WHERE ?? = ?'
        >>> select_by("shop", "orders", "id", [1, 2]).sql
        'SELECT * FROM ??.?? WHERE ?? IN (?)'
    """
    return Statement(
        sql=f"{SELECT_FROM} WHERE {column_condition(value)}",
        params=[database, table, column, value],
    )


def select_all(database: str, table: str) -> Statement:
    """Build a SELECT of the first SELECT_ALL_LIMIT rows of a table."""
    return Statement(
        sql=f"{SELECT_FROM} LIMIT {SELECT_ALL_LIMIT}",
        params=[database, table],
    )


def select_where(
    database: str,
    table: str,
    fields: Mapping[str, Any],
    join_by_or: bool = False,
) -> Statement:
    """
    Build a SELECT filtering on several columns.

    Each entry of ``fields`` becomes one parenthesized condition, in the
    mapping's iteration order. Conditions are joined uniformly by AND, or by
    OR when ``join_by_or`` is set. An empty mapping yields no WHERE clause.

    Args:
        database: Database name
        table: Table name
        fields: Column to value (or list of values) mapping
        join_by_or: Join conditions with OR instead of AND

    Returns:
        Statement for the filtered SELECT

    Examples:
        >>> select_where("shop", "orders", {"a": 1, "b": [2, 3]}).sql
        'SELECT * FROM ??.?? WHERE (?? = ?) AND (?? IN (?))'
        >>> select_where("shop", "orders", {}).sql
        'SELECT * FROM ??.??'
    """
    conditions: List[str] = []
    params: List[Any] = [database, table]

    for column, value in fields.items():
        conditions.append(f"({column_condition(value)})")
        params.extend([column, value])

    sql = SELECT_FROM
    if conditions:
        joiner = " OR " if join_by_or else " AND "
        sql = f"{sql} WHERE {joiner.join(conditions)}"

    return Statement(sql=sql, params=params)


def select_by_ids(database: str, table: str, ids: Sequence[Any]) -> Statement:
    """Build a SELECT of the rows whose ``id`` column is in ``ids``."""
    return Statement(
        sql=f"{SELECT_FROM} WHERE {ID_COLUMN} IN (?)",
        params=[database, table, list(ids)],
    )
