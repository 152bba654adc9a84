"""
Types shared between the query builder and driver connections.

A driver connection is anything with a callback-style ``query`` method. It
receives a ``?`` / ``??`` template plus positional arguments and later invokes
the callback exactly once with ``(error, None)`` or ``(None, result)``, where
``result`` is a list of row dictionaries for statements that return rows and
a WriteResult otherwise.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Protocol, Sequence

import pymysql

Row = Dict[str, Any]

QueryCallback = Callable[[Optional[BaseException], Any], None]


class Connection(Protocol):
    """Protocol for driver connections accepted by QueryBuilder."""

    def query(self, sql: str, args: Sequence[Any], callback: QueryCallback) -> None: ...


@dataclass(frozen=True)
class WriteResult:
    """
    Outcome of a statement that returns no rows.

    Attributes:
        insert_id: Auto-generated identifier of the (first) inserted row, 0 if none
        affected_rows: Number of rows inserted, updated or deleted
    """

    insert_id: int
    affected_rows: int


class QueryError(Exception):
    """Raised when the driver reports a failure.

    Only the driver's message text is kept; error codes and other structured
    fields are dropped, so every failure looks the same to callers.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


def error_message(error: Any) -> str:
    """
    Extract the message text from a driver error.

    PyMySQL errors carry ``(code, message)`` in ``args``; only the message is
    returned. Strings are returned unchanged.

    Examples:
        >>> error_message(pymysql.err.ProgrammingError(1146, "Table 'shop.x' doesn't exist"))
        "Table 'shop.x' doesn't exist"
        >>> error_message(RuntimeError("connection lost"))
        'connection lost'
    """
    if isinstance(error, str):
        return error
    if isinstance(error, QueryError):
        return error.message
    if isinstance(error, pymysql.MySQLError) and len(error.args) >= 2:
        return str(error.args[1])
    return str(error)
