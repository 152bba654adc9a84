"""
Typed query builder for single-table operations.

QueryBuilder turns high-level table operations into ``?`` / ``??`` SQL
templates, submits them through a caller-supplied connection and awaits the
connection's callback. It owns no connection and keeps no state beyond the
database name, so one builder can be shared freely.

The table registry is a typing convention only: parameterize the builder with
a TypedDict mapping table names to row TypedDicts to document which tables
and columns a codebase uses. Nothing is checked at runtime.

Usage:
    >>> class Tables(TypedDict):
    ...     orders: OrderRow
    ...     customers: CustomerRow
    >>> db: QueryBuilder[Tables] = create_query_builder("shop")
    >>> order = await db.get_one_by(conn, "orders", "id", 42)
    >>> created = await db.and_get(conn, "orders", db.create_one(conn, "orders", {"sku": "A-1"}))
"""

import asyncio
import inspect
from typing import (
    Any,
    Awaitable,
    Generic,
    List,
    Mapping,
    Optional,
    Sequence,
    TypeVar,
    Union,
)

from table_query.config import get_settings
from table_query.sql.core.identifier import qualify_table
from table_query.sql.core.placeholders import is_value_list
from table_query.sql.core.statement import Statement
from table_query.sql.operations import (
    delete_by,
    insert_one,
    select_all,
    select_by,
    select_by_ids,
    select_one_by,
    select_where,
)
from table_query.utils.logging import get_logger

from .models import Connection, QueryError, Row, WriteResult, error_message

logger = get_logger(__name__)

TableRegistry = TypeVar("TableRegistry")

PendingWrite = Union[
    Awaitable[Union[WriteResult, Sequence[WriteResult]]],
    WriteResult,
    Sequence[WriteResult],
]


class QueryBuilder(Generic[TableRegistry]):
    """
    Builds and submits single-table queries against one database.

    Args:
        database: Database name every table is qualified with
    """

    def __init__(self, database: str):
        self.database = database

    def __repr__(self) -> str:
        return f"QueryBuilder(database={self.database!r})"

    async def get_one_by(
        self, conn: Connection, table: str, column: str, value: Any
    ) -> Optional[Row]:
        """
        Get the first row where ``column`` equals ``value``.

        The match is always ``=``. An empty list cannot match anything, so it
        returns None without querying.

        Returns:
            The first matching row, or None when nothing matches
        """
        if is_value_list(value) and len(value) == 0:
            self._log_short_circuit("get_one_by", table, "empty value list")
            return None

        statement = select_one_by(self.database, table, column, value)
        rows = await self._submit(conn, table, statement, "get_one_by")
        return rows[0] if rows else None

    async def get_many_by(
        self, conn: Connection, table: str, column: str, value: Any
    ) -> List[Row]:
        """
        Get all rows where ``column`` matches ``value``.

        A list or tuple of values matches with IN. An empty list returns an
        empty result without querying.
        """
        if is_value_list(value) and len(value) == 0:
            self._log_short_circuit("get_many_by", table, "empty value list")
            return []

        rows = await self._submit(
            conn, table, select_by(self.database, table, column, value), "get_many_by"
        )
        return list(rows)

    async def get_all(self, conn: Connection, table: str) -> List[Row]:
        """Get the rows of a table, capped at 100."""
        rows = await self._submit(
            conn, table, select_all(self.database, table), "get_all"
        )
        return list(rows)

    async def get_many_where(
        self,
        conn: Connection,
        table: str,
        fields: Mapping[str, Any],
        join_by_or: bool = False,
    ) -> List[Row]:
        """
        Get all rows matching every entry of ``fields`` (or any, with
        ``join_by_or``).

        List values match with IN, other values with ``=``. If any entry is an
        empty list nothing can match, so an empty result is returned without
        querying, whatever the other entries and the joiner are. An empty
        ``fields`` mapping selects without a WHERE clause.

        Args:
            conn: Open driver connection
            table: Table name, without the database
            fields: Column to value (or list of values) mapping
            join_by_or: Join the conditions with OR instead of AND

        Returns:
            Matching rows
        """
        for column, value in fields.items():
            if is_value_list(value) and len(value) == 0:
                self._log_short_circuit(
                    "get_many_where", table, "empty value list", column=column
                )
                return []

        statement = select_where(self.database, table, fields, join_by_or)
        rows = await self._submit(conn, table, statement, "get_many_where")
        return list(rows)

    async def delete_by(
        self, conn: Connection, table: str, column: str, value: Any
    ) -> None:
        """
        Delete all rows where ``column`` matches ``value``.

        A ``None`` value or an empty list deletes nothing and issues no query.
        """
        if value is None:
            self._log_short_circuit("delete_by", table, "no value")
            return None
        if is_value_list(value) and len(value) == 0:
            self._log_short_circuit("delete_by", table, "empty value list")
            return None

        await self._submit(
            conn, table, delete_by(self.database, table, column, value), "delete_by"
        )
        return None

    async def create_one(
        self, conn: Connection, table: str, fields: Mapping[str, Any]
    ) -> WriteResult:
        """
        Insert a single row built from ``fields``.

        Returns:
            The driver's WriteResult, carrying the generated insert id
        """
        return await self._submit(
            conn, table, insert_one(self.database, table, fields), "create_one"
        )

    async def and_get(
        self, conn: Connection, table: str, pending: PendingWrite
    ) -> List[Row]:
        """
        Wait for one or more inserts and fetch the rows they created.

        ``pending`` is usually the un-awaited result of create_one, or an
        ``asyncio.gather`` of several. Rows are reloaded by their ``id``
        column, which every target table must have.

        Args:
            conn: Open driver connection
            table: Table the inserts went to
            pending: Awaitable (or resolved value) of one WriteResult or a
                sequence of them

        Returns:
            The created rows; empty without querying if no ids were produced
        """
        result = await pending if inspect.isawaitable(pending) else pending

        if isinstance(result, (list, tuple)):
            ids = [write.insert_id for write in result]
        else:
            ids = [result.insert_id]

        if not ids:
            self._log_short_circuit("and_get", table, "no insert ids")
            return []

        rows = await self._submit(
            conn, table, select_by_ids(self.database, table, ids), "and_get"
        )
        return list(rows)

    async def _submit(
        self, conn: Connection, table: str, statement: Statement, operation: str
    ) -> Any:
        """Submit a statement and wait for the connection's callback."""
        loop = asyncio.get_running_loop()
        future: "asyncio.Future[Any]" = loop.create_future()

        def settle(error: Optional[BaseException], result: Any) -> None:
            # Only the first callback invocation counts
            if future.done():
                return
            if error is not None:
                future.set_exception(QueryError(error_message(error)))
            else:
                future.set_result(result)

        def callback(error: Optional[BaseException], result: Any = None) -> None:
            loop.call_soon_threadsafe(settle, error, result)

        logger.debug(
            "query.submitted",
            operation=operation,
            target=qualify_table(table, self.database),
            sql=statement.sql,
            param_count=len(statement.params),
        )

        try:
            conn.query(statement.sql, statement.params, callback)
        except Exception as exc:
            settle(exc, None)

        try:
            return await future
        except QueryError as exc:
            logger.warning(
                "query.failed",
                operation=operation,
                target=qualify_table(table, self.database),
                error=exc.message,
            )
            raise

    def _log_short_circuit(
        self, operation: str, table: str, reason: str, **context: Any
    ) -> None:
        logger.debug(
            "query.short_circuit",
            operation=operation,
            target=qualify_table(table, self.database),
            reason=reason,
            **context,
        )


def create_query_builder(database: Optional[str] = None) -> QueryBuilder[Any]:
    """
    Create a QueryBuilder for ``database``.

    Args:
        database: Database name. Defaults to the TQ_MYSQL_DATABASE setting.

    Returns:
        A new QueryBuilder
    """
    if database is None:
        database = get_settings().mysql_database
    return QueryBuilder(database)
