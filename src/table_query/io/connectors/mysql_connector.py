"""
PyMySQL connector and callback connection adapter.

QueryBuilder talks to connections through a callback-style ``query`` method.
PyMySQLCallbackConnection provides that method on top of a blocking PyMySQL
connection by rendering the ``?`` / ``??`` template with the connection's own
escaping and running it on a worker thread. MySQLConnector opens such
connections from settings, with retry and exponential backoff.
"""

import time
from concurrent.futures import Executor, ThreadPoolExecutor
from contextlib import contextmanager
from typing import Any, Generator, List, Optional, Sequence, Union

import pymysql
from pymysql.cursors import DictCursor

from table_query.config import Settings, get_settings
from table_query.query.models import QueryCallback, Row, WriteResult
from table_query.sql.core.placeholders import format_sql
from table_query.utils.logging import get_logger

logger = get_logger(__name__)


class PyMySQLCallbackConnection:
    """
    Callback-style adapter over a PyMySQL connection.

    Queries run on a single worker thread per connection, so statements on
    one connection execute one at a time in submission order. The callback is
    invoked from that worker thread.

    Args:
        connection: Open PyMySQL connection; closed by close()
        executor: Executor to run queries on. Defaults to a private
            single-thread executor that close() shuts down.
    """

    def __init__(
        self,
        connection: pymysql.connections.Connection,
        executor: Optional[Executor] = None,
    ):
        self.connection = connection
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="table-query"
        )

    def query(self, sql: str, args: Sequence[Any], callback: QueryCallback) -> None:
        """Schedule ``sql`` with ``args``; ``callback(error, result)`` fires when done."""
        self._executor.submit(self._run, sql, list(args), callback)

    def _run(self, sql: str, args: List[Any], callback: QueryCallback) -> None:
        try:
            result = self.execute(sql, args)
        except Exception as exc:
            # Driver and rendering errors are delivered, not raised
            logger.debug("connection.query_error", error=str(exc))
            callback(exc, None)
            return
        callback(None, result)

    def execute(self, sql: str, args: Sequence[Any]) -> Union[List[Row], WriteResult]:
        """
        Render and execute a template synchronously.

        Returns:
            A list of row dictionaries if the statement produced a result set,
            otherwise a WriteResult
        """
        rendered = format_sql(sql, args, escape=self.connection.escape)

        with self.connection.cursor(DictCursor) as cursor:
            cursor.execute(rendered)
            if cursor.description is not None:
                return list(cursor.fetchall())
            return WriteResult(
                insert_id=cursor.lastrowid or 0,
                affected_rows=max(cursor.rowcount, 0),
            )

    def close(self) -> None:
        """
        Drain any owned executor, then close the PyMySQL connection.

        Statements already submitted finish before the socket is closed.
        """
        try:
            if self._owns_executor:
                self._executor.shutdown(wait=True)
        finally:
            self.connection.close()


class MySQLConnector:
    """
    Opens PyMySQL connections wrapped for QueryBuilder.

    Uses TQ_MYSQL_* settings for connection parameters and TQ_MAX_RETRIES /
    TQ_RETRY_BACKOFF_BASE for the retry policy.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

        logger.info(
            "connector.initialized",
            host=self.settings.mysql_host,
            port=self.settings.mysql_port,
            database=self.settings.mysql_database,
            user=self.settings.mysql_user,
            connect_timeout=self.settings.connect_timeout,
            read_timeout=self.settings.read_timeout,
            max_retries=self.settings.max_retries,
        )

    def connect(self) -> PyMySQLCallbackConnection:
        """
        Open a connection, retrying with exponential backoff.

        Returns:
            A PyMySQLCallbackConnection; the caller must close() it

        Raises:
            pymysql.Error: If every attempt fails
        """
        max_retries = self.settings.max_retries
        last_error: Optional[pymysql.Error] = None

        for attempt in range(1, max_retries + 1):
            try:
                logger.debug(
                    "connector.attempt", attempt=attempt, max_retries=max_retries
                )
                raw = pymysql.connect(
                    host=self.settings.mysql_host,
                    port=self.settings.mysql_port,
                    user=self.settings.mysql_user,
                    password=self.settings.mysql_password,
                    database=self.settings.mysql_database,
                    charset=self.settings.mysql_charset,
                    cursorclass=DictCursor,
                    connect_timeout=self.settings.connect_timeout,
                    read_timeout=self.settings.read_timeout,
                    autocommit=True,
                )
                logger.info("connector.connected", attempt=attempt)
                return PyMySQLCallbackConnection(raw)

            except pymysql.Error as e:
                last_error = e
                logger.warning(
                    "connector.attempt_failed",
                    attempt=attempt,
                    max_retries=max_retries,
                    error_type=type(e).__name__,
                    error=str(e),
                )
                if attempt < max_retries:
                    # Exponential backoff: 2s, 4s, 8s with the default base
                    backoff_time = self.settings.retry_backoff_base**attempt
                    logger.info("connector.backoff", seconds=backoff_time)
                    time.sleep(backoff_time)

        logger.error("connector.exhausted", max_retries=max_retries, error=str(last_error))
        raise pymysql.Error(
            f"Failed to connect to MySQL after {max_retries} attempts. "
            f"Last error: {last_error}"
        )

    @contextmanager
    def get_connection(self) -> Generator[PyMySQLCallbackConnection, None, None]:
        """
        Open a connection for the duration of a ``with`` block.

        Yields:
            PyMySQLCallbackConnection, closed on exit
        """
        conn = self.connect()
        try:
            yield conn
        finally:
            try:
                conn.close()
            except pymysql.Error as close_error:
                logger.warning("connector.close_failed", error=str(close_error))
