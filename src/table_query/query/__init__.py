"""Query builder and the connection-facing types it works with."""

from .builder import QueryBuilder, create_query_builder
from .models import Connection, QueryCallback, QueryError, Row, WriteResult, error_message

__all__ = [
    "QueryBuilder",
    "create_query_builder",
    "Connection",
    "QueryCallback",
    "QueryError",
    "Row",
    "WriteResult",
    "error_message",
]
