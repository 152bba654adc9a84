"""
table-query - typed single-table query construction for MySQL drivers.

Builds parameterized SQL templates for point lookups, filtered lookups,
bulk fetches, deletes and inserts, submits them through a caller-supplied
connection and returns the driver's rows or write results.
"""

__version__ = "0.1.0"

from table_query.query import (
    Connection,
    QueryBuilder,
    QueryError,
    Row,
    WriteResult,
    create_query_builder,
)

__all__ = [
    "Connection",
    "QueryBuilder",
    "QueryError",
    "Row",
    "WriteResult",
    "create_query_builder",
]
