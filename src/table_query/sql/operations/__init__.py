"""Statement builders for single-table SELECT, DELETE and INSERT."""

from .delete import delete_by
from .insert import insert_one
from .select import (
    ID_COLUMN,
    SELECT_ALL_LIMIT,
    select_all,
    select_by,
    select_by_ids,
    select_one_by,
    select_where,
)

__all__ = [
    "ID_COLUMN",
    "SELECT_ALL_LIMIT",
    "delete_by",
    "insert_one",
    "select_all",
    "select_by",
    "select_by_ids",
    "select_one_by",
    "select_where",
]
