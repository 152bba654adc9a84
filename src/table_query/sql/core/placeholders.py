"""
Placeholder rendering for ``?`` / ``??`` SQL templates.

Query templates mark identifiers with ``??`` and values with ``?``. Rendering
happens on the driver side of the boundary so that each slot gets the escaping
that matches its kind: identifiers are backtick-quoted, values are escaped as
MySQL literals through PyMySQL's converters.

Examples:
    >>> format_sql("SELECT * FROM ??.?? WHERE ?? = ?", ["shop", "orders", "id", 5])
    'SELECT * FROM `shop`.`orders` WHERE `id` = 5'
    >>> format_sql("SELECT * FROM ?? WHERE id IN (?)", ["orders", [1, 2, 3]])
    'SELECT * FROM `orders` WHERE id IN (1, 2, 3)'
    >>> format_sql("INSERT INTO ?? SET ?", ["orders", {"sku": "A-1", "qty": 2}])
    "INSERT INTO `orders` SET `sku` = 'A-1', `qty` = 2"
"""

import re
from typing import Any, Callable, List, Mapping, Optional, Sequence

from pymysql import converters

from .identifier import quote_identifier

PLACEHOLDER_PATTERN = re.compile(r"\?+")

DEFAULT_CHARSET = "utf8mb4"

Escaper = Callable[[Any], str]


def is_value_list(value: Any) -> bool:
    """Return True for values rendered as a comma separated list (``IN (?)``)."""
    return isinstance(value, (list, tuple))


def escape_identifier(value: Any) -> str:
    """
    Escape an identifier argument.

    Dotted names are split into qualified parts; a list renders as a comma
    separated list of identifiers.

    Examples:
        >>> escape_identifier("shop.orders")
        '`shop`.`orders`'
        >>> escape_identifier(["id", "sku"])
        '`id`, `sku`'
    """
    if is_value_list(value):
        return ", ".join(escape_identifier(item) for item in value)
    return quote_identifier(str(value), qualified=True)


def _default_escape(value: Any) -> str:
    return converters.escape_item(value, DEFAULT_CHARSET)


def escape_value(value: Any, escape: Optional[Escaper] = None) -> str:
    """
    Escape a value argument as a SQL literal.

    Args:
        value: Scalar, list/tuple, or mapping to render
        escape: Scalar escaper, e.g. a PyMySQL connection's ``escape`` method.
            Defaults to PyMySQL's converters with the utf8mb4 charset.

    Returns:
        SQL text for the value. ``None`` renders as NULL, a list as
        ``a, b, c`` (nested lists as parenthesized groups, an empty list as an
        empty string), and a mapping as comma separated column assignments.
    """
    escape = escape or _default_escape

    if value is None:
        return "NULL"
    if is_value_list(value):
        return _list_to_values(value, escape)
    if isinstance(value, Mapping):
        return _mapping_to_assignments(value, escape)
    return escape(value)


def _list_to_values(values: Sequence[Any], escape: Escaper) -> str:
    parts: List[str] = []
    for item in values:
        if is_value_list(item):
            parts.append(f"({_list_to_values(item, escape)})")
        else:
            parts.append(escape_value(item, escape))
    return ", ".join(parts)


def _mapping_to_assignments(fields: Mapping[str, Any], escape: Escaper) -> str:
    return ", ".join(
        f"{quote_identifier(str(column))} = {escape_value(value, escape)}"
        for column, value in fields.items()
        if not callable(value)
    )


def format_sql(
    template: str, args: Sequence[Any], escape: Optional[Escaper] = None
) -> str:
    """
    Render a ``?`` / ``??`` template with positional arguments.

    Placeholders are consumed left to right. ``??`` consumes the next argument
    as an identifier and ``?`` as a value. Runs of three or more question
    marks are left untouched, as are placeholders beyond the last argument.

    Args:
        template: SQL template
        args: Positional arguments in placeholder order
        escape: Scalar escaper passed through to escape_value

    Returns:
        Rendered SQL text
    """
    values = list(args)
    if not values:
        return template

    chunks: List[str] = []
    last_end = 0
    index = 0

    for match in PLACEHOLDER_PATTERN.finditer(template):
        if index >= len(values):
            break
        token = match.group()
        if len(token) > 2:
            continue

        value = values[index]
        if len(token) == 2:
            rendered = escape_identifier(value)
        else:
            rendered = escape_value(value, escape)

        chunks.append(template[last_end : match.start()])
        chunks.append(rendered)
        last_end = match.end()
        index += 1

    chunks.append(template[last_end:])
    return "".join(chunks)
