"""Statement container shared by the SQL operation builders."""

from dataclasses import dataclass, field
from typing import Any, List


@dataclass(frozen=True)
class Statement:
    """
    A SQL template paired with its positional arguments.

    Attributes:
        sql: Template using ``??`` for identifiers and ``?`` for values
        params: Arguments in placeholder order
    """

    sql: str
    params: List[Any] = field(default_factory=list)
