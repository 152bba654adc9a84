"""Pytest configuration: spy connections and the opt-in MySQL suite.

The MySQL suite talks to a real server configured through TQ_MYSQL_* variables
and only runs when RUN_MYSQL_TESTS=1 or --run-mysql-tests is given.
"""

from __future__ import annotations

import os
import re
import threading
from typing import Any, List, Optional, Sequence, Tuple

import pytest

MYSQL_OPTION = "run_mysql_tests"
MYSQL_MARK = "mysql_suite"
MYSQL_ENV = "RUN_MYSQL_TESTS"


def _env_enabled(name: str) -> bool:
    """Return True when the opt-in environment flag is set to '1'."""
    return os.getenv(name) == "1"


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register the CLI flag that mirrors RUN_MYSQL_TESTS."""
    parser.addoption(
        "--run-mysql-tests",
        action="store_true",
        dest=MYSQL_OPTION,
        default=_env_enabled(MYSQL_ENV),
        help="Run the suite against a real MySQL server "
        "(set RUN_MYSQL_TESTS=1 or pass --run-mysql-tests).",
    )


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Skip the MySQL suite unless its flag is enabled."""
    if config.getoption(MYSQL_OPTION):
        return

    skip_mysql = pytest.mark.skip(
        reason="Set RUN_MYSQL_TESTS=1 or pass --run-mysql-tests to run the MySQL suite."
    )
    for item in items:
        if MYSQL_MARK in item.keywords:
            item.add_marker(skip_mysql)


def validate_test_database(name: str) -> bool:
    """Refuse to run destructive tests against a database not named like a test one."""
    if not re.search(r"(test|tmp|dev|local|sandbox)", name or "", re.IGNORECASE):
        raise RuntimeError(
            f"Refusing to run tests against non-test database: {name!r}. "
            "Test databases must contain one of: test, tmp, dev, local, sandbox."
        )
    return True


class SpyConnection:
    """Connection double that records submissions and answers from a script.

    Each call to ``query`` consumes the next scripted response. A response
    that is an exception or a string is delivered as the callback's error,
    anything else as its result. With no responses left the result is ``[]``.

    Args:
        responses: Scripted responses, in call order
        threaded: Fire the callback from a separate thread
    """

    def __init__(self, *responses: Any, threaded: bool = False):
        self.responses: List[Any] = list(responses)
        self.threaded = threaded
        self.calls: List[Tuple[str, List[Any]]] = []

    @property
    def last_sql(self) -> Optional[str]:
        return self.calls[-1][0] if self.calls else None

    @property
    def last_params(self) -> Optional[List[Any]]:
        return self.calls[-1][1] if self.calls else None

    def query(self, sql: str, args: Sequence[Any], callback: Any) -> None:
        self.calls.append((sql, list(args)))
        response = self.responses.pop(0) if self.responses else []

        def deliver() -> None:
            if isinstance(response, (BaseException, str)):
                callback(response, None)
            else:
                callback(None, response)

        if self.threaded:
            threading.Thread(target=deliver).start()
        else:
            deliver()


@pytest.fixture
def spy_connection_factory():
    """Build SpyConnection instances with scripted responses."""
    return SpyConnection


@pytest.fixture
def mysql_settings():
    """Settings for the MySQL suite, guarded against non-test databases."""
    from table_query.config import get_settings

    settings = get_settings()
    validate_test_database(settings.mysql_database)
    return settings
