"""SQLite helpers for topicpath's local topic store."""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from typing import Iterator

from ..config import LocalConfig, DEFAULT_CONFIG
from .schema import apply_schema


def _configure_connection(connection: sqlite3.Connection) -> None:
    """Apply pragmas that keep readers responsive during writes."""

    connection.execute("PRAGMA journal_mode=WAL;")
    connection.execute("PRAGMA foreign_keys=ON;")


def get_connection(config: LocalConfig | None = None) -> sqlite3.Connection:
    """Create a SQLite connection scoped to the configured database path."""

    active_config = config or DEFAULT_CONFIG
    db_path = active_config.resolved_database_path()
    connection = sqlite3.connect(db_path)
    _configure_connection(connection)
    return connection


def open_database(config: LocalConfig | None = None) -> sqlite3.Connection:
    """Return a connection whose schema is guaranteed to be current."""

    connection = get_connection(config)
    apply_schema(connection)
    return connection


@contextmanager
def memory_connection() -> Iterator[sqlite3.Connection]:
    """Yield an in-memory SQLite connection with the schema applied.

    Tests use this helper to exercise the store without touching disk.
    """

    connection = sqlite3.connect(":memory:")
    try:
        _configure_connection(connection)
        apply_schema(connection)
        yield connection
    finally:
        connection.close()
