"""Utilities for applying the bundled SQLite schema."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
import sqlite3


SCHEMA_PATH = Path(__file__).resolve().parent / "schema.sql"


@lru_cache(maxsize=1)
def load_schema() -> str:
    """Return the contents of the bundled ``schema.sql``.

    The schema is cached because a CLI invocation or server session may open
    several connections.
    """

    return SCHEMA_PATH.read_text(encoding="utf-8")


def apply_schema(connection: sqlite3.Connection) -> None:
    """Ensure that the database ``connection`` matches the project schema."""

    connection.executescript(load_schema())
    connection.commit()
