"""SQLite-backed topic storage."""

from .database import get_connection, memory_connection, open_database
from .schema import apply_schema

__all__ = ["apply_schema", "get_connection", "memory_connection", "open_database"]
