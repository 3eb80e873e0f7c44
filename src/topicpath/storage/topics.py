"""Topic persistence on top of SQLite."""

from __future__ import annotations

import sqlite3
from datetime import datetime
from typing import List, Optional

from ..graph.model import TopicRecord

_COLUMNS = "id, name, content, parent_id"


def _row_to_record(row: tuple) -> TopicRecord:
    return TopicRecord(id=row[0], name=row[1], content=row[2] or "", parent_id=row[3])


def topic_exists(connection: sqlite3.Connection, topic_id: str) -> bool:
    row = connection.execute("SELECT 1 FROM topics WHERE id = ?", (topic_id,)).fetchone()
    return row is not None


def insert_topic(connection: sqlite3.Connection, record: TopicRecord) -> TopicRecord:
    """Store a new topic.

    Parameters
    ----------
    connection:
        Database connection
    record:
        Topic to insert; its ``id`` must not be in use yet

    Returns
    -------
    The stored record

    Raises
    ------
    ValueError:
        If a topic with the same id already exists
    """
    cursor = connection.cursor()

    if topic_exists(connection, record.id):
        raise ValueError(f"Topic '{record.id}' already exists")

    now = datetime.now().isoformat()
    cursor.execute(
        """INSERT INTO topics (id, name, content, parent_id, created_at, updated_at)
           VALUES (?, ?, ?, ?, ?, ?)""",
        (record.id, record.name, record.content, record.parent_id, now, now),
    )
    connection.commit()
    return record


def upsert_topic(connection: sqlite3.Connection, record: TopicRecord) -> bool:
    """Insert ``record`` or overwrite the stored topic with the same id.

    Returns
    -------
    True if a new row was created, False if an existing one was replaced
    """
    now = datetime.now().isoformat()
    created = not topic_exists(connection, record.id)
    connection.execute(
        """INSERT INTO topics (id, name, content, parent_id, created_at, updated_at)
           VALUES (?, ?, ?, ?, ?, ?)
           ON CONFLICT(id) DO UPDATE SET
               name = excluded.name,
               content = excluded.content,
               parent_id = excluded.parent_id,
               updated_at = excluded.updated_at""",
        (record.id, record.name, record.content, record.parent_id, now, now),
    )
    connection.commit()
    return created


def get_topic(connection: sqlite3.Connection, topic_id: str) -> Optional[TopicRecord]:
    """Get a topic by id, or None if it is not stored."""
    row = connection.execute(
        f"SELECT {_COLUMNS} FROM topics WHERE id = ?", (topic_id,)
    ).fetchone()
    if not row:
        return None
    return _row_to_record(row)


def list_topics(
    connection: sqlite3.Connection,
    offset: int = 0,
    limit: Optional[int] = None,
) -> List[TopicRecord]:
    """List stored topics in creation order.

    Parameters
    ----------
    connection:
        Database connection
    offset:
        Number of topics to skip
    limit:
        Maximum number of topics to return (None for all)
    """
    rows = connection.execute(
        f"""SELECT {_COLUMNS} FROM topics
            ORDER BY created_at, rowid
            LIMIT ? OFFSET ?""",
        (-1 if limit is None else limit, offset),
    ).fetchall()
    return [_row_to_record(row) for row in rows]


def list_children(connection: sqlite3.Connection, parent_id: str) -> List[TopicRecord]:
    rows = connection.execute(
        f"SELECT {_COLUMNS} FROM topics WHERE parent_id = ? ORDER BY created_at, rowid",
        (parent_id,),
    ).fetchall()
    return [_row_to_record(row) for row in rows]


def count_topics(connection: sqlite3.Connection) -> int:
    return connection.execute("SELECT COUNT(*) FROM topics").fetchone()[0]


def update_topic(
    connection: sqlite3.Connection,
    topic_id: str,
    name: Optional[str] = None,
    content: Optional[str] = None,
) -> Optional[TopicRecord]:
    """Change the name and/or content of a topic.

    Fields passed as None keep their stored value.

    Returns
    -------
    The updated record, or None if the topic does not exist
    """
    current = get_topic(connection, topic_id)
    if current is None:
        return None

    connection.execute(
        "UPDATE topics SET name = ?, content = ?, updated_at = ? WHERE id = ?",
        (
            current.name if name is None else name,
            current.content if content is None else content,
            datetime.now().isoformat(),
            topic_id,
        ),
    )
    connection.commit()
    return get_topic(connection, topic_id)


def set_parent(
    connection: sqlite3.Connection, topic_id: str, parent_id: Optional[str]
) -> Optional[TopicRecord]:
    """Re-attach a topic under ``parent_id`` (None makes it a root)."""
    cursor = connection.cursor()
    cursor.execute(
        "UPDATE topics SET parent_id = ?, updated_at = ? WHERE id = ?",
        (parent_id, datetime.now().isoformat(), topic_id),
    )
    connection.commit()
    if cursor.rowcount == 0:
        return None
    return get_topic(connection, topic_id)


def delete_topic(connection: sqlite3.Connection, topic_id: str) -> bool:
    """Remove a topic.

    Returns
    -------
    True if removed, False if not found
    """
    cursor = connection.cursor()
    cursor.execute("DELETE FROM topics WHERE id = ?", (topic_id,))
    connection.commit()
    return cursor.rowcount > 0
