"""Tests for the SQLite topic store."""

from __future__ import annotations

import pytest

from topicpath.graph import TopicRecord
from topicpath.storage import topics as store
from topicpath.storage.database import get_connection
from topicpath.config import LocalConfig
from topicpath.storage.schema import apply_schema


def test_schema_creates_topics_table(connection) -> None:
    rows = connection.execute(
        "SELECT name FROM sqlite_master WHERE type IN ('table', 'index')"
    ).fetchall()
    names = {name for (name,) in rows}
    assert {"topics", "idx_topics_parent"}.issubset(names)


def test_schema_can_be_applied_twice(connection) -> None:
    apply_schema(connection)
    assert store.count_topics(connection) == 0


def test_insert_and_get_topic(connection) -> None:
    record = TopicRecord("root", "Root", "Root content")
    store.insert_topic(connection, record)

    assert store.get_topic(connection, "root") == record
    assert store.get_topic(connection, "missing") is None
    assert store.topic_exists(connection, "root")


def test_insert_duplicate_id_raises(connection) -> None:
    store.insert_topic(connection, TopicRecord("root", "Root"))
    with pytest.raises(ValueError):
        store.insert_topic(connection, TopicRecord("root", "Other"))


def test_list_topics_keeps_insertion_order_and_paginates(connection) -> None:
    for topic_id in ("c", "a", "b"):
        store.insert_topic(connection, TopicRecord(topic_id, topic_id.upper()))

    assert [record.id for record in store.list_topics(connection)] == ["c", "a", "b"]
    assert [record.id for record in store.list_topics(connection, offset=1, limit=1)] == ["a"]


def test_children_update_move_and_delete(connection) -> None:
    store.insert_topic(connection, TopicRecord("root", "Root"))
    store.insert_topic(connection, TopicRecord("child", "Child", parent_id="root"))
    store.insert_topic(connection, TopicRecord("other", "Other"))

    assert [record.id for record in store.list_children(connection, "root")] == ["child"]

    updated = store.update_topic(connection, "child", content="New body")
    assert updated == TopicRecord("child", "Child", "New body", parent_id="root")
    assert store.update_topic(connection, "missing", name="x") is None

    moved = store.set_parent(connection, "child", "other")
    assert moved.parent_id == "other"
    assert store.list_children(connection, "root") == []
    assert store.set_parent(connection, "missing", None) is None

    assert store.delete_topic(connection, "child") is True
    assert store.delete_topic(connection, "child") is False
    assert store.count_topics(connection) == 2


def test_upsert_reports_whether_the_row_is_new(connection) -> None:
    assert store.upsert_topic(connection, TopicRecord("root", "Root")) is True
    assert store.upsert_topic(connection, TopicRecord("root", "Renamed", "Body")) is False
    assert store.get_topic(connection, "root") == TopicRecord("root", "Renamed", "Body")


def test_get_connection_creates_database_file(tmp_path) -> None:
    config = LocalConfig(base_dir=tmp_path / "home")
    connection = get_connection(config)
    try:
        apply_schema(connection)
    finally:
        connection.close()
    assert (tmp_path / "home" / "topicpath.db").exists()
