from __future__ import annotations

import sqlite3
from typing import Iterator, List

import pytest

from topicpath.graph import TopicRecord
from topicpath.service import TopicService
from topicpath.storage.database import memory_connection


def make_sample_records() -> List[TopicRecord]:
    """root -> child1 -> grandchild1 and root -> child2 -> grandchild2."""
    return [
        TopicRecord("root", "Root Topic", "Root content"),
        TopicRecord("child1", "Child 1", "Child 1 content", parent_id="root"),
        TopicRecord("child2", "Child 2", "Child 2 content", parent_id="root"),
        TopicRecord("grandchild1", "Grandchild 1", "Grandchild 1 content", parent_id="child1"),
        TopicRecord("grandchild2", "Grandchild 2", "Grandchild 2 content", parent_id="child2"),
    ]


@pytest.fixture
def sample_records() -> List[TopicRecord]:
    return make_sample_records()


@pytest.fixture
def connection() -> Iterator[sqlite3.Connection]:
    with memory_connection() as conn:
        yield conn


@pytest.fixture
def service(connection: sqlite3.Connection) -> TopicService:
    return TopicService(connection)


@pytest.fixture
def sample_service(service: TopicService) -> TopicService:
    service.import_topics(make_sample_records())
    return service


@pytest.fixture
def chain_records() -> List[TopicRecord]:
    """t0 -> t1 -> ... -> t2999, one topic per level."""
    return [
        TopicRecord(f"t{index}", f"Level {index}", parent_id=f"t{index - 1}" if index else None)
        for index in range(3000)
    ]
