"""Topic service: topic writes plus path queries against a cached graph."""

from __future__ import annotations

import logging
import sqlite3
import uuid
from typing import Any, Dict, Iterable, List, Optional

from .errors import (
    CircularReferenceError,
    TopicConflictError,
    TopicNotFoundError,
    TopicValidationError,
)
from .graph import (
    Graph,
    GraphStats,
    NeighborhoodEntry,
    PathResult,
    TopicRecord,
    build_graph,
    find_all_paths,
    find_closest_common_ancestor,
    find_shortest_path,
    find_topics_within_distance,
    get_graph_stats,
)
from .storage import topics as store

logger = logging.getLogger(__name__)


class TopicService:
    """Owns the topic store connection and one lazily built :class:`Graph`.

    Any write that changes the topic set drops the cached graph; the next
    query rebuilds it from a fresh snapshot of all topics.
    """

    def __init__(self, connection: sqlite3.Connection):
        self.connection = connection
        self._graph: Graph | None = None

    # ------------------------------------------------------------------
    # Graph cache

    @property
    def graph(self) -> Graph:
        if self._graph is None:
            records = store.list_topics(self.connection)
            self._graph = build_graph(records)
            logger.debug("Rebuilt topic graph from %d topics", len(records))
        return self._graph

    def invalidate(self) -> None:
        if self._graph is not None:
            logger.debug("Invalidating cached topic graph")
        self._graph = None

    # ------------------------------------------------------------------
    # Reads

    def get_topic(self, topic_id: str) -> Optional[TopicRecord]:
        return store.get_topic(self.connection, topic_id)

    def require_topic(self, topic_id: str) -> TopicRecord:
        record = self.get_topic(topic_id)
        if record is None:
            raise TopicNotFoundError(topic_id)
        return record

    def list_topics(self, offset: int = 0, limit: Optional[int] = None) -> List[TopicRecord]:
        return store.list_topics(self.connection, offset=offset, limit=limit)

    def count_topics(self) -> int:
        return store.count_topics(self.connection)

    def get_children(self, topic_id: str) -> List[TopicRecord]:
        return store.list_children(self.connection, topic_id)

    def get_root_topics(self) -> List[TopicRecord]:
        """Topics whose parent does not resolve to another stored topic."""
        graph = self.graph
        return [
            record for topic_id, record in graph.nodes.items()
            if graph.parent_of(topic_id) is None
        ]

    def search_topics(self, query: str) -> List[TopicRecord]:
        """Case-insensitive substring search over topic names and content."""
        needle = query.lower()
        return [
            record
            for record in self.list_topics()
            if needle in record.name.lower() or needle in record.content.lower()
        ]

    def get_topic_tree(self, topic_id: str) -> Optional[Dict[str, Any]]:
        """Return ``topic_id`` with its descendants nested under ``children``."""
        root = self.get_topic(topic_id)
        if root is None:
            return None

        tree = root.to_dict()
        tree["children"] = []
        seen = {root.id}
        pending = [(root, tree)]
        while pending:
            record, node = pending.pop()
            for child in self.get_children(record.id):
                if child.id in seen:
                    continue
                seen.add(child.id)
                child_node = child.to_dict()
                child_node["children"] = []
                node["children"].append(child_node)
                pending.append((child, child_node))
        return tree

    # ------------------------------------------------------------------
    # Writes

    def create_topic(
        self,
        name: str,
        content: str = "",
        parent_id: Optional[str] = None,
        topic_id: Optional[str] = None,
    ) -> TopicRecord:
        if not name or not name.strip():
            raise TopicValidationError("must be a non-empty string", field="name")
        if parent_id and not store.topic_exists(self.connection, parent_id):
            raise TopicNotFoundError(parent_id, role="Parent topic")

        record = TopicRecord(
            id=topic_id or uuid.uuid4().hex,
            name=name.strip(),
            content=content or "",
            parent_id=parent_id or None,
        )
        try:
            store.insert_topic(self.connection, record)
        except ValueError as exc:
            raise TopicConflictError(str(exc)) from exc

        self.invalidate()
        logger.info("Created topic %s (%s)", record.id, record.name)
        return record

    def update_topic(
        self,
        topic_id: str,
        name: Optional[str] = None,
        content: Optional[str] = None,
    ) -> TopicRecord:
        if name is not None and not name.strip():
            raise TopicValidationError("must be a non-empty string", field="name")
        updated = store.update_topic(
            self.connection,
            topic_id,
            name=name.strip() if name is not None else None,
            content=content,
        )
        if updated is None:
            raise TopicNotFoundError(topic_id)

        self.invalidate()
        logger.info("Updated topic %s", topic_id)
        return updated

    def would_create_cycle(self, topic_id: str, new_parent_id: str) -> bool:
        """Return True if ``new_parent_id`` is ``topic_id`` or one of its descendants."""
        current: Optional[str] = new_parent_id
        visited = set()
        while current:
            if current == topic_id:
                return True
            if current in visited:
                break
            visited.add(current)
            parent = store.get_topic(self.connection, current)
            current = parent.parent_id if parent else None
        return False

    def move_topic(self, topic_id: str, new_parent_id: Optional[str]) -> TopicRecord:
        self.require_topic(topic_id)
        if new_parent_id:
            if not store.topic_exists(self.connection, new_parent_id):
                raise TopicNotFoundError(new_parent_id, role="Parent topic")
            if self.would_create_cycle(topic_id, new_parent_id):
                raise CircularReferenceError(topic_id, new_parent_id)

        moved = store.set_parent(self.connection, topic_id, new_parent_id or None)
        if moved is None:
            raise TopicNotFoundError(topic_id)

        self.invalidate()
        logger.info("Moved topic %s under %s", topic_id, new_parent_id or "<root>")
        return moved

    def delete_topic(self, topic_id: str) -> bool:
        if not store.topic_exists(self.connection, topic_id):
            return False
        if store.list_children(self.connection, topic_id):
            raise TopicConflictError(
                f"Cannot delete topic '{topic_id}' with children. "
                "Delete children first or move them to another parent."
            )

        deleted = store.delete_topic(self.connection, topic_id)
        self.invalidate()
        logger.info("Deleted topic %s", topic_id)
        return deleted

    def import_topics(self, records: Iterable[TopicRecord]) -> int:
        """Insert or replace every record; returns how many were new."""
        created = 0
        for record in records:
            if store.upsert_topic(self.connection, record):
                created += 1
        self.invalidate()
        logger.info("Imported topics (%d new)", created)
        return created

    # ------------------------------------------------------------------
    # Path queries

    def find_shortest_path(self, start_id: str, end_id: str) -> Optional[PathResult]:
        return find_shortest_path(self.graph, start_id, end_id)

    def find_all_paths(self, start_id: str, end_id: str, max_depth: int = 10) -> List[PathResult]:
        return find_all_paths(self.graph, start_id, end_id, max_depth)

    def find_closest_common_ancestor(self, first_id: str, second_id: str) -> Optional[str]:
        return find_closest_common_ancestor(self.graph, first_id, second_id)

    def find_topics_within_distance(
        self, topic_id: str, max_distance: float
    ) -> List[NeighborhoodEntry]:
        return find_topics_within_distance(self.graph, topic_id, max_distance)

    def get_graph_stats(self) -> GraphStats:
        return get_graph_stats(self.graph)

    def get_topic_stats(self) -> Dict[str, Any]:
        """Aggregate counts over the stored hierarchy."""
        stats = self.get_graph_stats()
        total = stats.node_count
        # Every non-root topic is exactly one child of some other topic.
        children = total - len(stats.root_ids)
        return {
            "total_topics": total,
            "root_topics": len(stats.root_ids),
            "max_depth": stats.max_depth,
            "avg_children_per_topic": children / total if total else 0.0,
        }
