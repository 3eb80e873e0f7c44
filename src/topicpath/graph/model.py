"""Graph representations used by topicpath."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional, Set

from .weights import significant_words

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TopicRecord:
    """A topic as handed to the graph builder by the topic store."""

    id: str
    name: str
    content: str = ""
    parent_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TopicRecord":
        """Build a record from a loosely shaped mapping.

        ``parent_id``, ``parentId`` and ``parentTopicId`` are all accepted so
        that exported topic dumps can be fed in unchanged.
        """

        parent = data.get("parent_id", data.get("parentId", data.get("parentTopicId")))
        return cls(
            id=str(data["id"]),
            name=str(data.get("name", "")),
            content=str(data.get("content") or ""),
            parent_id=str(parent) if parent else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "content": self.content,
            "parent_id": self.parent_id,
        }


@dataclass(slots=True)
class Graph:
    """Undirected adjacency set built over the parent/child topic hierarchy.

    Instances are populated once by :func:`build_graph` and only read
    afterwards, so a single graph can be shared between threads.
    """

    nodes: Dict[str, TopicRecord] = field(default_factory=dict)
    adjacency: Dict[str, Set[str]] = field(default_factory=dict)
    vocabulary: Dict[str, FrozenSet[str]] = field(default_factory=dict)

    def add_node(self, record: TopicRecord) -> None:
        self.nodes[record.id] = record
        self.adjacency.setdefault(record.id, set())
        self.vocabulary[record.id] = significant_words(f"{record.name} {record.content}")

    def add_edge(self, source: str, target: str) -> None:
        # Set insertion keeps a 2-cycle (a -> b, b -> a) down to one edge.
        self.adjacency[source].add(target)
        self.adjacency[target].add(source)

    def neighbors(self, source: str) -> Set[str]:
        return self.adjacency.get(source, set())

    def __contains__(self, topic_id: object) -> bool:
        return topic_id in self.nodes

    def __len__(self) -> int:
        return len(self.nodes)

    def parent_of(self, topic_id: str) -> Optional[str]:
        """Return the resolvable parent id of ``topic_id``.

        A parent resolves only when it names a *different* topic in this
        graph; dangling and self references yield ``None``.
        """

        record = self.nodes.get(topic_id)
        if record is None or not record.parent_id:
            return None
        if record.parent_id == topic_id or record.parent_id not in self.nodes:
            return None
        return record.parent_id

    def edge_count(self) -> int:
        return sum(len(targets) for targets in self.adjacency.values()) // 2

    def topics_for(self, path: Iterable[str]) -> List[TopicRecord]:
        return [self.nodes[topic_id] for topic_id in path]


def build_graph(records: Iterable[TopicRecord]) -> Graph:
    """Build an undirected topic graph from a flat list of records.

    Every record becomes a node. Each record whose parent resolves inside
    the same list contributes one undirected edge. Duplicate ids keep the
    last record seen. Dangling or circular parent links never raise.
    """

    graph = Graph()
    for record in records:
        graph.add_node(record)

    for topic_id in graph.nodes:
        parent_id = graph.parent_of(topic_id)
        if parent_id is not None:
            graph.add_edge(topic_id, parent_id)

    logger.debug(
        "Built topic graph with %d nodes and %d edges",
        len(graph.nodes),
        graph.edge_count(),
    )
    return graph
