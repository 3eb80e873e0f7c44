"""Weighted path queries over a topic :class:`~topicpath.graph.model.Graph`.

Every query treats unknown ids, disconnected components and parent cycles
as ordinary "no result" outcomes and returns ``None`` or an empty list
instead of raising.
"""

from __future__ import annotations

import heapq
import math
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Sequence, Set, Tuple

from .model import Graph, TopicRecord
from .weights import weight_for_vocabularies


@dataclass(slots=True)
class PathResult:
    """A route between two topics together with its total weight."""

    path: List[str]
    distance: float
    topics: List[TopicRecord] = field(default_factory=list)

    @property
    def hops(self) -> int:
        return max(len(self.path) - 1, 0)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": list(self.path),
            "distance": self.distance,
            "topics": [topic.to_dict() for topic in self.topics],
        }


@dataclass(slots=True)
class NeighborhoodEntry:
    """A topic reached by a bounded search and the search-tree parent that reached it."""

    topic_id: str
    distance: float
    parent_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "topic_id": self.topic_id,
            "distance": self.distance,
            "parent_id": self.parent_id,
        }


@dataclass(slots=True)
class GraphStats:
    node_count: int
    edge_count: int
    max_depth: int
    root_ids: List[str]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "node_count": self.node_count,
            "edge_count": self.edge_count,
            "max_depth": self.max_depth,
            "root_ids": list(self.root_ids),
        }


def graph_edge_weight(graph: Graph, source: str, target: str) -> float:
    """Weight of the edge between two nodes using the graph's cached vocabulary."""

    return weight_for_vocabularies(graph.vocabulary[source], graph.vocabulary[target])


def path_distance(graph: Graph, path: Sequence[str]) -> float:
    """Sum the edge weights along ``path``."""

    return sum(graph_edge_weight(graph, a, b) for a, b in zip(path, path[1:]))


def _build_result(graph: Graph, path: List[str], distance: float) -> PathResult:
    return PathResult(path=path, distance=distance, topics=graph.topics_for(path))


def _reconstruct(previous: Dict[str, str], start_id: str, end_id: str) -> List[str]:
    path = [end_id]
    current = end_id
    while current != start_id and current in previous:
        current = previous[current]
        path.append(current)
    path.reverse()
    if path[0] != start_id:
        return []
    return path


def find_shortest_path(graph: Graph, start_id: str, end_id: str) -> Optional[PathResult]:
    """Return the lowest-weight path from ``start_id`` to ``end_id``.

    Nodes are settled in order of tentative distance using a binary heap.
    Ties are broken by the lexicographically smallest topic id; when several
    equal-weight routes exist only the distance is guaranteed, not which
    route is returned.
    """

    if start_id not in graph.nodes or end_id not in graph.nodes:
        return None
    if start_id == end_id:
        return _build_result(graph, [start_id], 0.0)

    distances: Dict[str, float] = {start_id: 0.0}
    previous: Dict[str, str] = {}
    settled: Set[str] = set()
    frontier: List[Tuple[float, str]] = [(0.0, start_id)]

    while frontier:
        distance, current = heapq.heappop(frontier)
        if current in settled:
            continue
        settled.add(current)
        if current == end_id:
            break

        for neighbor in graph.neighbors(current):
            if neighbor in settled:
                continue
            candidate = distance + graph_edge_weight(graph, current, neighbor)
            if candidate < distances.get(neighbor, math.inf):
                distances[neighbor] = candidate
                previous[neighbor] = current
                heapq.heappush(frontier, (candidate, neighbor))

    if end_id not in settled:
        return None

    path = _reconstruct(previous, start_id, end_id)
    if not path:
        return None
    return _build_result(graph, path, distances[end_id])


def find_all_paths(
    graph: Graph,
    start_id: str,
    end_id: str,
    max_depth: int = 10,
) -> List[PathResult]:
    """Enumerate every simple path of at most ``max_depth`` hops.

    Results are ordered by distance, then by hop count. The search backtracks
    over a per-path visited set, so cycles in the graph cannot trap it.
    """

    if start_id not in graph.nodes or end_id not in graph.nodes or max_depth < 0:
        return []

    found: List[List[str]] = []
    current_path: List[str] = []
    on_path: Set[str] = set()
    # One frame per node on current_path: the neighbours still to try from it.
    frames: List[Iterator[str]] = []

    def enter(topic_id: str) -> None:
        current_path.append(topic_id)
        on_path.add(topic_id)
        if topic_id == end_id:
            found.append(list(current_path))
            frames.append(iter(()))
        elif len(current_path) <= max_depth:
            frames.append(iter(sorted(graph.neighbors(topic_id))))
        else:
            frames.append(iter(()))

    enter(start_id)
    while frames:
        neighbor = next(frames[-1], None)
        if neighbor is None:
            frames.pop()
            on_path.discard(current_path.pop())
        elif neighbor not in on_path:
            enter(neighbor)

    results = [_build_result(graph, path, path_distance(graph, path)) for path in found]
    results.sort(key=lambda result: (result.distance, result.hops, result.path))
    return results


def ancestor_chain(graph: Graph, topic_id: str) -> List[str]:
    """Return ``topic_id`` followed by its resolvable ancestors, nearest first.

    The walk stops at the first id it has already seen, so a parent cycle
    ends the chain instead of looping forever.
    """

    if topic_id not in graph.nodes:
        return []
    chain = [topic_id]
    seen = {topic_id}
    parent = graph.parent_of(topic_id)
    while parent is not None and parent not in seen:
        chain.append(parent)
        seen.add(parent)
        parent = graph.parent_of(parent)
    return chain


def topic_depth(graph: Graph, topic_id: str) -> int:
    """Number of parent hops from ``topic_id`` up to its root (0 for roots)."""

    return max(len(ancestor_chain(graph, topic_id)) - 1, 0)


def find_closest_common_ancestor(graph: Graph, first_id: str, second_id: str) -> Optional[str]:
    """Return the deepest topic that appears in both ancestor chains."""

    first_chain = ancestor_chain(graph, first_id)
    second_chain = set(ancestor_chain(graph, second_id))
    common = [topic_id for topic_id in first_chain if topic_id in second_chain]
    if not common:
        return None
    # max() keeps the first maximum, i.e. the one nearest to first_id.
    return max(common, key=lambda topic_id: topic_depth(graph, topic_id))


def find_topics_within_distance(
    graph: Graph,
    topic_id: str,
    max_distance: float,
) -> List[NeighborhoodEntry]:
    """Return every topic whose weighted distance from ``topic_id`` is at most ``max_distance``.

    The origin itself is included at distance 0. Each entry records the
    neighbour through which its best distance was reached.
    """

    if topic_id not in graph.nodes or max_distance < 0:
        return []

    best: Dict[str, NeighborhoodEntry] = {topic_id: NeighborhoodEntry(topic_id, 0.0)}
    settled: Set[str] = set()
    frontier: List[Tuple[float, str]] = [(0.0, topic_id)]

    while frontier:
        distance, current = heapq.heappop(frontier)
        if current in settled:
            continue
        settled.add(current)

        for neighbor in graph.neighbors(current):
            if neighbor in settled:
                continue
            candidate = distance + graph_edge_weight(graph, current, neighbor)
            if candidate > max_distance:
                continue
            known = best.get(neighbor)
            if known is None or candidate < known.distance:
                best[neighbor] = NeighborhoodEntry(neighbor, candidate, current)
                heapq.heappush(frontier, (candidate, neighbor))

    return sorted(best.values(), key=lambda entry: (entry.distance, entry.topic_id))


def get_graph_stats(graph: Graph) -> GraphStats:
    """Summarise the size and shape of ``graph``."""

    root_ids = [topic_id for topic_id in graph.nodes if graph.parent_of(topic_id) is None]
    max_depth = max((topic_depth(graph, topic_id) for topic_id in graph.nodes), default=0)
    return GraphStats(
        node_count=len(graph.nodes),
        edge_count=graph.edge_count(),
        max_depth=max_depth,
        root_ids=root_ids,
    )
