"""Topic graph construction and weighted path queries."""

from .model import Graph, TopicRecord, build_graph
from .paths import (
    GraphStats,
    NeighborhoodEntry,
    PathResult,
    ancestor_chain,
    find_all_paths,
    find_closest_common_ancestor,
    find_shortest_path,
    find_topics_within_distance,
    get_graph_stats,
    path_distance,
    topic_depth,
)
from .weights import STOP_WORDS, edge_weight, jaccard_similarity, significant_words

__all__ = [
    "Graph",
    "GraphStats",
    "NeighborhoodEntry",
    "PathResult",
    "STOP_WORDS",
    "TopicRecord",
    "ancestor_chain",
    "build_graph",
    "edge_weight",
    "find_all_paths",
    "find_closest_common_ancestor",
    "find_shortest_path",
    "find_topics_within_distance",
    "get_graph_stats",
    "jaccard_similarity",
    "path_distance",
    "significant_words",
    "topic_depth",
]
