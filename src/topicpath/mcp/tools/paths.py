"""MCP tools for weighted path queries over the topic hierarchy."""

import json
from typing import Any, Dict, Optional

from ...config import LocalConfig
from ...service import TopicService


def _no_path(start_id: str, end_id: str) -> Dict[str, Any]:
    return {"error": f"No path found between '{start_id}' and '{end_id}'"}


async def shortest_path(
    service: TopicService,
    start_id: str,
    end_id: str,
) -> Dict[str, Any]:
    """Find the lowest-weight path between two topics.

    Args:
        service: Topic service holding the cached graph
        start_id: Topic the path starts at
        end_id: Topic the path ends at

    Returns:
        Path ids, total distance and the topics along the way, or an error
        entry when either id is unknown or the topics are not connected
    """
    result = service.find_shortest_path(start_id, end_id)
    if result is None:
        return _no_path(start_id, end_id)
    return result.to_dict()


async def all_paths(
    service: TopicService,
    start_id: str,
    end_id: str,
    max_depth: Optional[int] = None,
    default_max_depth: int = 10,
) -> Dict[str, Any]:
    """Enumerate simple paths up to ``max_depth`` hops, cheapest first."""
    depth = default_max_depth if max_depth is None else int(max_depth)
    results = service.find_all_paths(start_id, end_id, depth)
    return {
        "start_id": start_id,
        "end_id": end_id,
        "max_depth": depth,
        "paths": [result.to_dict() for result in results],
        "total_paths": len(results),
    }


async def common_ancestor(
    service: TopicService,
    first_id: str,
    second_id: str,
) -> Dict[str, Any]:
    ancestor_id = service.find_closest_common_ancestor(first_id, second_id)
    if ancestor_id is None:
        return {"error": f"No common ancestor for '{first_id}' and '{second_id}'"}
    return {
        "ancestor_id": ancestor_id,
        "ancestor": service.graph.nodes[ancestor_id].to_dict(),
    }


async def topics_within_distance(
    service: TopicService,
    topic_id: str,
    max_distance: Optional[float] = None,
    default_max_distance: float = 3.0,
) -> Dict[str, Any]:
    """List topics reachable from ``topic_id`` within a weighted radius."""
    radius = default_max_distance if max_distance is None else float(max_distance)
    if topic_id not in service.graph:
        return {"error": f"Topic '{topic_id}' not found"}
    entries = service.find_topics_within_distance(topic_id, radius)
    return {
        "topic_id": topic_id,
        "max_distance": radius,
        "topics": [entry.to_dict() for entry in entries],
    }


async def graph_stats(service: TopicService) -> Dict[str, Any]:
    return service.get_graph_stats().to_dict()


def register_tools(server, config: Optional[LocalConfig] = None) -> None:
    """Register path tools with the MCP server."""
    active = config or LocalConfig()

    def make_handler(tool_name: str):
        """Create handler for specific tool."""
        async def handler(service: TopicService, args: Dict[str, Any]) -> str:
            if tool_name == "find_shortest_path":
                result = await shortest_path(service, **args)
            elif tool_name == "find_all_paths":
                result = await all_paths(
                    service, default_max_depth=active.default_max_depth, **args
                )
            elif tool_name == "find_common_ancestor":
                result = await common_ancestor(service, **args)
            elif tool_name == "find_topics_within_distance":
                result = await topics_within_distance(
                    service, default_max_distance=active.default_max_distance, **args
                )
            elif tool_name == "get_graph_stats":
                result = await graph_stats(service)
            else:
                result = {"error": f"Unknown tool: {tool_name}"}
            return json.dumps(result, indent=2)
        return handler

    for tool_def in PATH_TOOLS:
        server.register_tool(
            tool_def["name"],
            tool_def["description"],
            tool_def["inputSchema"],
            make_handler(tool_def["name"]),
        )


# Tool registration metadata
PATH_TOOLS = [
    {
        "name": "find_shortest_path",
        "description": "Find the lowest-weight path between two topics through the parent/child hierarchy",
        "inputSchema": {
            "type": "object",
            "properties": {
                "start_id": {"type": "string", "description": "Topic to start from"},
                "end_id": {"type": "string", "description": "Topic to reach"},
            },
            "required": ["start_id", "end_id"],
        },
    },
    {
        "name": "find_all_paths",
        "description": "Enumerate every simple path between two topics up to a hop limit, cheapest first",
        "inputSchema": {
            "type": "object",
            "properties": {
                "start_id": {"type": "string", "description": "Topic to start from"},
                "end_id": {"type": "string", "description": "Topic to reach"},
                "max_depth": {
                    "type": "integer",
                    "description": "Maximum number of hops per path (default: 10)",
                },
            },
            "required": ["start_id", "end_id"],
        },
    },
    {
        "name": "find_common_ancestor",
        "description": "Find the closest topic that is an ancestor of both topics",
        "inputSchema": {
            "type": "object",
            "properties": {
                "first_id": {"type": "string", "description": "First topic"},
                "second_id": {"type": "string", "description": "Second topic"},
            },
            "required": ["first_id", "second_id"],
        },
    },
    {
        "name": "find_topics_within_distance",
        "description": "List topics whose weighted distance from a topic is within a radius",
        "inputSchema": {
            "type": "object",
            "properties": {
                "topic_id": {"type": "string", "description": "Topic at the centre of the search"},
                "max_distance": {
                    "type": "number",
                    "description": "Maximum cumulative edge weight (default: 3.0)",
                },
            },
            "required": ["topic_id"],
        },
    },
    {
        "name": "get_graph_stats",
        "description": "Report node count, edge count, maximum depth and root topics",
        "inputSchema": {"type": "object", "properties": {}},
    },
]
