"""MCP tools for browsing and editing topics."""

import json
from typing import Any, Dict, Optional

from ...errors import TopicPathError
from ...service import TopicService


async def list_topics(
    service: TopicService,
    offset: int = 0,
    limit: Optional[int] = None,
    query: Optional[str] = None,
) -> Dict[str, Any]:
    """List topics, optionally filtered by a text query.

    Args:
        service: Topic service
        offset: Number of topics to skip
        limit: Maximum number of topics to return
        query: Case-insensitive text to look for in names and content

    Returns:
        The requested page of topics, the page size as ``count`` and the
        number of matching topics before paging as ``total``
    """
    if query:
        matches = service.search_topics(query)
        total = len(matches)
        records = matches[offset:] if limit is None else matches[offset:offset + limit]
    else:
        total = service.count_topics()
        records = service.list_topics(offset=offset, limit=limit)
    return {
        "topics": [record.to_dict() for record in records],
        "count": len(records),
        "total": total,
    }


async def get_topic(
    service: TopicService,
    topic_id: str,
    include_children: bool = False,
) -> Dict[str, Any]:
    if include_children:
        tree = service.get_topic_tree(topic_id)
        if tree is None:
            return {"error": f"Topic with ID '{topic_id}' not found"}
        return tree

    record = service.get_topic(topic_id)
    if record is None:
        return {"error": f"Topic with ID '{topic_id}' not found"}
    return record.to_dict()


async def create_topic(
    service: TopicService,
    name: str,
    content: str = "",
    parent_id: Optional[str] = None,
    topic_id: Optional[str] = None,
) -> Dict[str, Any]:
    try:
        record = service.create_topic(name, content, parent_id=parent_id, topic_id=topic_id)
    except TopicPathError as exc:
        return {"error": str(exc)}
    return record.to_dict()


async def move_topic(
    service: TopicService,
    topic_id: str,
    parent_id: Optional[str] = None,
) -> Dict[str, Any]:
    try:
        record = service.move_topic(topic_id, parent_id)
    except TopicPathError as exc:
        return {"error": str(exc)}
    return record.to_dict()


async def delete_topic(service: TopicService, topic_id: str) -> Dict[str, Any]:
    try:
        deleted = service.delete_topic(topic_id)
    except TopicPathError as exc:
        return {"error": str(exc)}
    if not deleted:
        return {"error": f"Topic with ID '{topic_id}' not found"}
    return {"deleted": topic_id}


_HANDLERS = {
    "list_topics": list_topics,
    "get_topic": get_topic,
    "create_topic": create_topic,
    "move_topic": move_topic,
    "delete_topic": delete_topic,
}


def register_tools(server) -> None:
    """Register topic tools with the MCP server."""

    def make_handler(tool_name: str):
        async def handler(service: TopicService, args: Dict[str, Any]) -> str:
            result = await _HANDLERS[tool_name](service, **args)
            return json.dumps(result, indent=2)
        return handler

    for tool_def in TOPIC_TOOLS:
        server.register_tool(
            tool_def["name"],
            tool_def["description"],
            tool_def["inputSchema"],
            make_handler(tool_def["name"]),
        )


# Tool registration metadata
TOPIC_TOOLS = [
    {
        "name": "list_topics",
        "description": "List stored topics, optionally filtered by text in their name or content",
        "inputSchema": {
            "type": "object",
            "properties": {
                "offset": {"type": "integer", "description": "Number of topics to skip"},
                "limit": {"type": "integer", "description": "Maximum number of topics"},
                "query": {"type": "string", "description": "Text to search for"},
            },
        },
    },
    {
        "name": "get_topic",
        "description": "Get a topic by ID, optionally with its nested children",
        "inputSchema": {
            "type": "object",
            "properties": {
                "topic_id": {"type": "string", "description": "Topic ID"},
                "include_children": {
                    "type": "boolean",
                    "description": "Include the descendant hierarchy (default: false)",
                },
            },
            "required": ["topic_id"],
        },
    },
    {
        "name": "create_topic",
        "description": "Create a topic, optionally under an existing parent",
        "inputSchema": {
            "type": "object",
            "properties": {
                "name": {"type": "string", "description": "Topic name"},
                "content": {"type": "string", "description": "Topic body text"},
                "parent_id": {"type": "string", "description": "Parent topic ID"},
                "topic_id": {"type": "string", "description": "Explicit ID (generated if omitted)"},
            },
            "required": ["name"],
        },
    },
    {
        "name": "move_topic",
        "description": "Move a topic under a new parent, or to the root when no parent is given",
        "inputSchema": {
            "type": "object",
            "properties": {
                "topic_id": {"type": "string", "description": "Topic to move"},
                "parent_id": {"type": "string", "description": "New parent topic ID"},
            },
            "required": ["topic_id"],
        },
    },
    {
        "name": "delete_topic",
        "description": "Delete a topic that has no children",
        "inputSchema": {
            "type": "object",
            "properties": {
                "topic_id": {"type": "string", "description": "Topic to delete"},
            },
            "required": ["topic_id"],
        },
    },
]
