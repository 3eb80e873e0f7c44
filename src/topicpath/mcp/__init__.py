"""MCP server and tool definitions."""

from .tools import PATH_TOOLS, TOPIC_TOOLS

__all__ = ["PATH_TOOLS", "TOPIC_TOOLS"]
