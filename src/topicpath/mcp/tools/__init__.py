"""MCP tool handlers; importable without the MCP SDK installed."""

from .paths import PATH_TOOLS
from .topics import TOPIC_TOOLS

__all__ = ["PATH_TOOLS", "TOPIC_TOOLS"]
