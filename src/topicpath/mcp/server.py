"""MCP server exposing topic path queries over stdio."""

from __future__ import annotations

import logging
import sqlite3
from typing import Any, Awaitable, Callable, Dict

try:
    from mcp.server import Server
    from mcp.server.stdio import stdio_server
    from mcp import types
    MCP_AVAILABLE = True
except ImportError:
    MCP_AVAILABLE = False
    Server = None
    stdio_server = None
    types = None

from ..config import LocalConfig
from ..service import TopicService
from ..storage.database import open_database

logger = logging.getLogger(__name__)

ToolHandler = Callable[[TopicService, Dict[str, Any]], Awaitable[str]]


class TopicPathServer:
    """MCP server for topic hierarchy navigation."""

    def __init__(self, config: LocalConfig | None = None):
        if not MCP_AVAILABLE:
            raise RuntimeError(
                "MCP SDK is not installed. Install with: pip install mcp"
            )

        self.config = config or LocalConfig()
        self.server = Server("topicpath")
        self.connection: sqlite3.Connection | None = None
        self.service: TopicService | None = None
        self.tools: Dict[str, ToolHandler] = {}
        self.tool_metadata: Dict[str, tuple[str, Dict]] = {}

        # Register handlers once at initialization
        self._setup_handlers()

    def _get_service(self) -> TopicService:
        """Get or create the topic service; its graph cache lives as long as the server."""
        if self.service is None:
            self.connection = open_database(self.config)
            self.service = TopicService(self.connection)
        return self.service

    def _setup_handlers(self) -> None:
        """Set up MCP protocol handlers."""

        @self.server.list_tools()
        async def list_tools() -> list[types.Tool]:
            """List available tools."""
            return [
                types.Tool(
                    name=tool_name,
                    description=desc,
                    inputSchema=schema,
                )
                for tool_name, (desc, schema) in self.tool_metadata.items()
            ]

        @self.server.call_tool()
        async def call_tool(name: str, arguments: dict) -> list[types.TextContent]:
            """Handle tool invocation."""
            if name not in self.tools:
                raise ValueError(f"Unknown tool: {name}")

            service = self._get_service()
            handler = self.tools[name]

            try:
                result = await handler(service, arguments or {})
                return [types.TextContent(type="text", text=result)]
            except Exception as e:
                logger.exception("Tool %s failed", name)
                return [types.TextContent(type="text", text=f"Error: {str(e)}")]

    def register_tool(
        self,
        name: str,
        description: str,
        input_schema: Dict[str, Any],
        handler: ToolHandler,
    ) -> None:
        """Register an MCP tool.

        Parameters
        ----------
        name:
            Tool name
        description:
            Tool description
        input_schema:
            JSON schema for tool inputs
        handler:
            Coroutine function called with the topic service and the tool arguments
        """
        self.tools[name] = handler
        self.tool_metadata[name] = (description, input_schema)

    async def run(self) -> None:
        """Run the MCP server with stdio transport."""
        async with stdio_server() as (read_stream, write_stream):
            await self.server.run(
                read_stream,
                write_stream,
                self.server.create_initialization_options(),
            )

    def cleanup(self) -> None:
        """Clean up resources."""
        if self.connection:
            self.connection.close()
            self.connection = None
        self.service = None


def create_server(config: LocalConfig | None = None) -> TopicPathServer:
    """Create and configure an MCP server instance.

    Parameters
    ----------
    config:
        topicpath configuration

    Returns
    -------
    Configured TopicPathServer instance
    """
    server = TopicPathServer(config)

    from .tools import paths, topics

    # Topic browsing and editing
    topics.register_tools(server)

    # Shortest path, all paths, ancestors, neighbourhoods, stats
    paths.register_tools(server, config=server.config)

    return server
