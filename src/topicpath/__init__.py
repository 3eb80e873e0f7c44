"""topicpath package.

Stores a hierarchy of topics locally and answers weighted path questions
over it: shortest routes, all routes, common ancestors, neighbourhoods and
shape statistics.
"""

__all__ = [
    "config",
    "errors",
    "graph",
    "loader",
    "mcp",
    "service",
    "storage",
]
