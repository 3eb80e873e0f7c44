"""Command line utilities for managing topics and querying paths between them."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sqlite3
import sys
from pathlib import Path
from typing import Iterable

from .config import LocalConfig
from .errors import TopicPathError
from .loader import load_topics
from .service import TopicService
from .storage.database import open_database

logger = logging.getLogger(__name__)


def _resolve_config(database: Path | None) -> LocalConfig:
    config = LocalConfig.from_settings()
    if database is not None:
        config.database_path = database
    return config


def _ensure_connection(config: LocalConfig) -> sqlite3.Connection:
    return open_database(config)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )


def _print_topic(record, indent: str = "  ") -> None:
    parent = f" (parent: {record.parent_id})" if record.parent_id else ""
    print(f"{indent}{record.id}  {record.name}{parent}")


def _print_tree(tree: dict) -> None:
    pending = [(tree, 0)]
    while pending:
        node, depth = pending.pop()
        print(f"{'  ' * (depth + 1)}{node['id']}  {node['name']}")
        pending.extend((child, depth + 1) for child in reversed(node["children"]))


def _print_path(result) -> None:
    print(f"Path ({result.hops} hops, distance {result.distance:.4f}):")
    for position, topic in enumerate(result.topics):
        print(f"  {position}. {topic.id}  {topic.name}")


# ----------------------------------------------------------------------
# topic commands


def _topic_add(service: TopicService, args: argparse.Namespace) -> int:
    record = service.create_topic(
        args.name, args.content, parent_id=args.parent, topic_id=args.id
    )
    print(f"Created topic '{record.name}' (ID: {record.id})")
    return 0


def _topic_list(service: TopicService, args: argparse.Namespace) -> int:
    records = service.list_topics()
    if not records:
        print("No topics stored.")
        return 0
    print(f"Topics ({len(records)}):")
    for record in records:
        _print_topic(record)
    return 0


def _topic_show(service: TopicService, args: argparse.Namespace) -> int:
    if args.tree:
        tree = service.get_topic_tree(args.id)
        if tree is None:
            print(f"Error: Topic with ID '{args.id}' not found")
            return 1
        _print_tree(tree)
        return 0

    record = service.require_topic(args.id)
    print(f"{record.name} (ID: {record.id})")
    if record.parent_id:
        print(f"  Parent: {record.parent_id}")
    children = service.get_children(record.id)
    print(f"  Children: {len(children)}")
    if record.content:
        print()
        print(record.content)
    return 0


def _topic_search(service: TopicService, args: argparse.Namespace) -> int:
    records = service.search_topics(args.query)
    print(f"Found {len(records)} topic(s) matching '{args.query}':")
    for record in records:
        _print_topic(record)
    return 0


def _topic_update(service: TopicService, args: argparse.Namespace) -> int:
    record = service.update_topic(args.id, name=args.name, content=args.content)
    print(f"Updated topic '{record.name}' (ID: {record.id})")
    return 0


def _topic_move(service: TopicService, args: argparse.Namespace) -> int:
    record = service.move_topic(args.id, args.parent)
    target = record.parent_id or "the root"
    print(f"Moved topic '{record.id}' under {target}")
    return 0


def _topic_remove(service: TopicService, args: argparse.Namespace) -> int:
    if not service.delete_topic(args.id):
        print(f"Error: Topic with ID '{args.id}' not found")
        return 1
    print(f"Removed topic '{args.id}'")
    return 0


def _topic_import(service: TopicService, args: argparse.Namespace) -> int:
    records = load_topics(args.file)
    created = service.import_topics(records)
    print(f"Imported {len(records)} topics from {args.file} ({created} new)")
    return 0


# ----------------------------------------------------------------------
# path commands


def _path_shortest(service: TopicService, args: argparse.Namespace) -> int:
    result = service.find_shortest_path(args.start, args.end)
    if result is None:
        print(f"No path found between '{args.start}' and '{args.end}'")
        return 1
    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        _print_path(result)
    return 0


def _path_all(service: TopicService, args: argparse.Namespace) -> int:
    max_depth = args.max_depth if args.max_depth is not None else args.config.default_max_depth
    results = service.find_all_paths(args.start, args.end, max_depth)
    if args.json:
        print(json.dumps([result.to_dict() for result in results], indent=2))
        return 0
    if not results:
        print(f"No paths within {max_depth} hops between '{args.start}' and '{args.end}'")
        return 1
    print(f"Found {len(results)} path(s):")
    for result in results:
        print(f"  {result.distance:.4f}  {' -> '.join(result.path)}")
    return 0


def _path_ancestor(service: TopicService, args: argparse.Namespace) -> int:
    ancestor = service.find_closest_common_ancestor(args.first, args.second)
    if ancestor is None:
        print(f"No common ancestor for '{args.first}' and '{args.second}'")
        return 1
    print(ancestor)
    return 0


def _path_near(service: TopicService, args: argparse.Namespace) -> int:
    radius = (
        args.max_distance
        if args.max_distance is not None
        else args.config.default_max_distance
    )
    if radius < 0:
        print(f"Error: Search radius must not be negative (got {radius})")
        return 1
    entries = service.find_topics_within_distance(args.id, radius)
    if args.json:
        print(json.dumps([entry.to_dict() for entry in entries], indent=2))
        return 0
    if not entries:
        print(f"Error: Topic with ID '{args.id}' not found")
        return 1
    print(f"Topics within {radius} of '{args.id}':")
    for entry in entries:
        via = f"  (via {entry.parent_id})" if entry.parent_id else ""
        print(f"  {entry.distance:.4f}  {entry.topic_id}{via}")
    return 0


def _path_stats(service: TopicService, args: argparse.Namespace) -> int:
    stats = service.get_graph_stats()
    if args.json:
        print(json.dumps(stats.to_dict(), indent=2))
        return 0
    print("Topic graph summary:")
    print(f"  Topics     : {stats.node_count}")
    print(f"  Edges      : {stats.edge_count}")
    print(f"  Max depth  : {stats.max_depth}")
    print(f"  Roots      : {', '.join(stats.root_ids) or '-'}")
    return 0


def _serve_mcp(args: argparse.Namespace) -> int:
    """Start the MCP server."""
    config = args.config

    try:
        from .mcp.server import create_server
    except ImportError as e:
        print(f"Error: MCP server dependencies not available: {e}")
        print("Install with: pip install mcp")
        return 1

    logger.info("Starting topicpath MCP server on %s", config.resolved_database_path())

    server = create_server(config)
    try:
        asyncio.run(server.run())
    except KeyboardInterrupt:
        logger.info("Shutting down server")
    finally:
        server.cleanup()
    return 0


def _with_service(handler):
    """Wrap a command so it runs against a service bound to a fresh connection."""

    def run(args: argparse.Namespace) -> int:
        connection = _ensure_connection(args.config)
        try:
            return handler(TopicService(connection), args)
        finally:
            connection.close()

    return run


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--database",
        type=Path,
        help="Path to the SQLite database (defaults to ~/.topicpath/topicpath.db)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    topic_parser = subparsers.add_parser("topic", help="Manage topics")
    topic_sub = topic_parser.add_subparsers(dest="topic_command", required=True)

    add_parser = topic_sub.add_parser("add", help="Create a topic")
    add_parser.add_argument("name", help="Topic name")
    add_parser.add_argument("--content", default="", help="Topic body text")
    add_parser.add_argument("--parent", help="Parent topic ID")
    add_parser.add_argument("--id", help="Explicit topic ID (generated if omitted)")
    add_parser.set_defaults(func=_with_service(_topic_add))

    list_parser = topic_sub.add_parser("list", help="List all topics")
    list_parser.set_defaults(func=_with_service(_topic_list))

    show_parser = topic_sub.add_parser("show", help="Show a topic")
    show_parser.add_argument("id", help="Topic ID")
    show_parser.add_argument("--tree", action="store_true", help="Print the descendant tree")
    show_parser.set_defaults(func=_with_service(_topic_show))

    search_parser = topic_sub.add_parser("search", help="Search topic names and content")
    search_parser.add_argument("query", help="Text to search for")
    search_parser.set_defaults(func=_with_service(_topic_search))

    update_parser = topic_sub.add_parser("update", help="Change a topic's name or content")
    update_parser.add_argument("id", help="Topic ID")
    update_parser.add_argument("--name", help="New name")
    update_parser.add_argument("--content", help="New body text")
    update_parser.set_defaults(func=_with_service(_topic_update))

    move_parser = topic_sub.add_parser("move", help="Move a topic under another parent")
    move_parser.add_argument("id", help="Topic ID")
    move_parser.add_argument("--parent", help="New parent ID (omit to make it a root)")
    move_parser.set_defaults(func=_with_service(_topic_move))

    remove_parser = topic_sub.add_parser("remove", help="Delete a topic without children")
    remove_parser.add_argument("id", help="Topic ID")
    remove_parser.set_defaults(func=_with_service(_topic_remove))

    import_parser = topic_sub.add_parser("import", help="Import topics from a YAML or JSON file")
    import_parser.add_argument("file", type=Path, help="Topic file")
    import_parser.set_defaults(func=_with_service(_topic_import))

    path_parser = subparsers.add_parser("path", help="Query paths between topics")
    path_sub = path_parser.add_subparsers(dest="path_command", required=True)

    shortest_parser = path_sub.add_parser("shortest", help="Lowest-weight path between two topics")
    shortest_parser.add_argument("start", help="Start topic ID")
    shortest_parser.add_argument("end", help="End topic ID")
    shortest_parser.set_defaults(func=_with_service(_path_shortest))

    all_parser = path_sub.add_parser("all", help="Every simple path up to a hop limit")
    all_parser.add_argument("start", help="Start topic ID")
    all_parser.add_argument("end", help="End topic ID")
    all_parser.add_argument("--max-depth", type=int, help="Maximum hops per path")
    all_parser.set_defaults(func=_with_service(_path_all))

    ancestor_parser = path_sub.add_parser("ancestor", help="Closest common ancestor of two topics")
    ancestor_parser.add_argument("first", help="First topic ID")
    ancestor_parser.add_argument("second", help="Second topic ID")
    ancestor_parser.set_defaults(func=_with_service(_path_ancestor))

    near_parser = path_sub.add_parser("near", help="Topics within a weighted distance")
    near_parser.add_argument("id", help="Topic ID")
    near_parser.add_argument("--max-distance", type=float, help="Search radius")
    near_parser.set_defaults(func=_with_service(_path_near))

    stats_parser = path_sub.add_parser("stats", help="Graph statistics")
    stats_parser.set_defaults(func=_with_service(_path_stats))

    for query_parser in (shortest_parser, all_parser, near_parser, stats_parser):
        query_parser.add_argument("--json", action="store_true", help="Print JSON output")

    serve_parser = subparsers.add_parser("serve", help="Start the MCP server")
    serve_parser.set_defaults(func=_serve_mcp)

    return parser


def main(argv: Iterable[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    _configure_logging(args.log_level)
    args.config = _resolve_config(args.database)
    try:
        return args.func(args)
    except TopicPathError as exc:
        print(f"Error: {exc}")
        return 1
    except FileNotFoundError as exc:
        print(f"Error: File not found: {exc}")
        return 1


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
