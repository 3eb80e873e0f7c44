"""Utilities for loading topic hierarchies from YAML or JSON files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, List, Optional, Set

import yaml

from .errors import TopicValidationError
from .graph.model import TopicRecord


def _ensure_str(value: Any, field: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise TopicValidationError("must be a non-empty string", field=field)
    return value.strip()


def _optional_str(value: Any, field: str) -> Optional[str]:
    if value is None:
        return None
    return _ensure_str(value, field)


def _parse_topic(
    raw: Any,
    implied_parent: Optional[str],
    out: List[TopicRecord],
    seen: Set[str],
) -> None:
    if not isinstance(raw, dict):
        raise TopicValidationError("each topic entry must be a mapping", field="topics[]")

    topic_id = _ensure_str(raw.get("id"), "topics[].id")
    if topic_id in seen:
        raise TopicValidationError(f"duplicate topic id '{topic_id}'", field="topics[].id")
    name = _ensure_str(raw.get("name", topic_id), "topics[].name")

    content = raw.get("content", "")
    if content is None:
        content = ""
    elif not isinstance(content, str):
        raise TopicValidationError("must be a string if provided", field="topics[].content")

    parent = _optional_str(raw.get("parent_id", raw.get("parent")), "topics[].parent")
    if parent is None:
        parent = implied_parent

    seen.add(topic_id)
    out.append(TopicRecord(id=topic_id, name=name, content=content.strip(), parent_id=parent))

    children = raw.get("children") or []
    if not isinstance(children, list):
        raise TopicValidationError("must be a list of mappings", field="topics[].children")
    for child in children:
        _parse_topic(child, topic_id, out, seen)


def parse_topics(data: Any) -> List[TopicRecord]:
    """Turn already-decoded YAML/JSON data into topic records.

    Accepts either a bare list of topics or a mapping with a ``topics`` list.
    Nested ``children`` lists imply the parent of each child.
    """
    if isinstance(data, dict):
        data = data.get("topics")
    if not isinstance(data, list):
        raise TopicValidationError("expected a list of topics", field="topics")

    records: List[TopicRecord] = []
    seen: Set[str] = set()
    for raw in data:
        _parse_topic(raw, None, records, seen)
    return records


def load_topics(path: str | Path) -> List[TopicRecord]:
    """Load topic records from a ``.yaml``/``.yml`` or ``.json`` file."""
    resource = Path(path)
    if not resource.exists():
        raise FileNotFoundError(str(path))

    text = resource.read_text(encoding="utf-8")
    if resource.suffix.lower() == ".json":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise TopicValidationError(f"invalid JSON in {resource.name}: {exc}") from exc
    else:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise TopicValidationError(f"invalid YAML in {resource.name}: {exc}") from exc
    return parse_topics(data)
