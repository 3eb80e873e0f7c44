"""Exceptions raised by the topic service layer.

The graph queries themselves never raise for unknown ids; these errors only
cover writes and input validation.
"""

from __future__ import annotations


class TopicPathError(Exception):
    """Base class for all topicpath errors."""


class TopicNotFoundError(TopicPathError, LookupError):
    def __init__(self, topic_id: str, role: str = "Topic") -> None:
        super().__init__(f"{role} with ID '{topic_id}' not found")
        self.topic_id = topic_id


class TopicValidationError(TopicPathError, ValueError):
    def __init__(self, message: str, field: str | None = None) -> None:
        if field:
            message = f"Validation failed for field '{field}': {message}"
        super().__init__(message)
        self.field = field


class CircularReferenceError(TopicValidationError):
    def __init__(self, topic_id: str, parent_id: str) -> None:
        super().__init__(
            f"Cannot set parent of '{topic_id}' to '{parent_id}': would create circular reference"
        )
        self.topic_id = topic_id
        self.parent_id = parent_id


class TopicConflictError(TopicPathError):
    """Raised when a write conflicts with existing topics."""
