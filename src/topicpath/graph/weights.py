"""Edge weights derived from the vocabulary two topics share."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, AbstractSet, FrozenSet

if TYPE_CHECKING:
    from .model import TopicRecord


STOP_WORDS: FrozenSet[str] = frozenset(
    {
        "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for",
        "of", "with", "by", "is", "are", "was", "were", "be", "been", "being",
        "have", "has", "had", "do", "does", "did", "will", "would", "could",
        "should",
    }
)

STRUCTURAL_WEIGHT = 1.0
SIMILARITY_FACTOR = 0.5
MIN_WORD_LENGTH = 3

_PUNCTUATION = re.compile(r"[^\w\s]")


def significant_words(text: str) -> FrozenSet[str]:
    """Return the lower-cased words of ``text`` that carry meaning.

    Punctuation is replaced by spaces before splitting, words shorter than
    three characters are dropped, and so is anything in :data:`STOP_WORDS`.
    """

    cleaned = _PUNCTUATION.sub(" ", text.lower())
    return frozenset(
        word
        for word in cleaned.split()
        if len(word) >= MIN_WORD_LENGTH and word not in STOP_WORDS
    )


def jaccard_similarity(first: AbstractSet[str], second: AbstractSet[str]) -> float:
    """Size of the intersection over size of the union; 0 if either is empty."""

    if not first or not second:
        return 0.0
    return len(first & second) / len(first | second)


def weight_for_vocabularies(first: AbstractSet[str], second: AbstractSet[str]) -> float:
    similarity = jaccard_similarity(first, second)
    return STRUCTURAL_WEIGHT + (1.0 - similarity) * SIMILARITY_FACTOR


def edge_weight(a: "TopicRecord", b: "TopicRecord") -> float:
    """Traversal cost between two directly connected topics.

    The result lies in ``[1.0, 1.5]``: topics with identical vocabulary cost
    exactly 1.0, topics with nothing in common cost 1.5. The function is
    symmetric in its arguments.
    """

    return weight_for_vocabularies(
        significant_words(f"{a.name} {a.content}"),
        significant_words(f"{b.name} {b.content}"),
    )
