from __future__ import annotations

import pytest

from topicpath.graph import TopicRecord, edge_weight, jaccard_similarity, significant_words


def test_significant_words_drops_short_words_and_stop_words() -> None:
    words = significant_words("The cat and THE dog were in a big house")
    assert words == {"cat", "dog", "big", "house"}


def test_significant_words_treats_punctuation_as_whitespace() -> None:
    words = significant_words("graph-theory, (shortest) paths!")
    assert words == {"graph", "theory", "shortest", "paths"}


def test_significant_words_of_empty_text() -> None:
    assert significant_words("") == frozenset()
    assert significant_words("to be or not") == {"not"}


def test_jaccard_similarity_is_zero_when_either_side_is_empty() -> None:
    assert jaccard_similarity(set(), {"graph"}) == 0.0
    assert jaccard_similarity({"graph"}, set()) == 0.0


def test_jaccard_similarity_ratio() -> None:
    assert jaccard_similarity({"a1", "b2"}, {"b2", "c3"}) == pytest.approx(1 / 3)


def test_identical_vocabulary_costs_base_weight() -> None:
    a = TopicRecord("a", "Graph theory", "Shortest paths in graphs")
    b = TopicRecord("b", "Shortest paths", "graph theory graphs")
    assert edge_weight(a, b) == 1.0


def test_disjoint_vocabulary_costs_maximum_weight() -> None:
    a = TopicRecord("a", "Astronomy", "Stars and galaxies")
    b = TopicRecord("b", "Cooking", "Bread recipes")
    assert edge_weight(a, b) == 1.5


def test_empty_vocabulary_counts_as_no_similarity() -> None:
    a = TopicRecord("a", "A", "")
    b = TopicRecord("b", "A", "")
    assert edge_weight(a, b) == 1.5


def test_edge_weight_is_symmetric_and_bounded() -> None:
    a = TopicRecord("topic1", "JavaScript Basics", "Introduction to JavaScript programming language")
    b = TopicRecord("topic2", "JavaScript Advanced", "Advanced JavaScript programming concepts")

    forward = edge_weight(a, b)
    assert forward == edge_weight(b, a)
    assert 1.0 <= forward <= 1.5
    # 2 shared words out of 7 distinct ones.
    assert forward == pytest.approx(1.0 + (1 - 2 / 7) * 0.5)
