from __future__ import annotations

from topicpath.graph import TopicRecord, build_graph


def test_build_graph_links_children_to_parents(sample_records) -> None:
    graph = build_graph(sample_records)

    assert set(graph.nodes) == {"root", "child1", "child2", "grandchild1", "grandchild2"}
    assert graph.neighbors("root") == {"child1", "child2"}
    assert graph.neighbors("child1") == {"root", "grandchild1"}
    assert graph.neighbors("grandchild2") == {"child2"}
    assert graph.edge_count() == 4


def test_build_graph_from_empty_list() -> None:
    graph = build_graph([])
    assert len(graph) == 0
    assert graph.edge_count() == 0


def test_dangling_parent_is_not_an_edge() -> None:
    graph = build_graph([TopicRecord("orphan", "Orphan", parent_id="missing")])

    assert "orphan" in graph
    assert graph.neighbors("orphan") == set()
    assert graph.parent_of("orphan") is None


def test_two_cycle_produces_a_single_edge() -> None:
    graph = build_graph(
        [
            TopicRecord("topic1", "Topic 1", "Content 1", parent_id="topic2"),
            TopicRecord("topic2", "Topic 2", "Content 2", parent_id="topic1"),
        ]
    )

    assert graph.neighbors("topic1") == {"topic2"}
    assert graph.neighbors("topic2") == {"topic1"}
    assert graph.edge_count() == 1


def test_self_parent_is_ignored() -> None:
    graph = build_graph([TopicRecord("loop", "Loop", parent_id="loop")])

    assert graph.neighbors("loop") == set()
    assert graph.parent_of("loop") is None


def test_duplicate_ids_keep_the_last_record() -> None:
    graph = build_graph(
        [
            TopicRecord("root", "Root"),
            TopicRecord("dup", "First", parent_id="root"),
            TopicRecord("dup", "Second"),
        ]
    )

    assert graph.nodes["dup"].name == "Second"
    assert graph.neighbors("dup") == set()
    assert graph.edge_count() == 0


def test_vocabulary_is_precomputed_per_node() -> None:
    graph = build_graph([TopicRecord("py", "Python", "Dynamic typing and duck typing")])
    assert graph.vocabulary["py"] == {"python", "dynamic", "typing", "duck"}


def test_topic_record_from_dict_accepts_camel_case_parent() -> None:
    record = TopicRecord.from_dict(
        {"id": "c", "name": "Child", "content": None, "parentTopicId": "p"}
    )
    assert record == TopicRecord("c", "Child", "", parent_id="p")
    assert record.to_dict() == {"id": "c", "name": "Child", "content": "", "parent_id": "p"}
