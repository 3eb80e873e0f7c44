from __future__ import annotations

import json

import pytest

from topicpath.cli import main

TOPICS_YAML = """
topics:
  - id: root
    name: Root Topic
    content: Root content
    children:
      - id: child1
        name: Child 1
        content: Child 1 content
        children:
          - id: grandchild1
            name: Grandchild 1
            content: Grandchild 1 content
      - id: child2
        name: Child 2
        content: Child 2 content
        children:
          - id: grandchild2
            name: Grandchild 2
            content: Grandchild 2 content
"""


@pytest.fixture
def run(tmp_path, monkeypatch, capsys):
    monkeypatch.setenv("TOPICPATH_HOME", str(tmp_path / "home"))
    database = tmp_path / "topics.db"

    def invoke(*argv: str):
        code = main(["--database", str(database), *argv])
        return code, capsys.readouterr().out

    return invoke


@pytest.fixture
def seeded(run, tmp_path):
    source = tmp_path / "topics.yaml"
    source.write_text(TOPICS_YAML, encoding="utf-8")
    code, output = run("topic", "import", str(source))
    assert code == 0
    assert "Imported 5 topics" in output
    return run


def test_topic_add_and_list(run) -> None:
    code, output = run("topic", "add", "Root", "--id", "root", "--content", "Root body")
    assert code == 0
    assert "ID: root" in output

    code, _ = run("topic", "add", "Child", "--id", "child", "--parent", "root")
    assert code == 0

    code, output = run("topic", "list")
    assert "Topics (2):" in output
    assert "child  Child (parent: root)" in output


def test_topic_add_with_unknown_parent_fails(run) -> None:
    code, output = run("topic", "add", "Child", "--parent", "missing")
    assert code == 1
    assert "Error: Parent topic with ID 'missing' not found" in output


def test_shortest_path(seeded) -> None:
    code, output = seeded("path", "shortest", "grandchild1", "grandchild2", "--json")
    assert code == 0
    payload = json.loads(output)
    assert payload["path"] == ["grandchild1", "child1", "root", "child2", "grandchild2"]
    assert payload["distance"] == pytest.approx(5.4167, abs=1e-3)


def test_shortest_path_not_found(seeded) -> None:
    code, output = seeded("path", "shortest", "root", "missing")
    assert code == 1
    assert "No path found between 'root' and 'missing'" in output


def test_all_paths_and_ancestor(seeded) -> None:
    code, output = seeded("path", "all", "child1", "child2", "--max-depth", "2")
    assert code == 0
    assert "child1 -> root -> child2" in output

    code, output = seeded("path", "all", "grandchild1", "grandchild2", "--max-depth", "2")
    assert code == 1

    code, output = seeded("path", "ancestor", "grandchild1", "grandchild2")
    assert code == 0
    assert output.strip() == "root"


def test_near_and_stats(seeded) -> None:
    code, output = seeded("path", "near", "root", "--max-distance", "1.5", "--json")
    assert code == 0
    assert [entry["topic_id"] for entry in json.loads(output)] == ["root", "child1", "child2"]

    code, output = seeded("path", "stats", "--json")
    assert json.loads(output) == {
        "node_count": 5,
        "edge_count": 4,
        "max_depth": 2,
        "root_ids": ["root"],
    }


def test_near_rejects_negative_radius(seeded) -> None:
    code, output = seeded("path", "near", "root", "--max-distance", "-1")
    assert code == 1
    assert "negative" in output
    assert "not found" not in output


def test_show_tree(seeded) -> None:
    code, output = seeded("topic", "show", "root", "--tree")
    assert code == 0
    assert [line.split()[0] for line in output.splitlines()] == [
        "root",
        "child1",
        "grandchild1",
        "child2",
        "grandchild2",
    ]


def test_move_cycle_is_rejected(seeded) -> None:
    code, output = seeded("topic", "move", "root", "--parent", "grandchild1")
    assert code == 1
    assert "circular reference" in output


def test_remove_and_show(seeded) -> None:
    code, output = seeded("topic", "remove", "child1")
    assert code == 1
    assert "children" in output

    code, output = seeded("topic", "remove", "grandchild1")
    assert code == 0

    code, output = seeded("topic", "show", "root", "--tree")
    assert code == 0
    assert "grandchild1" not in output
    assert "grandchild2" in output


def test_import_missing_file(run, tmp_path) -> None:
    code, output = run("topic", "import", str(tmp_path / "absent.yaml"))
    assert code == 1
    assert "File not found" in output
