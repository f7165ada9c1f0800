"""Shared fixtures for issuegraph tests."""

import json
from pathlib import Path

import pytest

from issuegraph.models import DependencyKind, Edge, Node, StaticMetrics, Status


@pytest.fixture
def chain_nodes() -> list[Node]:
    """Three issues: B depends on A, C depends on B."""
    return [
        Node(id="A", title="Design schema", status=Status.OPEN, priority=1, labels=["api"]),
        Node(id="B", title="Build endpoint", status=Status.BLOCKED, priority=2, labels=["api", "backend"]),
        Node(id="C", title="Write docs", status=Status.IN_PROGRESS, priority=3, labels=["docs"]),
    ]


@pytest.fixture
def chain_edges() -> list[Edge]:
    return [
        Edge(from_id="B", to_id="A", kind=DependencyKind.BLOCKS),
        Edge(from_id="C", to_id="B", kind=DependencyKind.BLOCKS),
        Edge(from_id="C", to_id="A", kind=DependencyKind.RELATED),
    ]


@pytest.fixture
def chain_metrics() -> StaticMetrics:
    return StaticMetrics(
        pagerank={"A": 0.5, "B": 0.3, "C": 0.2},
        betweenness_scores={"A": 0.0, "B": 1.0, "C": 0.0},
        critical_path={"A": 1.0, "B": 2.0, "C": 3.0},
        topo_order=["A", "B", "C"],
    )


@pytest.fixture
def issues_file(tmp_path: Path) -> Path:
    """JSONL issues file in tracker export shape."""
    records = [
        {"id": "A", "title": "Design schema", "status": "open", "priority": 1, "labels": ["api"]},
        {
            "id": "B",
            "title": "Build endpoint",
            "status": "blocked",
            "priority": 2,
            "labels": ["api"],
            "dependencies": [{"depends_on_id": "A", "type": "blocks"}],
        },
        {
            "id": "C",
            "title": "Write docs",
            "status": "in_progress",
            "priority": 3,
            "dependencies": [
                {"depends_on_id": "B", "type": "blocks"},
                {"depends_on_id": "A", "type": "related"},
            ],
        },
    ]
    path = tmp_path / "issues.jsonl"
    path.write_text("\n".join(json.dumps(r) for r in records) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def metrics_file(tmp_path: Path) -> Path:
    path = tmp_path / "metrics.json"
    path.write_text(json.dumps({
        "pagerank": {"A": 0.5, "B": 0.3, "C": 0.2},
        "betweenness": {"B": 1.0},
        "critical_path": {"A": 1, "B": 2, "C": 3},
        "cycles": [],
        "topological_order": ["A", "B", "C"],
    }), encoding="utf-8")
    return path
