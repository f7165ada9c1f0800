"""Golden determinism checks: identical input must give byte-identical output."""

import random

import pytest

from issuegraph.config import ExportConfig
from issuegraph.dispatch import render_graph
from issuegraph.models import DependencyKind, Edge, Node, StaticMetrics, Status

FORMATS = ["json", "dot", "mermaid", "svg", "png"]


def build_graph(seed: int):
    rng = random.Random(seed)
    statuses = list(Status)
    nodes = [
        Node(
            id=f"bv-{i:02d}",
            title=f"Task {i} <{rng.choice(['api', 'ui', 'db'])}> \"quoted\"",
            status=rng.choice(statuses),
            priority=rng.randint(0, 4),
            labels=rng.sample(["api", "ui", "db", "ops"], k=rng.randint(0, 2)),
        )
        for i in range(12)
    ]
    edges = []
    for i in range(1, 12):
        for _ in range(rng.randint(0, 2)):
            target = rng.randrange(0, i)
            kind = DependencyKind.BLOCKS if rng.random() < 0.8 else DependencyKind.RELATED
            edges.append(Edge(from_id=nodes[i].id, to_id=nodes[target].id, kind=kind))
    metrics = StaticMetrics(
        pagerank={n.id: round(rng.random(), 4) for n in nodes},
        betweenness_scores={n.id: round(rng.random() * 3, 4) for n in nodes},
        critical_path={n.id: rng.randint(1, 4) for n in nodes},
    )
    return nodes, edges, metrics


class TestDeterminism:
    """Test repeated and reordered renders are byte-identical."""

    @pytest.mark.parametrize("fmt", FORMATS)
    def test_repeated_render(self, fmt):
        nodes, edges, metrics = build_graph(7)
        config = ExportConfig(data_hash="0123456789abcdef")
        first = render_graph(nodes, edges, metrics, config, fmt)
        second = render_graph(nodes, edges, metrics, config, fmt)
        assert first == second

    @pytest.mark.parametrize("fmt", FORMATS)
    def test_input_order_irrelevant(self, fmt):
        """Test shuffling nodes and edges does not change the output."""
        nodes, edges, metrics = build_graph(11)
        shuffled_nodes = list(reversed(nodes))
        shuffled_edges = list(edges)
        random.Random(3).shuffle(shuffled_edges)

        assert render_graph(nodes, edges, metrics, output_format=fmt) == \
            render_graph(shuffled_nodes, shuffled_edges, metrics, output_format=fmt)


class TestEdgeKindFiltering:
    """Test only blocking dependencies inside the node set become edges."""

    @pytest.mark.parametrize("seed", [1, 2, 3])
    def test_edge_counts(self, seed):
        nodes, edges, metrics = build_graph(seed)
        config = ExportConfig(label="api")
        expected_ids = {n.id for n in nodes if n.has_label("api")}
        expected = [
            (e.from_id, e.to_id) for e in edges
            if e.kind == DependencyKind.BLOCKS and e.from_id in expected_ids and e.to_id in expected_ids
        ]

        dot = render_graph(nodes, edges, metrics, config, "dot").decode("utf-8")
        assert dot.count(" -> ") == len(expected)
        assert "dashed" not in dot
