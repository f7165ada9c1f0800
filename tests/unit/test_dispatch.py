"""Unit tests for format dispatch and file output."""

import json
from pathlib import Path

import pytest
from defusedxml import ElementTree

from issuegraph.config import ExportConfig, GraphFormat
from issuegraph.dispatch import parse_format, render_graph, resolve_output, write_graph
from issuegraph.errors import ConfigurationError, EmptyGraphError, MissingMetricsError
from issuegraph.models import StaticMetrics, load_issues


class TestParseFormat:
    """Test explicit format parsing."""

    @pytest.mark.parametrize("value, expected", [
        ("json", GraphFormat.JSON),
        ("DOT", GraphFormat.DOT),
        (" mermaid ", GraphFormat.MERMAID),
        (".svg", GraphFormat.SVG),
        ("PNG", GraphFormat.PNG),
        (GraphFormat.PNG, GraphFormat.PNG),
    ])
    def test_known_formats(self, value, expected):
        assert parse_format(value) == expected

    def test_unknown_format(self):
        with pytest.raises(ConfigurationError, match="unsupported format"):
            parse_format("gif")


class TestResolveOutput:
    """Test format inference from output paths."""

    @pytest.mark.parametrize("name, expected", [
        ("graph.json", GraphFormat.JSON),
        ("graph.dot", GraphFormat.DOT),
        ("graph.gv", GraphFormat.DOT),
        ("graph.mmd", GraphFormat.MERMAID),
        ("graph.mermaid", GraphFormat.MERMAID),
        ("graph.SVG", GraphFormat.SVG),
        ("graph.png", GraphFormat.PNG),
    ])
    def test_extension_inference(self, name, expected):
        fmt, path = resolve_output(name)
        assert fmt == expected
        assert path == Path(name)

    def test_no_extension_appends_svg(self):
        """Test an extension-less path becomes an SVG with the suffix added."""
        fmt, path = resolve_output("out/graph")
        assert fmt == GraphFormat.SVG
        assert path == Path("out/graph.svg")

    def test_unknown_extension_defaults_to_svg(self):
        fmt, path = resolve_output("graph.txt")
        assert fmt == GraphFormat.SVG
        assert path == Path("graph.txt")

    def test_explicit_format_wins(self):
        fmt, path = resolve_output("graph.svg", "png")
        assert fmt == GraphFormat.PNG
        assert path == Path("graph.svg")

    def test_missing_path(self):
        with pytest.raises(ConfigurationError, match="output path is required"):
            resolve_output(None)
        with pytest.raises(ConfigurationError):
            resolve_output("")


class TestRenderGraph:
    """Test in-memory rendering for every format."""

    def test_requires_format(self, chain_nodes, chain_edges):
        with pytest.raises(ConfigurationError, match="output format is required"):
            render_graph(chain_nodes, chain_edges, None)

    def test_json_is_envelope(self, chain_nodes, chain_edges, chain_metrics):
        data = json.loads(render_graph(chain_nodes, chain_edges, chain_metrics, output_format="json"))
        assert data["format"] == "json"
        assert len(data["adjacency"]["nodes"]) == 3

    def test_dot_and_mermaid_are_graph_text(self, chain_nodes, chain_edges):
        dot = render_graph(chain_nodes, chain_edges, None, output_format="dot").decode("utf-8")
        mermaid = render_graph(chain_nodes, chain_edges, None, output_format="mermaid").decode("utf-8")
        assert dot.startswith("digraph G {")
        assert mermaid.startswith("graph TD")

    def test_snapshot_requires_metrics(self, chain_nodes, chain_edges):
        with pytest.raises(MissingMetricsError):
            render_graph(chain_nodes, chain_edges, None, output_format="svg")

    def test_snapshot_requires_nodes(self, chain_nodes, chain_edges, chain_metrics):
        config = ExportConfig(label="nothing")
        with pytest.raises(EmptyGraphError):
            render_graph(chain_nodes, chain_edges, chain_metrics, config, "png")

    def test_empty_structured_output_is_not_an_error(self, chain_nodes, chain_edges):
        config = ExportConfig(label="nothing")
        data = json.loads(render_graph(chain_nodes, chain_edges, None, config, "json"))
        assert data["nodes"] == 0

    def test_snapshot_applies_filters(self, chain_nodes, chain_edges, chain_metrics):
        config = ExportConfig(root="B", depth=1, title="Subgraph")
        svg = render_graph(chain_nodes, chain_edges, chain_metrics, config, "svg")
        text = svg.decode("utf-8")
        assert "nodes: 2  edges: 1" in text
        assert ">C</text>" not in text
        ElementTree.fromstring(svg)

    def test_roomy_preset_changes_geometry(self, chain_nodes, chain_edges, chain_metrics):
        compact = render_graph(chain_nodes, chain_edges, chain_metrics, ExportConfig(), "svg")
        roomy = render_graph(chain_nodes, chain_edges, chain_metrics, ExportConfig(preset="roomy"), "svg")
        assert compact != roomy


class TestWriteGraph:
    """Test writing graphs to disk."""

    def test_writes_inferred_format(self, tmp_path, chain_nodes, chain_edges, chain_metrics):
        out = write_graph(tmp_path / "graph.dot", chain_nodes, chain_edges, chain_metrics)
        assert out == tmp_path / "graph.dot"
        assert out.read_text(encoding="utf-8").startswith("digraph G {")

    def test_appends_svg_suffix(self, tmp_path, chain_nodes, chain_edges, chain_metrics):
        out = write_graph(tmp_path / "nested" / "snapshot", chain_nodes, chain_edges, chain_metrics)
        assert out == tmp_path / "nested" / "snapshot.svg"
        ElementTree.fromstring(out.read_bytes())

    def test_configured_format(self, tmp_path, chain_nodes, chain_edges, chain_metrics):
        config = ExportConfig(format="png")
        out = write_graph(tmp_path / "graph.bin", chain_nodes, chain_edges, chain_metrics, config)
        assert out.read_bytes().startswith(b"\x89PNG")

    def test_no_partial_file_on_error(self, tmp_path, chain_nodes, chain_edges):
        """Test nothing is written when rendering fails."""
        target = tmp_path / "graph.png"
        with pytest.raises(MissingMetricsError):
            write_graph(target, chain_nodes, chain_edges, None)
        assert not target.exists()

    def test_unknown_explicit_format_writes_nothing(self, tmp_path, chain_nodes, chain_edges):
        target = tmp_path / "graph.svg"
        with pytest.raises(ConfigurationError):
            write_graph(target, chain_nodes, chain_edges, None, ExportConfig.model_construct(format="gif"))
        assert not target.exists()

    def test_failed_write_leaves_no_file(self, tmp_path, monkeypatch, chain_nodes, chain_edges):
        """Test an interrupted write discards the temporary file and keeps the old output."""
        target = tmp_path / "graph.dot"
        target.write_text("previous", encoding="utf-8")

        def fail_replace(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr("issuegraph.dispatch.os.replace", fail_replace)
        with pytest.raises(OSError, match="disk full"):
            write_graph(target, chain_nodes, chain_edges)

        assert target.read_text(encoding="utf-8") == "previous"
        assert sorted(p.name for p in tmp_path.iterdir()) == ["graph.dot"]

    def test_overwrites_existing_file(self, tmp_path, chain_nodes, chain_edges):
        target = tmp_path / "graph.mmd"
        target.write_text("stale", encoding="utf-8")
        write_graph(target, chain_nodes, chain_edges)
        assert target.read_text(encoding="utf-8").startswith("graph TD")
        assert sorted(p.name for p in tmp_path.iterdir()) == ["graph.mmd"]


class TestSurrogateInput:
    """Test lone surrogates from JSON input never break encoding."""

    @pytest.fixture
    def surrogate_issues(self, tmp_path):
        path = tmp_path / "issues.json"
        # The \u escapes decode to lone surrogates
        path.write_text(
            '[{"id": "A\\ud800", "title": "bad \\ud800 title", "labels": ["x\\udfff"],'
            ' "dependencies": [{"depends_on_id": "B\\udc00", "type": "blocks"}]},'
            ' {"id": "B", "title": "fine"}]',
            encoding="utf-8",
        )
        return path

    @pytest.mark.parametrize("fmt", ["json", "dot", "mermaid", "svg", "png"])
    def test_every_format_renders(self, surrogate_issues, fmt):
        nodes, edges = load_issues(surrogate_issues)
        metrics = StaticMetrics(pagerank={"A": 0.5, "B": 0.5})

        data = render_graph(nodes, edges, metrics, output_format=fmt)

        if fmt != "png":
            text = data.decode("utf-8")
            assert "bad  title" in text
            assert "\ud800" not in text

    def test_ids_and_edges_cleaned(self, surrogate_issues):
        nodes, edges = load_issues(surrogate_issues)
        assert [n.id for n in nodes] == ["A", "B"]
        assert nodes[0].labels == ["x"]
        assert [(e.from_id, e.to_id) for e in edges] == [("A", "B")]

        data = json.loads(render_graph(nodes, edges, None, output_format="json"))
        assert data["adjacency"]["edges"] == [{"from": "A", "to": "B", "type": "blocks"}]
