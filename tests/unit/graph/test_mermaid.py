"""Unit tests for the Mermaid serializer."""

from issuegraph.graph import GraphSpec, MermaidRenderer
from issuegraph.graph.sanitize import fnv32a
from issuegraph.models import DependencyKind, Edge, Node, Status


class TestMermaidRenderer:
    """Test Mermaid rendering."""

    def test_format_name(self):
        assert MermaidRenderer().format_name == "mermaid"

    def test_header_and_class_defs(self, chain_nodes, chain_edges):
        output = MermaidRenderer().render(GraphSpec.build(chain_nodes, chain_edges))
        lines = output.splitlines()

        assert lines[0] == "graph TD"
        assert sum(1 for line in lines if line.strip().startswith("classDef ")) == 4

    def test_nodes_and_classes(self, chain_nodes, chain_edges):
        output = MermaidRenderer().render(GraphSpec.build(chain_nodes, chain_edges))

        assert '    A["A<br/>Design schema"]' in output
        assert "    class A open" in output
        assert "    class B blocked" in output
        assert "    class C inprogress" in output

    def test_edge_arrows(self, chain_nodes, chain_edges):
        """Test blocking edges use thick arrows and related edges stay hidden."""
        output = MermaidRenderer().render(GraphSpec.build(chain_nodes, chain_edges))
        assert "    B ==> A" in output
        assert "    C ==> B" in output
        assert "-.->" not in output.replace("%% -.->", "")

    def test_related_edge_when_included(self, chain_nodes, chain_edges):
        spec = GraphSpec.build(chain_nodes, chain_edges, include_related=True)
        output = MermaidRenderer().render(spec)
        assert "    C -.-> A" in output

    def test_colliding_ids_are_distinct(self):
        """Test IDs that sanitize alike still get separate diagram nodes."""
        nodes = [Node(id="bv.1"), Node(id="bv/1")]
        edges = [Edge(from_id="bv/1", to_id="bv.1")]
        output = MermaidRenderer().render(GraphSpec.build(nodes, edges))

        suffixed = f"bv1_{fnv32a('bv/1'):08x}"
        assert '    bv1["bv.1<br/>"]' in output
        assert f'    {suffixed}["bv/1<br/>"]' in output
        assert f"    {suffixed} ==> bv1" in output

    def test_label_sanitized(self):
        nodes = [Node(id="x", title='Use "quotes" [and] <tags>\nplease')]
        output = MermaidRenderer().render(GraphSpec.build(nodes, []))
        assert "x[\"x<br/>Use 'quotes' (and) &lt;tags&gt; please\"]" in output

    def test_label_truncated(self):
        nodes = [Node(id="x", title="z" * 80)]
        output = MermaidRenderer().render(GraphSpec.build(nodes, []))
        assert "z" * 37 + "..." in output
        assert "z" * 38 not in output

    def test_tombstone_reuses_closed_class(self):
        nodes = [Node(id="t", status=Status.TOMBSTONE), Node(id="c", status=Status.CLOSED)]
        output = MermaidRenderer().render(GraphSpec.build(nodes, []))
        assert "    class t closed" in output
        assert "    class c closed" in output

    def test_placeholder_off_by_default(self):
        output = MermaidRenderer().render(GraphSpec.build([Node(id="a")], []))
        assert "NoLinks" not in output

    def test_placeholder_when_enabled(self):
        """Test the placeholder node appears only for non-empty edgeless graphs."""
        renderer = MermaidRenderer(show_no_dependencies_node=True)
        assert 'NoLinks["No Dependencies"]' in renderer.render(GraphSpec.build([Node(id="a")], []))
        assert "NoLinks" not in renderer.render(GraphSpec.build([], []))

        nodes = [Node(id="a"), Node(id="b")]
        edges = [Edge(from_id="a", to_id="b", kind=DependencyKind.BLOCKS)]
        assert "NoLinks" not in renderer.render(GraphSpec.build(nodes, edges))

    def test_legend_comment(self, chain_nodes, chain_edges):
        output = MermaidRenderer().render(GraphSpec.build(chain_nodes, chain_edges))
        assert "%% Legend:" in output
        assert "%% -.->" not in output
