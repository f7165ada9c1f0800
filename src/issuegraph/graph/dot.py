"""Graphviz DOT serializer."""

from ..models.export import GraphExplanation
from ..models.issue import DependencyKind
from .framework import GraphRenderer
from .models import GraphSpec
from .palette import status_color
from .sanitize import LabelTarget, escape_dot, sanitize_label

TITLE_MAX_RUNES = 30

BLOCKS_EDGE_STYLE = ("bold", "#E53935")
RELATED_EDGE_STYLE = ("dashed", "#999999")


class DotRenderer(GraphRenderer):
    """Graphviz digraph with status fill colors and PageRank pen widths."""

    @property
    def format_name(self) -> str:
        return "dot"

    def explain(self) -> GraphExplanation:
        return GraphExplanation(
            what="Dependency graph in Graphviz DOT format",
            how_to_render="Save to file.dot, run: dot -Tpng file.dot -o graph.png",
            when_to_use="When you need a visual overview of dependencies for documentation or debugging",
        )

    def render(self, spec: GraphSpec) -> str:
        """Render graph specification as a DOT digraph."""
        lines = [
            "digraph G {",
            "    rankdir=LR;",
            '    node [shape=box, fontname="Helvetica", fontsize=10];',
            '    edge [fontname="Helvetica", fontsize=8];',
            "",
        ]

        for node in spec.nodes:
            lines.append(f"    {self._render_node(node, spec)}")

        if spec.edges:
            lines.append("")
            for edge in spec.edges:
                lines.append(f"    {self._render_edge(edge)}")

        lines.append("}")
        return "\n".join(lines) + "\n"

    def _render_node(self, node, spec: GraphSpec) -> str:
        escaped_id = escape_dot(node.id)
        title = sanitize_label(node.title, TITLE_MAX_RUNES, LabelTarget.DOT)
        label = f"{escaped_id}\\n{title}\\nP{node.priority} {node.status.value}"

        rank = spec.rank_of(node.id)
        penwidth = 1.0 + rank * 3.0 if rank > 0 else 1.0

        return (f'"{escaped_id}" [label="{label}", fillcolor="{status_color(node.status)}", '
                f"style=filled, penwidth={penwidth:.1f}];")

    def _render_edge(self, edge) -> str:
        style, color = BLOCKS_EDGE_STYLE if edge.kind == DependencyKind.BLOCKS else RELATED_EDGE_STYLE
        return f'"{escape_dot(edge.from_id)}" -> "{escape_dot(edge.to_id)}" [style={style}, color="{color}"];'
