"""Mermaid diagram serializer."""

import logging

from ..models.export import GraphExplanation
from ..models.issue import DependencyKind, Status
from .framework import GraphRenderer
from .models import GraphSpec
from .sanitize import LabelTarget, SafeIdRegistry, sanitize_label

logger = logging.getLogger(__name__)

LABEL_MAX_RUNES = 40
PLACEHOLDER_NODE = 'NoLinks["No Dependencies"]'

CLASS_DEFS = [
    "classDef open fill:#50FA7B,stroke:#333,color:#000",
    "classDef inprogress fill:#8BE9FD,stroke:#333,color:#000",
    "classDef blocked fill:#FF5555,stroke:#333,color:#000",
    "classDef closed fill:#6272A4,stroke:#333,color:#fff",
]

STATUS_CLASSES = {
    Status.OPEN: "open",
    Status.IN_PROGRESS: "inprogress",
    Status.BLOCKED: "blocked",
    Status.CLOSED: "closed",
    Status.TOMBSTONE: "closed",
}


class MermaidRenderer(GraphRenderer):
    """Mermaid flowchart with status classes and collision-free node IDs."""

    def __init__(self, show_no_dependencies_node: bool = False):
        self.show_no_dependencies_node = show_no_dependencies_node

    @property
    def format_name(self) -> str:
        return "mermaid"

    def explain(self) -> GraphExplanation:
        return GraphExplanation(
            what="Dependency graph in Mermaid diagram format",
            how_to_render="Paste into any Markdown renderer that supports Mermaid, or use mermaid.live",
            when_to_use="When you need an embeddable diagram for documentation or GitHub issues",
        )

    def render(self, spec: GraphSpec) -> str:
        """Render graph specification as a Mermaid flowchart."""
        lines = ["graph TD"]
        lines.extend(f"    {class_def}" for class_def in CLASS_DEFS)
        lines.append("")

        # IDs are assigned in sorted order so collision suffixes are stable
        safe_ids = SafeIdRegistry()
        for node in spec.nodes:
            safe_ids.get(node.id)

        for node in spec.nodes:
            safe_id = safe_ids.get(node.id)
            label_id = sanitize_label(node.id, LABEL_MAX_RUNES, LabelTarget.MERMAID)
            title = sanitize_label(node.title, LABEL_MAX_RUNES, LabelTarget.MERMAID)
            lines.append(f'    {safe_id}["{label_id}<br/>{title}"]')
            lines.append(f"    class {safe_id} {STATUS_CLASSES[node.status]}")

        lines.append("")

        for edge in spec.edges:
            lines.append(f"    {self._render_edge(edge, safe_ids)}")

        if self.show_no_dependencies_node and not spec.edges and spec.nodes:
            lines.append(f"    {PLACEHOLDER_NODE}")

        lines.extend(self._render_legend(spec))
        return "\n".join(lines) + "\n"

    def _render_edge(self, edge, safe_ids: SafeIdRegistry) -> str:
        arrow = "==>" if edge.kind == DependencyKind.BLOCKS else "-.->"
        return f"{safe_ids.get(edge.from_id)} {arrow} {safe_ids.get(edge.to_id)}"

    def _render_legend(self, spec: GraphSpec) -> list[str]:
        """Render legend as comments (Mermaid doesn't have native legend support)."""
        kinds = {edge.kind for edge in spec.edges}
        if not kinds:
            return []

        lines = ["", "    %% Legend:"]
        if DependencyKind.BLOCKS in kinds:
            lines.append("    %% ==> Blocks - source waits on target")
        if DependencyKind.RELATED in kinds:
            lines.append("    %% -.-> Related - informational link")
        return lines
