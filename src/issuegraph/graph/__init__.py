"""Graph export module for issuegraph.

Structured serializers (JSON adjacency, Graphviz DOT, Mermaid) consume the
filtered issue set directly; the layout engine feeds the snapshot renderer.
"""

from ..config import ExportConfig
from .adjacency import AdjacencyRenderer
from .dot import DotRenderer
from .filter import extract_subgraph, filter_nodes
from .framework import GraphExporter, GraphRenderer
from .layout import LAYOUT_PRESETS, build_layout, top_bottleneck
from .mermaid import MermaidRenderer
from .models import GraphSpec, LayoutNode, LayoutResult, Summary


def create_exporter(config: ExportConfig | None = None) -> GraphExporter:
    """Exporter with the JSON, DOT and Mermaid serializers registered."""
    config = config or ExportConfig()
    exporter = GraphExporter(config)
    exporter.add_renderer(AdjacencyRenderer())
    exporter.add_renderer(DotRenderer())
    exporter.add_renderer(MermaidRenderer(show_no_dependencies_node=config.show_no_dependencies_node))
    return exporter


__all__ = [
    "AdjacencyRenderer",
    "DotRenderer",
    "GraphExporter",
    "GraphRenderer",
    "GraphSpec",
    "LAYOUT_PRESETS",
    "LayoutNode",
    "LayoutResult",
    "MermaidRenderer",
    "Summary",
    "build_layout",
    "create_exporter",
    "extract_subgraph",
    "filter_nodes",
    "top_bottleneck",
]
