"""JSON adjacency list serializer."""

import json

from ..models.export import AdjacencyEdge, AdjacencyGraph, AdjacencyNode, GraphExplanation, GraphExportResult
from ..models.issue import DependencyKind
from .framework import GraphRenderer
from .models import GraphSpec


class AdjacencyRenderer(GraphRenderer):
    """Serializes the graph as ``{"nodes": [...], "edges": [...]}``."""

    @property
    def format_name(self) -> str:
        return "json"

    def explain(self) -> GraphExplanation:
        return GraphExplanation(
            what="Dependency graph as JSON adjacency list",
            when_to_use="When you need programmatic access to the graph structure",
        )

    def build(self, spec: GraphSpec) -> AdjacencyGraph:
        nodes = []
        for node in spec.nodes:
            rank = spec.rank_of(node.id)
            nodes.append(AdjacencyNode(
                id=node.id,
                title=node.title,
                status=node.status.value,
                priority=node.priority,
                labels=sorted(set(node.labels)) or None,
                pagerank=rank or None,
            ))

        edges = [
            AdjacencyEdge(
                from_id=edge.from_id,
                to_id=edge.to_id,
                type="blocks" if edge.kind == DependencyKind.BLOCKS else "related",
            )
            for edge in spec.edges
        ]
        return AdjacencyGraph(nodes=nodes, edges=edges)

    def render(self, spec: GraphSpec) -> str:
        data = self.build(spec).model_dump(mode="json", by_alias=True, exclude_none=True)
        return json.dumps(data, indent=2, ensure_ascii=False) + "\n"

    def apply(self, result: GraphExportResult, spec: GraphSpec) -> None:
        result.adjacency = self.build(spec)
