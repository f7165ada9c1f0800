"""Graph data models shared by the serializers and the snapshot layout."""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from ..models.issue import Edge, Node, Status
from ..models.metrics import MetricsProvider

logger = logging.getLogger(__name__)


def resolve_edges(
    edges: Iterable[Edge | None],
    node_ids: set[str],
    include_related: bool = False,
) -> list[Edge]:
    """Drop missing entries, dangling endpoints and (by default) related edges.

    The result is sorted by source ID, then target ID, for deterministic output.
    """
    kept: list[Edge] = []
    dropped = 0
    for edge in edges:
        if edge is None:
            dropped += 1
            continue
        if not include_related and not edge.is_blocking:
            continue
        if edge.from_id not in node_ids or edge.to_id not in node_ids:
            dropped += 1
            continue
        kept.append(edge)

    if dropped:
        logger.debug(f"Dropped {dropped} edges with missing entries or endpoints outside the node set")
    return sorted(kept, key=lambda e: (e.from_id, e.to_id, e.kind.value))


@dataclass
class GraphSpec:
    """Complete graph specification for the structured serializers."""
    nodes: list[Node] = field(default_factory=list)  # sorted by ID
    edges: list[Edge] = field(default_factory=list)  # both endpoints in nodes
    page_rank: dict[str, float] = field(default_factory=dict)

    @classmethod
    def build(
        cls,
        nodes: Sequence[Node],
        edges: Iterable[Edge | None],
        metrics: MetricsProvider | None = None,
        include_related: bool = False,
    ) -> "GraphSpec":
        """Sort nodes and resolve edges against the supplied node set.

        Without a metrics provider every PageRank-derived value falls back
        to zero.
        """
        sorted_nodes = sorted(nodes, key=lambda n: n.id)
        node_ids = {node.id for node in sorted_nodes}
        page_rank = metrics.page_rank() if metrics is not None else {}
        return cls(
            nodes=sorted_nodes,
            edges=resolve_edges(edges, node_ids, include_related),
            page_rank=page_rank or {},
        )

    def rank_of(self, node_id: str) -> float:
        return self.page_rank.get(node_id, 0.0)

    @property
    def is_empty(self) -> bool:
        return not self.nodes


@dataclass
class LayoutNode:
    """A node placed on the snapshot canvas."""
    id: str
    title: str
    status: Status
    level: int
    page_rank: float
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0


@dataclass
class Summary:
    """Header block content of a snapshot."""
    title: str
    data_hash: str
    node_count: int
    edge_count: int
    top_bottleneck_id: str | None
    top_bottleneck_score: float = 0.0
    cycle_count: int = 0

    @property
    def top_bottleneck(self) -> str:
        if self.top_bottleneck_id is None:
            return "n/a"
        return f"{self.top_bottleneck_id} ({self.top_bottleneck_score:.2f})"


@dataclass
class LayoutResult:
    """Everything a snapshot backend needs to draw one graph."""
    nodes: list[LayoutNode]
    edges: list[Edge]
    width: int
    height: int
    header_height: float
    summary: Summary

    def node_index(self) -> dict[str, LayoutNode]:
        return {node.id: node for node in self.nodes}
