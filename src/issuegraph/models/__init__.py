"""Data models for issuegraph."""

from .export import AdjacencyEdge, AdjacencyGraph, AdjacencyNode, GraphExplanation, GraphExportResult
from .issue import DependencyKind, Edge, Node, Status, load_issues
from .metrics import MetricsProvider, StaticMetrics

__all__ = [
    "AdjacencyEdge",
    "AdjacencyGraph",
    "AdjacencyNode",
    "DependencyKind",
    "Edge",
    "GraphExplanation",
    "GraphExportResult",
    "MetricsProvider",
    "Node",
    "StaticMetrics",
    "Status",
    "load_issues",
]
