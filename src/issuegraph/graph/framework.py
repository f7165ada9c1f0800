"""Structured export framework: renderer interface and export envelope."""

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence

from ..config import ExportConfig
from ..errors import ConfigurationError
from ..models.export import GraphExplanation, GraphExportResult
from ..models.issue import Edge, Node
from ..models.metrics import MetricsProvider
from .filter import filter_nodes
from .models import GraphSpec

logger = logging.getLogger(__name__)

EMPTY_EXPLANATION = GraphExplanation(
    what="Empty graph - no issues match the filter criteria",
    when_to_use="Adjust filter parameters to include more issues",
)


class GraphRenderer(ABC):
    """Abstract base class for text serializers."""

    @property
    @abstractmethod
    def format_name(self) -> str:
        """Name of the output format."""
        pass

    @abstractmethod
    def render(self, spec: GraphSpec) -> str:
        """Render graph specification to string format."""
        pass

    @abstractmethod
    def explain(self) -> GraphExplanation:
        """Describe the rendered output for readers of the export envelope."""
        pass

    def apply(self, result: GraphExportResult, spec: GraphSpec) -> None:
        """Attach the rendered graph to the export envelope."""
        result.graph = self.render(spec)


class GraphExporter:
    """Filters issues and dispatches them to a registered serializer."""

    def __init__(self, config: ExportConfig | None = None):
        self.config = config or ExportConfig()
        self.renderers: dict[str, GraphRenderer] = {}

    def add_renderer(self, renderer: GraphRenderer) -> None:
        """Add a graph renderer."""
        self.renderers[renderer.format_name] = renderer

    def get_renderer(self, format_name: str) -> GraphRenderer:
        if format_name not in self.renderers:
            available = sorted(self.renderers)
            raise ConfigurationError(f"Unknown format '{format_name}'. Available: {available}")
        return self.renderers[format_name]

    def build_spec(
        self,
        nodes: Sequence[Node],
        edges: Iterable[Edge | None],
        metrics: MetricsProvider | None = None,
    ) -> GraphSpec:
        """Apply the configured filters and resolve edges."""
        edges = list(edges)
        filtered = filter_nodes(
            nodes,
            edges,
            label=self.config.label,
            root_id=self.config.root,
            max_depth=self.config.depth,
        )
        return GraphSpec.build(filtered, edges, metrics, include_related=self.config.include_related)

    def filters_applied(self) -> dict[str, str] | None:
        filters: dict[str, str] = {}
        if self.config.label:
            filters["label"] = self.config.label
        if self.config.root:
            filters["root"] = self.config.root
        if self.config.depth > 0:
            filters["depth"] = str(self.config.depth)
        return filters or None

    def export(
        self,
        nodes: Sequence[Node],
        edges: Iterable[Edge | None],
        metrics: MetricsProvider | None = None,
        format_name: str | None = None,
    ) -> GraphExportResult:
        """Export the dependency graph in a structured format.

        Args:
            nodes: All issues; the configured filters are applied here
            edges: Dependencies; entries that are None or point outside the
                   filtered node set are skipped
            metrics: Optional metrics; PageRank-derived fields default to zero
            format_name: 'json', 'dot' or 'mermaid' (default: configured format or json)

        Returns:
            Export envelope with the rendered graph and counts
        """
        if format_name is None:
            format_name = self.config.format.value if self.config.format else "json"
        renderer = self.get_renderer(format_name)

        spec = self.build_spec(nodes, edges, metrics)
        result = GraphExportResult(
            format=renderer.format_name,
            nodes=len(spec.nodes),
            edges=len(spec.edges),
            filters_applied=self.filters_applied(),
            explanation=EMPTY_EXPLANATION if spec.is_empty else renderer.explain(),
            data_hash=self.config.data_hash or None,
        )
        renderer.apply(result, spec)

        logger.debug(f"Exported {result.nodes} nodes and {result.edges} edges as {result.format}")
        return result
