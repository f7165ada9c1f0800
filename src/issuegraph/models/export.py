"""Export envelope and JSON adjacency models."""

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class AdjacencyNode(BaseModel):
    """Node entry of the JSON adjacency list."""

    id: str
    title: str
    status: str
    priority: int
    labels: list[str] | None = Field(default=None, description="Sorted labels, omitted when empty")
    pagerank: float | None = Field(default=None, description="PageRank, omitted when zero or unavailable")


class AdjacencyEdge(BaseModel):
    """Edge entry of the JSON adjacency list."""

    from_id: str = Field(alias="from")
    to_id: str = Field(alias="to")
    type: str = Field(description="'blocks' or 'related'")

    model_config = ConfigDict(populate_by_name=True)


class AdjacencyGraph(BaseModel):
    """JSON adjacency list representation of the graph."""

    nodes: list[AdjacencyNode] = Field(default_factory=list)
    edges: list[AdjacencyEdge] = Field(default_factory=list)


class GraphExplanation(BaseModel):
    """Short description of the export for downstream readers."""

    what: str
    how_to_render: str | None = None
    when_to_use: str


class GraphExportResult(BaseModel):
    """Envelope returned by the structured serializers."""

    format: str
    graph: str | None = Field(default=None, description="Rendered DOT or Mermaid text")
    nodes: int = 0
    edges: int = 0
    filters_applied: dict[str, str] | None = None
    explanation: GraphExplanation
    data_hash: str | None = None
    adjacency: AdjacencyGraph | None = None

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def to_json(self) -> str:
        """Serialize as 2-space indented JSON with a trailing newline."""
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False) + "\n"
