"""Read-only access to precomputed graph metrics.

The metrics themselves (PageRank, betweenness, critical-path depth, cycles and
topological order) are computed upstream. Exports only read them.
"""

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


class MetricsProvider(ABC):
    """Interface for metric sources consumed by the exporters."""

    @abstractmethod
    def page_rank(self) -> dict[str, float]:
        """PageRank score per node ID."""
        pass

    @abstractmethod
    def betweenness(self) -> dict[str, float]:
        """Betweenness centrality per node ID."""
        pass

    @abstractmethod
    def critical_path_score(self) -> dict[str, float]:
        """Critical-path depth per node ID."""
        pass

    @abstractmethod
    def cycles(self) -> list[list[str]]:
        """Detected cycles, each an ordered list of node IDs."""
        pass

    @abstractmethod
    def topological_order(self) -> list[str]:
        """Node IDs in topological order (cyclic members excluded)."""
        pass


@dataclass
class StaticMetrics(MetricsProvider):
    """Metrics held in memory, typically loaded from a JSON file."""
    pagerank: dict[str, float] = field(default_factory=dict)
    betweenness_scores: dict[str, float] = field(default_factory=dict)
    critical_path: dict[str, float] = field(default_factory=dict)
    cycle_list: list[list[str]] = field(default_factory=list)
    topo_order: list[str] = field(default_factory=list)

    def page_rank(self) -> dict[str, float]:
        return dict(self.pagerank)

    def betweenness(self) -> dict[str, float]:
        return dict(self.betweenness_scores)

    def critical_path_score(self) -> dict[str, float]:
        return dict(self.critical_path)

    def cycles(self) -> list[list[str]]:
        return [list(cycle) for cycle in self.cycle_list]

    def topological_order(self) -> list[str]:
        return list(self.topo_order)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "StaticMetrics":
        """Build from a mapping with ``pagerank``, ``betweenness``,
        ``critical_path``, ``cycles`` and ``topological_order`` keys."""
        return cls(
            pagerank=_float_map(data.get("pagerank")),
            betweenness_scores=_float_map(data.get("betweenness")),
            critical_path=_float_map(data.get("critical_path")),
            cycle_list=[list(c) for c in data.get("cycles") or []],
            topo_order=list(data.get("topological_order") or []),
        )

    @classmethod
    def load(cls, path: str | Path) -> "StaticMetrics":
        path = Path(path)
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in metrics file {path}: {e}")
        if not isinstance(data, dict):
            raise ValueError(f"Metrics file {path} must contain a JSON object")
        return cls.from_dict(data)


def _float_map(raw: dict[str, Any] | None) -> dict[str, float]:
    if not raw:
        return {}
    return {str(k): float(v) for k, v in raw.items() if v is not None}
