"""issuegraph - dependency graph exports for issue trackers.

issuegraph renders a graph of issues linked by blocking dependencies, annotated
with precomputed centrality metrics, as a JSON adjacency list, Graphviz DOT,
a Mermaid diagram, or an SVG/PNG snapshot.
"""

__version__ = "0.1.0"
__author__ = "issuegraph contributors"
__description__ = "Dependency graph exports for issue trackers"

from issuegraph.config import ExportConfig, IssueGraphConfig

__all__ = [
    "__version__",
    "__author__",
    "__description__",
    "ExportConfig",
    "IssueGraphConfig",
]
