"""Label and reachability filters applied before any export."""

import logging
from collections import deque
from collections.abc import Iterable, Sequence

from ..models.issue import Edge, Node

logger = logging.getLogger(__name__)


def filter_by_label(nodes: Sequence[Node], label: str) -> list[Node]:
    """Keep nodes carrying ``label`` (case-insensitive)."""
    return [node for node in nodes if node.has_label(label)]


def extract_subgraph(
    nodes: Sequence[Node],
    edges: Iterable[Edge | None],
    root_id: str,
    max_depth: int = 0,
) -> list[Node]:
    """Collect the nodes reachable from ``root_id`` along blocking dependencies.

    Traversal follows each node's dependencies (the targets of its outgoing
    ``blocks`` edges) breadth-first, visiting every node at most once.
    ``max_depth`` of 0 means unlimited. An unknown root yields an empty list.
    Result order follows the input order of ``nodes``.
    """
    by_id = {node.id: node for node in nodes}
    if root_id not in by_id:
        logger.debug(f"Subgraph root {root_id!r} not in node set")
        return []

    dependencies: dict[str, list[str]] = {}
    for edge in edges:
        if edge is None or not edge.is_blocking:
            continue
        dependencies.setdefault(edge.from_id, []).append(edge.to_id)

    visited: set[str] = set()
    queue: deque[tuple[str, int]] = deque([(root_id, 0)])

    while queue:
        current, depth = queue.popleft()
        if current in visited or current not in by_id:
            continue
        if max_depth > 0 and depth > max_depth:
            continue
        visited.add(current)

        for dep_id in dependencies.get(current, []):
            if dep_id not in visited:
                queue.append((dep_id, depth + 1))

    return [node for node in nodes if node.id in visited]


def filter_nodes(
    nodes: Sequence[Node],
    edges: Iterable[Edge | None],
    label: str | None = None,
    root_id: str | None = None,
    max_depth: int = 0,
) -> list[Node]:
    """Apply the label filter, then the root/depth filter on what remains.

    Neither filter raises: no match simply produces an empty list, and
    callers decide whether an empty graph is acceptable.
    """
    filtered = list(nodes)

    if label:
        filtered = filter_by_label(filtered, label)

    if root_id:
        filtered = extract_subgraph(filtered, edges, root_id, max_depth)

    logger.debug(f"Filtered {len(nodes)} issues down to {len(filtered)} "
                 f"(label={label!r}, root={root_id!r}, depth={max_depth})")
    return filtered
