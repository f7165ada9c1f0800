"""Level-based layout for graph snapshots.

Nodes are placed in columns by critical-path depth and ordered within a
column by PageRank (descending) with the node ID as tie-break. Columns are
centred vertically on the tallest column so no two nodes overlap.
"""

import logging
import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from functools import cmp_to_key

from ..config import LayoutPreset
from ..errors import EmptyGraphError, MissingMetricsError
from ..models.issue import Edge, Node
from ..models.metrics import MetricsProvider
from .models import LayoutNode, LayoutResult, Summary, resolve_edges
from .sanitize import LabelTarget, sanitize_label

logger = logging.getLogger(__name__)

PADDING = 36.0
HEADER_HEIGHT = 120.0
MIN_CANVAS_WIDTH = 640
MIN_CANVAS_HEIGHT = 480
RANK_EPSILON = 1e-6
TITLE_MAX_RUNES = 44
DEFAULT_TITLE = "Graph Snapshot"


@dataclass(frozen=True)
class Spacing:
    """Node size and gaps for one preset."""
    node_width: float
    node_height: float
    col_gap: float
    row_gap: float


LAYOUT_PRESETS: dict[LayoutPreset, Spacing] = {
    LayoutPreset.COMPACT: Spacing(node_width=170.0, node_height=70.0, col_gap=80.0, row_gap=40.0),
    LayoutPreset.ROOMY: Spacing(node_width=190.0, node_height=82.0, col_gap=110.0, row_gap=55.0),
}


def get_spacing(preset: LayoutPreset | str | None) -> Spacing:
    """Spacing for a preset; anything other than 'roomy' is compact."""
    if isinstance(preset, LayoutPreset):
        return LAYOUT_PRESETS[preset]
    if preset and preset.strip().lower() == LayoutPreset.ROOMY.value:
        return LAYOUT_PRESETS[LayoutPreset.ROOMY]
    return LAYOUT_PRESETS[LayoutPreset.COMPACT]


def level_for(critical_path: float | None) -> int:
    """Round the critical-path depth half away from zero, never below 1."""
    if critical_path is None or not math.isfinite(critical_path):
        return 1
    return max(1, math.floor(critical_path + 0.5))


def compare_by_rank(a: LayoutNode, b: LayoutNode) -> int:
    """Higher PageRank first; ranks within RANK_EPSILON fall through to ID order."""
    diff = a.page_rank - b.page_rank
    if abs(diff) > RANK_EPSILON:
        return -1 if diff > 0 else 1
    return (a.id > b.id) - (a.id < b.id)


def top_bottleneck(betweenness: dict[str, float], node_ids: Iterable[str]) -> tuple[str | None, float]:
    """Node with the highest betweenness, ties broken by ascending ID.

    Only nodes in ``node_ids`` are considered. When none of them has a score
    the alphabetically first node is reported with a score of zero.
    """
    candidates = sorted(set(node_ids))
    if not candidates:
        return None, 0.0

    best_id: str | None = None
    best_score = 0.0
    for node_id in candidates:
        score = betweenness.get(node_id)
        if score is None:
            continue
        if best_id is None or score - best_score > RANK_EPSILON:
            best_id, best_score = node_id, score

    if best_id is None:
        return candidates[0], 0.0
    return best_id, best_score


def build_layout(
    nodes: Sequence[Node],
    edges: Iterable[Edge | None],
    metrics: MetricsProvider | None,
    preset: LayoutPreset | str | None = LayoutPreset.COMPACT,
    *,
    title: str | None = None,
    data_hash: str | None = None,
) -> LayoutResult:
    """Assign levels, order and coordinates to every node.

    Args:
        nodes: Filtered issues to place
        edges: Dependencies; only blocking edges between placed nodes are kept
        metrics: Metrics provider, required
        preset: Spacing preset ('compact' or 'roomy')
        title: Summary title, defaults to "Graph Snapshot"
        data_hash: Provenance hash shown in the summary

    Raises:
        EmptyGraphError: If ``nodes`` is empty
        MissingMetricsError: If ``metrics`` is None
    """
    if not nodes:
        raise EmptyGraphError()
    if metrics is None:
        raise MissingMetricsError()

    spacing = get_spacing(preset)
    page_rank = metrics.page_rank()
    critical = metrics.critical_path_score()

    buckets: dict[int, list[LayoutNode]] = {}
    for node in sorted(nodes, key=lambda n: n.id):
        level = level_for(critical.get(node.id))
        buckets.setdefault(level, []).append(LayoutNode(
            id=node.id,
            title=sanitize_label(node.title, TITLE_MAX_RUNES, LabelTarget.PLAIN),
            status=node.status,
            level=level,
            page_rank=page_rank.get(node.id, 0.0),
            width=spacing.node_width,
            height=spacing.node_height,
        ))

    max_level = max(buckets)
    max_rows = max(len(bucket) for bucket in buckets.values())
    row_pitch = spacing.node_height + spacing.row_gap
    center_y = PADDING + HEADER_HEIGHT + (max_rows - 1) * row_pitch / 2

    placed: list[LayoutNode] = []
    for level in sorted(buckets):
        bucket = sorted(buckets[level], key=cmp_to_key(compare_by_rank))
        start_y = center_y - (len(bucket) - 1) * row_pitch / 2
        for index, layout_node in enumerate(bucket):
            layout_node.x = PADDING + (level - 1) * (spacing.node_width + spacing.col_gap)
            layout_node.y = start_y + index * row_pitch
            placed.append(layout_node)

    width = int(PADDING * 2 + max_level * (spacing.node_width + spacing.col_gap) + spacing.node_width)
    height = int(PADDING * 2 + HEADER_HEIGHT + max_rows * row_pitch + spacing.node_height)
    width = max(width, MIN_CANVAS_WIDTH)
    height = max(height, MIN_CANVAS_HEIGHT)

    node_ids = {node.id for node in placed}
    blocking = resolve_edges(edges, node_ids, include_related=False)
    bottleneck_id, bottleneck_score = top_bottleneck(metrics.betweenness(), node_ids)

    summary = Summary(
        title=title.strip() if title and title.strip() else DEFAULT_TITLE,
        data_hash=data_hash or "",
        node_count=len(placed),
        edge_count=len(blocking),
        top_bottleneck_id=bottleneck_id,
        top_bottleneck_score=bottleneck_score,
        cycle_count=len(metrics.cycles()),
    )

    logger.debug(f"Laid out {len(placed)} nodes over {max_level} levels on a {width}x{height} canvas")
    return LayoutResult(
        nodes=placed,
        edges=blocking,
        width=width,
        height=height,
        header_height=HEADER_HEIGHT,
        summary=summary,
    )
