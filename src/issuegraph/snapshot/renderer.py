"""Snapshot compositing: draws a laid-out graph onto a backend canvas.

Drawing order is fixed for both backends: background, header panel, summary
text, status legend, edges (so nodes cover edge origins), then nodes in
layout order.
"""

import logging
import math
from enum import Enum

from ..graph.models import LayoutNode, LayoutResult
from ..graph.palette import LEGEND_ROWS, status_color
from ..graph.sanitize import LabelTarget, sanitize_label, truncate_runes
from .canvas import BACKDROP, EDGE, HEADER_BG, LEGEND_BG, STROKE, SUBTLE, TEXT, Canvas, TextStyle
from .raster import RasterCanvas
from .svg import SvgCanvas

logger = logging.getLogger(__name__)

HEADER_MARGIN = 16.0
SUMMARY_X = 32.0
SUMMARY_TITLE_MAX_RUNES = 60
SUMMARY_VALUE_MAX_RUNES = 64

LEGEND_WIDTH = 180.0
LEGEND_HEIGHT = 96.0
LEGEND_MARGIN = 20.0
LEGEND_TOP = 24.0

NODE_RADIUS = 8.0
NODE_TEXT_INSET = 10.0
NODE_TITLE_MAX_RUNES = 40
NODE_ID_MAX_RUNES = 24

ARROW_LENGTH = 8.0
ARROW_HALF_WIDTH = 4.0

TITLE_STYLE = TextStyle(TEXT, 16, bold=True)
SUMMARY_STYLE = TextStyle(SUBTLE, 13)
LEGEND_TITLE_STYLE = TextStyle(TEXT, 13, bold=True)
LEGEND_ROW_STYLE = TextStyle(SUBTLE, 12)
NODE_ID_STYLE = TextStyle(TEXT, 13, bold=True)
NODE_TITLE_STYLE = TextStyle(SUBTLE, 12)
NODE_RANK_STYLE = TextStyle(SUBTLE, 11)


class SnapshotBackend(str, Enum):
    """Interchangeable drawing backends."""
    VECTOR = "svg"
    RASTER = "png"


def create_canvas(backend: SnapshotBackend | str, width: int, height: int) -> Canvas:
    backend = SnapshotBackend(backend)
    if backend == SnapshotBackend.VECTOR:
        return SvgCanvas(width, height)
    return RasterCanvas(width, height)


def render_snapshot(layout: LayoutResult, backend: SnapshotBackend | str = SnapshotBackend.VECTOR) -> bytes:
    """Draw ``layout`` with the chosen backend and return the encoded bytes."""
    canvas = create_canvas(backend, layout.width, layout.height)
    draw_snapshot(canvas, layout)
    logger.debug(f"Rendered {len(layout.nodes)} nodes with the {SnapshotBackend(backend).value} backend")
    return canvas.finish()


def draw_snapshot(canvas: Canvas, layout: LayoutResult) -> None:
    canvas.fill_rounded_rect(0, 0, layout.width, layout.height, 0, BACKDROP)
    canvas.fill_rounded_rect(
        HEADER_MARGIN,
        HEADER_MARGIN,
        layout.width - 2 * HEADER_MARGIN,
        layout.header_height - 24,
        10,
        HEADER_BG,
    )
    _draw_summary(canvas, layout)
    _draw_legend(canvas, layout)
    _draw_edges(canvas, layout)
    for node in layout.nodes:
        _draw_node(canvas, node)


def _draw_summary(canvas: Canvas, layout: LayoutResult) -> None:
    summary = layout.summary
    counts = f"nodes: {summary.node_count}  edges: {summary.edge_count}"
    if summary.cycle_count:
        counts += f"  cycles: {summary.cycle_count}"

    title = sanitize_label(summary.title, SUMMARY_TITLE_MAX_RUNES, LabelTarget.PLAIN)
    data_hash = sanitize_label(summary.data_hash, SUMMARY_VALUE_MAX_RUNES, LabelTarget.PLAIN)
    bottleneck = sanitize_label(summary.top_bottleneck, SUMMARY_VALUE_MAX_RUNES, LabelTarget.PLAIN)

    canvas.text(SUMMARY_X, 44, title, TITLE_STYLE)
    canvas.text(SUMMARY_X, 64, f"data_hash: {data_hash}", SUMMARY_STYLE)
    canvas.text(SUMMARY_X, 84, counts, SUMMARY_STYLE)
    canvas.text(SUMMARY_X, 104, f"top bottleneck: {bottleneck}", SUMMARY_STYLE)


def _draw_legend(canvas: Canvas, layout: LayoutResult) -> None:
    x = layout.width - LEGEND_WIDTH - LEGEND_MARGIN
    y = LEGEND_TOP
    canvas.fill_rounded_rect(x, y, LEGEND_WIDTH, LEGEND_HEIGHT, 10, LEGEND_BG)
    canvas.stroke_rounded_rect(x, y, LEGEND_WIDTH, LEGEND_HEIGHT, 10, STROKE, 1)
    canvas.text(x + 12, y + 18, "Legend", LEGEND_TITLE_STYLE)

    for index, (status, label) in enumerate(LEGEND_ROWS):
        row_y = y + 36 + index * 16
        color = status_color(status)
        canvas.fill_rounded_rect(x + 12, row_y - 7, 14, 14, 3, color)
        canvas.stroke_rounded_rect(x + 12, row_y - 7, 14, 14, 3, STROKE, 1)
        canvas.text(x + 32, row_y, label, LEGEND_ROW_STYLE)


def _border_point(target: LayoutNode, from_x: float, from_y: float) -> tuple[float, float] | None:
    """Where the segment from (from_x, from_y) to the target centre enters the target box."""
    cx = target.x + target.width / 2
    cy = target.y + target.height / 2
    dx = from_x - cx
    dy = from_y - cy
    if dx == 0 and dy == 0:
        return None

    scale = math.inf
    if dx:
        scale = min(scale, (target.width / 2) / abs(dx))
    if dy:
        scale = min(scale, (target.height / 2) / abs(dy))
    return cx + dx * scale, cy + dy * scale


def _draw_edges(canvas: Canvas, layout: LayoutResult) -> None:
    index = layout.node_index()
    for edge in layout.edges:
        source = index.get(edge.from_id)
        target = index.get(edge.to_id)
        if source is None or target is None:
            continue

        sx = source.x + source.width / 2
        sy = source.y + source.height / 2
        tip = _border_point(target, sx, sy)
        if tip is None:
            continue
        tx, ty = tip

        canvas.line(sx, sy, tx, ty, EDGE, 2)

        length = math.hypot(tx - sx, ty - sy)
        ux, uy = (tx - sx) / length, (ty - sy) / length
        base_x, base_y = tx - ux * ARROW_LENGTH, ty - uy * ARROW_LENGTH
        canvas.polygon(
            [
                (tx, ty),
                (base_x - uy * ARROW_HALF_WIDTH, base_y + ux * ARROW_HALF_WIDTH),
                (base_x + uy * ARROW_HALF_WIDTH, base_y - ux * ARROW_HALF_WIDTH),
            ],
            EDGE,
        )


def _draw_node(canvas: Canvas, node: LayoutNode) -> None:
    canvas.fill_rounded_rect(node.x, node.y, node.width, node.height, NODE_RADIUS, status_color(node.status))
    canvas.stroke_rounded_rect(node.x, node.y, node.width, node.height, NODE_RADIUS, STROKE, 1.2)

    text_x = node.x + NODE_TEXT_INSET
    node_id = sanitize_label(node.id, NODE_ID_MAX_RUNES, LabelTarget.PLAIN)
    canvas.text(text_x, node.y + 18, node_id, NODE_ID_STYLE)
    canvas.text(text_x, node.y + 36, truncate_runes(node.title, NODE_TITLE_MAX_RUNES), NODE_TITLE_STYLE)
    canvas.text(text_x, node.y + 54, f"PR {node.page_rank:.3f}", NODE_RANK_STYLE)
