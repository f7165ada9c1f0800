"""Static graph snapshots (SVG and PNG)."""

from .canvas import Canvas, TextStyle
from .raster import RasterCanvas
from .renderer import SnapshotBackend, create_canvas, draw_snapshot, render_snapshot
from .svg import SvgCanvas

__all__ = [
    "Canvas",
    "RasterCanvas",
    "SnapshotBackend",
    "SvgCanvas",
    "TextStyle",
    "create_canvas",
    "draw_snapshot",
    "render_snapshot",
]
