"""SVG backend: emits escaped, well-formed markup."""

from collections.abc import Sequence

from ..graph.sanitize import escape_xml
from .canvas import FONT_FAMILY, Canvas, Point, TextStyle

SVG_NAMESPACE = "http://www.w3.org/2000/svg"


def _num(value: float) -> str:
    """Format a coordinate with at most two decimals and no trailing zeros."""
    value = round(float(value), 2)
    if value.is_integer():
        return str(int(value))
    return f"{value:.2f}".rstrip("0").rstrip(".")


class SvgCanvas(Canvas):
    """Collects SVG elements in drawing order."""

    def __init__(self, width: int, height: int):
        super().__init__(width, height)
        self._elements: list[str] = []

    def fill_rounded_rect(self, x, y, w, h, radius, fill):
        self._elements.append(
            f'<rect x="{_num(x)}" y="{_num(y)}" width="{_num(w)}" height="{_num(h)}" '
            f'rx="{_num(radius)}" ry="{_num(radius)}" fill="{escape_xml(fill)}"/>'
        )

    def stroke_rounded_rect(self, x, y, w, h, radius, stroke, stroke_width):
        self._elements.append(
            f'<rect x="{_num(x)}" y="{_num(y)}" width="{_num(w)}" height="{_num(h)}" '
            f'rx="{_num(radius)}" ry="{_num(radius)}" fill="none" '
            f'stroke="{escape_xml(stroke)}" stroke-width="{_num(stroke_width)}"/>'
        )

    def line(self, x1, y1, x2, y2, stroke, stroke_width):
        self._elements.append(
            f'<line x1="{_num(x1)}" y1="{_num(y1)}" x2="{_num(x2)}" y2="{_num(y2)}" '
            f'stroke="{escape_xml(stroke)}" stroke-width="{_num(stroke_width)}"/>'
        )

    def polygon(self, points: Sequence[Point], fill):
        coords = " ".join(f"{_num(px)},{_num(py)}" for px, py in points)
        self._elements.append(f'<polygon points="{coords}" fill="{escape_xml(fill)}"/>')

    def text(self, x, y, content, style: TextStyle):
        weight = ' font-weight="bold"' if style.bold else ""
        self._elements.append(
            f'<text x="{_num(x)}" y="{_num(y)}" fill="{escape_xml(style.color)}" '
            f'font-size="{style.size}px" font-family="{FONT_FAMILY}"{weight} '
            f'dominant-baseline="middle">{escape_xml(content)}</text>'
        )

    def finish(self) -> bytes:
        lines = [
            '<?xml version="1.0" encoding="UTF-8"?>',
            f'<svg xmlns="{SVG_NAMESPACE}" width="{self.width}" height="{self.height}" '
            f'viewBox="0 0 {self.width} {self.height}">',
        ]
        lines.extend(f"  {element}" for element in self._elements)
        lines.append("</svg>")
        return ("\n".join(lines) + "\n").encode("utf-8")
