"""Drawing contract shared by the vector and raster snapshot backends.

The compositing code in ``renderer`` only talks to ``Canvas``; each backend
translates the same primitives, coordinates and colors into its own output.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass

BACKDROP = "#F9FAFB"
HEADER_BG = "#F3F4F6"
LEGEND_BG = "#EEEEEE"
STROKE = "#222222"
EDGE = "#6B80BF"
TEXT = "#111111"
SUBTLE = "#666666"

FONT_FAMILY = "monospace"

Point = tuple[float, float]


@dataclass(frozen=True)
class TextStyle:
    """Font settings for a single text run."""
    color: str
    size: int
    bold: bool = False


class Canvas(ABC):
    """Minimal drawing surface.

    Text is left-aligned at ``x`` and vertically centred on ``y``.
    """

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height

    @abstractmethod
    def fill_rounded_rect(self, x: float, y: float, w: float, h: float, radius: float, fill: str) -> None:
        pass

    @abstractmethod
    def stroke_rounded_rect(self, x: float, y: float, w: float, h: float, radius: float,
                            stroke: str, stroke_width: float) -> None:
        pass

    @abstractmethod
    def line(self, x1: float, y1: float, x2: float, y2: float, stroke: str, stroke_width: float) -> None:
        pass

    @abstractmethod
    def polygon(self, points: Sequence[Point], fill: str) -> None:
        pass

    @abstractmethod
    def text(self, x: float, y: float, content: str, style: TextStyle) -> None:
        pass

    @abstractmethod
    def finish(self) -> bytes:
        """Return the encoded document. The canvas must not be drawn on afterwards."""
        pass
