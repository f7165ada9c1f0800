"""Raster backend: paints the snapshot with Pillow and encodes it as PNG."""

import io
from collections.abc import Sequence

from PIL import Image, ImageDraw, ImageFont

from .canvas import Canvas, Point, TextStyle


class RasterCanvas(Canvas):
    """Pillow-backed canvas using the bundled default font at each size."""

    def __init__(self, width: int, height: int):
        super().__init__(width, height)
        self._image = Image.new("RGB", (width, height), "#FFFFFF")
        self._draw = ImageDraw.Draw(self._image)
        self._font_cache: dict[int, ImageFont.FreeTypeFont | ImageFont.ImageFont] = {}

    def _font(self, size: int) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
        cached = self._font_cache.get(size)
        if cached is not None:
            return cached
        font = ImageFont.load_default(size=size)
        self._font_cache[size] = font
        return font

    def fill_rounded_rect(self, x, y, w, h, radius, fill):
        box = [x, y, x + w, y + h]
        if radius <= 0:
            self._draw.rectangle(box, fill=fill)
        else:
            self._draw.rounded_rectangle(box, radius=radius, fill=fill)

    def stroke_rounded_rect(self, x, y, w, h, radius, stroke, stroke_width):
        box = [x, y, x + w, y + h]
        width = max(1, round(stroke_width))
        if radius <= 0:
            self._draw.rectangle(box, outline=stroke, width=width)
        else:
            self._draw.rounded_rectangle(box, radius=radius, outline=stroke, width=width)

    def line(self, x1, y1, x2, y2, stroke, stroke_width):
        self._draw.line([(x1, y1), (x2, y2)], fill=stroke, width=max(1, round(stroke_width)))

    def polygon(self, points: Sequence[Point], fill):
        self._draw.polygon(list(points), fill=fill)

    def text(self, x, y, content, style: TextStyle):
        # The default font has no bold face; weight is carried by size only.
        font = self._font(style.size)
        left, top, right, bottom = self._draw.textbbox((0, 0), content, font=font)
        self._draw.text((x, y - (bottom - top) / 2 - top), content, fill=style.color, font=font)

    def finish(self) -> bytes:
        buffer = io.BytesIO()
        self._image.save(buffer, format="PNG")
        return buffer.getvalue()
