from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, replace
import math
from pathlib import Path
from typing import Any, Iterator, Sequence

import numpy as np
from PIL import Image

from relief_plot.errors import InvalidInput
from relief_plot.raster import draw_polyline, draw_text, fill_canvas, fill_circle, fill_polygon, new_canvas, stroke_circle, text_width
from relief_plot.raster.canvas import TRANSPARENT
from relief_plot.style import (
    DEFAULT_FONT_SPEC,
    RGBA,
    TEXT_ALIGNMENTS,
    ColorLike,
    FontSpec,
    TextAlign,
    parse_color,
    parse_font,
)


Point = tuple[float, float]
Matrix = tuple[float, float, float, float, float, float]

IDENTITY: Matrix = (1.0, 0.0, 0.0, 1.0, 0.0, 0.0)


@dataclass(frozen=True)
class SurfaceState:
    stroke_color: RGBA = (0, 0, 0, 255)
    fill_color: RGBA = (0, 0, 0, 255)
    line_width: float = 1.0
    line_dash: tuple[float, ...] = ()
    font: FontSpec = DEFAULT_FONT_SPEC
    text_align: TextAlign = "left"
    # (a, b, c, d, e, f): x' = a*x + c*y + e, y' = b*x + d*y + f
    matrix: Matrix = IDENTITY

    @property
    def rotation_deg(self) -> float:
        a, b = self.matrix[0], self.matrix[1]
        return math.degrees(math.atan2(b, a))


@dataclass(frozen=True)
class DrawCall:
    kind: str
    points: tuple[Point, ...]
    color: RGBA
    line_width: float | None = None
    line_dash: tuple[float, ...] = ()
    radius: float | None = None
    text: str | None = None
    font: FontSpec | None = None
    align: TextAlign | None = None
    angle: float = 0.0


class Surface:
    """Fixed-size RGBA raster target with canvas-style drawing state.

    Stroke, fill, font and alignment settings persist between calls until
    changed. ``save``/``restore`` snapshot and reinstate the whole state,
    including the current transform.
    """

    def __init__(self, width: int, height: int, *, background: ColorLike | None = None) -> None:
        if width <= 0 or height <= 0:
            raise InvalidInput("surface width and height must be > 0")
        self._width = int(width)
        self._height = int(height)
        self._background: RGBA = TRANSPARENT if background is None else parse_color(background)
        self._pixels = new_canvas(self._width, self._height, color=self._background)
        self._state = SurfaceState()
        self._stack: list[SurfaceState] = []

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def state(self) -> SurfaceState:
        return self._state

    # -- state -------------------------------------------------------------

    def set_stroke_color(self, color: ColorLike) -> None:
        self._state = replace(self._state, stroke_color=parse_color(color))

    def set_fill_color(self, color: ColorLike) -> None:
        self._state = replace(self._state, fill_color=parse_color(color))

    def set_line_width(self, width: float) -> None:
        if not math.isfinite(width) or width <= 0:
            raise InvalidInput("line width must be > 0")
        self._state = replace(self._state, line_width=float(width))

    def set_line_dash(self, dash: Sequence[float]) -> None:
        pattern = tuple(float(v) for v in dash)
        if any((not math.isfinite(v)) or v < 0 for v in pattern):
            raise InvalidInput("line dash entries must be finite and >= 0")
        self._state = replace(self._state, line_dash=pattern)

    def set_font(self, font: str | FontSpec) -> None:
        self._state = replace(self._state, font=parse_font(font))

    def set_text_align(self, align: TextAlign) -> None:
        if align not in TEXT_ALIGNMENTS:
            raise InvalidInput(f"text align must be one of {TEXT_ALIGNMENTS}, got {align!r}")
        self._state = replace(self._state, text_align=align)

    def save(self) -> None:
        self._stack.append(self._state)

    def restore(self) -> None:
        if self._stack:
            self._state = self._stack.pop()

    @contextmanager
    def saved_state(self) -> Iterator["Surface"]:
        self.save()
        try:
            yield self
        finally:
            self.restore()

    def translate(self, dx: float, dy: float) -> None:
        a, b, c, d, e, f = self._state.matrix
        matrix = (a, b, c, d, e + a * dx + c * dy, f + b * dx + d * dy)
        self._state = replace(self._state, matrix=matrix)

    def rotate(self, degrees: float) -> None:
        theta = math.radians(degrees)
        cos_t = math.cos(theta)
        sin_t = math.sin(theta)
        a, b, c, d, e, f = self._state.matrix
        matrix = (
            a * cos_t + c * sin_t,
            b * cos_t + d * sin_t,
            c * cos_t - a * sin_t,
            d * cos_t - b * sin_t,
            e,
            f,
        )
        self._state = replace(self._state, matrix=matrix)

    def transform_point(self, x: float, y: float) -> Point:
        a, b, c, d, e, f = self._state.matrix
        return (a * x + c * y + e, b * x + d * y + f)

    # -- primitives --------------------------------------------------------

    def stroke_path(self, points: Sequence[Point], *, closed: bool = False) -> None:
        device = self._to_device(points)
        if closed and len(device) > 2:
            device = device + (device[0],)
        state = self._state
        self._record(
            "stroke",
            device,
            color=state.stroke_color,
            line_width=state.line_width,
            line_dash=state.line_dash,
        )
        if len(device) < 2:
            return
        xs, ys = _split(device)
        draw_polyline(self._pixels, xs, ys, state.stroke_color, width=state.line_width, dash=state.line_dash)

    def fill_path(self, points: Sequence[Point]) -> None:
        device = self._to_device(points)
        self._record("fill", device, color=self._state.fill_color)
        if len(device) < 3:
            return
        xs, ys = _split(device)
        fill_polygon(self._pixels, xs, ys, self._state.fill_color)

    def fill_circle(self, center: Point, radius: float) -> None:
        cx, cy = self.transform_point(*center)
        self._record("fill_circle", ((cx, cy),), color=self._state.fill_color, radius=radius)
        fill_circle(self._pixels, cx, cy, radius, self._state.fill_color)

    def stroke_circle(self, center: Point, radius: float) -> None:
        cx, cy = self.transform_point(*center)
        state = self._state
        self._record("stroke_circle", ((cx, cy),), color=state.stroke_color, line_width=state.line_width, radius=radius)
        stroke_circle(self._pixels, cx, cy, radius, state.stroke_color, width=state.line_width)

    def fill_text(self, text: str, x: float, y: float) -> None:
        anchor = self.transform_point(x, y)
        state = self._state
        angle = state.rotation_deg
        self._record(
            "text",
            (anchor,),
            color=state.fill_color,
            text=text,
            font=state.font,
            align=state.text_align,
            angle=angle,
        )
        draw_text(
            self._pixels,
            anchor[0],
            anchor[1],
            text,
            state.fill_color,
            font_family=state.font.family,
            font_size_px=state.font.size_px,
            align=state.text_align,
            rotate_deg=angle,
        )

    def measure_text(self, text: str) -> float:
        font = self._state.font
        return text_width(text, font_family=font.family, font_size_px=font.size_px)

    def clear(self) -> None:
        fill_canvas(self._pixels, self._background)
        self._record("clear", (), color=self._background)

    # -- export ------------------------------------------------------------

    def to_rgba(self) -> np.ndarray:
        return self._pixels.copy()

    def to_image(self) -> Image.Image:
        return Image.fromarray(self.to_rgba())

    def save_png(self, path: str | Path) -> Path:
        target = Path(path)
        self.to_image().save(target, format="PNG")
        return target

    def _to_device(self, points: Sequence[Point]) -> tuple[Point, ...]:
        return tuple(self.transform_point(float(x), float(y)) for x, y in points)

    def _record(self, kind: str, points: tuple[Point, ...], **details: Any) -> None:
        return None


class RecordingSurface(Surface):
    """Surface that keeps an ordered log of every primitive it executes."""

    def __init__(self, width: int, height: int, *, background: ColorLike | None = None) -> None:
        self.calls: list[DrawCall] = []
        super().__init__(width, height, background=background)

    def calls_of(self, kind: str) -> list[DrawCall]:
        return [call for call in self.calls if call.kind == kind]

    def reset_calls(self) -> None:
        self.calls.clear()

    def _record(self, kind: str, points: tuple[Point, ...], **details: Any) -> None:
        self.calls.append(DrawCall(kind=kind, points=points, **details))


def _split(points: Sequence[Point]) -> tuple[np.ndarray, np.ndarray]:
    arr = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    return arr[:, 0], arr[:, 1]
