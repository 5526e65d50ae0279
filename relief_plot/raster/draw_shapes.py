from __future__ import annotations

from typing import Sequence

import numpy as np
from PIL import Image, ImageDraw

from relief_plot.raster.canvas import blend_mask, clip_rect
from relief_plot.style import RGBA


def fill_polygon(dst: np.ndarray, xs: np.ndarray, ys: np.ndarray, color: RGBA) -> None:
    xs = np.asarray(xs, dtype=np.float64)
    ys = np.asarray(ys, dtype=np.float64)
    if xs.size < 3 or _shoelace_area(xs, ys) == 0.0:
        return
    bounds = clip_rect(dst, float(np.min(xs)), float(np.min(ys)), float(np.max(xs)), float(np.max(ys)))
    if bounds is None:
        return
    x0, y0, x1, y1 = bounds
    image = Image.new("L", (x1 - x0, y1 - y0), 0)
    vertices = [(float(x) - x0, float(y) - y0) for x, y in zip(xs.tolist(), ys.tolist())]
    ImageDraw.Draw(image).polygon(vertices, fill=255)
    blend_mask(dst, x0, y0, np.asarray(image, dtype=np.uint8), color)


def fill_circle(dst: np.ndarray, cx: float, cy: float, radius: float, color: RGBA) -> None:
    _draw_ellipse(dst, cx, cy, radius, color, fill=True, width=1)


def stroke_circle(dst: np.ndarray, cx: float, cy: float, radius: float, color: RGBA, width: float = 1.0) -> None:
    _draw_ellipse(dst, cx, cy, radius, color, fill=False, width=max(1, int(round(width))))


def _draw_ellipse(
    dst: np.ndarray,
    cx: float,
    cy: float,
    radius: float,
    color: RGBA,
    *,
    fill: bool,
    width: int,
) -> None:
    margin = width // 2 + 1
    bounds = clip_rect(dst, cx - radius, cy - radius, cx + radius, cy + radius, margin=margin)
    if bounds is None:
        return
    x0, y0, x1, y1 = bounds
    image = Image.new("L", (x1 - x0, y1 - y0), 0)
    box = _ellipse_box(cx - x0, cy - y0, radius)
    draw = ImageDraw.Draw(image)
    if fill:
        draw.ellipse(box, fill=255)
    else:
        draw.ellipse(box, outline=255, width=width)
    blend_mask(dst, x0, y0, np.asarray(image, dtype=np.uint8), color)


def _ellipse_box(cx: float, cy: float, radius: float) -> Sequence[float]:
    return (cx - radius, cy - radius, cx + radius, cy + radius)


def _shoelace_area(xs: np.ndarray, ys: np.ndarray) -> float:
    # Zero for collinear or repeated vertices, which cover no pixels.
    return 0.5 * abs(float(np.dot(xs, np.roll(ys, -1)) - np.dot(ys, np.roll(xs, -1))))
