from __future__ import annotations

import math
from typing import Iterator, Sequence

import numpy as np

from relief_plot.raster.canvas import blend_mask, clip_rect
from relief_plot.style import RGBA


Window = tuple[float, float, float, float]


def draw_polyline(
    dst: np.ndarray,
    xs: np.ndarray,
    ys: np.ndarray,
    color: RGBA,
    width: float = 1.0,
    dash: Sequence[float] = (),
) -> None:
    xs = np.asarray(xs, dtype=np.float64)
    ys = np.asarray(ys, dtype=np.float64)
    if xs.size < 2:
        return
    brush = max(1, int(round(width)))
    radius = brush // 2
    bounds = clip_rect(dst, float(np.min(xs)), float(np.min(ys)), float(np.max(xs)), float(np.max(ys)), margin=radius)
    if bounds is None:
        return
    x0, y0, x1, y1 = bounds
    mask = np.zeros((y1 - y0, x1 - x0), dtype=np.uint8)
    # Segments are cut to the mask plus the brush reach, so off-canvas lengths cost nothing.
    window = (x0 - radius - 1.0, y0 - radius - 1.0, x1 + radius + 1.0, y1 + radius + 1.0)
    for ax, ay, bx, by in dash_runs(xs, ys, dash, window=window):
        _draw_line_segment(
            mask,
            int(round(ax)) - x0,
            int(round(ay)) - y0,
            int(round(bx)) - x0,
            int(round(by)) - y0,
            radius=radius,
        )
    blend_mask(dst, x0, y0, mask, color)


def dash_runs(
    xs: np.ndarray,
    ys: np.ndarray,
    dash: Sequence[float],
    window: Window | None = None,
) -> Iterator[tuple[float, float, float, float]]:
    """Yield the visible pieces of a polyline under a canvas-style dash pattern.

    The pattern restarts at the first vertex and carries across vertices.
    With a `window` (xmin, ymin, xmax, ymax), only the pieces inside it are
    yielded; the dash phase still advances over the parts cut away.
    """

    pattern = normalize_dash(dash)
    points = list(zip(xs.tolist(), ys.tolist()))
    index = 0
    remaining = pattern[0] if pattern else 0.0
    for (ax, ay), (bx, by) in zip(points, points[1:]):
        length = math.hypot(bx - ax, by - ay)
        span = (0.0, 1.0) if window is None else clip_segment(ax, ay, bx, by, window)
        if not pattern:
            if span is not None:
                t0, t1 = span
                yield _lerp(ax, bx, t0), _lerp(ay, by, t0), _lerp(ax, bx, t1), _lerp(ay, by, t1)
            continue
        if length == 0.0:
            continue
        if span is None:
            index, remaining = _advance(pattern, index, remaining, length)
            continue
        lo, hi = span[0] * length, span[1] * length
        index, remaining = _advance(pattern, index, remaining, lo)
        ux = (bx - ax) / length
        uy = (by - ay) / length
        pos = lo
        while pos < hi:
            run = min(remaining, hi - pos)
            if index % 2 == 0 and run > 0:
                yield ax + ux * pos, ay + uy * pos, ax + ux * (pos + run), ay + uy * (pos + run)
            pos += run
            remaining -= run
            if remaining <= 1e-9:
                index = (index + 1) % len(pattern)
                remaining = pattern[index]
        index, remaining = _advance(pattern, index, remaining, length - hi)


def normalize_dash(dash: Sequence[float]) -> tuple[float, ...]:
    pattern = tuple(float(v) for v in dash)
    if not pattern or sum(pattern) <= 0:
        return ()
    if len(pattern) % 2 == 1:
        pattern = pattern * 2
    return pattern


def clip_segment(ax: float, ay: float, bx: float, by: float, window: Window) -> tuple[float, float] | None:
    """Liang-Barsky: the (t0, t1) parameter range of a->b inside `window`, or None."""

    xmin, ymin, xmax, ymax = window
    dx = bx - ax
    dy = by - ay
    t0, t1 = 0.0, 1.0
    for p, q in ((-dx, ax - xmin), (dx, xmax - ax), (-dy, ay - ymin), (dy, ymax - ay)):
        if p == 0.0:
            if q < 0.0:
                return None
            continue
        t = q / p
        if p < 0.0:
            if t > t1:
                return None
            t0 = max(t0, t)
        else:
            if t < t0:
                return None
            t1 = min(t1, t)
    return t0, t1


def _advance(pattern: tuple[float, ...], index: int, remaining: float, distance: float) -> tuple[int, float]:
    if distance < remaining:
        return index, remaining - distance
    distance -= remaining
    index = (index + 1) % len(pattern)
    remaining = pattern[index]
    # Even-length patterns return to the same index after one full period.
    distance %= sum(pattern)
    for _ in range(len(pattern)):
        if distance < remaining:
            break
        distance -= remaining
        index = (index + 1) % len(pattern)
        remaining = pattern[index]
    return index, max(0.0, remaining - distance)


def _lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def _draw_line_segment(mask: np.ndarray, x0: int, y0: int, x1: int, y1: int, radius: int) -> None:
    dx = abs(x1 - x0)
    sx = 1 if x0 < x1 else -1
    dy = -abs(y1 - y0)
    sy = 1 if y0 < y1 else -1
    err = dx + dy

    while True:
        _stamp_square_brush(mask, x0, y0, radius=radius)
        if x0 == x1 and y0 == y1:
            break
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x0 += sx
        if e2 <= dx:
            err += dx
            y0 += sy


def _stamp_square_brush(mask: np.ndarray, x: int, y: int, radius: int) -> None:
    ya = max(0, y - radius)
    yb = min(mask.shape[0], y + radius + 1)
    xa = max(0, x - radius)
    xb = min(mask.shape[1], x + radius + 1)
    if ya < yb and xa < xb:
        mask[ya:yb, xa:xb] = 255
