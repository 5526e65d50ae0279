from __future__ import annotations

import numpy as np

from relief_plot.style import RGBA


TRANSPARENT: RGBA = (0, 0, 0, 0)


def new_canvas(width: int, height: int, color: RGBA = TRANSPARENT) -> np.ndarray:
    canvas = np.zeros((height, width, 4), dtype=np.uint8)
    fill_canvas(canvas, color)
    return canvas


def fill_canvas(dst: np.ndarray, color: RGBA) -> None:
    dst[:, :, 0] = color[0]
    dst[:, :, 1] = color[1]
    dst[:, :, 2] = color[2]
    dst[:, :, 3] = color[3]


def blend_mask(dst: np.ndarray, x: int, y: int, mask: np.ndarray, color: RGBA) -> None:
    """Composite `color` over `dst` using an 8-bit coverage mask placed at (x, y)."""

    h, w = mask.shape
    if h <= 0 or w <= 0:
        return

    x0 = max(0, x)
    y0 = max(0, y)
    x1 = min(dst.shape[1], x + w)
    y1 = min(dst.shape[0], y + h)
    if x1 <= x0 or y1 <= y0:
        return

    sx0 = x0 - x
    sy0 = y0 - y
    cov = mask[sy0 : sy0 + (y1 - y0), sx0 : sx0 + (x1 - x0)].astype(np.float32) / 255.0
    src_alpha = (color[3] / 255.0) * cov
    if not np.any(src_alpha > 0):
        return

    patch = dst[y0:y1, x0:x1]
    dst_rgb = patch[:, :, :3].astype(np.float32)
    dst_alpha = patch[:, :, 3].astype(np.float32) / 255.0

    src_rgb = np.asarray(color[:3], dtype=np.float32).reshape(1, 1, 3)
    out_alpha = src_alpha + dst_alpha * (1.0 - src_alpha)
    out_rgb_num = src_rgb * src_alpha[:, :, None] + dst_rgb * dst_alpha[:, :, None] * (1.0 - src_alpha[:, :, None])
    safe_alpha = np.where(out_alpha > 1e-6, out_alpha, 1.0)
    out_rgb = out_rgb_num / safe_alpha[:, :, None]

    touched = src_alpha > 0
    patch[:, :, :3] = np.where(touched[:, :, None], np.clip(np.rint(out_rgb), 0, 255), patch[:, :, :3]).astype(np.uint8)
    patch[:, :, 3] = np.where(touched, np.clip(np.rint(out_alpha * 255.0), 0, 255), patch[:, :, 3]).astype(np.uint8)


def clip_rect(
    dst: np.ndarray,
    xmin: float,
    ymin: float,
    xmax: float,
    ymax: float,
    margin: int = 0,
) -> tuple[int, int, int, int] | None:
    """Integer (x0, y0, x1, y1) bounds of a float box intersected with the canvas, end-exclusive."""

    x0 = max(0, int(np.floor(xmin)) - margin)
    y0 = max(0, int(np.floor(ymin)) - margin)
    x1 = min(dst.shape[1], int(np.ceil(xmax)) + margin + 1)
    y1 = min(dst.shape[0], int(np.ceil(ymax)) + margin + 1)
    if x1 <= x0 or y1 <= y0:
        return None
    return x0, y0, x1, y1
