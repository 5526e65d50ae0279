from __future__ import annotations

from functools import lru_cache
import logging
import math
from pathlib import Path

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from relief_plot.raster.canvas import blend_mask
from relief_plot.style import DEFAULT_FONT_FAMILY, DEFAULT_FONT_SIZE_PX, RGBA, TextAlign


LOGGER = logging.getLogger(__name__)

SANS_FONT_FALLBACK_PATTERNS = (
    "arial",
    "helvetica",
    "liberationsans",
    "liberation sans",
    "dejavusans",
    "dejavu sans",
    "verdana",
)


def draw_text(
    dst: np.ndarray,
    x: float,
    y: float,
    text: str,
    color: RGBA,
    *,
    font_family: str = DEFAULT_FONT_FAMILY,
    font_size_px: float = DEFAULT_FONT_SIZE_PX,
    align: TextAlign = "left",
    rotate_deg: float = 0.0,
) -> None:
    """Paint `text` with its alphabetic baseline anchored at (x, y).

    `align` moves the anchor along the baseline; `rotate_deg` turns the glyphs
    clockwise on screen around the anchor.
    """

    if not text:
        return
    font = _load_font(font_family=font_family, font_size_px=font_size_px)
    mask, anchor_x, anchor_y = _render_mask(text=text, font=font)
    anchor_x += _align_offset(text, font, align)
    if rotate_deg % 360.0 != 0.0:
        mask, anchor_x, anchor_y = _rotate_mask(mask, anchor_x, anchor_y, rotate_deg=rotate_deg)
    blend_mask(dst, int(round(x - anchor_x)), int(round(y - anchor_y)), mask, color)


def text_width(
    text: str,
    *,
    font_family: str = DEFAULT_FONT_FAMILY,
    font_size_px: float = DEFAULT_FONT_SIZE_PX,
) -> float:
    if not text:
        return 0.0
    font = _load_font(font_family=font_family, font_size_px=font_size_px)
    return float(font.getlength(text))


def _align_offset(text: str, font: ImageFont.FreeTypeFont | ImageFont.ImageFont, align: TextAlign) -> float:
    if align == "left":
        return 0.0
    advance = float(font.getlength(text))
    if align == "center":
        return advance / 2.0
    return advance


@lru_cache(maxsize=128)
def _render_mask(text: str, font: ImageFont.FreeTypeFont | ImageFont.ImageFont) -> tuple[np.ndarray, float, float]:
    ascent, _ = font.getmetrics()
    left, top, right, bottom = font.getbbox(text)
    width = max(1, int(math.ceil(right - left)))
    height = max(1, int(math.ceil(bottom - top)))
    image = Image.new("L", (width, height), 0)
    draw = ImageDraw.Draw(image)
    draw.text((-left, -top), text, fill=255, font=font)
    mask = np.asarray(image, dtype=np.uint8)
    return mask, float(-left), float(ascent - top)


def _rotate_mask(mask: np.ndarray, anchor_x: float, anchor_y: float, *, rotate_deg: float) -> tuple[np.ndarray, float, float]:
    h, w = mask.shape
    # PIL turns counter-clockwise; screen rotation is clockwise.
    image = Image.fromarray(mask).rotate(-rotate_deg, resample=Image.Resampling.BICUBIC, expand=True)
    rotated = np.asarray(image, dtype=np.uint8)
    rh, rw = rotated.shape
    phi = math.radians(-rotate_deg)
    dx = anchor_x - w / 2.0
    dy = anchor_y - h / 2.0
    new_x = rw / 2.0 + dx * math.cos(phi) + dy * math.sin(phi)
    new_y = rh / 2.0 - dx * math.sin(phi) + dy * math.cos(phi)
    return rotated, new_x, new_y


@lru_cache(maxsize=64)
def _load_font(font_family: str, font_size_px: float) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    size = max(1, int(round(font_size_px)))
    font_path = _resolve_font_path(font_family)
    if font_path is not None:
        try:
            return ImageFont.truetype(str(font_path), size=size)
        except OSError:
            LOGGER.warning("could not load font file %s, using default font", font_path)
    else:
        LOGGER.warning("no font matching %r found, using default font", font_family)
    return ImageFont.load_default(size=size)


@lru_cache(maxsize=32)
def _resolve_font_path(font_family: str) -> Path | None:
    wanted = font_family.strip().lower() if font_family.strip() else DEFAULT_FONT_FAMILY.lower()
    patterns = (wanted,) + SANS_FONT_FALLBACK_PATTERNS

    font_dirs = [
        Path.home() / "Library" / "Fonts",
        Path("/Library/Fonts"),
        Path("/System/Library/Fonts"),
        Path("/System/Library/Fonts/Supplemental"),
        Path("/usr/share/fonts"),
        Path("/usr/local/share/fonts"),
        Path("C:/Windows/Fonts"),
    ]

    candidates: list[Path] = []
    for base in font_dirs:
        if not base.exists():
            continue
        for ext in ("*.ttf", "*.otf", "*.ttc"):
            candidates.extend(sorted(base.rglob(ext)))

    for pattern in patterns:
        p = pattern.replace(" ", "")
        for path in candidates:
            stem = path.stem.lower().replace(" ", "")
            if stem == p or stem.startswith(p + "-") or stem.startswith(p + "_"):
                return path
        for path in candidates:
            if p in path.stem.lower().replace(" ", ""):
                return path
    return None
