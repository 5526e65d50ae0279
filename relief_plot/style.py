from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
import math
import re
from typing import Literal

from PIL import ImageColor

from relief_plot.errors import InvalidInput


RGBA = tuple[int, int, int, int]
ColorLike = str | tuple[int, int, int] | tuple[int, int, int, int]
TextAlign = Literal["left", "center", "right"]

DEFAULT_COLOR = "black"
DEFAULT_FONT = "12px Arial"
DEFAULT_FONT_SIZE_PX = 12.0
DEFAULT_FONT_FAMILY = "Arial"
TEXT_ALIGNMENTS = ("left", "center", "right")

_RGBA_FUNC = re.compile(
    r"^rgba\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d*\.?\d+)\s*\)$",
    re.IGNORECASE,
)
_FONT_SHORTHAND = re.compile(r"^\s*(?:[a-z-]+\s+)*?(\d+(?:\.\d+)?)px\s+(.+?)\s*$", re.IGNORECASE)


@dataclass(frozen=True)
class FontSpec:
    size_px: float = DEFAULT_FONT_SIZE_PX
    family: str = DEFAULT_FONT_FAMILY

    def __post_init__(self) -> None:
        if not math.isfinite(self.size_px) or self.size_px <= 0:
            raise InvalidInput("font size must be a positive number of pixels")
        if not self.family.strip():
            raise InvalidInput("font family must be non-empty")

    @property
    def css(self) -> str:
        return f"{self.size_px:g}px {self.family}"


@dataclass(frozen=True)
class DrawStyle:
    """Per-call presentation overrides.

    Every field is optional. A field left as ``None`` keeps whatever the
    surface currently holds for that setting.
    """

    color: ColorLike | None = None
    line_width: float | None = None
    fill_color: ColorLike | None = None
    font: str | None = None
    line_dash: tuple[float, ...] | None = None
    angle: float | None = None

    def __post_init__(self) -> None:
        if self.line_width is not None and (not math.isfinite(self.line_width) or self.line_width <= 0):
            raise InvalidInput("line_width must be > 0")
        if self.line_dash is not None:
            dash = tuple(float(v) for v in self.line_dash)
            if any((not math.isfinite(v)) or v < 0 for v in dash):
                raise InvalidInput("line_dash entries must be finite and >= 0")
            object.__setattr__(self, "line_dash", dash)
        if self.angle is not None and not math.isfinite(self.angle):
            raise InvalidInput("angle must be finite")


def parse_color(color: ColorLike) -> RGBA:
    if isinstance(color, tuple):
        return _coerce_color_tuple(color)
    if not isinstance(color, str) or not color.strip():
        raise InvalidInput(f"unsupported color: {color!r}")
    return _parse_color_string(color.strip())


def parse_font(font: str | FontSpec) -> FontSpec:
    if isinstance(font, FontSpec):
        return font
    return _parse_font_string(str(font))


@lru_cache(maxsize=256)
def _parse_color_string(text: str) -> RGBA:
    match = _RGBA_FUNC.match(text)
    if match is not None:
        r, g, b = (int(match.group(i)) for i in (1, 2, 3))
        alpha = float(match.group(4))
        if max(r, g, b) > 255 or alpha > 1.0:
            raise InvalidInput(f"rgba() component out of range: {text!r}")
        return (r, g, b, int(round(alpha * 255)))
    try:
        rgb = ImageColor.getrgb(text)
    except ValueError as exc:
        raise InvalidInput(f"unknown color: {text!r}") from exc
    if len(rgb) == 3:
        return (rgb[0], rgb[1], rgb[2], 255)
    return (rgb[0], rgb[1], rgb[2], rgb[3])


@lru_cache(maxsize=64)
def _parse_font_string(text: str) -> FontSpec:
    match = _FONT_SHORTHAND.match(text)
    if match is None:
        raise InvalidInput(f"font must look like '<size>px <family>', got {text!r}")
    family = match.group(2).strip().strip("'\"")
    return FontSpec(size_px=float(match.group(1)), family=family)


def _coerce_color_tuple(color: tuple[int, ...]) -> RGBA:
    if len(color) not in (3, 4):
        raise InvalidInput(f"color tuple must have 3 or 4 components, got {len(color)}")
    values = [int(v) for v in color]
    if any(v < 0 or v > 255 for v in values):
        raise InvalidInput(f"color components must be in [0, 255]: {color!r}")
    if len(values) == 3:
        values.append(255)
    return (values[0], values[1], values[2], values[3])


DEFAULT_FONT_SPEC = parse_font(DEFAULT_FONT)
