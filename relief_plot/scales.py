from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
import logging
import math
from typing import Sequence, TypeVar

import numpy as np

from relief_plot.config import AxisConfig, Scale
from relief_plot.errors import InvalidInput, InvalidScale
from relief_plot.series import DataPoint, points_to_arrays


LOGGER = logging.getLogger(__name__)

Value = TypeVar("Value", float, np.ndarray)

# Absorbs float noise in (max - min) / step so 0.3 / 0.1 counts as 3 steps.
TICK_COUNT_EPSILON = 1e-9


def map_horizontal(value: Value, vmin: float, vmax: float, pixel_start: float, pixel_end: float) -> Value:
    """Map a domain value onto [pixel_start, pixel_end], left to right."""

    _check_span(vmin, vmax)
    out = pixel_start + (np.asarray(value, dtype=np.float64) - vmin) / (vmax - vmin) * (pixel_end - pixel_start)
    return _unwrap(out)


def map_vertical(value: Value, vmin: float, vmax: float, pixel_start: float, pixel_end: float) -> Value:
    """Map a domain value onto [pixel_start, pixel_end] with `vmax` at `pixel_start` (pixel y grows downward)."""

    _check_span(vmin, vmax)
    out = pixel_end - (np.asarray(value, dtype=np.float64) - vmin) / (vmax - vmin) * (pixel_end - pixel_start)
    return _unwrap(out)


@dataclass(frozen=True)
class PlotTransform:
    """Padding-aware mapping from (time, elevation) to surface pixels.

    Every layer draws through one of these so axes, curves and overlays
    line up exactly.
    """

    x_scale: Scale
    y_scale: Scale
    left: float
    right: float
    top: float
    bottom: float

    @classmethod
    def from_config(cls, config: AxisConfig, width: int, height: int) -> "PlotTransform":
        padding = config.padding
        left = float(padding.left)
        right = float(width) - float(padding.right)
        top = float(padding.top)
        bottom = float(height) - float(padding.bottom)
        if right < left or bottom < top:
            raise InvalidInput(f"padding {padding} leaves no plotting rectangle on a {width}x{height} surface")
        return cls(x_scale=config.x_scale, y_scale=config.y_scale, left=left, right=right, top=top, bottom=bottom)

    @property
    def baseline(self) -> float:
        return self.bottom

    def x(self, time: Value) -> Value:
        return map_horizontal(time, self.x_scale.min, self.x_scale.max, self.left, self.right)

    def y(self, elevation: Value) -> Value:
        return map_vertical(elevation, self.y_scale.min, self.y_scale.max, self.top, self.bottom)

    def map_points(self, points: Sequence[DataPoint]) -> tuple[np.ndarray, np.ndarray]:
        times, elevations = points_to_arrays(points)
        return (
            np.asarray(self.x(times), dtype=np.float64),
            np.asarray(self.y(elevations), dtype=np.float64),
        )


def tick_values(scale: Scale) -> np.ndarray:
    """Tick positions from `scale.min` up to and including `scale.max`, one per step."""

    if not scale.step > 0:
        LOGGER.warning("ignoring non-positive tick step %r for scale [%r, %r]", scale.step, scale.min, scale.max)
        return np.empty(0, dtype=np.float64)
    count = int(math.floor(scale.span / scale.step + TICK_COUNT_EPSILON)) + 1
    return scale.min + np.arange(count, dtype=np.float64) * scale.step


def format_tick_label(value: float, scale: Scale) -> str:
    if scale.show_decimals:
        quant = Decimal(1).scaleb(-scale.decimal_places)
        out = format(Decimal(str(value)).quantize(quant, rounding=ROUND_HALF_UP), "f")
    else:
        out = str(int(math.floor(value + 0.5)))
    if out.startswith("-") and float(out) == 0.0:
        out = out[1:]
    return out


def format_number(value: float) -> str:
    text = repr(float(value))
    if text.endswith(".0"):
        text = text[:-2]
    return text


def _check_span(vmin: float, vmax: float) -> None:
    if not (math.isfinite(vmin) and math.isfinite(vmax)):
        raise InvalidScale(f"scale bounds must be finite, got min={vmin!r}, max={vmax!r}")
    if vmax <= vmin:
        raise InvalidScale(f"scale max must be > min, got min={vmin!r}, max={vmax!r}")


def _unwrap(out: np.ndarray):
    if np.ndim(out) == 0:
        return float(out)
    return out
