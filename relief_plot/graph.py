from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

import numpy as np

from relief_plot import axes, curves, interpolation, primitives, selectors
from relief_plot.config import AxisConfig
from relief_plot.errors import InvalidInput
from relief_plot.selectors import DEFAULT_GEOMETRY, SelectorGeometry, SelectorLabels
from relief_plot.style import ColorLike, DrawStyle
from relief_plot.surface import Point, Surface


AxisOptions = AxisConfig | Mapping[str, Any] | None


class LineGraph:
    """Draws relief and trajectory profiles onto one fixed-size surface.

    Every method recomputes its geometry from its arguments; nothing but the
    surface and its size is kept between calls, so layers drawn with the same
    axis options line up pixel for pixel.
    """

    def __init__(self, width: int, height: int, surface: Surface | None = None) -> None:
        if surface is None:
            surface = Surface(width, height)
        elif (surface.width, surface.height) != (width, height):
            raise InvalidInput(
                f"surface is {surface.width}x{surface.height}, expected {width}x{height}"
            )
        self._surface = surface

    @property
    def width(self) -> int:
        return self._surface.width

    @property
    def height(self) -> int:
        return self._surface.height

    @property
    def surface(self) -> Surface:
        return self._surface

    def clear_canvas(self) -> None:
        self._surface.clear()

    def draw_line(self, start: Point, end: Point, style: DrawStyle | None = None) -> None:
        primitives.draw_line(self._surface, start, end, style)

    def draw_circle(self, center: Point, radius: float, style: DrawStyle | None = None) -> None:
        primitives.draw_circle(self._surface, center, radius, style)

    def draw_text(self, text: str, position: Point, style: DrawStyle | None = None) -> None:
        primitives.draw_text(self._surface, text, position, style)

    def draw_axes(self, config: AxisOptions = None) -> None:
        axes.draw_axes(self._surface, config)

    def plot_data_points(self, points: Any, style: DrawStyle | None = None) -> None:
        curves.plot_data_points(self._surface, points, style)

    def connect_data_points(self, points: Any, config: AxisOptions = None, style: DrawStyle | None = None) -> None:
        curves.connect_data_points(self._surface, points, config, style)

    def fill_area_under_curve(
        self,
        points: Any,
        config: AxisOptions = None,
        fill_color: ColorLike = curves.DEFAULT_AREA_FILL,
    ) -> None:
        curves.fill_area_under_curve(self._surface, points, config, fill_color)

    def draw_vertical_line_to_trajectory_with_limits(
        self,
        markers: Any,
        reference: Any,
        config: AxisOptions = None,
        style: DrawStyle | None = None,
    ) -> None:
        interpolation.draw_vertical_line_to_trajectory_with_limits(self._surface, markers, reference, config, style)

    def draw_selectors(
        self,
        markers: Any,
        config: AxisOptions = None,
        style: DrawStyle | None = None,
        pad_top: float = 0.0,
        text: str = "",
        *,
        geometry: SelectorGeometry = DEFAULT_GEOMETRY,
    ) -> None:
        selectors.draw_selectors(self._surface, markers, config, style, pad_top, text, geometry)

    def draw_selectors_and_indicators(
        self,
        markers: Any,
        config: AxisOptions = None,
        style: DrawStyle | None = None,
        pad_top: float = 0.0,
        center_text: str = "",
        left_text: str = "",
        right_text: str = "",
        *,
        left_secondary_text: str = "",
        right_secondary_text: str = "",
        geometry: SelectorGeometry = DEFAULT_GEOMETRY,
    ) -> None:
        labels = SelectorLabels(
            center=center_text,
            left=left_text,
            right=right_text,
            left_secondary=left_secondary_text,
            right_secondary=right_secondary_text,
        )
        selectors.draw_selectors_and_indicators(self._surface, markers, config, style, pad_top, labels, geometry)

    def display_max_values(self, config: AxisOptions = None, style: DrawStyle | None = None) -> None:
        axes.display_max_values(self._surface, config, style)

    def to_rgba(self) -> np.ndarray:
        return self._surface.to_rgba()

    def save_png(self, path: str | Path) -> Path:
        return self._surface.save_png(path)
