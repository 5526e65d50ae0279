from __future__ import annotations

from typing import Any, Mapping

import numpy as np

from relief_plot.adapters import coerce_points
from relief_plot.config import AxisConfig, resolve_axis_config
from relief_plot.primitives import apply_stroke_style, draw_circle
from relief_plot.scales import PlotTransform, map_horizontal, map_vertical
from relief_plot.series import points_to_arrays
from relief_plot.style import ColorLike, DrawStyle
from relief_plot.surface import Surface


DEFAULT_AREA_FILL = "rgba(0, 0, 0, 0.15)"
DEFAULT_MARKER_FILL = "blue"
DEFAULT_MARKER_RADIUS_PX = 5.0
SCATTER_MARGIN_PX = 50.0


def connect_data_points(
    surface: Surface,
    points: Any,
    config: AxisConfig | Mapping[str, Any] | None = None,
    style: DrawStyle | None = None,
) -> None:
    """Stroke one straight-segment polyline through `points` in the order given."""

    points = coerce_points(points)
    transform = PlotTransform.from_config(resolve_axis_config(config), surface.width, surface.height)
    if not points:
        return
    xs, ys = transform.map_points(points)
    apply_stroke_style(surface, style)
    surface.stroke_path(list(zip(xs.tolist(), ys.tolist())))


def fill_area_under_curve(
    surface: Surface,
    points: Any,
    config: AxisConfig | Mapping[str, Any] | None = None,
    fill_color: ColorLike = DEFAULT_AREA_FILL,
) -> None:
    """Fill between the curve and the X axis baseline.

    The path drops from the first point to the baseline and back up from the
    last one, so stretches below the baseline fill toward it as well.
    """

    points = coerce_points(points)
    transform = PlotTransform.from_config(resolve_axis_config(config), surface.width, surface.height)
    if not points:
        return
    xs, ys = transform.map_points(points)
    baseline = transform.baseline
    path = [(float(xs[0]), baseline)]
    path.extend(zip(xs.tolist(), ys.tolist()))
    path.append((float(xs[-1]), baseline))
    surface.set_fill_color(fill_color)
    surface.fill_path(path)


def plot_data_points(
    surface: Surface,
    points: Any,
    style: DrawStyle | None = None,
    radius: float = DEFAULT_MARKER_RADIUS_PX,
) -> None:
    """Mark every point with a circle, scaled to the points' own extents.

    Unlike the other curve operations this ignores the axis configuration and
    fits the data inside a fixed margin, so a single point or a flat series
    has no span to map and raises `InvalidScale`.
    """

    points = coerce_points(points)
    if not points:
        return
    style = style or DrawStyle(fill_color=DEFAULT_MARKER_FILL)
    times, elevations = points_to_arrays(points)
    xs = map_horizontal(
        times,
        float(np.min(times)),
        float(np.max(times)),
        SCATTER_MARGIN_PX,
        surface.width - SCATTER_MARGIN_PX,
    )
    ys = map_vertical(
        elevations,
        float(np.min(elevations)),
        float(np.max(elevations)),
        SCATTER_MARGIN_PX,
        surface.height - SCATTER_MARGIN_PX,
    )
    for x, y in zip(np.atleast_1d(xs).tolist(), np.atleast_1d(ys).tolist()):
        draw_circle(surface, (x, y), radius, style)
