from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence

import numpy as np

from relief_plot.adapters import coerce_points
from relief_plot.config import AxisConfig, resolve_axis_config
from relief_plot.primitives import draw_line
from relief_plot.scales import PlotTransform
from relief_plot.series import DataPoint, points_to_arrays
from relief_plot.style import DrawStyle
from relief_plot.surface import Surface


LOGGER = logging.getLogger(__name__)


def interpolate_elevation(time: float, reference: Sequence[DataPoint]) -> float | None:
    """Linear elevation of `reference` at `time`, or None when no segment covers it.

    Uses the first segment whose right endpoint is at or after `time`, so
    `reference` must be ordered by time. Times before the first point
    extrapolate along the first segment.
    """

    if len(reference) < 2:
        return None
    times, elevations = points_to_arrays(reference)
    hits = np.flatnonzero(times[1:] >= time)
    if hits.size == 0:
        return None
    i = int(hits[0]) + 1
    t0, t1 = float(times[i - 1]), float(times[i])
    e0, e1 = float(elevations[i - 1]), float(elevations[i])
    if t1 == t0:
        return e1
    return e0 + (time - t0) / (t1 - t0) * (e1 - e0)


def draw_vertical_line_to_trajectory_with_limits(
    surface: Surface,
    markers: Any,
    reference: Any,
    config: AxisConfig | Mapping[str, Any] | None = None,
    style: DrawStyle | None = None,
) -> None:
    """Draw a vertical segment from the baseline up to `reference` at each marker's time.

    Markers past the reference's last time get no line.
    """

    markers = coerce_points(markers)
    reference = coerce_points(reference)
    transform = PlotTransform.from_config(resolve_axis_config(config), surface.width, surface.height)
    baseline = transform.baseline
    for marker in markers:
        elevation = interpolate_elevation(marker.time, reference)
        if elevation is None:
            LOGGER.debug("no reference segment covers marker time %r, skipping", marker.time)
            continue
        x = transform.x(marker.time)
        draw_line(surface, (x, baseline), (x, transform.y(elevation)), style)
