from __future__ import annotations

from typing import Any, Mapping

from relief_plot.config import AxisConfig, resolve_axis_config
from relief_plot.primitives import draw_line, draw_text
from relief_plot.scales import PlotTransform, format_number, format_tick_label, tick_values
from relief_plot.style import DEFAULT_COLOR, DEFAULT_FONT, DrawStyle
from relief_plot.surface import Surface


TICK_MARK_LENGTH_PX = 5.0
DEFAULT_X_LABEL_OFFSET_PX = 10.0
DEFAULT_Y_LABEL_OFFSET_PX = 20.0
Y_TICK_BASELINE_SHIFT_PX = 5.0
MAX_VALUES_INSET_PX = 10.0
MAX_VALUES_ROW_PX = 20.0


def draw_axes(surface: Surface, config: AxisConfig | Mapping[str, Any] | None = None) -> None:
    """Draw both axis lines with tick marks, tick labels and optional titles.

    The X axis runs along the baseline under the plotting rectangle, the Y
    axis along its left edge. Ticks run from each scale's min to its max in
    `step` increments; a non-positive step draws the bare axis line.
    """

    config = resolve_axis_config(config)
    transform = PlotTransform.from_config(config, surface.width, surface.height)
    baseline = transform.baseline
    tick_style = DrawStyle(color=config.font_color, font=config.tick_font)
    title_style = DrawStyle(color=config.font_color, font=config.title_font)

    draw_line(surface, (transform.left, baseline), (transform.right, baseline), config.x_axis_style)
    if config.x_label:
        with surface.saved_state():
            surface.set_text_align("center")
            draw_text(
                surface,
                config.x_label,
                ((transform.left + transform.right) / 2.0, surface.height - config.padding.bottom / 2.0),
                title_style,
            )

    x_offset = _label_offset(config.x_scale.label_offset, DEFAULT_X_LABEL_OFFSET_PX)
    for value in tick_values(config.x_scale).tolist():
        px = transform.x(value)
        draw_line(surface, (px, baseline), (px, baseline + TICK_MARK_LENGTH_PX), config.x_axis_style)
        with surface.saved_state():
            surface.set_text_align("center")
            draw_text(
                surface,
                format_tick_label(value, config.x_scale),
                (px, baseline + config.font_size + x_offset),
                tick_style,
            )

    draw_line(surface, (transform.left, transform.top), (transform.left, baseline), config.y_axis_style)
    if config.y_label:
        with surface.saved_state():
            surface.set_text_align("center")
            draw_text(
                surface,
                config.y_label,
                (config.padding.left / 2.0, (transform.top + transform.bottom) / 2.0),
                DrawStyle(color=config.font_color, font=config.title_font, angle=-90.0),
            )

    y_offset = _label_offset(config.y_scale.label_offset, DEFAULT_Y_LABEL_OFFSET_PX)
    for value in tick_values(config.y_scale).tolist():
        py = transform.y(value)
        draw_line(surface, (transform.left - TICK_MARK_LENGTH_PX, py), (transform.left, py), config.y_axis_style)
        with surface.saved_state():
            surface.set_text_align("right")
            draw_text(
                surface,
                format_tick_label(value, config.y_scale),
                (transform.left - y_offset, py + Y_TICK_BASELINE_SHIFT_PX),
                tick_style,
            )


def display_max_values(
    surface: Surface,
    config: AxisConfig | Mapping[str, Any] | None = None,
    style: DrawStyle | None = None,
) -> None:
    """Write the scale maxima (`-<y max> m` above `-<x max> s`) right-aligned beside the origin."""

    config = resolve_axis_config(config)
    style = style or DrawStyle()
    x = config.padding.left - MAX_VALUES_INSET_PX
    y = surface.height - config.padding.bottom + MAX_VALUES_ROW_PX
    surface.set_fill_color(style.color if style.color is not None else DEFAULT_COLOR)
    surface.set_font(style.font or DEFAULT_FONT)
    with surface.saved_state():
        surface.set_text_align("right")
        surface.fill_text(f"-{format_number(config.y_scale.max)} m", x, y - MAX_VALUES_ROW_PX)
        surface.fill_text(f"-{format_number(config.x_scale.max)} s", x, y)


def _label_offset(value: float | None, default: float) -> float:
    return default if value is None else float(value)
