from __future__ import annotations

from relief_plot.errors import InvalidInput
from relief_plot.style import DEFAULT_COLOR, DEFAULT_FONT, DrawStyle
from relief_plot.surface import Point, Surface


EMPTY_STYLE = DrawStyle()


def apply_stroke_style(surface: Surface, style: DrawStyle | None) -> None:
    """Push the stroke fields that `style` sets; unset fields keep the surface's value."""

    if style is None:
        return
    if style.color is not None:
        surface.set_stroke_color(style.color)
    if style.line_width is not None:
        surface.set_line_width(style.line_width)
    if style.line_dash is not None:
        surface.set_line_dash(style.line_dash)


def draw_line(surface: Surface, start: Point, end: Point, style: DrawStyle | None = None) -> None:
    apply_stroke_style(surface, style)
    surface.stroke_path([start, end])


def draw_circle(surface: Surface, center: Point, radius: float, style: DrawStyle | None = None) -> None:
    if radius < 0:
        raise InvalidInput(f"circle radius must be >= 0, got {radius!r}")
    style = style or EMPTY_STYLE
    if style.fill_color is not None:
        surface.set_fill_color(style.fill_color)
        surface.fill_circle(center, radius)
    if style.color is not None:
        surface.set_stroke_color(style.color)
        if style.line_width is not None:
            surface.set_line_width(style.line_width)
        surface.stroke_circle(center, radius)


def draw_text(surface: Surface, text: str, position: Point, style: DrawStyle | None = None) -> None:
    style = style or EMPTY_STYLE
    x, y = position
    if style.angle:
        with surface.saved_state():
            surface.translate(x, y)
            surface.rotate(style.angle)
            surface.set_fill_color(style.color if style.color is not None else DEFAULT_COLOR)
            surface.set_font(style.font or DEFAULT_FONT)
            surface.fill_text(text, 0.0, 0.0)
        return
    if style.font is not None:
        surface.set_font(style.font)
    if style.color is not None:
        surface.set_fill_color(style.color)
    surface.fill_text(text, x, y)
