from .canvas import blend_mask, fill_canvas, new_canvas
from .draw_lines import draw_polyline
from .draw_shapes import fill_circle, fill_polygon, stroke_circle
from .draw_text import draw_text, text_width

__all__ = [
    "blend_mask",
    "draw_polyline",
    "draw_text",
    "fill_canvas",
    "fill_circle",
    "fill_polygon",
    "new_canvas",
    "stroke_circle",
    "text_width",
]
