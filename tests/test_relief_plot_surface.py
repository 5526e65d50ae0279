from __future__ import annotations

import unittest

import numpy as np

from relief_plot import DrawStyle, InvalidInput, RecordingSurface, Surface
from relief_plot.primitives import draw_circle, draw_line, draw_text
from relief_plot.style import FontSpec, parse_color, parse_font
from relief_plot.surface import IDENTITY


class SurfaceStateTests(unittest.TestCase):
    def test_stroke_style_persists_between_calls(self) -> None:
        surface = RecordingSurface(100, 100)
        draw_line(surface, (0, 0), (10, 0), DrawStyle(color="red", line_width=3))
        draw_line(surface, (0, 5), (10, 5))
        first, second = surface.calls_of("stroke")
        self.assertEqual(first.color, (255, 0, 0, 255))
        self.assertEqual(second.color, (255, 0, 0, 255))
        self.assertEqual(second.line_width, 3.0)

    def test_unset_style_fields_keep_current_state(self) -> None:
        surface = RecordingSurface(100, 100)
        surface.set_line_dash([4, 2])
        draw_line(surface, (0, 0), (10, 0), DrawStyle(color="blue"))
        call = surface.calls_of("stroke")[0]
        self.assertEqual(call.line_dash, (4.0, 2.0))
        self.assertEqual(call.line_width, 1.0)

    def test_rotated_text_restores_transform_and_fill(self) -> None:
        surface = RecordingSurface(200, 200)
        surface.set_fill_color("blue")
        surface.set_text_align("right")
        draw_text(surface, "Elevation", (10, 20), DrawStyle(angle=-90))

        call = surface.calls_of("text")[0]
        self.assertAlmostEqual(call.points[0][0], 10.0)
        self.assertAlmostEqual(call.points[0][1], 20.0)
        self.assertAlmostEqual(call.angle, -90.0)
        self.assertEqual(call.color, (0, 0, 0, 255))
        self.assertEqual(call.font, FontSpec(12.0, "Arial"))

        self.assertEqual(surface.state.matrix, IDENTITY)
        self.assertEqual(surface.state.fill_color, (0, 0, 255, 255))
        self.assertEqual(surface.state.text_align, "right")

    def test_restore_on_empty_stack_is_noop(self) -> None:
        surface = Surface(10, 10)
        surface.set_line_width(4)
        surface.restore()
        self.assertEqual(surface.state.line_width, 4.0)

    def test_saved_state_scopes_nested_changes(self) -> None:
        surface = Surface(10, 10)
        with surface.saved_state():
            surface.set_text_align("center")
            with surface.saved_state():
                surface.set_text_align("right")
            self.assertEqual(surface.state.text_align, "center")
        self.assertEqual(surface.state.text_align, "left")

    def test_translate_composes_onto_transform(self) -> None:
        surface = Surface(10, 10)
        surface.translate(10, 5)
        surface.translate(1, 1)
        self.assertEqual(surface.transform_point(1, 1), (12.0, 7.0))

    def test_invalid_state_values_raise(self) -> None:
        surface = Surface(10, 10)
        with self.assertRaises(InvalidInput):
            surface.set_text_align("justify")  # type: ignore[arg-type]
        with self.assertRaises(InvalidInput):
            surface.set_line_width(0)
        with self.assertRaises(InvalidInput):
            Surface(0, 10)


class SurfacePixelTests(unittest.TestCase):
    def test_horizontal_stroke_paints_pixels(self) -> None:
        surface = Surface(20, 20)
        surface.set_stroke_color((0, 0, 255))
        surface.stroke_path([(2, 10), (17, 10)])
        rgba = surface.to_rgba()
        self.assertEqual(rgba[10, 10].tolist(), [0, 0, 255, 255])
        self.assertEqual(int(rgba[0, 0, 3]), 0)

    def test_dashed_stroke_leaves_gaps(self) -> None:
        surface = Surface(20, 10)
        surface.set_line_dash([4, 4])
        surface.stroke_path([(0, 5), (19, 5)])
        rgba = surface.to_rgba()
        self.assertEqual(int(rgba[5, 2, 3]), 255)
        self.assertEqual(int(rgba[5, 6, 3]), 0)
        self.assertEqual(int(rgba[5, 10, 3]), 255)

    def test_fill_circle_paints_center_only(self) -> None:
        surface = Surface(40, 40)
        surface.set_fill_color("red")
        surface.fill_circle((20, 20), 5)
        rgba = surface.to_rgba()
        self.assertEqual(rgba[20, 20].tolist(), [255, 0, 0, 255])
        self.assertEqual(int(rgba[0, 0, 3]), 0)

    def test_text_leaves_glyph_coverage(self) -> None:
        surface = Surface(120, 40)
        surface.fill_text("Hello", 10, 30)
        self.assertTrue(np.any(surface.to_rgba()[:, :, 3] > 0))

    def test_clear_restores_background(self) -> None:
        surface = Surface(10, 10, background="white")
        surface.fill_path([(0, 0), (9, 0), (9, 9)])
        surface.clear()
        self.assertTrue(np.all(surface.to_rgba() == 255))

    def test_measure_text_grows_with_text(self) -> None:
        surface = Surface(10, 10)
        self.assertEqual(surface.measure_text(""), 0.0)
        self.assertGreater(surface.measure_text("abcd"), surface.measure_text("abc"))


class PrimitiveTests(unittest.TestCase):
    def test_circle_fills_without_stroke_when_only_fill_set(self) -> None:
        surface = RecordingSurface(50, 50)
        draw_circle(surface, (25, 25), 5, DrawStyle(fill_color="green"))
        self.assertEqual(len(surface.calls_of("fill_circle")), 1)
        self.assertEqual(surface.calls_of("stroke_circle"), [])

    def test_circle_strokes_and_fills(self) -> None:
        surface = RecordingSurface(50, 50)
        draw_circle(surface, (25, 25), 5, DrawStyle(color="black", fill_color="white", line_width=2))
        self.assertEqual([c.kind for c in surface.calls], ["fill_circle", "stroke_circle"])
        self.assertEqual(surface.calls[1].line_width, 2.0)

    def test_negative_radius_raises(self) -> None:
        with self.assertRaises(InvalidInput):
            draw_circle(RecordingSurface(10, 10), (5, 5), -1)


class StyleParsingTests(unittest.TestCase):
    def test_parse_colors(self) -> None:
        self.assertEqual(parse_color("black"), (0, 0, 0, 255))
        self.assertEqual(parse_color("#ff0000"), (255, 0, 0, 255))
        self.assertEqual(parse_color("rgba(0, 0, 0, 0.15)"), (0, 0, 0, 38))
        self.assertEqual(parse_color((1, 2, 3)), (1, 2, 3, 255))
        with self.assertRaises(InvalidInput):
            parse_color("not-a-color")
        with self.assertRaises(InvalidInput):
            parse_color((0, 0, 300))

    def test_parse_fonts(self) -> None:
        self.assertEqual(parse_font("16px Arial"), FontSpec(16.0, "Arial"))
        self.assertEqual(parse_font("bold 14px Helvetica Neue"), FontSpec(14.0, "Helvetica Neue"))
        with self.assertRaises(InvalidInput):
            parse_font("Arial")

    def test_draw_style_validates_fields(self) -> None:
        self.assertEqual(DrawStyle(line_dash=[5, 5]).line_dash, (5.0, 5.0))
        with self.assertRaises(InvalidInput):
            DrawStyle(line_width=0)
        with self.assertRaises(InvalidInput):
            DrawStyle(line_dash=(1, -1))


if __name__ == "__main__":
    unittest.main()
