from __future__ import annotations

import unittest

import numpy as np

from relief_plot import DataPoint, DrawStyle, InvalidScale, RecordingSurface, Surface
from relief_plot.curves import connect_data_points, fill_area_under_curve, plot_data_points
from relief_plot.interpolation import draw_vertical_line_to_trajectory_with_limits, interpolate_elevation


RAMP = [DataPoint(0.0, 0.0), DataPoint(5.0, 5.0), DataPoint(10.0, 10.0)]


class CurveTests(unittest.TestCase):
    def test_fill_path_drops_to_baseline_at_both_ends(self) -> None:
        surface = RecordingSurface(800, 600)
        fill_area_under_curve(surface, RAMP)
        (call,) = surface.calls_of("fill")
        self.assertEqual(
            call.points,
            ((50.0, 550.0), (50.0, 550.0), (400.0, 300.0), (750.0, 50.0), (750.0, 550.0)),
        )
        self.assertEqual(call.color, (0, 0, 0, 38))

    def test_fill_with_custom_color(self) -> None:
        surface = RecordingSurface(800, 600)
        fill_area_under_curve(surface, RAMP, fill_color="rgba(255, 0, 0, 0.5)")
        self.assertEqual(surface.calls_of("fill")[0].color, (255, 0, 0, 128))

    def test_empty_input_issues_no_draw_calls(self) -> None:
        surface = RecordingSurface(800, 600)
        fill_area_under_curve(surface, [])
        connect_data_points(surface, [])
        plot_data_points(surface, [])
        self.assertEqual(surface.calls, [])

    def test_single_point_polyline_has_one_vertex(self) -> None:
        surface = RecordingSurface(800, 600)
        connect_data_points(surface, [(5.0, 5.0)])
        (call,) = surface.calls_of("stroke")
        self.assertEqual(call.points, ((400.0, 300.0),))

    def test_polyline_keeps_input_order(self) -> None:
        surface = RecordingSurface(800, 600)
        connect_data_points(surface, [(10.0, 0.0), (0.0, 0.0), (5.0, 10.0)], style=DrawStyle(color="red"))
        (call,) = surface.calls_of("stroke")
        self.assertEqual(call.points, ((750.0, 550.0), (50.0, 550.0), (400.0, 50.0)))
        self.assertEqual(call.color, (255, 0, 0, 255))

    def test_curve_respects_axis_config_mapping(self) -> None:
        surface = RecordingSurface(800, 600)
        config = {"x_scale": {"min": 0, "max": 100, "step": 10}, "padding": {"left": 100}}
        connect_data_points(surface, [(0.0, 0.0), (100.0, 10.0)], config)
        (call,) = surface.calls_of("stroke")
        self.assertEqual(call.points, ((100.0, 550.0), (750.0, 50.0)))

    def test_stroke_to_far_off_canvas_point_is_clipped(self) -> None:
        surface = Surface(800, 600)
        connect_data_points(surface, [(0.0, 0.0), (10.0, 1e6)])
        alpha = surface.to_rgba()[:, :, 3]
        self.assertEqual(int(alpha[300, 50]), 255)
        self.assertEqual(int(alpha[1, 50]), 255)
        self.assertEqual(int(alpha[300, 60]), 0)

    def test_dashed_stroke_keeps_phase_across_clipped_length(self) -> None:
        clipped = Surface(100, 20)
        clipped.set_line_dash([4, 4])
        clipped.stroke_path([(-1e6, 10), (99, 10)])
        alpha = clipped.to_rgba()[10, :, 3]
        # The start is a whole number of 8 px periods back, so dashes cover [8k, 8k + 4].
        self.assertEqual(int(alpha[90]), 255)
        self.assertEqual(int(alpha[94]), 0)
        self.assertEqual(int(alpha[97]), 255)

    def test_single_point_fill_paints_nothing(self) -> None:
        surface = Surface(800, 600)
        fill_area_under_curve(surface, [(5.0, 5.0)], fill_color="red")
        self.assertFalse(np.any(surface.to_rgba()[:, :, 3]))

    def test_plot_data_points_scales_to_own_extent(self) -> None:
        surface = RecordingSurface(800, 600)
        plot_data_points(surface, [(0.0, 0.0), (5.0, 2.0), (10.0, 10.0)])
        calls = surface.calls_of("fill_circle")
        self.assertEqual(len(calls), 3)
        self.assertEqual(calls[0].points, ((50.0, 550.0),))
        self.assertEqual(calls[2].points, ((750.0, 50.0),))
        self.assertEqual(calls[0].color, (0, 0, 255, 255))
        self.assertEqual(calls[0].radius, 5.0)

    def test_plot_data_points_rejects_flat_extent(self) -> None:
        with self.assertRaises(InvalidScale):
            plot_data_points(RecordingSurface(800, 600), [(1.0, 1.0)])


class InterpolationTests(unittest.TestCase):
    def test_midpoint_is_exact(self) -> None:
        reference = [DataPoint(0.0, 0.0), DataPoint(10.0, 100.0)]
        self.assertEqual(interpolate_elevation(5.0, reference), 50.0)
        self.assertEqual(interpolate_elevation(10.0, reference), 100.0)

    def test_time_past_reference_is_uncovered(self) -> None:
        reference = [DataPoint(0.0, 0.0), DataPoint(10.0, 100.0)]
        self.assertIsNone(interpolate_elevation(15.0, reference))
        self.assertIsNone(interpolate_elevation(5.0, reference[:1]))

    def test_time_before_reference_extrapolates_first_segment(self) -> None:
        reference = [DataPoint(0.0, 0.0), DataPoint(10.0, 100.0)]
        self.assertEqual(interpolate_elevation(-5.0, reference), -50.0)

    def test_zero_length_segment_returns_right_endpoint(self) -> None:
        reference = [DataPoint(5.0, 10.0), DataPoint(5.0, 20.0)]
        self.assertEqual(interpolate_elevation(5.0, reference), 20.0)

    def test_vertical_lines_skip_uncovered_markers(self) -> None:
        surface = RecordingSurface(800, 600)
        config = {
            "x_scale": {"min": 0, "max": 20, "step": 5},
            "y_scale": {"min": 0, "max": 100, "step": 10},
        }
        with self.assertLogs("relief_plot.interpolation", level="DEBUG"):
            draw_vertical_line_to_trajectory_with_limits(
                surface,
                [(5.0, 0.0), (15.0, 0.0)],
                [(0.0, 0.0), (10.0, 100.0)],
                config,
            )
        (call,) = surface.calls_of("stroke")
        self.assertEqual(call.points, ((225.0, 550.0), (225.0, 300.0)))


if __name__ == "__main__":
    unittest.main()
