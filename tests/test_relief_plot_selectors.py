from __future__ import annotations

import unittest

from relief_plot import InvalidInput, RecordingSurface, SelectorLabels
from relief_plot.selectors import (
    DEFAULT_GEOMETRY,
    draw_selectors,
    draw_selectors_and_indicators,
    layout_selector_labels,
)


def fixed_width(text: str) -> float:
    return 6.0 * len(text)


def layout(xs, labels, *, min_x=50.0, max_x=750.0, **kwargs):
    return layout_selector_labels(xs, labels, measure=fixed_width, row_y=100.0, min_x=min_x, max_x=max_x, **kwargs)


class SelectorLayoutTests(unittest.TestCase):
    def test_center_label_fits_between_selectors(self) -> None:
        (placement,) = layout((200.0, 500.0), SelectorLabels(center="ab"))
        self.assertEqual(placement.strategy, "between")
        self.assertEqual(placement.x, 350.0 - 6.0)
        self.assertEqual(placement.y, 100.0)

    def test_center_label_falls_back_right_of_selectors(self) -> None:
        (placement,) = layout((300.0, 320.0), SelectorLabels(center="abcdef"))
        self.assertEqual(placement.strategy, "right_of")
        self.assertEqual(placement.x, 320.0 + DEFAULT_GEOMETRY.outer_clearance)

    def test_center_label_falls_back_left_of_selectors(self) -> None:
        (placement,) = layout((700.0, 710.0), SelectorLabels(center="abcdef"))
        self.assertEqual(placement.strategy, "left_of")
        self.assertEqual(placement.x, 700.0 - DEFAULT_GEOMETRY.outer_clearance - 36.0)

    def test_label_falls_back_to_centered_when_nothing_fits(self) -> None:
        (placement,) = layout((395.0, 405.0), SelectorLabels(center="abcdef"), min_x=390.0, max_x=410.0)
        self.assertEqual(placement.strategy, "centered")
        self.assertEqual(placement.x, 400.0 - 18.0)

    def test_side_slots_prefer_their_own_side(self) -> None:
        placements = layout((200.0, 500.0), SelectorLabels(left="abc", right="abc"))
        by_slot = {p.slot: p for p in placements}
        self.assertEqual(by_slot["left"].strategy, "left_of")
        self.assertEqual(by_slot["left"].x, 200.0 - 7.0 - 18.0)
        self.assertEqual(by_slot["right"].strategy, "right_of")
        self.assertEqual(by_slot["right"].x, 507.0)

    def test_secondary_labels_use_second_row(self) -> None:
        placements = layout((200.0, 500.0), SelectorLabels(center="a", left_secondary="b", right_secondary="c"))
        rows = {p.slot: p.y for p in placements}
        self.assertEqual(rows["center"], 100.0)
        self.assertEqual(rows["left_secondary"], 100.0 + DEFAULT_GEOMETRY.row_gap)
        self.assertEqual(rows["right_secondary"], 100.0 + DEFAULT_GEOMETRY.row_gap)

    def test_overlapping_labels_are_swept_apart(self) -> None:
        labels = SelectorLabels(center="abcdef", left="abcdef", right="abcdef")
        placements = layout((395.0, 405.0), labels, min_x=390.0, max_x=410.0)
        self.assertEqual([p.slot for p in placements], ["center", "left", "right"])
        self.assertEqual([p.x for p in placements], [382.0, 423.0, 464.0])

    def test_custom_strategy_order(self) -> None:
        (placement,) = layout((200.0, 500.0), SelectorLabels(center="ab"), slot_strategies={"center": ("left_of",)})
        self.assertEqual(placement.strategy, "left_of")

    def test_unknown_strategy_name_is_rejected(self) -> None:
        with self.assertRaises(InvalidInput):
            layout((200.0, 500.0), SelectorLabels(center="ab"), slot_strategies={"center": ("above",)})

    def test_layout_needs_two_positions(self) -> None:
        with self.assertRaises(InvalidInput):
            layout((200.0,), SelectorLabels(center="a"))


class SelectorDrawingTests(unittest.TestCase):
    MARKERS = [(2.5, 0.0), (7.5, 0.0)]

    def test_glyphs_hang_below_baseline(self) -> None:
        surface = RecordingSurface(800, 600)
        draw_selectors_and_indicators(surface, self.MARKERS, pad_top=10.0)
        strokes = [call.points for call in surface.calls_of("stroke")]
        self.assertEqual(
            strokes,
            [
                ((225.0, 560.0), (225.0, 580.0)),
                ((225.0, 570.0), (235.0, 570.0)),
                ((575.0, 560.0), (575.0, 580.0)),
                ((575.0, 570.0), (565.0, 570.0)),
            ],
        )
        self.assertEqual(surface.calls_of("text"), [])

    def test_center_label_is_centered_between_selectors(self) -> None:
        surface = RecordingSurface(800, 600)
        width = RecordingSurface(800, 600).measure_text("Span")
        draw_selectors_and_indicators(surface, self.MARKERS, pad_top=10.0, labels=SelectorLabels(center="Span"))
        (call,) = surface.calls_of("text")
        self.assertAlmostEqual(call.points[0][0], 400.0 - width / 2.0)
        self.assertAlmostEqual(call.points[0][1], 585.0)
        self.assertEqual(call.align, "left")

    def test_label_drawing_keeps_text_align(self) -> None:
        surface = RecordingSurface(800, 600)
        surface.set_text_align("right")
        draw_selectors_and_indicators(surface, self.MARKERS, labels=SelectorLabels(center="a", right="b"))
        self.assertEqual(surface.state.text_align, "right")

    def test_single_label_sits_at_stub_level(self) -> None:
        surface = RecordingSurface(800, 600)
        draw_selectors(surface, self.MARKERS, pad_top=10.0, text="Leg")
        (call,) = surface.calls_of("text")
        self.assertAlmostEqual(call.points[0][1], 575.0)

    def test_marker_count_must_be_two(self) -> None:
        with self.assertRaises(InvalidInput):
            draw_selectors_and_indicators(RecordingSurface(800, 600), [(1.0, 0.0)])
        with self.assertRaises(InvalidInput):
            draw_selectors(RecordingSurface(800, 600), [(1.0, 0.0), (2.0, 0.0), (3.0, 0.0)])


if __name__ == "__main__":
    unittest.main()
