from __future__ import annotations

from dataclasses import dataclass, replace
import logging
from typing import Any, Callable, Iterator, Mapping, Sequence

from relief_plot.adapters import coerce_points
from relief_plot.config import AxisConfig, resolve_axis_config
from relief_plot.errors import InvalidInput
from relief_plot.primitives import draw_line
from relief_plot.scales import PlotTransform
from relief_plot.series import DataPoint
from relief_plot.style import DEFAULT_COLOR, DEFAULT_FONT, DrawStyle
from relief_plot.surface import Surface


LOGGER = logging.getLogger(__name__)

SLOTS = ("center", "left", "right", "left_secondary", "right_secondary")
SLOT_ROWS = {
    "center": 0,
    "left": 0,
    "right": 0,
    "left_secondary": 1,
    "right_secondary": 1,
}


@dataclass(frozen=True)
class SelectorGeometry:
    """Pixel constants for selector glyphs and their labels."""

    bar_height: float = 20.0
    stub_length: float = 10.0
    bar_width: float = 2.0
    text_padding: float = 5.0
    row_gap: float = 20.0
    label_gap: float = 5.0

    @property
    def inner_clearance(self) -> float:
        # Distance from a selector to text on its stub side.
        return self.stub_length + self.bar_width + self.text_padding

    @property
    def outer_clearance(self) -> float:
        return self.bar_width + self.text_padding


DEFAULT_GEOMETRY = SelectorGeometry()


@dataclass(frozen=True)
class SelectorLabels:
    center: str = ""
    left: str = ""
    right: str = ""
    left_secondary: str = ""
    right_secondary: str = ""

    def items(self) -> Iterator[tuple[str, str]]:
        for slot in SLOTS:
            text = getattr(self, slot)
            if text:
                yield slot, text


@dataclass(frozen=True)
class PlacementContext:
    left_x: float
    right_x: float
    min_x: float
    max_x: float
    geometry: SelectorGeometry


@dataclass(frozen=True)
class LabelPlacement:
    slot: str
    text: str
    x: float
    y: float
    width: float
    strategy: str

    @property
    def right(self) -> float:
        return self.x + self.width


PlacementStrategy = Callable[[PlacementContext, float], float | None]


def place_between(ctx: PlacementContext, width: float) -> float | None:
    gap = (ctx.right_x - ctx.left_x) - 2.0 * ctx.geometry.inner_clearance
    if gap > width:
        return (ctx.left_x + ctx.right_x) / 2.0 - width / 2.0
    return None


def place_right_of(ctx: PlacementContext, width: float) -> float | None:
    x = ctx.right_x + ctx.geometry.outer_clearance
    if ctx.max_x - x >= width:
        return x
    return None


def place_left_of(ctx: PlacementContext, width: float) -> float | None:
    x = ctx.left_x - ctx.geometry.outer_clearance - width
    if x >= ctx.min_x:
        return x
    return None


def place_centered(ctx: PlacementContext, width: float) -> float | None:
    return (ctx.left_x + ctx.right_x) / 2.0 - width / 2.0


STRATEGIES: dict[str, PlacementStrategy] = {
    "between": place_between,
    "right_of": place_right_of,
    "left_of": place_left_of,
    "centered": place_centered,
}

DEFAULT_SLOT_STRATEGIES: dict[str, tuple[str, ...]] = {
    "center": ("between", "right_of", "left_of", "centered"),
    "left": ("left_of", "between", "right_of", "centered"),
    "right": ("right_of", "between", "left_of", "centered"),
    "left_secondary": ("left_of", "between", "right_of", "centered"),
    "right_secondary": ("right_of", "between", "left_of", "centered"),
}


def layout_selector_labels(
    selector_xs: Sequence[float],
    labels: SelectorLabels,
    *,
    measure: Callable[[str], float],
    row_y: float,
    min_x: float,
    max_x: float,
    geometry: SelectorGeometry = DEFAULT_GEOMETRY,
    slot_strategies: Mapping[str, Sequence[str]] | None = None,
) -> list[LabelPlacement]:
    """Place each label with the first strategy that fits, then separate overlaps per row.

    `centered` always fits, so every label gets a position even when the
    selectors sit too close together or too near an edge.
    """

    if len(selector_xs) != 2:
        raise InvalidInput(f"selector layout needs exactly two x positions, got {len(selector_xs)}")
    orders = dict(DEFAULT_SLOT_STRATEGIES)
    if slot_strategies:
        orders.update(slot_strategies)
    unknown = sorted({name for order in orders.values() for name in order} - set(STRATEGIES))
    if unknown:
        raise InvalidInput(f"unknown placement strategy: {', '.join(unknown)}")
    ctx = PlacementContext(
        left_x=min(selector_xs),
        right_x=max(selector_xs),
        min_x=min_x,
        max_x=max_x,
        geometry=geometry,
    )

    placements: list[LabelPlacement] = []
    for slot, text in labels.items():
        width = float(measure(text))
        x, strategy = _first_fit(ctx, width, orders.get(slot, ()))
        LOGGER.debug("selector label %s (%r) placed %s at x=%.1f", slot, text, strategy, x)
        placements.append(
            LabelPlacement(
                slot=slot,
                text=text,
                x=x,
                y=row_y + SLOT_ROWS[slot] * geometry.row_gap,
                width=width,
                strategy=strategy,
            )
        )
    return _separate_rows(placements, geometry.label_gap)


def draw_selector_glyphs(
    surface: Surface,
    selector_xs: Sequence[float],
    top: float,
    style: DrawStyle | None = None,
    geometry: SelectorGeometry = DEFAULT_GEOMETRY,
) -> None:
    """Draw the bracket pair: the first stub points right, the second left."""

    for index, x in enumerate(selector_xs):
        draw_line(surface, (x, top), (x, top + geometry.bar_height), style)
        direction = 1.0 if index == 0 else -1.0
        stub_y = top + geometry.bar_height / 2.0
        draw_line(surface, (x, stub_y), (x + direction * geometry.stub_length, stub_y), style)


def draw_selectors(
    surface: Surface,
    markers: Any,
    config: AxisConfig | Mapping[str, Any] | None = None,
    style: DrawStyle | None = None,
    pad_top: float = 0.0,
    text: str = "",
    geometry: SelectorGeometry = DEFAULT_GEOMETRY,
) -> None:
    """Draw two selectors with one label level with their stubs."""

    config, transform, xs = _resolve_selectors(surface, markers, config)
    top = transform.baseline + pad_top
    draw_selector_glyphs(surface, xs, top, style, geometry)
    if not text:
        return
    row_y = top + geometry.bar_height / 2.0 + geometry.text_padding
    _draw_labels(surface, xs, SelectorLabels(center=text), row_y, config, style, geometry)


def draw_selectors_and_indicators(
    surface: Surface,
    markers: Any,
    config: AxisConfig | Mapping[str, Any] | None = None,
    style: DrawStyle | None = None,
    pad_top: float = 0.0,
    labels: SelectorLabels | None = None,
    geometry: SelectorGeometry = DEFAULT_GEOMETRY,
) -> None:
    """Draw two selectors with up to five labels in two rows beneath them."""

    config, transform, xs = _resolve_selectors(surface, markers, config)
    top = transform.baseline + pad_top
    draw_selector_glyphs(surface, xs, top, style, geometry)
    if labels is None or next(labels.items(), None) is None:
        return
    row_y = top + geometry.bar_height + geometry.text_padding
    _draw_labels(surface, xs, labels, row_y, config, style, geometry)


def _resolve_selectors(
    surface: Surface,
    markers: Any,
    config: AxisConfig | Mapping[str, Any] | None,
) -> tuple[AxisConfig, PlotTransform, tuple[float, float]]:
    points: list[DataPoint] = coerce_points(markers)
    if len(points) != 2:
        raise InvalidInput(f"selectors need exactly two marker points, got {len(points)}")
    config = resolve_axis_config(config)
    transform = PlotTransform.from_config(config, surface.width, surface.height)
    xs = (transform.x(points[0].time), transform.x(points[1].time))
    return config, transform, xs


def _draw_labels(
    surface: Surface,
    xs: tuple[float, float],
    labels: SelectorLabels,
    row_y: float,
    config: AxisConfig,
    style: DrawStyle | None,
    geometry: SelectorGeometry,
) -> None:
    style = style or DrawStyle()
    surface.set_fill_color(style.color if style.color is not None else DEFAULT_COLOR)
    surface.set_font(style.font or DEFAULT_FONT)
    placements = layout_selector_labels(
        xs,
        labels,
        measure=surface.measure_text,
        row_y=row_y,
        min_x=config.padding.left,
        max_x=surface.width - config.padding.right,
        geometry=geometry,
    )
    with surface.saved_state():
        surface.set_text_align("left")
        for placement in placements:
            surface.fill_text(placement.text, placement.x, placement.y)


def _first_fit(ctx: PlacementContext, width: float, order: Sequence[str]) -> tuple[float, str]:
    for name in order:
        x = STRATEGIES[name](ctx, width)
        if x is not None:
            return x, name
    return place_centered(ctx, width), "centered"


def _separate_rows(placements: list[LabelPlacement], gap: float) -> list[LabelPlacement]:
    moved: dict[str, LabelPlacement] = {}
    for row in sorted({p.y for p in placements}):
        cursor: float | None = None
        for placement in sorted((p for p in placements if p.y == row), key=lambda p: (p.x, SLOTS.index(p.slot))):
            if cursor is not None and placement.x < cursor:
                placement = replace(placement, x=cursor)
            moved[placement.slot] = placement
            cursor = placement.right + gap
    return [moved[p.slot] for p in placements]
