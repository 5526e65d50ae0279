from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
import math
from typing import Any, Mapping

from relief_plot.errors import InvalidInput, InvalidScale
from relief_plot.style import (
    DEFAULT_COLOR,
    DEFAULT_FONT_FAMILY,
    DEFAULT_FONT_SIZE_PX,
    ColorLike,
    DrawStyle,
    FontSpec,
    parse_color,
)


DEFAULT_PADDING_PX = 50.0
TITLE_FONT_INCREMENT_PX = 4.0


@dataclass(frozen=True)
class Scale:
    """Domain bounds and tick spacing for one axis.

    ``max`` must be strictly greater than ``min``. A non-positive ``step`` is
    accepted but produces no ticks.
    """

    min: float
    max: float
    step: float
    decimal_places: int = 0
    show_decimals: bool = False
    label_offset: float | None = None

    def __post_init__(self) -> None:
        if not (math.isfinite(self.min) and math.isfinite(self.max)):
            raise InvalidScale(f"scale bounds must be finite, got min={self.min!r}, max={self.max!r}")
        if self.max <= self.min:
            raise InvalidScale(f"scale max must be > min, got min={self.min!r}, max={self.max!r}")
        if not math.isfinite(self.step):
            raise InvalidScale(f"scale step must be finite, got {self.step!r}")
        if isinstance(self.decimal_places, float) and self.decimal_places.is_integer():
            object.__setattr__(self, "decimal_places", int(self.decimal_places))
        if not isinstance(self.decimal_places, int) or isinstance(self.decimal_places, bool):
            raise InvalidInput(f"decimal_places must be a whole number, got {self.decimal_places!r}")
        if self.decimal_places < 0 or self.decimal_places > 20:
            raise InvalidInput("decimal_places must be in [0, 20]")
        if self.label_offset is not None and not math.isfinite(self.label_offset):
            raise InvalidInput("label_offset must be finite")

    @property
    def span(self) -> float:
        return self.max - self.min


@dataclass(frozen=True)
class Padding:
    top: float = DEFAULT_PADDING_PX
    bottom: float = DEFAULT_PADDING_PX
    left: float = DEFAULT_PADDING_PX
    right: float = DEFAULT_PADDING_PX

    def __post_init__(self) -> None:
        for name in ("top", "bottom", "left", "right"):
            value = getattr(self, name)
            if not math.isfinite(value) or value < 0:
                raise InvalidInput(f"padding `{name}` must be finite and >= 0, got {value!r}")


def _default_scale() -> Scale:
    return Scale(min=0.0, max=10.0, step=1.0)


def _default_axis_style() -> DrawStyle:
    return DrawStyle(color=DEFAULT_COLOR, line_width=1.0)


@dataclass(frozen=True)
class AxisConfig:
    x_scale: Scale = field(default_factory=_default_scale)
    y_scale: Scale = field(default_factory=_default_scale)
    padding: Padding = field(default_factory=Padding)
    x_label: str | None = None
    y_label: str | None = None
    x_axis_style: DrawStyle = field(default_factory=_default_axis_style)
    y_axis_style: DrawStyle = field(default_factory=_default_axis_style)
    font_size: float = DEFAULT_FONT_SIZE_PX
    font_color: ColorLike = DEFAULT_COLOR
    font_family: str = DEFAULT_FONT_FAMILY

    def __post_init__(self) -> None:
        for name, kind in _NESTED_OPTIONS.items():
            if not isinstance(getattr(self, name), kind):
                raise InvalidInput(f"axis option `{name}` must be a {kind.__name__}")
        if not math.isfinite(self.font_size) or self.font_size <= 0:
            raise InvalidInput("font_size must be > 0")
        if not self.font_family.strip():
            raise InvalidInput("font_family must be non-empty")
        parse_color(self.font_color)

    @property
    def tick_font(self) -> str:
        return FontSpec(size_px=self.font_size, family=self.font_family).css

    @property
    def title_font(self) -> str:
        return FontSpec(size_px=self.font_size + TITLE_FONT_INCREMENT_PX, family=self.font_family).css

    @classmethod
    def from_mapping(cls, overrides: Mapping[str, Any] | None = None) -> "AxisConfig":
        """Merge option overrides onto the defaults.

        Nested options (scales, padding, axis styles) may be given as mappings.
        Padding mappings may name a subset of sides; the rest keep their default.
        """

        defaults = cls()
        values: dict[str, Any] = {f.name: getattr(defaults, f.name) for f in fields(cls)}
        if overrides:
            for key, value in overrides.items():
                if key not in values:
                    raise InvalidInput(f"Unknown axis option: {key}")
                kind = _NESTED_OPTIONS.get(key)
                if kind is not None and isinstance(value, Mapping):
                    value = _build_nested(kind, value, key=key)
                values[key] = value
        return cls(**values)


_NESTED_OPTIONS: dict[str, type] = {
    "x_scale": Scale,
    "y_scale": Scale,
    "padding": Padding,
    "x_axis_style": DrawStyle,
    "y_axis_style": DrawStyle,
}


def _build_nested(kind: type, raw: Mapping[str, Any], *, key: str) -> Any:
    known = {f.name for f in fields(kind)}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise InvalidInput(f"Unknown `{key}` option(s): {', '.join(unknown)}")
    if kind is Padding:
        return replace(Padding(), **raw)
    try:
        return kind(**raw)
    except TypeError as exc:
        raise InvalidInput(f"invalid `{key}` option: {exc}") from exc


def resolve_axis_config(config: AxisConfig | Mapping[str, Any] | None) -> AxisConfig:
    if config is None:
        return AxisConfig()
    if isinstance(config, AxisConfig):
        return config
    if isinstance(config, Mapping):
        return AxisConfig.from_mapping(config)
    raise InvalidInput(f"unsupported axis config type: {type(config)!r}")
