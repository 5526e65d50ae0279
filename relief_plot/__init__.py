from relief_plot.config import AxisConfig, Padding, Scale
from relief_plot.errors import InvalidInput, InvalidScale, ReliefPlotError
from relief_plot.graph import LineGraph
from relief_plot.scales import PlotTransform, map_horizontal, map_vertical, tick_values
from relief_plot.selectors import SelectorGeometry, SelectorLabels
from relief_plot.series import DataPoint
from relief_plot.style import DrawStyle
from relief_plot.surface import DrawCall, RecordingSurface, Surface

__all__ = [
    "AxisConfig",
    "DataPoint",
    "DrawCall",
    "DrawStyle",
    "InvalidInput",
    "InvalidScale",
    "LineGraph",
    "Padding",
    "PlotTransform",
    "RecordingSurface",
    "ReliefPlotError",
    "Scale",
    "SelectorGeometry",
    "SelectorLabels",
    "Surface",
    "map_horizontal",
    "map_vertical",
    "tick_values",
]
