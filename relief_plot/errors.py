from __future__ import annotations


class ReliefPlotError(Exception):
    """Base class for errors raised by relief_plot drawing calls."""


class InvalidScale(ReliefPlotError, ValueError):
    """Scale bounds cannot be mapped to pixels (empty, reversed or non-finite span)."""


class InvalidInput(ReliefPlotError, ValueError):
    """Drawing input has the wrong shape, count or value type."""
