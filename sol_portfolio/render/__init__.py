"""Rendering sinks."""
from .chart import PlotlyPieChart
from .text import TextBreakdown

__all__ = ["PlotlyPieChart", "TextBreakdown"]
