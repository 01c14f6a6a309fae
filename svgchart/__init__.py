from svgchart.bar import BarChartLayout, BarGeometry, layout_bars
from svgchart.color import (
    CATPPUCCIN_COLORS,
    DEFAULT_PALETTE,
    CalculatedColor,
    ChartColor,
    Color,
    Gradient,
    HexColor,
    Palette,
    RGBColor,
    parse_color,
)
from svgchart.errors import (
    ChartError,
    ColorFormatError,
    InvalidConfigurationError,
    PlotInputError,
    TickOverflowError,
)
from svgchart.line import LineChartLayout, layout_line
from svgchart.options import (
    BarChartOptions,
    LineChartOptions,
    PieChartOptions,
    load_chart_options,
    validate_chart_options,
)
from svgchart.pie import PieChartLayout, PieSegment, PieSlice, SegmentSize, build_pie_segments, layout_pie
from svgchart.scales import Tick, TickSpacing, format_number, get_ticks, nice_number, plan_ticks, reduce_range
from svgchart.series import Point, Series

__all__ = [
    "BarChartLayout",
    "BarChartOptions",
    "BarGeometry",
    "CATPPUCCIN_COLORS",
    "CalculatedColor",
    "ChartColor",
    "ChartError",
    "Color",
    "ColorFormatError",
    "DEFAULT_PALETTE",
    "Gradient",
    "HexColor",
    "InvalidConfigurationError",
    "LineChartLayout",
    "LineChartOptions",
    "Palette",
    "PieChartLayout",
    "PieChartOptions",
    "PieSegment",
    "PieSlice",
    "PlotInputError",
    "Point",
    "RGBColor",
    "SegmentSize",
    "Series",
    "Tick",
    "TickOverflowError",
    "TickSpacing",
    "build_pie_segments",
    "format_number",
    "get_ticks",
    "layout_bars",
    "layout_line",
    "layout_pie",
    "load_chart_options",
    "nice_number",
    "parse_color",
    "plan_ticks",
    "reduce_range",
    "validate_chart_options",
]
