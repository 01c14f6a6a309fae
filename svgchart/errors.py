from __future__ import annotations


class ChartError(ValueError):
    """Base error for chart computations."""


class InvalidConfigurationError(ChartError):
    pass


class PlotInputError(InvalidConfigurationError):
    pass


class ColorFormatError(InvalidConfigurationError):
    pass


class TickOverflowError(ChartError):
    pass
