from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np

from svgchart.adapters.normalize import normalize_values
from svgchart.errors import InvalidConfigurationError
from svgchart.options import BarChartOptions
from svgchart.scales import Tick, TickSpacing, get_ticks, plan_ticks, reduce_range


@dataclass(frozen=True)
class BarGeometry:
    """One bar in a 100x100 viewBox whose y axis points up from the bottom."""

    index: int
    value: float
    x: float
    y: float
    width: float
    height: float
    color: str
    label_x: float
    label_y: float


@dataclass(frozen=True)
class BarChartLayout:
    spacing: TickSpacing
    ticks: tuple[Tick, ...]
    bars: tuple[BarGeometry, ...]

    @property
    def baseline(self) -> float:
        span = self.spacing.max_point - self.spacing.min_point
        return 100.0 * -self.spacing.min_point / span


def layout_bars(values: Any, options: BarChartOptions | None = None, *, data: Any = None) -> BarChartLayout:
    opts = options if options is not None else BarChartOptions()
    arr = normalize_values(values, data=data)
    if not np.all(np.isfinite(arr)):
        raise InvalidConfigurationError("bar values must be finite")

    vmin, vmax = reduce_range(arr)
    spacing = plan_ticks(vmin, vmax, opts.max_ticks)
    span = spacing.max_point - spacing.min_point
    n = int(arr.size)

    bars = []
    for i, v in enumerate(arr.tolist()):
        if v > 0.0:
            y = 100.0 * -spacing.min_point / span
        else:
            y = 100.0 * (v - spacing.min_point) / span
        bars.append(
            BarGeometry(
                index=i,
                value=v,
                x=5.0 + 95.0 / n * i,
                y=y,
                width=80.0 / n,
                height=100.0 * abs(v) / span,
                color=opts.color.color_for_index(i, n).to_hex(),
                label_x=15.0 + 85.0 / n * (i + 0.5),
                label_y=100.0 - 100.0 * (v - spacing.min_point) / span,
            )
        )
    return BarChartLayout(spacing=spacing, ticks=tuple(get_ticks(spacing)), bars=tuple(bars))
