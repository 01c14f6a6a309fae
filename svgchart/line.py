from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

import numpy as np

from svgchart.adapters.normalize import normalize_values
from svgchart.errors import InvalidConfigurationError, PlotInputError
from svgchart.options import LineChartOptions
from svgchart.scales import Tick, TickSpacing, format_number, get_ticks, plan_ticks


@dataclass(frozen=True)
class LineChartLayout:
    x_range: tuple[float, float]
    spacing: TickSpacing
    ticks: tuple[Tick, ...]
    points: tuple[tuple[float, float], ...]
    gradient_stops: tuple[str, str]

    def polyline_points(self) -> str:
        return " ".join(f"{format_number(x)},{format_number(y)}" for x, y in self.points)


def layout_line(
    points: Iterable[tuple[Any, Any]] | None = None,
    options: LineChartOptions | None = None,
    *,
    x: Any = None,
    y: Any = None,
    data: Any = None,
) -> LineChartLayout:
    """Map (x, y) pairs into a 100x100 viewBox with a y axis that points up.

    Pass either `points` or the separate `x`/`y` columns; with a pandas
    `data=` frame, `x` and `y` name its columns. The x axis spans the raw data
    range; the y axis spans the planned tick range.
    """

    opts = options if options is not None else LineChartOptions()
    if points is not None:
        if x is not None or y is not None:
            raise PlotInputError("pass either `points` or `x`/`y`, not both")
        if data is not None:
            raise PlotInputError("`data` requires `x` and `y` column names")
        x, y = [], []
        for i, point in enumerate(points):
            try:
                px, py = point
            except (TypeError, ValueError) as exc:
                raise PlotInputError(f"point at index {i} is not an (x, y) pair: {point!r}") from exc
            x.append(px)
            y.append(py)
    elif data is not None and not (isinstance(x, str) and isinstance(y, str)):
        raise PlotInputError("`data` requires `x` and `y` column names")
    x_arr = normalize_values(x, data=data, label="x")
    y_arr = normalize_values(y, data=data, label="y")
    if x_arr.shape != y_arr.shape:
        raise PlotInputError(f"x and y length mismatch: {x_arr.size} != {y_arr.size}")
    if not (np.all(np.isfinite(x_arr)) and np.all(np.isfinite(y_arr))):
        raise InvalidConfigurationError("line points must be finite")

    xmin = float(np.min(x_arr))
    xmax = float(np.max(x_arr))
    spacing = plan_ticks(float(np.min(y_arr)), float(np.max(y_arr)), opts.max_ticks)
    x_span = xmax - xmin
    y_span = spacing.max_point - spacing.min_point

    mapped = []
    for xv, yv in zip(x_arr.tolist(), y_arr.tolist(), strict=True):
        px = 0.0 if x_span == 0 else 100.0 * (xv - xmin) / x_span
        py = 100.0 * (yv - spacing.min_point) / y_span
        mapped.append((px, py))

    return LineChartLayout(
        x_range=(xmin, xmax),
        spacing=spacing,
        ticks=tuple(get_ticks(spacing)),
        points=tuple(mapped),
        gradient_stops=(
            opts.color.color_for_index(0, 2).to_hex(),
            opts.color.color_for_index(1, 2).to_hex(),
        ),
    )
