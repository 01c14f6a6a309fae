from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any, NamedTuple

import numpy as np

from svgchart.adapters.normalize import normalize_values
from svgchart.errors import InvalidConfigurationError, TickOverflowError


LOGGER = logging.getLogger(__name__)

MAX_TICK_COUNT = 255


@dataclass(frozen=True)
class TickSpacing:
    min_point: float
    max_point: float
    spacing: float
    num_ticks: int


class Tick(NamedTuple):
    """Axis gridline: `position` is a percent offset where 100 is the origin side."""

    position: float
    label: str


def reduce_range(values: Any = None, *, data: Any = None) -> tuple[float, float]:
    """Return the (min, max) of `values`, widened so that the pair always spans zero.

    `values` must be non-empty and finite; anything else raises
    `InvalidConfigurationError` rather than folding to infinities. With a
    pandas `data=` frame, `values` names its column.
    """

    arr = normalize_values(values, data=data)
    if not np.all(np.isfinite(arr)):
        raise InvalidConfigurationError("values must be finite")
    vmin = float(np.min(arr))
    vmax = float(np.max(arr))
    return (vmin if vmin < 0.0 else 0.0, vmax if vmax > 0.0 else 0.0)


def nice_number(value: float, *, round_result: bool) -> float:
    if not np.isfinite(value) or value <= 0:
        raise InvalidConfigurationError(f"nice_number requires a positive finite value, got {value!r}")
    exp = np.floor(np.log10(value))
    frac = value / (10**exp)

    if round_result:
        if frac < 1.5:
            nice_frac = 1.0
        elif frac < 3.0:
            nice_frac = 2.0
        elif frac < 7.0:
            nice_frac = 5.0
        else:
            nice_frac = 10.0
    else:
        if frac <= 1.0:
            nice_frac = 1.0
        elif frac <= 2.0:
            nice_frac = 2.0
        elif frac <= 5.0:
            nice_frac = 5.0
        else:
            nice_frac = 10.0

    return float(nice_frac * (10**exp))


def plan_ticks(vmin: float, vmax: float, max_ticks: int) -> TickSpacing:
    if isinstance(max_ticks, bool) or not isinstance(max_ticks, (int, np.integer)):
        raise InvalidConfigurationError("max_ticks must be an integer")
    if not 2 <= max_ticks <= MAX_TICK_COUNT:
        raise InvalidConfigurationError(f"max_ticks must be in [2, {MAX_TICK_COUNT}]")
    vmin = float(vmin)
    vmax = float(vmax)
    if not (np.isfinite(vmin) and np.isfinite(vmax)):
        raise InvalidConfigurationError("tick range must be finite")
    if vmin > vmax:
        raise InvalidConfigurationError(f"tick range is inverted: {vmin} > {vmax}")
    if vmin == vmax:
        LOGGER.debug("zero tick range at %s; widening to a span of 1", vmin)
        vmax = vmin + 1.0

    span = nice_number(vmax - vmin, round_result=False)
    spacing = nice_number(span / (int(max_ticks) - 1), round_result=True)
    min_point = float(np.floor(vmin / spacing) * spacing) + 0.0
    max_point = float(np.ceil(vmax / spacing) * spacing) + 0.0

    steps = (max_point - min_point) / spacing
    if not np.isfinite(steps):
        raise TickOverflowError(f"tick count is not finite for range [{vmin}, {vmax}]")
    # Round rather than truncate so drift like 2.9999999999999996 stays 3 steps.
    num_ticks = int(round(steps)) + 1
    if num_ticks > MAX_TICK_COUNT:
        raise TickOverflowError(f"range [{vmin}, {vmax}] needs {num_ticks} ticks (limit {MAX_TICK_COUNT})")
    return TickSpacing(min_point=min_point, max_point=max_point, spacing=spacing, num_ticks=num_ticks)


def get_ticks(spacing: TickSpacing) -> list[Tick]:
    span = spacing.max_point - spacing.min_point
    if span == 0:
        return [Tick(position=100.0, label=format_number(spacing.min_point))]
    ticks: list[Tick] = []
    for i in range(spacing.num_ticks):
        value = spacing.min_point + i * spacing.spacing
        ticks.append(Tick(position=100.0 - (value - spacing.min_point) / span * 100.0, label=format_number(value)))
    return ticks


def format_number(value: float) -> str:
    """Shortest round-trip decimal without exponent; integral values drop `.0`."""

    value = float(value)
    if not np.isfinite(value):
        return str(value)
    out = np.format_float_positional(value, unique=True, trim="-")
    if out == "-0":
        out = "0"
    return out
