from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
import logging
import math
from typing import Any

import numpy as np

from svgchart.adapters.normalize import normalize_values
from svgchart.color import ChartColor
from svgchart.errors import InvalidConfigurationError
from svgchart.options import PieChartOptions
from svgchart.scales import format_number
from svgchart.series import Series


LOGGER = logging.getLogger(__name__)

# Wedges are drawn at 99/100 so the hover stroke has a 1-unit margin.
SEGMENT_RADIUS = 99.0
ARC_RADIUS = 100


class SegmentSize(Enum):
    LESS_THAN_HALF = "less_than_half"
    HALF = "half"
    MORE_THAN_HALF = "more_than_half"


@dataclass(frozen=True)
class PieSegment:
    from_point: tuple[float, float]
    to_point: tuple[float, float]
    value: float
    label: str | None = None
    source_index: int = 0

    def angle(self) -> SegmentSize:
        zcross = self.from_point[0] * self.to_point[1] - self.to_point[0] * self.from_point[1]
        if zcross == 0.0:
            return SegmentSize.HALF
        if zcross > 0.0:
            return SegmentSize.LESS_THAN_HALF
        return SegmentSize.MORE_THAN_HALF

    @property
    def large_arc_flag(self) -> int:
        return 1 if self.angle() is SegmentSize.MORE_THAN_HALF else 0

    def arc_path(self) -> str:
        fx, fy = self.from_point
        tx, ty = self.to_point
        return (
            f"M0 0 {format_number(fx)} {format_number(fy)} "
            f"A{ARC_RADIUS} {ARC_RADIUS} 0 {self.large_arc_flag} 1 {format_number(tx)} {format_number(ty)}Z"
        )

    def label_anchor(self) -> tuple[float, float]:
        """Unit vector pointing at the wedge's angular center.

        A half circle has no usable midpoint, so the `from` vector rotated 90
        degrees clockwise is used instead; wedges larger than half flip the
        midpoint of their endpoints.
        """

        fx, fy = self.from_point
        tx, ty = self.to_point
        size = self.angle()
        if size is SegmentSize.HALF:
            magnitude = math.hypot(fx, fy)
            return (fy / magnitude, -fx / magnitude)
        mx = (fx + tx) / 2.0
        my = (fy + ty) / 2.0
        magnitude = math.hypot(mx, my)
        if size is SegmentSize.MORE_THAN_HALF:
            return (-mx / magnitude, -my / magnitude)
        return (mx / magnitude, my / magnitude)


def build_pie_segments(
    values: Any,
    labels: Sequence[str] | None = None,
    *,
    data: Any = None,
) -> list[PieSegment]:
    """Sweep `values` around the circle starting at 3 o'clock (angle 0).

    Segments come back in ascending-value order (ties keep input order) and
    zero values are dropped; `source_index` maps each one to its input slot.
    """

    if isinstance(values, Series) and labels is None:
        labels = values.labels()
    arr = normalize_values(values, data=data)
    if not np.all(np.isfinite(arr)):
        raise InvalidConfigurationError("pie values must be finite")
    if np.any(arr < 0):
        raise InvalidConfigurationError("pie values must be non-negative")
    if labels is not None and len(labels) != arr.size:
        raise InvalidConfigurationError(f"labels length mismatch: {len(labels)} != {arr.size}")

    entries = [(float(v), i) for i, v in enumerate(arr.tolist()) if v != 0.0]
    if not entries:
        LOGGER.debug("pie values sum to zero; no segments")
        return []
    total = math.fsum(v for v, _ in entries)
    entries.sort(key=lambda entry: entry[0])

    segments: list[PieSegment] = []
    prev = (SEGMENT_RADIUS, 0.0)
    cumulative = 0.0
    for value, index in entries:
        cumulative += value / total
        theta = cumulative * math.tau
        point = (math.cos(theta) * SEGMENT_RADIUS, math.sin(theta) * SEGMENT_RADIUS)
        segments.append(
            PieSegment(
                from_point=prev,
                to_point=point,
                value=value,
                label=None if labels is None else str(labels[index]),
                source_index=index,
            )
        )
        prev = point
    return segments


@dataclass(frozen=True)
class PieSlice:
    segment: PieSegment
    color: str
    path: str
    label_position: tuple[float, float]


@dataclass(frozen=True)
class PieChartLayout:
    slices: tuple[PieSlice, ...]
    view_box: tuple[float, float, float, float] = (0.0, 0.0, 200.0, 200.0)
    origin: tuple[float, float] = (100.0, 100.0)


def layout_pie(
    values: Any,
    options: PieChartOptions | None = None,
    *,
    labels: Sequence[str] | None = None,
    data: Any = None,
) -> PieChartLayout:
    opts = options if options is not None else PieChartOptions()
    color: ChartColor = opts.color
    segments = build_pie_segments(values, labels=labels, data=data)
    n = len(segments)
    slices = []
    for i, segment in enumerate(segments):
        ax, ay = segment.label_anchor()
        slices.append(
            PieSlice(
                segment=segment,
                color=color.color_for_index(i, n).to_hex(),
                path=segment.arc_path(),
                label_position=(ax * opts.label_radius, ay * opts.label_radius),
            )
        )
    return PieChartLayout(slices=tuple(slices))
