from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Generic, TypeVar

import numpy as np

from svgchart.errors import PlotInputError


T = TypeVar("T")


@dataclass(frozen=True)
class Point(Generic[T]):
    value: T
    label: str


@dataclass(frozen=True)
class Series(Generic[T]):
    """Ordered (value, label) pairs; identity is sequence position only."""

    points: tuple[Point[T], ...]

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[T, str]]) -> Series[T]:
        return cls(points=tuple(Point(value=value, label=str(label)) for value, label in pairs))

    def __iter__(self) -> Iterator[Point[T]]:
        return iter(self.points)

    def __len__(self) -> int:
        return len(self.points)

    def values(self) -> np.ndarray:
        out = np.empty(len(self.points), dtype=np.float64)
        for i, point in enumerate(self.points):
            try:
                out[i] = float(point.value)  # type: ignore[arg-type]
            except (TypeError, ValueError) as exc:
                raise PlotInputError(f"series contains non-numeric value at index {i}: {point.value!r}") from exc
        return out

    def labels(self) -> list[str]:
        return [point.label for point in self.points]
