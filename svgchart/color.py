from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
import math
import re
from typing import Protocol, TypeAlias

from svgchart.errors import ColorFormatError, InvalidConfigurationError

_HEX_COLOR = re.compile(r"#[0-9a-fA-F]{6}")


@dataclass(frozen=True)
class HexColor:
    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not _HEX_COLOR.fullmatch(self.value):
            raise ColorFormatError(f"hex color must look like #rrggbb, got {self.value!r}")

    def to_hex(self) -> str:
        return self.value

    def to_rgb(self) -> tuple[int, int, int]:
        v = self.value
        return (int(v[1:3], 16), int(v[3:5], 16), int(v[5:7], 16))


@dataclass(frozen=True)
class RGBColor:
    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        for name in ("r", "g", "b"):
            channel = getattr(self, name)
            if isinstance(channel, bool) or not isinstance(channel, int) or not 0 <= channel <= 255:
                raise ColorFormatError(f"channel `{name}` must be an int in [0, 255], got {channel!r}")

    def to_hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"

    def to_rgb(self) -> tuple[int, int, int]:
        return (self.r, self.g, self.b)


Color: TypeAlias = HexColor | RGBColor


def parse_color(value: Color | str | Sequence[int]) -> Color:
    if isinstance(value, (HexColor, RGBColor)):
        return value
    if isinstance(value, str):
        return HexColor(value)
    if isinstance(value, Sequence) and len(value) == 3:
        r, g, b = value
        return RGBColor(r, g, b)
    raise ColorFormatError(f"cannot interpret {value!r} as a color")


CATPPUCCIN_COLORS: tuple[Color, ...] = (
    HexColor("#dc8a78"),  # rosewater
    HexColor("#8839ef"),  # mauve
    HexColor("#fe640b"),  # peach
    HexColor("#40a02b"),  # green
    HexColor("#04a5e5"),  # sky
    HexColor("#ea76cb"),  # pink
    HexColor("#1e66f5"),  # blue
    HexColor("#d20f39"),  # red
    HexColor("#df8e1d"),  # yellow
    HexColor("#209fb5"),  # sapphire
    HexColor("#7287fd"),  # lavender
    HexColor("#e64553"),  # maroon
)


class ChartColor(Protocol):
    """Maps the `i`-th of `total` data points to a color."""

    def color_for_index(self, i: int, total: int) -> Color:
        ...


@dataclass(frozen=True)
class Palette:
    """Takes colors in order, wrapping around when the end is reached."""

    colors: tuple[Color, ...]

    def __post_init__(self) -> None:
        if len(self.colors) == 0:
            raise InvalidConfigurationError("palette must contain at least one color")
        object.__setattr__(self, "colors", tuple(parse_color(c) for c in self.colors))

    def color_for_index(self, i: int, total: int) -> Color:
        return self.colors[i % len(self.colors)]


@dataclass(frozen=True)
class Gradient:
    """Interpolates between `from_color` and `to_color`.

    With `gamma_correct` (the default) channels are interpolated in linear
    light, so the midpoint of black to white lands near 188 instead of 128.
    """

    from_color: Color
    to_color: Color
    gamma_correct: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "from_color", parse_color(self.from_color))
        object.__setattr__(self, "to_color", parse_color(self.to_color))

    def color_for_index(self, i: int, total: int) -> Color:
        if total < 1:
            raise InvalidConfigurationError("total must be >= 1")
        if i < 0:
            raise InvalidConfigurationError("index must be >= 0")
        if total == 1 or i == 0:
            return self.from_color
        if i >= total - 1:
            return self.to_color
        start = self.from_color.to_rgb()
        end = self.to_color.to_rgb()

        if not self.gamma_correct:
            return RGBColor(*(a + int((b - a) * i / (total - 1)) for a, b in zip(start, end)))

        channels = []
        for a, b in zip(start, end):
            lin_a = _srgb_to_linear(a)
            lin_b = _srgb_to_linear(b)
            channels.append(_linear_to_srgb((lin_b - lin_a) * i / (total - 1) + lin_a))
        return RGBColor(*channels)


@dataclass(frozen=True)
class CalculatedColor:
    func: Callable[[int, int], Color]

    def color_for_index(self, i: int, total: int) -> Color:
        return self.func(i, total)


DEFAULT_PALETTE = Palette(CATPPUCCIN_COLORS)


def _srgb_to_linear(channel: int) -> float:
    relative = channel / 255.0
    if relative > 0.04045:
        return math.pow((relative + 0.055) / 1.055, 2.4)
    return relative / 12.92


def _linear_to_srgb(channel: float) -> int:
    if channel > 0.0031308:
        corrected = 1.055 * math.pow(channel, 1.0 / 2.4) - 0.055
    else:
        corrected = channel * 12.92
    return min(255, max(0, int(corrected * 255.0)))
