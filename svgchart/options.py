from __future__ import annotations

from dataclasses import dataclass
import logging
import math
from pathlib import Path
import tomllib
from typing import Any, Literal, Mapping

from svgchart.color import DEFAULT_PALETTE, ChartColor, Gradient, HexColor, Palette, parse_color
from svgchart.errors import ColorFormatError, InvalidConfigurationError


LOGGER = logging.getLogger(__name__)

ChartKind = Literal["bar", "line", "pie"]

DEFAULT_MAX_TICKS = 5
DEFAULT_LABEL_RADIUS = 85.0
DEFAULT_LINE_PALETTE = Palette((HexColor("#dd3333"),))


@dataclass(frozen=True)
class BarChartOptions:
    max_ticks: int = DEFAULT_MAX_TICKS
    color: ChartColor = DEFAULT_PALETTE


@dataclass(frozen=True)
class LineChartOptions:
    max_ticks: int = DEFAULT_MAX_TICKS
    color: ChartColor = DEFAULT_LINE_PALETTE


@dataclass(frozen=True)
class PieChartOptions:
    color: ChartColor = DEFAULT_PALETTE
    label_radius: float = DEFAULT_LABEL_RADIUS


ChartOptions = BarChartOptions | LineChartOptions | PieChartOptions

_OPTION_TYPES: dict[str, type] = {
    "bar": BarChartOptions,
    "line": LineChartOptions,
    "pie": PieChartOptions,
}
_COLOR_KEYS = ("palette", "gradient")
_KIND_KEYS: dict[str, tuple[str, ...]] = {
    "bar": ("max_ticks",) + _COLOR_KEYS,
    "line": ("max_ticks",) + _COLOR_KEYS,
    "pie": ("label_radius",) + _COLOR_KEYS,
}


def validate_chart_options(kind: ChartKind, overrides: Mapping[str, Any] | None = None) -> ChartOptions:
    """Validate and merge option overrides against the defaults for `kind`.

    `palette` and `gradient` are mutually exclusive color sources.
    """

    if kind not in _OPTION_TYPES:
        raise InvalidConfigurationError(f"Unknown chart kind: {kind}")
    allowed = _KIND_KEYS[kind]
    raw: dict[str, Any] = dict(overrides or {})
    for key in raw:
        if key not in allowed:
            raise InvalidConfigurationError(f"Unknown {kind} chart option: {key}")

    kwargs: dict[str, Any] = {}
    if "max_ticks" in raw:
        max_ticks = raw["max_ticks"]
        if isinstance(max_ticks, bool) or not isinstance(max_ticks, int) or not 2 <= max_ticks <= 255:
            raise InvalidConfigurationError("Option `max_ticks` must be an integer in [2, 255]")
        kwargs["max_ticks"] = max_ticks

    if "palette" in raw and "gradient" in raw:
        raise InvalidConfigurationError("Options `palette` and `gradient` are mutually exclusive")
    if "palette" in raw:
        kwargs["color"] = _parse_palette(raw["palette"])
    elif "gradient" in raw:
        kwargs["color"] = _parse_gradient(raw["gradient"])

    if "label_radius" in raw:
        radius = raw["label_radius"]
        if isinstance(radius, bool) or not isinstance(radius, (int, float)):
            raise InvalidConfigurationError("Option `label_radius` must be a positive finite number")
        if not math.isfinite(radius) or radius <= 0:
            raise InvalidConfigurationError("Option `label_radius` must be a positive finite number")
        kwargs["label_radius"] = float(radius)

    return _OPTION_TYPES[kind](**kwargs)


def load_chart_options(path: str | Path, kind: ChartKind) -> ChartOptions:
    """Read `[chart]` and `[chart.<kind>]` from a TOML file; the kind table wins."""

    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"chart config not found: {config_path}")
    with config_path.open("rb") as f:
        try:
            raw = tomllib.load(f)
        except tomllib.TOMLDecodeError as exc:
            raise InvalidConfigurationError(f"invalid chart config {config_path}: {exc}") from exc
    LOGGER.debug("loading %s chart options from %s", kind, config_path)

    section = raw.get("chart", {})
    if not isinstance(section, dict):
        raise InvalidConfigurationError("`chart` must be a table")
    if kind not in _OPTION_TYPES:
        raise InvalidConfigurationError(f"Unknown chart kind: {kind}")
    known = {key for keys in _KIND_KEYS.values() for key in keys}
    merged: dict[str, Any] = {}
    for key, value in section.items():
        if key in _OPTION_TYPES:
            continue
        if key not in known:
            raise InvalidConfigurationError(f"Unknown chart option: {key}")
        # Shared keys only apply to the kinds that understand them.
        if key in _KIND_KEYS[kind]:
            merged[key] = value
    specific = section.get(kind, {})
    if not isinstance(specific, dict):
        raise InvalidConfigurationError(f"`chart.{kind}` must be a table")
    if "palette" in specific or "gradient" in specific:
        merged.pop("palette", None)
        merged.pop("gradient", None)
    merged.update(specific)
    return validate_chart_options(kind, merged)


def _parse_palette(value: Any) -> Palette:
    if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple)):
        raise InvalidConfigurationError("Option `palette` must be a list of hex colors")
    if not value:
        raise InvalidConfigurationError("Option `palette` must contain at least one color")
    try:
        return Palette(tuple(parse_color(c) for c in value))
    except ColorFormatError as exc:
        raise InvalidConfigurationError(f"Option `palette` is invalid: {exc}") from exc


def _parse_gradient(value: Any) -> Gradient:
    if not isinstance(value, Mapping):
        raise InvalidConfigurationError("Option `gradient` must be a table with `from` and `to`")
    unknown = set(value) - {"from", "to", "gamma_correct"}
    if unknown:
        raise InvalidConfigurationError(f"Unknown gradient key: {sorted(unknown)[0]}")
    try:
        from_color = parse_color(value["from"])
        to_color = parse_color(value["to"])
    except KeyError as exc:
        raise InvalidConfigurationError(f"Option `gradient` missing required field: {exc.args[0]}") from exc
    except ColorFormatError as exc:
        raise InvalidConfigurationError(f"Option `gradient` is invalid: {exc}") from exc
    gamma_correct = value.get("gamma_correct", True)
    if not isinstance(gamma_correct, bool):
        raise InvalidConfigurationError("Gradient `gamma_correct` must be a boolean")
    return Gradient(from_color=from_color, to_color=to_color, gamma_correct=gamma_correct)
