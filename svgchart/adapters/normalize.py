from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal
from typing import Any

import numpy as np

from svgchart.errors import PlotInputError
from svgchart.series import Series


try:
    import pandas as pd
except Exception:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]


def normalize_values(values: Any = None, *, data: Any = None, label: str = "values") -> np.ndarray:
    raw = _resolve_input(values, data=data, label=label)
    if raw is None:
        raise PlotInputError(f"{label} input is required")
    arr = _coerce_1d_numeric(raw, label=label)
    if arr.size == 0:
        raise PlotInputError(f"empty {label}")
    return arr


def _resolve_input(values: Any, *, data: Any, label: str) -> Any:
    if data is not None:
        if pd is None:
            raise PlotInputError("pandas is required when using `data=`")
        if not isinstance(data, pd.DataFrame):
            raise PlotInputError("`data` must be a pandas DataFrame")
        if isinstance(values, str):
            if values not in data.columns:
                raise PlotInputError(f"column not found: {values}")
            return data[values]
        if values is None:
            numeric_cols = [c for c in data.columns if _is_numeric_dtype(data[c])]
            if len(numeric_cols) != 1:
                raise PlotInputError(f"when {label} is omitted, data must have exactly one numeric column")
            return data[numeric_cols[0]]
        return values

    if pd is not None and isinstance(values, pd.DataFrame):
        numeric_cols = [c for c in values.columns if _is_numeric_dtype(values[c])]
        if len(numeric_cols) != 1:
            raise PlotInputError("1-D DataFrame input must contain exactly one numeric column")
        return values[numeric_cols[0]]

    return values


def _is_numeric_dtype(series: Any) -> bool:
    if pd is None:
        return False
    try:
        return bool(pd.api.types.is_numeric_dtype(series))
    except (TypeError, ValueError):
        return False


def _coerce_1d_numeric(value: Any, *, label: str) -> np.ndarray:
    if isinstance(value, Series):
        return value.values()

    if pd is not None and isinstance(value, pd.Series):
        return _coerce_ndarray(value.to_numpy(), label=label)

    if isinstance(value, np.ndarray):
        if value.ndim != 1:
            raise PlotInputError(f"{label} must be 1-D")
        return _coerce_ndarray(value, label=label)

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        arr = np.asarray(value, dtype=object)
        if arr.ndim != 1:
            raise PlotInputError(f"{label} must be 1-D")
        return _coerce_ndarray(arr, label=label)

    raise PlotInputError(f"unsupported {label} input type: {type(value)!r}")


def _coerce_ndarray(arr: np.ndarray, *, label: str) -> np.ndarray:
    if arr.dtype.kind in {"i", "u", "f", "b"}:
        return arr.astype(np.float64, copy=False)

    out = np.empty(arr.shape[0], dtype=np.float64)
    for i, raw in enumerate(arr.tolist()):
        if raw is None:
            out[i] = np.nan
            continue
        if isinstance(raw, Decimal):
            out[i] = float(raw)
            continue
        if isinstance(raw, (str, bytes)):
            raise PlotInputError(f"{label} contains non-numeric value at index {i}: {raw!r}")
        try:
            out[i] = float(raw)
        except (TypeError, ValueError) as exc:
            raise PlotInputError(f"{label} contains non-numeric value at index {i}: {raw!r}") from exc
    return out
