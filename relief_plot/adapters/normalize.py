from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

import numpy as np

from relief_plot.errors import InvalidInput
from relief_plot.series import DataPoint


try:
    import pandas as pd
except ImportError:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]

try:
    import torch
except ImportError:  # pragma: no cover - optional dependency
    torch = None  # type: ignore[assignment]


TIME_KEY = "time"
ELEVATION_KEY = "elevation"


def coerce_points(data: Any) -> list[DataPoint]:
    """Turn caller-supplied point data into an ordered list of `DataPoint`.

    Accepts `DataPoint` sequences, ``{"time": ..., "elevation": ...}`` mappings,
    ``(time, elevation)`` pairs, ``(N, 2)`` arrays or tensors and DataFrames
    with ``time``/``elevation`` columns. Order is preserved as given.
    """

    if data is None:
        raise InvalidInput("point data is required")

    if pd is not None and isinstance(data, pd.DataFrame):
        return _from_dataframe(data)

    if torch is not None and isinstance(data, torch.Tensor):
        tensor = data.detach()
        if tensor.is_cuda:
            tensor = tensor.cpu()
        return _from_array(tensor.to(torch.float64).numpy())

    if isinstance(data, np.ndarray):
        return _from_array(data)

    if isinstance(data, (str, bytes, bytearray, Mapping)) or not isinstance(data, Iterable):
        raise InvalidInput(f"unsupported point data type: {type(data)!r}")

    points = [_coerce_point(item, index=i) for i, item in enumerate(data)]
    return points


def _coerce_point(item: Any, *, index: int) -> DataPoint:
    if isinstance(item, DataPoint):
        time, elevation = item.time, item.elevation
    elif isinstance(item, Mapping):
        if TIME_KEY not in item or ELEVATION_KEY not in item:
            raise InvalidInput(f"point {index} must have `{TIME_KEY}` and `{ELEVATION_KEY}` keys")
        time, elevation = item[TIME_KEY], item[ELEVATION_KEY]
    elif isinstance(item, Sequence) and not isinstance(item, (str, bytes, bytearray)):
        if len(item) != 2:
            raise InvalidInput(f"point {index} must be a (time, elevation) pair, got {len(item)} values")
        time, elevation = item[0], item[1]
    else:
        raise InvalidInput(f"unsupported point type at index {index}: {type(item)!r}")
    return _checked_point(time, elevation, index=index)


def _checked_point(time: Any, elevation: Any, *, index: int) -> DataPoint:
    try:
        t = float(time)
        e = float(elevation)
    except (TypeError, ValueError) as exc:
        raise InvalidInput(f"point {index} contains a non-numeric value: {time!r}, {elevation!r}") from exc
    if not (np.isfinite(t) and np.isfinite(e)):
        raise InvalidInput(f"point {index} is not finite: ({t!r}, {e!r})")
    return DataPoint(time=t, elevation=e)


def _from_array(arr: np.ndarray) -> list[DataPoint]:
    if arr.size == 0:
        return []
    if arr.ndim != 2 or arr.shape[1] != 2:
        raise InvalidInput(f"point array must have shape (N, 2), got {arr.shape}")
    if arr.dtype.kind not in {"i", "u", "f"}:
        raise InvalidInput(f"point array must be numeric, got dtype {arr.dtype}")
    values = arr.astype(np.float64, copy=False)
    finite = np.isfinite(values).all(axis=1)
    if not np.all(finite):
        bad = int(np.flatnonzero(~finite)[0])
        raise InvalidInput(f"point {bad} is not finite: {tuple(values[bad].tolist())}")
    return [DataPoint(time=float(t), elevation=float(e)) for t, e in values.tolist()]


def _from_dataframe(frame: Any) -> list[DataPoint]:
    missing = [col for col in (TIME_KEY, ELEVATION_KEY) if col not in frame.columns]
    if missing:
        raise InvalidInput(f"DataFrame is missing column(s): {', '.join(missing)}")
    try:
        values = frame[[TIME_KEY, ELEVATION_KEY]].to_numpy(dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise InvalidInput(f"DataFrame `{TIME_KEY}`/`{ELEVATION_KEY}` columns must be numeric") from exc
    return _from_array(values)
