"""Apply chains element-wise to a pandas Series."""

from __future__ import annotations

from typing import Any, Callable

import numpy as np
import pandas as pd


class SeriesAdapterError(ValueError):
    """Raised when data cannot be passed through a chain."""


def apply_to_series(
    series: pd.Series,
    run: Callable[[Any], Any],
    *,
    dtype: Any = None,
) -> pd.Series:
    """Run ``run`` on every element of ``series``.

    ``run`` is usually a terminal call on a dispatcher, for example
    ``lambda value: chain.number(value)``. ``None`` results become missing
    values; index and name are preserved.
    """
    if not isinstance(series, pd.Series):
        raise SeriesAdapterError("apply_to_series expects a pandas.Series")
    if not callable(run):
        raise SeriesAdapterError("run must be callable")
    results = [run(value) for value in series.tolist()]
    values = [np.nan if result is None else result for result in results]
    return pd.Series(values, index=series.index.copy(), name=series.name, dtype=dtype)
