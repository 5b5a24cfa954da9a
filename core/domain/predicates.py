"""Success predicates deciding whether a step result counts."""

from __future__ import annotations

from typing import Any

import pandas as pd


def is_non_null(value: Any) -> bool:
    """Default predicate: any result other than ``None`` is a success."""
    return value is not None


def is_present(value: Any) -> bool:
    """Treat ``None``, ``NaN``, ``NaT`` and ``pd.NA`` scalars as failures.

    Containers and arbitrary objects are always considered present, even when
    they hold missing values.
    """
    if value is None:
        return False
    if not pd.api.types.is_scalar(value):
        return True
    return not bool(pd.isna(value))
