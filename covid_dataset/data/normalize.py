"""
Table normalization: classify every header, rename in one batch, then cast.
"""
from __future__ import annotations

from typing import Iterable, Optional

import numpy as np
import pandas as pd

from covid_dataset.config import HEADER_ALIASES
from covid_dataset.data.errors import RenameCollisionError, ValueCastError
from covid_dataset.data.headers import classify
from covid_dataset.data.schemas import ColumnClassification, Status


_INT_RE = r"[+-]?\d+"

INT64_MIN = int(np.iinfo(np.int64).min)
INT64_MAX = int(np.iinfo(np.int64).max)


# ---------------------------------------------------------------------------
# Column plan
# ---------------------------------------------------------------------------

def plan_columns(
    headers: Iterable[str],
    date_format: Optional[str] = None,
) -> list[ColumnClassification]:
    """Classify headers (after aliasing) and reject duplicate target names."""
    headers = [HEADER_ALIASES.get(str(h).strip(), h) for h in headers]
    plans = [classify(h, date_format) for h in headers]

    sources: dict[str, list[str]] = {}
    for plan in plans:
        sources.setdefault(plan.name, []).append(plan.source)
    for name, raw in sources.items():
        if len(raw) > 1:
            raise RenameCollisionError(name, raw)
    return plans


# ---------------------------------------------------------------------------
# Value casts
# ---------------------------------------------------------------------------

def cast_int64(series: pd.Series, column: str) -> pd.Series:
    """Cast string cells to int64; whitespace and comma thousands separators are accepted."""
    if pd.api.types.is_integer_dtype(series.dtype):
        return series.astype("int64")

    text = series.astype(str).str.strip().str.replace(",", "", regex=False)
    valid = text.str.fullmatch(_INT_RE, na=False).to_numpy(dtype=bool)
    if not valid.all():
        pos = int(np.flatnonzero(~valid)[0])
        raise ValueCastError(column, pos, series.iloc[pos])
    numbers = [int(v) for v in text.tolist()]
    for pos, number in enumerate(numbers):
        if not INT64_MIN <= number <= INT64_MAX:
            raise ValueCastError(column, pos, series.iloc[pos])
    return pd.Series(numbers, index=series.index, name=series.name, dtype="int64")


_CASTS = {
    "int64": cast_int64,
}


# ---------------------------------------------------------------------------
# Table normalization
# ---------------------------------------------------------------------------

def normalize_table(table: pd.DataFrame, date_format: Optional[str] = None) -> pd.DataFrame:
    """Return a new frame with normalized column names and cast values.

    Columns are read by position so a raw table with duplicate headers still
    reaches the collision check instead of being silently merged by pandas.
    """
    plans = plan_columns([str(c) for c in table.columns], date_format)

    projected = {}
    for i, plan in enumerate(plans):
        series = table.iloc[:, i]
        if plan.cast is not None:
            series = _CASTS[plan.cast](series, plan.name)
        projected[plan.name] = series.rename(plan.name)

    return pd.DataFrame(projected, index=table.index, columns=[p.name for p in plans])


def with_status(table: pd.DataFrame, status: Status | str) -> pd.DataFrame:
    """Prepend the literal ``status`` column."""
    status = Status(status)
    if "status" in table.columns:
        raise RenameCollisionError("status", ["status", f"'{status.value}' literal"])
    out = table.copy()
    out.insert(0, "status", status.value)
    return out
