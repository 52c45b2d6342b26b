"""
Cell parsing and row-chunking helpers shared by the projectors, plus JSON sanitizing.
"""
from __future__ import annotations

import math
import re
from concurrent.futures import Executor
from typing import Callable, Optional, TypeVar

import numpy as np
import pandas as pd

from covid_dataset.data.errors import MissingColumnError, ValueCastError
from covid_dataset.data.normalize import INT64_MAX, INT64_MIN

T = TypeVar("T")

_INT_RE = re.compile(r"^[+-]?\d+$")


# ---------------------------------------------------------------------------
# Cell parsing
# ---------------------------------------------------------------------------

def is_blank(value) -> bool:
    """True for None, NaN/NA and whitespace-only strings."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return bool(pd.api.types.is_scalar(value) and pd.isna(value))


def parse_float(value, column: str, row=None) -> float:
    """Parse a coordinate-like cell; blanks and NaN are errors, not defaults."""
    if is_blank(value):
        raise ValueCastError(column, row, value)
    try:
        result = float(str(value).strip())
    except ValueError:
        raise ValueCastError(column, row, value)
    if math.isnan(result) or math.isinf(result):
        raise ValueCastError(column, row, value)
    return result


def parse_int(value, column: str, row=None) -> int:
    """Parse a count cell. Accepts ints and digit strings with comma separators."""
    if isinstance(value, (int, np.integer)) and not isinstance(value, (bool, np.bool_)):
        return int(value)
    if is_blank(value):
        raise ValueCastError(column, row, value)
    text = str(value).strip().replace(",", "")
    if not _INT_RE.match(text):
        raise ValueCastError(column, row, value)
    number = int(text)
    if not INT64_MIN <= number <= INT64_MAX:
        raise ValueCastError(column, row, value)
    return number


def cell_text(value) -> str:
    """String cell with blanks and NaN mapped to ""."""
    if is_blank(value):
        return ""
    return str(value)


def require_columns(table: pd.DataFrame, columns: list[str]) -> None:
    available = [str(c) for c in table.columns]
    for col in columns:
        if col not in table.columns:
            raise MissingColumnError(col, available)


# ---------------------------------------------------------------------------
# Row chunking
# ---------------------------------------------------------------------------

def map_row_chunks(
    func: Callable[[pd.DataFrame], list[T]],
    table: pd.DataFrame,
    executor: Optional[Executor] = None,
    workers: int = 1,
) -> list[T]:
    """Apply func to contiguous row chunks and concatenate results in row order.

    Without an executor (or with a single worker) func runs once over the whole
    table. A failure in any chunk propagates; partial results are dropped.
    """
    if executor is None or workers <= 1 or len(table) <= 1:
        return func(table)

    positions = np.array_split(np.arange(len(table)), min(workers, len(table)))
    chunks = [table.iloc[idx[0]:idx[-1] + 1] for idx in positions if len(idx)]

    results: list[T] = []
    for part in executor.map(func, chunks):
        results.extend(part)
    return results


# ---------------------------------------------------------------------------
# JSON
# ---------------------------------------------------------------------------

def sanitize_for_json(obj):
    """Recursively convert numpy/pandas types to native Python for JSON serialization."""
    if isinstance(obj, dict):
        clean = {}
        for k, v in obj.items():
            if k is None:
                continue
            if isinstance(k, (np.integer,)):
                k = int(k)
            clean[str(k) if not isinstance(k, str) else k] = sanitize_for_json(v)
        return clean
    if isinstance(obj, (list, tuple)):
        return [sanitize_for_json(v) for v in obj]
    if isinstance(obj, (np.integer,)):
        return int(obj)
    if isinstance(obj, (np.floating,)):
        v = float(obj)
        return None if (math.isnan(v) or math.isinf(v)) else v
    if isinstance(obj, np.bool_):
        return bool(obj)
    if isinstance(obj, np.ndarray):
        return sanitize_for_json(obj.tolist())
    if isinstance(obj, float):
        return None if (math.isnan(obj) or math.isinf(obj)) else obj
    if pd.api.types.is_scalar(obj) and pd.isna(obj):
        return None
    return obj
