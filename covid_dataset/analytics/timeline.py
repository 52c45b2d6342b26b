"""
Record projection: fold the date columns of each normalized row into a timeline.
"""
from __future__ import annotations

from concurrent.futures import Executor
from typing import Optional

import pandas as pd

from covid_dataset.analytics.common import (
    cell_text, is_blank, map_row_chunks, parse_float, parse_int, require_columns,
)
from covid_dataset.config import ITEM_REQUIRED_COLUMNS
from covid_dataset.data.errors import DatasetError, MissingColumnError
from covid_dataset.data.headers import date_column_pattern
from covid_dataset.data.schemas import CovidItem, Status


def date_columns(table: pd.DataFrame, date_format: Optional[str] = None) -> list[str]:
    """Columns named the way date_format renders dates (d_20200321, ...), in table order."""
    pattern = date_column_pattern(date_format)
    return [c for c in table.columns if isinstance(c, str) and pattern.match(c)]


def _row_status(value, row, default: Optional[Status]) -> Status:
    if is_blank(value):
        if default is None:
            raise DatasetError(f"Missing status at row {row}")
        return default
    if isinstance(value, Status):
        return value
    try:
        return Status(str(value).strip().lower())
    except ValueError:
        raise DatasetError(f"Unknown status {value!r} at row {row}")


def _project_chunk(
    chunk: pd.DataFrame,
    dates: list[str],
    status: Optional[Status],
) -> list[CovidItem]:
    has_status = "status" in chunk.columns
    statuses = chunk["status"].tolist() if has_status else [None] * len(chunk)
    provinces = chunk["province_state"].tolist()
    countries = chunk["country_region"].tolist()
    lats = chunk["lat"].tolist()
    lons = chunk["lon"].tolist()
    counts = {d: chunk[d].tolist() for d in dates}

    items = []
    for i, row in enumerate(chunk.index.tolist()):
        timeline = {d: parse_int(counts[d][i], d, row) for d in dates}
        items.append(CovidItem(
            status=_row_status(statuses[i], row, status),
            province_state=cell_text(provinces[i]),
            country_region=cell_text(countries[i]),
            lat=parse_float(lats[i], "lat", row),
            lon=parse_float(lons[i], "lon", row),
            timeline=timeline,
        ))
    return items


def project_items(
    table: pd.DataFrame,
    status: Status | str | None = None,
    executor: Optional[Executor] = None,
    workers: int = 1,
    date_format: Optional[str] = None,
) -> list[CovidItem]:
    """One CovidItem per row of a normalized case-count table, in row order.

    The row's own ``status`` column wins; ``status`` is only used when the
    table has none. Date columns are the ones named by date_format.
    """
    status = Status(status) if status is not None else None
    if "status" not in table.columns and status is None:
        raise MissingColumnError("status", [str(c) for c in table.columns])
    require_columns(table, ["province_state"] + ITEM_REQUIRED_COLUMNS)

    dates = date_columns(table, date_format)
    return map_row_chunks(
        lambda chunk: _project_chunk(chunk, dates, status),
        table, executor, workers,
    )
