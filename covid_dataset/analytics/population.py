"""
Population history projection over year columns (y_1960, y_1961, ...).
"""
from __future__ import annotations

import re
from concurrent.futures import Executor
from typing import Optional

import pandas as pd

from covid_dataset.analytics.common import (
    cell_text, is_blank, map_row_chunks, parse_int, require_columns,
)
from covid_dataset.config import POPULATION_COUNTRY_COLUMN, YEAR_COLUMN_PREFIX
from covid_dataset.data.schemas import CountryPopulationHistory

_YEAR_COLUMN_RE = re.compile(rf"^{re.escape(YEAR_COLUMN_PREFIX)}([0-9]+)$")


def year_columns(table: pd.DataFrame) -> dict[str, int]:
    """Column name -> calendar year, in table order."""
    years = {}
    for col in table.columns:
        m = _YEAR_COLUMN_RE.match(str(col))
        if m:
            years[col] = int(m.group(1))
    return years


def yearly_population(values: dict[int, object], row=None) -> dict[int, int]:
    """Parse one country's year cells; blanks count as 0 and zero years are dropped."""
    yearly = {}
    for year, value in values.items():
        text = "0" if is_blank(value) else str(value).strip()
        population = parse_int(text, f"{YEAR_COLUMN_PREFIX}{year}", row)
        if population != 0:
            yearly[year] = population
    return yearly


def latest_history(country: str, yearly: dict[int, int]) -> Optional[CountryPopulationHistory]:
    """Build the history record, or None when no year reports a population."""
    if not yearly:
        return None
    latest_year = max(yearly)
    return CountryPopulationHistory(
        country=country,
        latest_year=latest_year,
        latest_population=yearly[latest_year],
        yearly=yearly,
    )


def _project_chunk(chunk: pd.DataFrame, years: dict[str, int]) -> list[CountryPopulationHistory]:
    countries = chunk[POPULATION_COUNTRY_COLUMN].tolist()
    cells = {col: chunk[col].tolist() for col in years}

    histories = []
    for i, row in enumerate(chunk.index.tolist()):
        values = {year: cells[col][i] for col, year in years.items()}
        history = latest_history(cell_text(countries[i]), yearly_population(values, row))
        if history is not None:
            histories.append(history)
    return histories


def project_population(
    table: pd.DataFrame,
    executor: Optional[Executor] = None,
    workers: int = 1,
) -> list[CountryPopulationHistory]:
    """One history per country with at least one non-zero year, in row order."""
    require_columns(table, [POPULATION_COUNTRY_COLUMN])
    years = year_columns(table)
    return map_row_chunks(
        lambda chunk: _project_chunk(chunk, years),
        table, executor, workers,
    )
