"""
DatasetSession: the explicitly opened/closed engine a parse run goes through.

Holds the run configuration (dataset folder, output date format) and the
thread pool used to project rows in parallel. Open one per run:

    with DatasetSession() as session:
        items = session.parse_datasets()
        population = session.parse_population()
"""
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Optional

import pandas as pd

from covid_dataset.analytics.population import project_population
from covid_dataset.analytics.timeline import project_items
from covid_dataset.config import DATASET_FOLDER, OUTPUT_DATE_FORMAT, WORKERS
from covid_dataset.data.loader import population_path, read_raw_table, status_path
from covid_dataset.data.normalize import normalize_table, with_status
from covid_dataset.data.schemas import CountryPopulationHistory, CovidItem, Status


class DatasetSession:
    """Batch parser over one dataset folder."""

    def __init__(
        self,
        dataset_dir: Path | str = DATASET_FOLDER,
        date_format: str = OUTPUT_DATE_FORMAT,
        workers: int = WORKERS,
    ) -> None:
        self.dataset_dir = Path(dataset_dir)
        self.date_format = date_format
        self.workers = max(1, int(workers))
        self._executor: Optional[ThreadPoolExecutor] = None
        if self.workers > 1:
            self._executor = ThreadPoolExecutor(
                max_workers=self.workers, thread_name_prefix="covid-dataset",
            )
        self._closed = False

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def __enter__(self) -> "DatasetSession":
        self._check_open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        """Shut the worker pool down. Safe to call more than once."""
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None
        self._closed = True

    @property
    def is_closed(self) -> bool:
        return self._closed

    def _check_open(self) -> None:
        if self._closed:
            raise RuntimeError("DatasetSession is closed")

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load_dataset(self, path: Path | str) -> pd.DataFrame:
        """Read one CSV and normalize its headers and values."""
        self._check_open()
        return normalize_table(read_raw_table(path), self.date_format)

    def load_status(self, status: Status | str) -> pd.DataFrame:
        """Normalized case-count table for one status, with the status column prepended."""
        status = Status(status)
        path = status_path(status, self.dataset_dir)
        df = with_status(self.load_dataset(path), status)
        print(f"  {status.value}: {path.name} ({len(df):,} rows, {len(df.columns):,} columns)")
        return df

    # ------------------------------------------------------------------
    # Projection
    # ------------------------------------------------------------------

    def project_items(self, table: pd.DataFrame, status: Status | str | None = None) -> list[CovidItem]:
        self._check_open()
        return project_items(table, status, self._executor, self.workers, self.date_format)

    def project_population(self, table: pd.DataFrame) -> list[CountryPopulationHistory]:
        self._check_open()
        return project_population(table, self._executor, self.workers)

    def parse_datasets(self) -> dict[Status, list[CovidItem]]:
        """Load and project the confirmed, deaths and recovered files."""
        self._check_open()
        print("Parsing case-count datasets...")
        parsed: dict[Status, list[CovidItem]] = {}
        for status in Status:
            parsed[status] = self.project_items(self.load_status(status))
        return parsed

    def parse_population(self) -> list[CountryPopulationHistory]:
        """Load and project the population file."""
        self._check_open()
        print("Parsing population dataset...")
        path = population_path(self.dataset_dir)
        df = self.load_dataset(path)
        histories = self.project_population(df)
        print(f"  population: {path.name} ({len(df):,} rows → {len(histories):,} countries)")
        return histories
