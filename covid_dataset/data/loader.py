"""
CSV discovery and raw loading.

Raw tables keep every cell as a string and every header exactly as written;
all interpretation happens in normalize.py.
"""
from __future__ import annotations

from pathlib import Path

import pandas as pd

from covid_dataset.config import DATASET_FOLDER, POPULATION_FILE, STATUS_FILES
from covid_dataset.data.errors import MalformedHeaderError
from covid_dataset.data.schemas import Status


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------

def status_path(status: Status | str, folder: Path = DATASET_FOLDER) -> Path:
    return Path(folder) / STATUS_FILES[Status(status).value]


def population_path(folder: Path = DATASET_FOLDER) -> Path:
    return Path(folder) / POPULATION_FILE


def discover_datasets(folder: Path = DATASET_FOLDER) -> dict[Status, Path]:
    """Status -> CSV path for the case-count files present in folder."""
    found: dict[Status, Path] = {}
    for status in Status:
        path = status_path(status, folder)
        if path.exists():
            found[status] = path
    return found


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

def read_raw_table(filepath: Path | str) -> pd.DataFrame:
    """Load one comma-separated, quoted CSV as a frame of strings.

    The first row is taken as the header row verbatim: pandas would otherwise
    rename blank headers to "Unnamed: n" and suffix duplicates with ".1",
    hiding both from the header checks.
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"Dataset not found: {filepath}")

    try:
        raw = pd.read_csv(
            filepath,
            header=None,
            dtype=str,
            keep_default_na=False,
        )
    except pd.errors.EmptyDataError:
        raise MalformedHeaderError("", f"{filepath.name} has no header row")

    headers = raw.iloc[0].tolist()
    body = raw.iloc[1:].reset_index(drop=True)
    body.columns = headers
    return body
