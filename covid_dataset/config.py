"""
COVID Dataset configuration: paths, dataset files, header conventions.
"""
import os
from pathlib import Path

# ---------------------------------------------------------------------------
# Paths: override with COVID_DATA_DIR (or the specific vars) for CI / cloud runs
# ---------------------------------------------------------------------------
_data_dir = Path(os.environ.get("COVID_DATA_DIR", str(Path.cwd())))
DATASET_FOLDER = Path(os.environ.get("COVID_DATASET_DIR", str(_data_dir / "dataset")))
OUTPUT_FOLDER = Path(os.environ.get("COVID_OUTPUT_DIR", str(_data_dir / "public")))

# ---------------------------------------------------------------------------
# Source files inside DATASET_FOLDER, keyed by status
# ---------------------------------------------------------------------------
STATUS_FILES = {
    "confirmed": "global_confirmed.csv",
    "deaths": "global_deaths.csv",
    "recovered": "global_recovered.csv",
}
POPULATION_FILE = "global_population.csv"

# ---------------------------------------------------------------------------
# Header normalization
# ---------------------------------------------------------------------------
# strftime pattern used to rename M/D/YY date headers, e.g. 3/21/20 -> d_20200321.
# The record projector finds date columns by matching names against this pattern.
DEFAULT_DATE_FORMAT = "d_%Y%m%d"
OUTPUT_DATE_FORMAT = os.environ.get("COVID_DATE_FORMAT", DEFAULT_DATE_FORMAT)

# Source quirk: longitude is sometimes spelled "Long"
HEADER_ALIASES = {
    "Long": "Lon",
}

YEAR_COLUMN_PREFIX = "y_"

# Fixed (non-timeline) columns every case-count table must carry after normalization
ITEM_REQUIRED_COLUMNS = ["country_region", "lat", "lon"]
POPULATION_COUNTRY_COLUMN = "country"

# ---------------------------------------------------------------------------
# Projection workers (1 = inline, no thread pool)
# ---------------------------------------------------------------------------
WORKERS = int(os.environ.get("COVID_WORKERS", "1"))
