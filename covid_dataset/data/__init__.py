"""Header classification, table normalization and raw CSV loading."""
from .errors import (
    DatasetError, MalformedHeaderError, RenameCollisionError, DateParseError,
    ValueCastError, MissingColumnError,
)
from .schemas import Status, ColumnKind, ColumnClassification, CovidItem, CountryPopulationHistory
from .headers import classify
from .normalize import normalize_table, plan_columns, with_status
from .loader import read_raw_table, discover_datasets
