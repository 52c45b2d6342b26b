"""
Header classification: decide what a raw CSV header means and what it is renamed to.

Rules are tried in order, first match wins:

    3/21/20          -> DATE      d_20200321   (cast to int64)
    Province/State   -> COMPOUND  province_state
    1960 [YR1960]    -> YEAR      y_1960
    Lat              -> PLAIN     lat

A header with two or more slashes that is not a date is rejected outright,
so "a/b/c" never turns into a column name that depends on where it was split.
"""
from __future__ import annotations

import datetime as dt
import re
from dataclasses import replace
from typing import Callable, Optional

from covid_dataset.config import DEFAULT_DATE_FORMAT, YEAR_COLUMN_PREFIX
from covid_dataset.data.errors import DateParseError, MalformedHeaderError
from covid_dataset.data.schemas import ColumnClassification, ColumnKind


_DATE_LIKE_RE = re.compile(r"^([0-9]+)/([0-9]+)/([0-9]+)$")
_SINGLE_SLASH_RE = re.compile(r"^([^/]*)/([^/]*)$")
_NUMBER_COL_RE = re.compile(r"^([0-9]+).*$")


# ---------------------------------------------------------------------------
# Date headers
# ---------------------------------------------------------------------------

def parse_header_date(header: str) -> dt.date:
    """Parse an M/D/YY header. Two-digit years always land in 2000-2099."""
    m = _DATE_LIKE_RE.match(header)
    if not m:
        raise DateParseError(header, "not in M/D/YY form")
    month, day, year = m.groups()
    if len(month) > 2 or len(day) > 2:
        raise DateParseError(header, "month and day take at most 2 digits")
    if len(year) != 2:
        raise DateParseError(header, "expected a 2-digit year")
    try:
        return dt.date(2000 + int(year), int(month), int(day))
    except ValueError as exc:
        raise DateParseError(header, str(exc)) from exc


# strftime fields -> what they render as once the name is lowercased
_STRFTIME_FIELDS = {
    "%Y": "[0-9]{4}",
    "%y": "[0-9]{2}",
    "%m": "[0-9]{2}",
    "%d": "[0-9]{2}",
    "%j": "[0-9]{3}",
    "%b": "[a-z]+",
    "%B": "[a-z]+",
    "%a": "[a-z]+",
    "%A": "[a-z]+",
    "%%": "%",
}


def date_column_pattern(date_format: Optional[str] = None) -> re.Pattern:
    """Anchored regex matching the names _date_column renders with date_format.

    "d_%Y%m%d" -> ^d_[0-9]{4}[0-9]{2}[0-9]{2}$. Unpadded fields ("%-d") match
    any run of digits; fields not listed above match any text.
    """
    parts = []
    for token in re.split(r"(%-?.)", date_format or DEFAULT_DATE_FORMAT):
        if not token:
            continue
        if token.startswith("%-"):
            parts.append("[0-9]+")
        elif token.startswith("%") and len(token) > 1:
            parts.append(_STRFTIME_FIELDS.get(token, ".+?"))
        else:
            parts.append(re.escape(token.lower()))
    return re.compile("^" + "".join(parts) + "$")


def _date_column(header: str, m: re.Match, date_format: str) -> ColumnClassification:
    name = parse_header_date(header).strftime(date_format).lower()
    return ColumnClassification(header, ColumnKind.DATE, name, cast="int64")


def _compound_column(header: str, m: re.Match, date_format: str) -> ColumnClassification:
    left, right = m.groups()
    if not left.strip() or not right.strip():
        raise MalformedHeaderError(header, "empty name on one side of '/'")
    return ColumnClassification(header, ColumnKind.COMPOUND, f"{left}_{right}".lower())


def _year_column(header: str, m: re.Match, date_format: str) -> ColumnClassification:
    return ColumnClassification(header, ColumnKind.YEAR, f"{YEAR_COLUMN_PREFIX}{m.group(1)}")


_Handler = Callable[[str, re.Match, str], ColumnClassification]

_RULES: list[tuple[re.Pattern, _Handler]] = [
    (_DATE_LIKE_RE, _date_column),
    (_SINGLE_SLASH_RE, _compound_column),
    (_NUMBER_COL_RE, _year_column),
]


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------

def _validate(result: ColumnClassification) -> ColumnClassification:
    if not result.name.strip():
        raise MalformedHeaderError(result.source, "normalizes to an empty name")
    if "/" in result.name:
        raise MalformedHeaderError(result.source, "normalized name contains '/'")
    return result


def classify(header: str, date_format: Optional[str] = None) -> ColumnClassification:
    """Classify one raw header and compute its normalized name."""
    if header is None:
        raise MalformedHeaderError("", "header is missing")
    date_format = date_format or DEFAULT_DATE_FORMAT
    text = str(header).strip()
    if not text:
        raise MalformedHeaderError(str(header), "header is empty")

    if text.count("/") > 1 and not _DATE_LIKE_RE.match(text):
        raise MalformedHeaderError(str(header), "more than one '/' outside a M/D/YY date")

    for pattern, handler in _RULES:
        m = pattern.match(text)
        if m:
            result = handler(text, m, date_format)
            break
    else:
        result = ColumnClassification(text, ColumnKind.PLAIN, text.lower())

    # Keep the header exactly as it appeared so renames can find it.
    if result.source != header:
        result = replace(result, source=header)
    return _validate(result)
