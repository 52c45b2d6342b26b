"""
Errors raised while normalizing and projecting dataset tables.

Every error is structural and deterministic: none of them is retried, and a
run that hits one aborts without producing output.
"""
from __future__ import annotations


class DatasetError(ValueError):
    """Base class for all dataset normalization errors."""


class MalformedHeaderError(DatasetError):
    """A header produced an empty or invalid normalized name."""

    def __init__(self, header: str, reason: str) -> None:
        self.header = header
        self.reason = reason
        super().__init__(f"Malformed header {header!r}: {reason}")


class RenameCollisionError(DatasetError):
    """Two distinct raw headers normalize to the same column name."""

    def __init__(self, name: str, headers: list[str]) -> None:
        self.name = name
        self.headers = headers
        joined = ", ".join(repr(h) for h in headers)
        super().__init__(f"Headers {joined} all normalize to {name!r}")


class DateParseError(DatasetError):
    """A date-shaped header is not a valid M/D/YY calendar date."""

    def __init__(self, header: str, reason: str) -> None:
        self.header = header
        super().__init__(f"Cannot parse date header {header!r}: {reason}")


class ValueCastError(DatasetError):
    """A cell expected to hold a number cannot be parsed."""

    def __init__(self, column: str, row: int | None, value) -> None:
        self.column = column
        self.row = row
        self.value = value
        where = f"row {row}, " if row is not None else ""
        super().__init__(f"Cannot parse {value!r} as a number ({where}column {column!r})")


class MissingColumnError(DatasetError):
    """A fixed column required by a projection is absent."""

    def __init__(self, column: str, available: list[str]) -> None:
        self.column = column
        super().__init__(f"Required column {column!r} missing (have: {', '.join(available)})")
