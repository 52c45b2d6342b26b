"""
Record types produced by header classification and row projection.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class Status(str, Enum):
    CONFIRMED = "confirmed"
    DEATHS = "deaths"
    RECOVERED = "recovered"


class ColumnKind(str, Enum):
    DATE = "date"
    COMPOUND = "compound"
    YEAR = "year"
    PLAIN = "plain"


@dataclass(frozen=True)
class ColumnClassification:
    """How one raw header is renamed and cast.

    ``cast`` names the target dtype applied after renaming (``"int64"`` for
    date columns); ``None`` means the column passes through unchanged.
    """
    source: str
    kind: ColumnKind
    name: str
    cast: Optional[str] = None


@dataclass(frozen=True)
class CovidItem:
    """One status time series for one place."""
    status: Status
    province_state: str
    country_region: str
    lat: float
    lon: float
    timeline: dict[str, int] = field(default_factory=dict)

    @property
    def place(self) -> tuple[str, str]:
        return self.country_region, self.province_state

    def to_dict(self) -> dict:
        return {
            "status": self.status.value,
            "provinceState": self.province_state,
            "countryRegion": self.country_region,
            "lat": self.lat,
            "lon": self.lon,
            "timeline": dict(self.timeline),
        }


@dataclass(frozen=True)
class CountryPopulationHistory:
    """Population by year for one country; zero years are never stored."""
    country: str
    latest_year: int
    latest_population: int
    yearly: dict[int, int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "country": self.country,
            "latestYear": self.latest_year,
            "latestPopulation": self.latest_population,
            "yearly": {str(y): p for y, p in self.yearly.items()},
        }
