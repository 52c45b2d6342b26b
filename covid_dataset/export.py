"""
JSON export of projected records.

Layout under the output folder:

    data/by-country/<country>_<province>.json   one document per place, all statuses
    data/by-status/<status>.json                every item of one status
    data/places.json                            slug -> place index
    data/population/history.json                population histories
    data/summary.json                           per-status aggregate totals
"""
from __future__ import annotations

import json
import re
import unicodedata
from pathlib import Path
from typing import Optional

from covid_dataset.analytics.common import sanitize_for_json
from covid_dataset.analytics.summary import country_totals, summarize
from covid_dataset.data.schemas import CountryPopulationHistory, CovidItem, Status


def _slug(name: str) -> str:
    """Convert a place name to a filesystem-safe slug."""
    s = name.lower().strip()
    s = unicodedata.normalize("NFKD", s)
    s = re.sub(r"[^\w\s-]", "", s)
    s = re.sub(r"[\s_]+", "-", s).strip("-")
    return s or "unknown"


def place_filename(country: str, province: str = "") -> str:
    """``{country}_{province}.json``, or ``{country}.json`` without a province."""
    if province:
        return f"{_slug(country)}_{_slug(province)}.json"
    return f"{_slug(country)}.json"


def _write_json(path: Path, data) -> None:
    """Write sanitised JSON to path, creating parent dirs."""
    path.parent.mkdir(parents=True, exist_ok=True)
    clean = sanitize_for_json(data)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(clean, f, separators=(",", ":"), ensure_ascii=False)


# ---------------------------------------------------------------------------
# Case counts
# ---------------------------------------------------------------------------

def group_by_place(items_by_status: dict[Status, list[CovidItem]]) -> dict[tuple[str, str], dict]:
    """Merge the statuses of each place into one document, in first-seen order."""
    places: dict[tuple[str, str], dict] = {}
    for status, items in items_by_status.items():
        key_status = Status(status).value
        for item in items:
            doc = places.get(item.place)
            if doc is None:
                doc = {
                    "place": {
                        "countryRegion": item.country_region,
                        "provinceState": item.province_state,
                        "lat": item.lat,
                        "lon": item.lon,
                    },
                }
                places[item.place] = doc
            doc[key_status] = dict(item.timeline)
    return places


def export_items(items_by_status: dict[Status, list[CovidItem]], out: Path) -> int:
    """Write per-place and per-status documents. Returns the number of place files."""
    out = Path(out)
    places = group_by_place(items_by_status)

    index = {}
    used: set[str] = set()
    for (country, province), doc in places.items():
        filename = place_filename(country, province)
        if filename in used:
            stem = filename[:-len(".json")]
            i = 2
            while f"{stem}-{i}.json" in used:
                i += 1
            filename = f"{stem}-{i}.json"
        used.add(filename)
        index[filename[:-len(".json")]] = doc["place"]
        _write_json(out / "data/by-country" / filename, doc)

    for status, items in items_by_status.items():
        _write_json(
            out / f"data/by-status/{Status(status).value}.json",
            [item.to_dict() for item in items],
        )

    _write_json(out / "data/places.json", index)
    return len(places)


# ---------------------------------------------------------------------------
# Population
# ---------------------------------------------------------------------------

def export_population(histories: list[CountryPopulationHistory], out: Path) -> Path:
    path = Path(out) / "data/population/history.json"
    _write_json(path, [h.to_dict() for h in histories])
    return path


# ---------------------------------------------------------------------------
# Summary
# ---------------------------------------------------------------------------

def export_summary(
    items_by_status: dict[Status, list[CovidItem]],
    out: Path,
    histories: Optional[list[CountryPopulationHistory]] = None,
) -> dict:
    """Write data/summary.json and return what was written."""
    summary = {"statuses": summarize(items_by_status)}
    confirmed = items_by_status.get(Status.CONFIRMED)
    if confirmed:
        summary["top_countries"] = dict(list(country_totals(confirmed).items())[:10])
    if histories is not None:
        summary["population"] = {
            "countries": len(histories),
            "total": sum(h.latest_population for h in histories),
        }
    _write_json(Path(out) / "data/summary.json", summary)
    return summary
