"""
Aggregate totals over projected items.
"""
from __future__ import annotations

from covid_dataset.data.schemas import CovidItem, Status


def latest_count(item: CovidItem) -> int:
    """Last value of the item's timeline (0 for an empty timeline)."""
    if not item.timeline:
        return 0
    return next(reversed(item.timeline.values()))


def status_totals(items: list[CovidItem]) -> dict:
    """Places, latest date key and summed latest counts for one status."""
    latest_date = None
    for item in items:
        if item.timeline:
            last = next(reversed(item.timeline))
            if latest_date is None or last > latest_date:
                latest_date = last

    return {
        "places": len(items),
        "countries": len({item.country_region for item in items}),
        "latest_date": latest_date,
        "latest_total": sum(latest_count(item) for item in items),
    }


def summarize(items_by_status: dict[Status, list[CovidItem]]) -> dict:
    """Per-status totals keyed by status value."""
    return {
        Status(status).value: status_totals(items)
        for status, items in items_by_status.items()
    }


def country_totals(items: list[CovidItem]) -> dict[str, int]:
    """Latest count per country, summing provinces; sorted descending."""
    totals: dict[str, int] = {}
    for item in items:
        totals[item.country_region] = totals.get(item.country_region, 0) + latest_count(item)
    return dict(sorted(totals.items(), key=lambda kv: kv[1], reverse=True))
