"""Shared helper functions for statistics routes."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from flask import current_app

from optistats.services.bucketing import parse_granularity
from optistats.services.ranking import DisplayCount, parse_display_count
from optistats.utils.date_range import DateRange, validate
from optistats.utils.filter_store import FilterStore

# keys forwarded upstream, in the order the upstream logs expect them
DEFAULT_FILTERS: Dict[str, Any] = {
    "locationId": None,
    "startDate": None,
    "endDate": None,
    "period": None,
}


def build_filters(args) -> FilterStore:
    """Build a ``FilterStore`` from request args.

    ``startDate`` / ``endDate`` are validated and normalized to
    ``YYYY-MM-DD``; ``period`` falls back to the configured default. Raises
    ``DateRangeError`` / ``InvalidOrder`` on bad dates.
    """
    store = FilterStore(
        dict(DEFAULT_FILTERS, period=current_app.config.get("DEFAULT_PERIOD", "month"))
    )
    date_range = validate(args.get("startDate"), args.get("endDate"))
    updates: Dict[str, Any] = {
        "locationId": args.get("locationId"),
        "startDate": None,
        "endDate": None,
    }
    updates.update(date_range.to_query_params())

    period = args.get("period")
    if period:
        updates["period"] = parse_granularity(period, store.get("period"))
    store.set_many(updates)
    return store


def date_range_of(store: FilterStore) -> DateRange:
    return validate(store.get("startDate"), store.get("endDate"))


def display_count_of(args) -> DisplayCount:
    default = current_app.config.get("DEFAULT_DISPLAY_COUNT", 10)
    return parse_display_count(args.get("displayCount"), default)


def multi_value(args, name: str) -> List[str]:
    """A repeatable query arg, also accepted as one comma-separated value."""
    values = args.getlist(name)
    if len(values) == 1 and "," in values[0]:
        values = values[0].split(",")
    return [v.strip() for v in values if v and v.strip()]


def selected_location_ids(args) -> List[str]:
    return multi_value(args, "locationIds")


def selected_product_types(args) -> List[str]:
    return [value.upper() for value in multi_value(args, "productTypes")]


def list_or_empty(payload: Any, key: Optional[str] = None) -> List[Any]:
    """Upstream payloads are sometimes bare lists, sometimes wrapped."""
    if key and isinstance(payload, dict):
        payload = payload.get(key)
    return list(payload) if isinstance(payload, (list, tuple)) else []


__all__ = [
    "DEFAULT_FILTERS",
    "build_filters",
    "date_range_of",
    "display_count_of",
    "list_or_empty",
    "multi_value",
    "selected_location_ids",
    "selected_product_types",
]
