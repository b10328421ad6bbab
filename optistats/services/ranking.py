"""Top-N ranking and share-of-total for categorical breakdowns."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Callable, Dict, Iterable, List, Literal, Mapping, Optional, Sequence, Union

from optistats.utils.coerce import to_number

ALL = "all"

DisplayCount = Union[int, Literal["all"]]

DISPLAY_COUNTS: Sequence[DisplayCount] = (5, 10, 20, ALL)

MetricSelector = Union[str, Callable[[Mapping[str, Any]], Any]]


@dataclass(frozen=True)
class CategoryShare:
    category_key: str
    metric_primary: float
    percentage: float
    rank: Optional[int] = None
    metric_secondary: Optional[float] = None

    def as_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "rank": self.rank,
            "categoryKey": self.category_key,
            "metricPrimary": self.metric_primary,
            "percentage": self.percentage,
        }
        if self.metric_secondary is not None:
            out["metricSecondary"] = self.metric_secondary
        return out


@dataclass(frozen=True)
class RankingResult:
    ranked: List[CategoryShare] = field(default_factory=list)
    total: float = 0.0


def round1(value: float) -> float:
    """One decimal place, halves rounded away from zero on the exact binary value."""
    return float(Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def percentage_of(value: float, total: float) -> float:
    if total == 0:
        return 0.0
    return round1(value / total * 100)


def parse_display_count(value: Any, default: DisplayCount = 10) -> DisplayCount:
    """Map a request value ("5", "20", "all", ...) to a display count."""
    if value is None:
        return default
    text = str(value).strip().lower()
    if text == ALL:
        return ALL
    try:
        count = int(text)
    except ValueError:
        return default
    return count if count in DISPLAY_COUNTS else default


def _selector(metric: MetricSelector) -> Callable[[Mapping[str, Any]], Any]:
    if callable(metric):
        return metric
    return lambda entry: entry.get(metric)


def _prepare(
    entries: Iterable[Mapping[str, Any]],
    metric: MetricSelector,
    key: MetricSelector,
    secondary: Optional[MetricSelector],
) -> List[Dict[str, Any]]:
    select_metric = _selector(metric)
    select_key = _selector(key)
    select_secondary = _selector(secondary) if secondary is not None else None

    prepared = []
    for entry in entries:
        if not isinstance(entry, Mapping):
            continue
        value = to_number(select_metric(entry))
        if value is None:
            continue
        second = None
        if select_secondary is not None:
            second = to_number(select_secondary(entry)) or 0.0
        prepared.append(
            {"key": str(select_key(entry)), "metric": value, "secondary": second}
        )
    return prepared


def rank(
    entries: Iterable[Mapping[str, Any]],
    metric: MetricSelector,
    display_count: DisplayCount = ALL,
    *,
    key: MetricSelector = "categoryKey",
    secondary: Optional[MetricSelector] = None,
) -> RankingResult:
    """
    Sort ``entries`` descending by ``metric`` and keep the top ``display_count``.

    Equal metrics keep their input order. The total and every percentage are
    computed over the full population, so a visible entry keeps the same
    percentage whatever ``display_count`` is. Entries with no numeric metric
    are left out.
    """
    prepared = _prepare(entries, metric, key, secondary)
    ordered = sorted(prepared, key=lambda item: item["metric"], reverse=True)
    total = sum(item["metric"] for item in ordered)

    if display_count != ALL:
        ordered = ordered[: max(int(display_count), 0)]

    ranked = [
        CategoryShare(
            category_key=item["key"],
            metric_primary=item["metric"],
            metric_secondary=item["secondary"],
            percentage=percentage_of(item["metric"], total),
            rank=position,
        )
        for position, item in enumerate(ordered, start=1)
    ]
    return RankingResult(ranked=ranked, total=total)


def share_of_total(
    entries: Iterable[Mapping[str, Any]],
    metric: MetricSelector,
    *,
    key: MetricSelector = "categoryKey",
) -> RankingResult:
    """Percentages in input order, no sorting or truncation."""
    prepared = _prepare(entries, metric, key, None)
    total = sum(item["metric"] for item in prepared)
    shares = [
        CategoryShare(
            category_key=item["key"],
            metric_primary=item["metric"],
            percentage=percentage_of(item["metric"], total),
        )
        for item in prepared
    ]
    return RankingResult(ranked=shares, total=total)


__all__ = [
    "ALL",
    "CategoryShare",
    "DISPLAY_COUNTS",
    "DisplayCount",
    "RankingResult",
    "parse_display_count",
    "percentage_of",
    "rank",
    "round1",
    "share_of_total",
]
