"""Period bucketing for trend charts."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

import pandas as pd

from optistats.utils.coerce import to_number
from optistats.utils.date_range import DateRange, is_complete

GRANULARITIES = ("day", "week", "month")

# pandas offsets for the bucket grid; weeks are anchored to Monday (ISO)
FREQ_RULE: Dict[str, str] = {
    "day": "D",
    "week": "W-MON",
    "month": "MS",
}

KEY_FORMAT: Dict[str, str] = {
    "day": "%Y-%m-%d",
    "week": "%Y-%m-%d",
    "month": "%Y-%m",
}


@dataclass(frozen=True)
class TrendPoint:
    period_key: str
    total_value: float
    count: Union[int, float]

    def as_dict(self) -> Dict[str, Any]:
        return {
            "periodKey": self.period_key,
            "totalValue": self.total_value,
            "count": self.count,
        }


def parse_granularity(value: Optional[str], default: str = "month") -> str:
    """Map a request value to a granularity, falling back to ``default``."""
    candidate = (value or "").strip().lower()
    return candidate if candidate in GRANULARITIES else default


def _coerce_timestamp(value: Any) -> Optional[pd.Timestamp]:
    if value is None or isinstance(value, bool):
        return None
    if not isinstance(value, (str, date, datetime, pd.Timestamp)):
        return None
    if isinstance(value, str) and not value.strip():
        return None
    try:
        ts = pd.Timestamp(value)
    except (TypeError, ValueError):
        return None
    if pd.isna(ts):
        return None
    if ts.tzinfo is not None:
        ts = ts.tz_convert("UTC").tz_localize(None)
    return ts.normalize()


def _as_count(value: float) -> Union[int, float]:
    return int(value) if float(value).is_integer() else float(value)


def bucket_start(day: pd.Timestamp, granularity: str) -> pd.Timestamp:
    """First day of the bucket containing ``day``."""
    if granularity == "day":
        return day
    if granularity == "week":
        return day - pd.Timedelta(days=day.weekday())
    if granularity == "month":
        return day.replace(day=1)
    raise ValueError(f"Unknown granularity '{granularity}'; expected one of {GRANULARITIES}")


def bucket_keys(date_range: DateRange, granularity: str) -> List[pd.Timestamp]:
    """Every bucket start covering ``date_range`` inclusive, ascending."""
    if not is_complete(date_range):
        return []
    start = bucket_start(pd.Timestamp(date_range.start), granularity)
    end = pd.Timestamp(date_range.end)
    return list(pd.date_range(start=start, end=end, freq=FREQ_RULE[granularity]))


def bucketize(
    records: Iterable[Mapping[str, Any]],
    granularity: str,
    date_range: DateRange,
    *,
    timestamp_key: str = "timestamp",
    value_key: str = "value",
    count_key: Optional[str] = None,
) -> List[TrendPoint]:
    """
    Group ``records`` into zero-filled buckets spanning ``date_range``.

    Returns an empty list when the range is incomplete; callers show a
    placeholder instead of an empty chart. Records outside the range, or
    without a usable timestamp or value, are skipped. When ``count_key`` is
    given, ``count`` sums that field (pre-aggregated rows) instead of counting
    records.
    """
    if granularity not in GRANULARITIES:
        raise ValueError(f"Unknown granularity '{granularity}'; expected one of {GRANULARITIES}")
    keys = bucket_keys(date_range, granularity)
    if not keys:
        return []

    range_start = pd.Timestamp(date_range.start)
    range_end = pd.Timestamp(date_range.end)

    rows = []
    for record in records:
        if not isinstance(record, Mapping):
            continue
        ts = _coerce_timestamp(record.get(timestamp_key))
        value = to_number(record.get(value_key))
        if ts is None or value is None:
            continue
        if ts < range_start or ts > range_end:
            continue
        if count_key is None:
            count = 1.0
        else:
            count = to_number(record.get(count_key)) or 0.0
        rows.append((ts, value, count))

    totals: Dict[pd.Timestamp, Dict[str, float]] = {}
    if rows:
        frame = pd.DataFrame(rows, columns=["ts", "value", "count"])
        frame["bucket"] = [bucket_start(ts, granularity) for ts in frame["ts"]]
        totals = frame.groupby("bucket")[["value", "count"]].sum().to_dict("index")

    fmt = KEY_FORMAT[granularity]
    points: List[TrendPoint] = []
    for key in keys:
        bucket = totals.get(key)
        if bucket is None:
            points.append(TrendPoint(period_key=key.strftime(fmt), total_value=0.0, count=0))
            continue
        points.append(
            TrendPoint(
                period_key=key.strftime(fmt),
                total_value=float(bucket["value"]),
                count=_as_count(bucket["count"]),
            )
        )
    return points


__all__ = [
    "FREQ_RULE",
    "GRANULARITIES",
    "TrendPoint",
    "bucket_keys",
    "bucket_start",
    "bucketize",
    "parse_granularity",
]
