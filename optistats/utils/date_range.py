# date_range.py
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, Optional

import pandas as pd

WIRE_FORMAT = "%Y-%m-%d"

# whole years inside the nanosecond Timestamp span, so bucket edges stay in bounds
MIN_DATE = date(1678, 1, 1)
MAX_DATE = date(2261, 12, 31)


class DateRangeError(ValueError):
    """A date value could not be understood."""

    code = "invalid_date"


class InvalidOrder(DateRangeError):
    """Both ends are set and the start falls after the end."""

    code = "invalid_order"


def _in_bounds(value: date) -> date:
    if not MIN_DATE <= value <= MAX_DATE:
        raise DateRangeError(
            f"Date {format_date(value)} is outside {format_date(MIN_DATE)}..{format_date(MAX_DATE)}"
        )
    return value


def _parse_date(value: Any) -> Optional[date]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return _in_bounds(value.date())
    if isinstance(value, date):
        return _in_bounds(value)
    text = str(value).strip()
    if not text:
        return None
    try:
        parsed = datetime.strptime(text, WIRE_FORMAT).date()
    except ValueError:
        lenient = pd.to_datetime(text, errors="coerce")
        if pd.isna(lenient):
            raise DateRangeError(f"Could not parse date value '{value}'")
        parsed = lenient.date()
    return _in_bounds(parsed)


@dataclass(frozen=True)
class DateRange:
    start: Optional[date] = None
    end: Optional[date] = None

    def is_complete(self) -> bool:
        return self.start is not None and self.end is not None

    def to_query_params(self) -> Dict[str, str]:
        params: Dict[str, str] = {}
        if self.start is not None:
            params["startDate"] = format_date(self.start)
        if self.end is not None:
            params["endDate"] = format_date(self.end)
        return params


def validate(start: Any = None, end: Any = None) -> DateRange:
    """
    Build a ``DateRange`` from user input.

    Blank or missing ends are valid and mean "not selected yet". Raises
    ``InvalidOrder`` when both ends are set and ``start > end``.
    """
    start_date = _parse_date(start)
    end_date = _parse_date(end)
    if start_date is not None and end_date is not None and start_date > end_date:
        raise InvalidOrder(
            f"Start date {format_date(start_date)} is after end date {format_date(end_date)}"
        )
    return DateRange(start=start_date, end=end_date)


def is_complete(date_range: Optional[DateRange]) -> bool:
    return date_range is not None and date_range.is_complete()


def format_date(value: Optional[date]) -> str:
    """Canonical ``YYYY-MM-DD`` used for display and on the wire."""
    if value is None:
        return ""
    if isinstance(value, datetime):
        value = value.date()
    return value.strftime(WIRE_FORMAT)


__all__ = [
    "DateRange",
    "DateRangeError",
    "InvalidOrder",
    "format_date",
    "is_complete",
    "validate",
]
