# coerce.py
import math
from typing import Any, Optional


def to_number(value: Any) -> Optional[float]:
    """Finite float for ``value``, or None when it is not numeric."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str) and not value.strip():
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def to_float(value: Any) -> float:
    number = to_number(value)
    return 0.0 if number is None else number


__all__ = ["to_float", "to_number"]
