# filter_store.py
from typing import Any, Callable, Dict, Iterable, Mapping, Optional

ChangeCallback = Callable[[Dict[str, Any]], None]


def is_active_value(value: Any) -> bool:
    """
    A value counts as an applied filter unless it is:
      - None
      - a string that is blank after stripping
      - an empty list / tuple / set
    Numbers and booleans (including 0 and False) are always active.
    """
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip() != ""
    if isinstance(value, (list, tuple, set, frozenset)):
        return len(value) > 0
    return True


class FilterStore:
    """Keyed filter values shared by every filtered list or report.

    Every mutation hands the full updated mapping (a copy) to ``on_change`` so
    consumers can rebuild their request parameters in one step.
    """

    def __init__(
        self,
        defaults: Optional[Mapping[str, Any]] = None,
        on_change: Optional[ChangeCallback] = None,
    ):
        self._defaults: Dict[str, Any] = dict(defaults or {})
        self._filters: Dict[str, Any] = dict(self._defaults)
        self._on_change = on_change

    @property
    def filters(self) -> Dict[str, Any]:
        return dict(self._filters)

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change(dict(self._filters))

    # -------- mutations --------
    def set_filter(self, key: str, value: Any) -> None:
        self._filters[key] = value
        self._notify()

    def set_many(self, partial: Mapping[str, Any]) -> None:
        self._filters.update(partial)
        self._notify()

    def remove_filter(self, key: str) -> None:
        """Drop ``key`` entirely so it disappears from query parameters."""
        self._filters.pop(key, None)
        self._notify()

    def reset(self) -> None:
        self._filters = dict(self._defaults)
        self._notify()

    def clear(self) -> None:
        """Null every present key; unlike ``reset`` the keys stay."""
        self._filters = {key: None for key in self._filters}
        self._notify()

    # -------- queries --------
    def get(self, key: str, default: Any = None) -> Any:
        return self._filters.get(key, default)

    def is_active(self, key: str) -> bool:
        return key in self._filters and is_active_value(self._filters[key])

    def active_keys(self) -> Iterable[str]:
        return [key for key, value in self._filters.items() if is_active_value(value)]

    def active_count(self) -> int:
        return len(self.active_keys())

    def has_active(self) -> bool:
        return any(is_active_value(value) for value in self._filters.values())

    def to_query_params(self) -> Dict[str, Any]:
        """Active entries only, in insertion order."""
        return {key: value for key, value in self._filters.items() if is_active_value(value)}

    def __repr__(self) -> str:
        return f"FilterStore({self._filters!r})"


__all__ = ["ChangeCallback", "FilterStore", "is_active_value"]
