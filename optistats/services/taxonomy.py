"""Fixed product-type taxonomy and merging of sparse category results."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from optistats.utils.coerce import to_float


class ProductType(str, Enum):
    """Product categories in the order the overview lays out its cards."""

    FRAME = "FRAME"
    SUNGLASSES = "SUNGLASSES"
    CONTACT_LENS = "CONTACT_LENS"
    SOLUTION = "SOLUTION"
    OTHER = "OTHER"


PRODUCT_TYPES: List[str] = [member.value for member in ProductType]

# upstream sometimes reports OTHER as OTHER_PRODUCT
PRODUCT_TYPE_ALIASES: Dict[str, str] = {"OTHER_PRODUCT": ProductType.OTHER.value}


@dataclass(frozen=True)
class CategoryEntry:
    category_key: str
    metric_primary: float = 0.0
    metric_secondary: Optional[float] = 0.0
    rank: Optional[int] = None

    def as_dict(self) -> Dict[str, Any]:
        return {
            "categoryKey": self.category_key,
            "metricPrimary": self.metric_primary,
            "metricSecondary": self.metric_secondary,
            "rank": self.rank,
        }


def index_entries(
    rows: Iterable[Mapping[str, Any]],
    key_field: str,
    metric_field: str,
    secondary_field: Optional[str] = None,
) -> Dict[str, CategoryEntry]:
    """Build the sparse key -> entry mapping from upstream rows.

    Rows without a key are skipped; a repeated key keeps the first row.
    """
    indexed: Dict[str, CategoryEntry] = {}
    for row in rows:
        if not isinstance(row, Mapping):
            continue
        key = row.get(key_field)
        if key in (None, ""):
            continue
        key = str(key)
        if key in indexed:
            continue
        indexed[key] = CategoryEntry(
            category_key=key,
            metric_primary=to_float(row.get(metric_field)),
            metric_secondary=to_float(row.get(secondary_field)) if secondary_field else 0.0,
        )
    return indexed


def merge(
    known_keys: Sequence[str],
    sparse_entries: Mapping[str, Any],
    *,
    aliases: Optional[Mapping[str, str]] = None,
) -> List[CategoryEntry]:
    """
    One entry per ``known_keys`` element, in that order.

    Missing keys get a zero placeholder; keys outside the taxonomy are
    dropped. ``sparse_entries`` values may be ``CategoryEntry`` objects or
    plain mappings carrying ``metricPrimary`` / ``metricSecondary``.
    """
    aliases = aliases or {}
    by_key: Dict[str, Any] = {}
    for raw_key, entry in sparse_entries.items():
        key = aliases.get(str(raw_key), str(raw_key))
        by_key.setdefault(key, entry)

    merged: List[CategoryEntry] = []
    for key in known_keys:
        key = str(key.value if isinstance(key, Enum) else key)
        entry = by_key.get(key)
        if entry is None:
            merged.append(CategoryEntry(category_key=key))
        elif isinstance(entry, CategoryEntry):
            merged.append(
                CategoryEntry(
                    category_key=key,
                    metric_primary=entry.metric_primary,
                    metric_secondary=entry.metric_secondary,
                    rank=entry.rank,
                )
            )
        elif isinstance(entry, Mapping):
            merged.append(
                CategoryEntry(
                    category_key=key,
                    metric_primary=to_float(entry.get("metricPrimary")),
                    metric_secondary=to_float(entry.get("metricSecondary")),
                    rank=entry.get("rank"),
                )
            )
        else:
            merged.append(CategoryEntry(category_key=key, metric_primary=to_float(entry)))
    return merged


__all__ = [
    "CategoryEntry",
    "PRODUCT_TYPES",
    "PRODUCT_TYPE_ALIASES",
    "ProductType",
    "index_entries",
    "merge",
]
