"""Display-ready structures for the statistics charts, cards and tables.

Everything here composes the bucketing, ranking and taxonomy helpers and
routes every number through a single ``Formatter``; field names are bound by
the chart components and must stay stable.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from optistats.services.bucketing import bucketize
from optistats.services.formatting import Formatter
from optistats.services.ranking import ALL, DisplayCount, rank, share_of_total
from optistats.services.taxonomy import PRODUCT_TYPE_ALIASES, PRODUCT_TYPES, index_entries, merge
from optistats.utils.coerce import to_float
from optistats.utils.date_range import DateRange, format_date, is_complete


def trend_view(
    records: Iterable[Mapping[str, Any]],
    period: str,
    date_range: DateRange,
    formatter: Formatter,
    *,
    timestamp_key: str = "date",
    value_key: str = "totalSales",
    count_key: Optional[str] = None,
) -> Dict[str, Any]:
    complete = is_complete(date_range)
    points = (
        bucketize(
            records,
            period,
            date_range,
            timestamp_key=timestamp_key,
            value_key=value_key,
            count_key=count_key,
        )
        if complete
        else []
    )

    rows = []
    total_value = 0.0
    total_count = 0
    for point in points:
        total_value += point.total_value
        total_count += point.count
        row = point.as_dict()
        row["totalValue"] = round(point.total_value, 2)
        row["totalValueDisplay"] = formatter.currency(point.total_value)
        row["countDisplay"] = formatter.count(point.count)
        rows.append(row)

    return {
        "period": period,
        "complete": complete,
        "startDate": format_date(date_range.start) if date_range else "",
        "endDate": format_date(date_range.end) if date_range else "",
        "points": rows,
        "totals": {
            "totalValue": round(total_value, 2),
            "count": total_count,
            "totalValueDisplay": formatter.currency(total_value),
            "countDisplay": formatter.count(total_count),
        },
    }


def ranking_view(
    rows: Iterable[Mapping[str, Any]],
    formatter: Formatter,
    *,
    key_field: str,
    metric_field: str,
    secondary_field: Optional[str] = None,
    display_count: DisplayCount = ALL,
    metric_format: str = "currency",
) -> Dict[str, Any]:
    result = rank(
        rows,
        metric_field,
        display_count,
        key=key_field,
        secondary=secondary_field,
    )
    render = formatter.currency if metric_format == "currency" else formatter.count

    out_rows = []
    for share in result.ranked:
        row = share.as_dict()
        row["metricPrimaryDisplay"] = render(share.metric_primary)
        row["percentageDisplay"] = formatter.percentage(share.percentage)
        if share.metric_secondary is not None:
            row["metricSecondaryDisplay"] = formatter.count(share.metric_secondary)
        out_rows.append(row)

    return {
        "displayCount": display_count,
        "metric": metric_field,
        "metricLabel": formatter.label(metric_field),
        "total": result.total,
        "totalDisplay": render(result.total),
        "rows": out_rows,
    }


def product_type_view(
    rows: Iterable[Mapping[str, Any]],
    formatter: Formatter,
    *,
    known_keys: Sequence[str] = PRODUCT_TYPES,
    aliases: Optional[Mapping[str, str]] = None,
    key_field: str = "productType",
    metric_field: str = "totalRevenue",
    secondary_field: str = "totalQuantitySold",
) -> Dict[str, Any]:
    sparse = index_entries(rows, key_field, metric_field, secondary_field)
    merged = merge(
        known_keys,
        sparse,
        aliases=PRODUCT_TYPE_ALIASES if aliases is None else aliases,
    )
    cards = []
    for entry in merged:
        card = entry.as_dict()
        card["metricPrimaryDisplay"] = formatter.currency(entry.metric_primary)
        card["metricSecondaryDisplay"] = formatter.count(entry.metric_secondary)
        cards.append(card)
    return {"productTypes": list(known_keys), "cards": cards}


def overview_cards(stats: Optional[Mapping[str, Any]], formatter: Formatter) -> List[Dict[str, Any]]:
    stats = stats or {}
    total_sales = to_float(stats.get("totalSales"))
    sales_count = to_float(stats.get("salesCount"))
    average = total_sales / sales_count if total_sales and sales_count else 0.0
    return [
        formatter.describe("totalSales", total_sales, "currency"),
        formatter.describe("salesCount", int(sales_count), "number"),
        formatter.describe("averageSaleValue", average, "currency"),
    ]


def _selected(ids: Optional[Iterable[Any]]) -> List[str]:
    return [str(value) for value in (ids or []) if value not in (None, "")]


def store_comparison_view(
    stores: Iterable[Mapping[str, Any]],
    formatter: Formatter,
    selected_ids: Optional[Iterable[Any]] = None,
) -> Dict[str, Any]:
    """Stores narrowed to ``selected_ids`` (empty means all) with their shares."""
    wanted = set(_selected(selected_ids))
    filtered = [
        store
        for store in stores
        if isinstance(store, Mapping) and (not wanted or str(store.get("locationId")) in wanted)
    ]
    normalized = [
        {
            "locationId": store.get("locationId"),
            "salesCount": to_float(store.get("salesCount")),
            "totalSales": to_float(store.get("totalSales")),
        }
        for store in filtered
    ]
    count_shares = share_of_total(normalized, "salesCount", key="locationId")
    value_shares = share_of_total(normalized, "totalSales", key="locationId")

    rows = []
    for store, by_count, by_value in zip(filtered, count_shares.ranked, value_shares.ranked):
        sales_count = by_count.metric_primary
        total_sales = by_value.metric_primary
        average = store.get("averageSaleValue")
        if average is None:
            average = total_sales / sales_count if sales_count else 0.0
        rows.append(
            {
                "locationId": store.get("locationId"),
                "locationName": store.get("locationName"),
                "locationType": store.get("locationType"),
                "salesCount": int(sales_count),
                "totalSales": round(total_sales, 2),
                "averageSaleValue": round(to_float(average), 2),
                "salesCountPercentage": by_count.percentage,
                "totalSalesPercentage": by_value.percentage,
                "salesCountDisplay": formatter.count(sales_count),
                "totalSalesDisplay": formatter.currency(total_sales),
                "averageSaleValueDisplay": formatter.currency(average),
                "salesCountPercentageDisplay": formatter.percentage(by_count.percentage),
                "totalSalesPercentageDisplay": formatter.percentage(by_value.percentage),
            }
        )

    return {
        "selectedLocationIds": sorted(wanted),
        "stores": rows,
        "totals": {
            "salesCount": int(count_shares.total),
            "totalSales": round(value_shares.total, 2),
            "salesCountDisplay": formatter.count(count_shares.total),
            "totalSalesDisplay": formatter.currency(value_shares.total),
        },
    }


def selected_types(
    known_keys: Sequence[str],
    selection: Optional[Iterable[Any]] = None,
    aliases: Optional[Mapping[str, str]] = None,
) -> List[str]:
    """Known types picked by ``selection``, in taxonomy order; none picked means all."""
    aliases = PRODUCT_TYPE_ALIASES if aliases is None else aliases
    picked = set()
    for value in _selected(selection):
        key = value.strip().upper()
        picked.add(aliases.get(key, key))
    chosen = [key for key in known_keys if key in picked]
    return chosen or list(known_keys)


def inventory_by_location_view(
    payload: Optional[Mapping[str, Any]],
    selected_ids: Optional[Iterable[Any]] = None,
    *,
    known_keys: Sequence[str] = PRODUCT_TYPES,
    aliases: Optional[Mapping[str, str]] = None,
    product_types: Optional[Iterable[Any]] = None,
) -> Dict[str, Any]:
    """One chart row per location with a quantity for each charted product type.

    ``product_types`` narrows the charted types; unknown values are ignored
    and an empty selection charts the full taxonomy.
    """
    payload = payload or {}
    wanted = set(_selected(selected_ids))
    aliases = PRODUCT_TYPE_ALIASES if aliases is None else aliases
    charted = selected_types(known_keys, product_types, aliases)

    rows = []
    for location in payload.get("locations") or []:
        if not isinstance(location, Mapping):
            continue
        if wanted and str(location.get("locationId")) not in wanted:
            continue
        quantities = location.get("productTypeQuantities") or {}
        data_point: Dict[str, Any] = {
            "locationId": location.get("locationId"),
            "locationName": location.get("locationName"),
        }
        for entry in merge(charted, quantities, aliases=aliases):
            data_point[entry.category_key] = int(entry.metric_primary)
        rows.append(data_point)

    return {"productTypes": charted, "locations": rows}



def user_comparison_view(
    users: Iterable[Mapping[str, Any]],
    formatter: Formatter,
    display_count: DisplayCount = ALL,
) -> Dict[str, Any]:
    """Sellers ranked by sales value, with their share of the period total."""
    indexed = [user for user in users if isinstance(user, Mapping)]
    result = rank(
        [{"position": str(i), "totalSales": user.get("totalSales")} for i, user in enumerate(indexed)],
        "totalSales",
        display_count,
        key="position",
    )

    rows = []
    for share in result.ranked:
        user = indexed[int(share.category_key)]
        sales_count = to_float(user.get("salesCount"))
        average = user.get("averageSaleValue")
        if average is None:
            average = share.metric_primary / sales_count if sales_count else 0.0
        operations = int(to_float(user.get("totalOperations")))
        rows.append(
            {
                "rank": share.rank,
                "userId": user.get("userId"),
                "userName": user.get("userName"),
                "userEmail": user.get("userEmail"),
                "salesCount": int(sales_count),
                "totalSales": round(share.metric_primary, 2),
                "averageSaleValue": round(to_float(average), 2),
                "totalOperations": operations,
                "percentage": share.percentage,
                "salesCountDisplay": formatter.count(sales_count),
                "totalSalesDisplay": formatter.currency(share.metric_primary),
                "averageSaleValueDisplay": formatter.currency(average),
                "totalOperationsDisplay": formatter.count(operations),
                "percentageDisplay": formatter.percentage(share.percentage),
            }
        )

    return {
        "displayCount": display_count,
        "total": round(result.total, 2),
        "totalDisplay": formatter.currency(result.total),
        "users": rows,
    }


__all__ = [
    "inventory_by_location_view",
    "overview_cards",
    "product_type_view",
    "ranking_view",
    "selected_types",
    "store_comparison_view",
    "trend_view",
    "user_comparison_view",
]
