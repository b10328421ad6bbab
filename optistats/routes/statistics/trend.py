"""Sales trend endpoint."""

from __future__ import annotations

from typing import Any, Dict

from flask import jsonify, request

from . import bp, get_client, get_formatter
from .helpers import build_filters, date_range_of, list_or_empty
from optistats.services.view_models import trend_view


def build_trend() -> Dict[str, Any]:
    filters = build_filters(request.args)
    date_range = date_range_of(filters)
    period = filters.get("period")

    records = []
    # an unset end means "no chart yet", never "everything since epoch"
    if date_range.is_complete():
        payload = get_client().sales_trend(filters.to_query_params())
        records = list_or_empty(payload, "trend")

    view = trend_view(
        records,
        period,
        date_range,
        get_formatter(),
        timestamp_key="date",
        value_key="totalSales",
        count_key="salesCount",
    )
    view["filters"] = filters.to_query_params()
    return view


@bp.route("/statistics/trend", methods=["GET"])
def trend():
    return jsonify(build_trend())
