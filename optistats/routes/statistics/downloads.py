"""CSV export endpoints."""

from __future__ import annotations

import io
from datetime import datetime, timezone
from typing import Any, Dict, List

import pandas as pd
from flask import Response

from . import bp
from .breakdowns import build_brand_ranking
from .trend import build_trend


def _csv_response(rows: List[Dict[str, Any]], columns: List[str], prefix: str) -> Response:
    frame = pd.DataFrame(rows, columns=columns)

    buf = io.StringIO()
    frame.to_csv(buf, index=False)
    buf.seek(0)

    ts = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
    filename = f"{prefix}_{ts}.csv"

    return Response(
        buf.getvalue(),
        mimetype="text/csv",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


@bp.route("/statistics/export/brands.csv", methods=["GET"])
def export_brands():
    """Download the brand ranking as shown, with display-count applied."""
    view = build_brand_ranking()
    return _csv_response(
        view["rows"],
        ["rank", "categoryKey", "metricPrimary", "percentage"],
        "brands",
    )


@bp.route("/statistics/export/trend.csv", methods=["GET"])
def export_trend():
    view = build_trend()
    return _csv_response(view["points"], ["periodKey", "totalValue", "count"], "trend")
