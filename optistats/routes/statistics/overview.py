"""Overview cards endpoint."""

from __future__ import annotations

from flask import current_app, jsonify, request

from . import bp, get_client, get_formatter
from .helpers import build_filters, list_or_empty
from optistats.services.view_models import overview_cards, product_type_view


@bp.route("/statistics/overview", methods=["GET"])
def overview():
    """Headline cards plus one card per product type."""
    client = get_client()
    formatter = get_formatter()
    filters = build_filters(request.args)
    params = filters.to_query_params()

    stats = client.dashboard(params) or {}
    by_type = client.sales_by_product_type(params)

    return jsonify(
        {
            "filters": params,
            "cards": overview_cards(stats, formatter),
            "productTypes": product_type_view(
                list_or_empty(by_type, "salesByProductType"),
                formatter,
                known_keys=current_app.config["PRODUCT_TYPES"],
                aliases=current_app.config["PRODUCT_TYPE_ALIASES"],
            ),
        }
    )
