"""Categorical breakdown endpoints (brands, product types, stores, users, stock)."""

from __future__ import annotations

from typing import Any, Dict

from flask import current_app, jsonify, request

from . import bp, get_client, get_formatter
from .helpers import (
    build_filters,
    display_count_of,
    list_or_empty,
    selected_location_ids,
    selected_product_types,
)
from optistats.services.view_models import (
    inventory_by_location_view,
    product_type_view,
    ranking_view,
    selected_types,
    store_comparison_view,
    user_comparison_view,
)


def build_brand_ranking() -> Dict[str, Any]:
    filters = build_filters(request.args)
    params = filters.to_query_params()
    stats = get_client().sales(params)

    view = ranking_view(
        list_or_empty(stats, "salesByBrand"),
        get_formatter(),
        key_field="brand",
        metric_field="totalSales",
        display_count=display_count_of(request.args),
    )
    view["filters"] = params
    return view


@bp.route("/statistics/brands", methods=["GET"])
def brands():
    """Top brands by sales value; percentages are over every brand."""
    return jsonify(build_brand_ranking())


@bp.route("/statistics/product-types", methods=["GET"])
def product_types():
    filters = build_filters(request.args)
    params = filters.to_query_params()
    payload = get_client().sales_by_product_type(params)

    view = product_type_view(
        list_or_empty(payload, "salesByProductType"),
        get_formatter(),
        known_keys=current_app.config["PRODUCT_TYPES"],
        aliases=current_app.config["PRODUCT_TYPE_ALIASES"],
    )
    view["filters"] = params
    return jsonify(view)


@bp.route("/statistics/stores", methods=["GET"])
def stores():
    filters = build_filters(request.args)
    # comparing stores only makes sense across every location
    filters.remove_filter("locationId")
    params = filters.to_query_params()
    payload = get_client().store_comparison(params)

    view = store_comparison_view(
        list_or_empty(payload, "stores"),
        get_formatter(),
        selected_location_ids(request.args),
    )
    view["filters"] = params
    return jsonify(view)


@bp.route("/statistics/users", methods=["GET"])
def users():
    filters = build_filters(request.args)
    params = filters.to_query_params()
    payload = get_client().user_sales(params)

    view = user_comparison_view(
        list_or_empty(payload, "userSales"),
        get_formatter(),
        display_count_of(request.args),
    )
    view["filters"] = params
    return jsonify(view)


@bp.route("/statistics/inventory/by-location", methods=["GET"])
def inventory_by_location():
    filters = build_filters(request.args)
    filters.remove_filter("locationId")
    known_keys = current_app.config["PRODUCT_TYPES"]
    aliases = current_app.config["PRODUCT_TYPE_ALIASES"]
    picked = selected_product_types(request.args)
    if picked:
        filters.set_filter("productTypes", selected_types(known_keys, picked, aliases))
    params = filters.to_query_params()
    payload = get_client().inventory_by_location(params)

    view = inventory_by_location_view(
        payload if isinstance(payload, dict) else {},
        selected_location_ids(request.args),
        known_keys=known_keys,
        aliases=aliases,
        product_types=picked,
    )
    view["filters"] = params
    return jsonify(view)
