"""Healthcheck endpoint."""

from __future__ import annotations

from flask import current_app, jsonify

from . import bp, get_client
from optistats.services.api_client import StatisticsApiError


@bp.route("/health", methods=["GET"])
def health():
    client = get_client()
    try:
        client.dashboard()
        return (
            jsonify(
                {
                    "ok": True,
                    "upstream": client.base_url,
                    "productTypes": list(current_app.config["PRODUCT_TYPES"]),
                }
            ),
            200,
        )
    except StatisticsApiError as exc:
        current_app.logger.exception("Healthcheck failed")
        return jsonify({"ok": False, "upstream": client.base_url, "error": exc.message}), 500
