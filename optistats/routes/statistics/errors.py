"""JSON error responses for the statistics blueprint."""

from __future__ import annotations

from flask import jsonify

from . import bp
from optistats.services.api_client import StatisticsApiError
from optistats.utils.date_range import DateRangeError


@bp.app_errorhandler(DateRangeError)
def handle_date_range_error(exc: DateRangeError):
    return jsonify({"error": str(exc), "code": exc.code}), 400


@bp.app_errorhandler(StatisticsApiError)
def handle_api_error(exc: StatisticsApiError):
    return jsonify({"error": exc.message, "code": "upstream_error"}), 502
