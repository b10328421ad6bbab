"""Statistics blueprint package."""

from __future__ import annotations

from flask import Blueprint

bp = Blueprint("statistics", __name__)


def get_formatter():
    from flask import current_app

    return current_app.extensions["formatter"]


def get_client():
    from flask import current_app

    return current_app.extensions["statistics_client"]


from . import breakdowns, downloads, errors, health, overview, trend  # noqa: E402,F401

__all__ = ["bp", "get_client", "get_formatter"]
