"""Application configuration objects."""

import os
from typing import Dict, List

from dotenv import load_dotenv

from optistats.services.taxonomy import PRODUCT_TYPE_ALIASES, PRODUCT_TYPES

load_dotenv()


def _csv_env(name: str, default: List[str]) -> List[str]:
    raw = os.getenv(name)
    if not raw:
        return list(default)
    return [part.strip().upper() for part in raw.split(",") if part.strip()]


class Config:
    """Base configuration for the statistics service."""

    # -------------------------
    # Upstream API
    # -------------------------
    API_BASE_URL = os.getenv("OPTISTATS_API_BASE_URL", "http://localhost:8080/api/v1")
    API_TOKEN = os.getenv("OPTISTATS_API_TOKEN")
    API_TIMEOUT = float(os.getenv("OPTISTATS_API_TIMEOUT", "30"))

    # -------------------------
    # Presentation
    # -------------------------
    CURRENCY_SUFFIX = os.getenv("OPTISTATS_CURRENCY_SUFFIX", "zł")
    THOUSANDS_SEP = os.getenv("OPTISTATS_THOUSANDS_SEP", " ")
    DECIMAL_SEP = os.getenv("OPTISTATS_DECIMAL_SEP", ",")

    METRIC_LABELS: Dict[str, str] = {
        "totalSales": "Wartość sprzedaży",
        "salesCount": "Liczba sprzedaży",
        "averageSaleValue": "Średnia wartość sprzedaży",
        "totalRevenue": "Przychód",
        "totalQuantitySold": "Sprzedane sztuki",
    }

    # -------------------------
    # Taxonomy
    # -------------------------
    PRODUCT_TYPES: List[str] = _csv_env("OPTISTATS_PRODUCT_TYPES", PRODUCT_TYPES)
    PRODUCT_TYPE_ALIASES: Dict[str, str] = dict(PRODUCT_TYPE_ALIASES)

    # -------------------------
    # Filters & rankings
    # -------------------------
    DEFAULT_PERIOD = os.getenv("OPTISTATS_DEFAULT_PERIOD", "month")
    DEFAULT_DISPLAY_COUNT = 10


__all__ = ["Config"]
