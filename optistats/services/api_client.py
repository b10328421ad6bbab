"""Client for the upstream statistics API."""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

import requests

logger = logging.getLogger("optistats")


class StatisticsApiError(RuntimeError):
    """Upstream call failed or answered with ``success: false``."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class StatisticsClient:
    """Fetch raw statistics payloads from the remote API.

    Responses are wrapped as ``{"success": bool, "data": ..., "error": str}``;
    only ``data`` is returned. There is no retry: a failed call raises
    ``StatisticsApiError`` and the caller decides what to show.
    """

    def __init__(self, config: Mapping[str, Any], session: Optional[requests.Session] = None):
        self.base_url = str(config.get("API_BASE_URL", "")).rstrip("/")
        self.timeout = float(config.get("API_TIMEOUT", 30))
        self.token = config.get("API_TOKEN")
        self._session = session

    def _http(self) -> requests.Session:
        if self._session is None:
            self._session = requests.Session()
        return self._session

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def get(self, path: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        url = f"{self.base_url}/{path.lstrip('/')}"
        try:
            resp = self._http().get(
                url, params=dict(params or {}), headers=self._headers(), timeout=self.timeout
            )
            resp.raise_for_status()
            body = resp.json()
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            logger.warning("Statistics API %s answered %s", url, status)
            raise StatisticsApiError(_error_message(e.response) or str(e), status) from e
        except (requests.ConnectionError, requests.Timeout) as e:
            logger.error("Statistics API %s unreachable: %s", url, e)
            raise StatisticsApiError(f"Statistics service unreachable: {e}") from e
        except ValueError as e:
            logger.error("Statistics API %s returned invalid JSON", url)
            raise StatisticsApiError("Statistics service returned an invalid response") from e

        if not isinstance(body, Mapping) or not body.get("success"):
            error = body.get("error") if isinstance(body, Mapping) else None
            logger.warning("Statistics API %s reported failure: %s", url, error)
            raise StatisticsApiError(error or "Statistics service reported a failure")
        return body.get("data")

    # -------- endpoints --------
    def dashboard(self, params: Optional[Mapping[str, Any]] = None) -> Any:
        return self.get("/statistics/dashboard", params)

    def sales(self, params: Optional[Mapping[str, Any]] = None) -> Any:
        return self.get("/statistics/sales", params)

    def sales_trend(self, params: Optional[Mapping[str, Any]] = None) -> Any:
        return self.get("/statistics/sales/trend", params)

    def sales_by_product_type(self, params: Optional[Mapping[str, Any]] = None) -> Any:
        return self.get("/statistics/sales/by-product-type", params)

    def store_comparison(self, params: Optional[Mapping[str, Any]] = None) -> Any:
        return self.get("/statistics/stores/comparison", params)

    def user_sales(self, params: Optional[Mapping[str, Any]] = None) -> Any:
        return self.get("/statistics/users/sales", params)

    def inventory_by_location(self, params: Optional[Mapping[str, Any]] = None) -> Any:
        """Stock per location grouped by product type; accepts ``productTypes``."""
        return self.get("/statistics/products/inventory-by-location", params)


def _error_message(response: Optional[requests.Response]) -> Optional[str]:
    if response is None:
        return None
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, Mapping):
        return body.get("error")
    return None


__all__ = ["StatisticsApiError", "StatisticsClient"]
