import pathlib
import sys

import pytest

PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from optistats.app import create_app
from optistats.services.api_client import StatisticsApiError
from optistats.services.formatting import Formatter


class FakeStatisticsClient:
    """Stands in for the upstream API; records every call it receives."""

    base_url = "http://upstream.test/api/v1"

    def __init__(self):
        self.calls = []
        self.responses = {}
        self.fail_with = None

    def _answer(self, name, params):
        self.calls.append((name, dict(params or {})))
        if self.fail_with is not None:
            raise self.fail_with
        return self.responses.get(name)

    def dashboard(self, params=None):
        return self._answer("dashboard", params)

    def sales(self, params=None):
        return self._answer("sales", params)

    def sales_trend(self, params=None):
        return self._answer("sales_trend", params)

    def sales_by_product_type(self, params=None):
        return self._answer("sales_by_product_type", params)

    def store_comparison(self, params=None):
        return self._answer("store_comparison", params)

    def user_sales(self, params=None):
        return self._answer("user_sales", params)

    def inventory_by_location(self, params=None):
        return self._answer("inventory_by_location", params)


@pytest.fixture()
def formatter():
    return Formatter(currency_suffix="zł", thousands_sep=" ", decimal_sep=",")


@pytest.fixture()
def fake_client():
    return FakeStatisticsClient()


@pytest.fixture()
def app(fake_client):
    app = create_app(
        {
            "TESTING": True,
            "API_BASE_URL": FakeStatisticsClient.base_url,
            "DEFAULT_PERIOD": "month",
            "DEFAULT_DISPLAY_COUNT": 10,
        }
    )
    app.extensions["statistics_client"] = fake_client
    return app


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def upstream_down(fake_client):
    fake_client.fail_with = StatisticsApiError("Statistics service unreachable")
    return fake_client
