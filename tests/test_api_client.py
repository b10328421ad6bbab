import pytest
import requests

from optistats.services.api_client import StatisticsApiError, StatisticsClient


class FakeResponse:
    def __init__(self, body=None, status_code=200, invalid_json=False):
        self._body = body
        self.status_code = status_code
        self._invalid_json = invalid_json

    def json(self):
        if self._invalid_json:
            raise ValueError("No JSON object could be decoded")
        return self._body

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.requests = []

    def get(self, url, params=None, headers=None, timeout=None):
        self.requests.append({"url": url, "params": params, "headers": headers, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.response


def _client(session, **config):
    settings = {"API_BASE_URL": "http://upstream.test/api/v1/", "API_TIMEOUT": 5}
    settings.update(config)
    return StatisticsClient(settings, session=session)


def test_unwraps_data_and_forwards_params():
    session = FakeSession(FakeResponse({"success": True, "data": {"totalSales": 10}}))
    client = _client(session, API_TOKEN="secret")

    data = client.sales({"startDate": "2024-01-01", "period": "week"})

    assert data == {"totalSales": 10}
    sent = session.requests[0]
    assert sent["url"] == "http://upstream.test/api/v1/statistics/sales"
    assert sent["params"] == {"startDate": "2024-01-01", "period": "week"}
    assert sent["headers"]["Authorization"] == "Bearer secret"
    assert sent["timeout"] == 5.0


def test_no_token_means_no_auth_header():
    session = FakeSession(FakeResponse({"success": True, "data": []}))
    _client(session).sales_trend()
    assert "Authorization" not in session.requests[0]["headers"]


def test_success_false_raises_with_upstream_message():
    session = FakeSession(FakeResponse({"success": False, "error": "Brak uprawnień"}))
    with pytest.raises(StatisticsApiError) as excinfo:
        _client(session).dashboard()
    assert excinfo.value.message == "Brak uprawnień"


def test_http_error_carries_status_and_message():
    session = FakeSession(FakeResponse({"success": False, "error": "Not found"}, status_code=404))
    with pytest.raises(StatisticsApiError) as excinfo:
        _client(session).store_comparison()
    assert excinfo.value.status_code == 404
    assert excinfo.value.message == "Not found"


def test_connection_problems_become_api_errors():
    session = FakeSession(error=requests.ConnectionError("refused"))
    with pytest.raises(StatisticsApiError):
        _client(session).inventory_by_location()

    session = FakeSession(error=requests.Timeout("slow"))
    with pytest.raises(StatisticsApiError):
        _client(session).sales_by_product_type()


def test_invalid_json_becomes_api_error():
    session = FakeSession(FakeResponse(invalid_json=True))
    with pytest.raises(StatisticsApiError):
        _client(session).sales()


@pytest.mark.parametrize(
    "method, path",
    [
        ("dashboard", "/statistics/dashboard"),
        ("sales", "/statistics/sales"),
        ("sales_trend", "/statistics/sales/trend"),
        ("sales_by_product_type", "/statistics/sales/by-product-type"),
        ("store_comparison", "/statistics/stores/comparison"),
        ("user_sales", "/statistics/users/sales"),
        ("inventory_by_location", "/statistics/products/inventory-by-location"),
    ],
)
def test_each_endpoint_requests_its_upstream_path(method, path):
    session = FakeSession(FakeResponse({"success": True, "data": {}}))
    getattr(_client(session), method)()
    assert session.requests[0]["url"] == "http://upstream.test/api/v1" + path


def test_product_types_are_sent_as_a_list():
    session = FakeSession(FakeResponse({"success": True, "data": {"locations": []}}))
    _client(session).inventory_by_location({"productTypes": ["FRAME", "SOLUTION"]})
    assert session.requests[0]["params"] == {"productTypes": ["FRAME", "SOLUTION"]}
