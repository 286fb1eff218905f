"""
Интеграционные тесты: GlobalPostClient + RequestsTransport поверх responses.
"""

import pytest
import requests
import responses
from responses import matchers

from globalpost_client import (
    APITransportError,
    BadRequestError,
    GlobalPostClient,
    MemoryLogger,
    ServiceUnavailableError,
)

TEST_URL = "https://test-api.globalpost.com.ua"
PROD_URL = "https://api.globalpost.com.ua"


@pytest.mark.integration
class TestFullIntegration:
    """Весь стек: сборка запроса, транспорт, ретраи, классификация."""

    @responses.activate
    def test_get_countries(self):
        responses.add(
            responses.GET,
            f"{TEST_URL}/public/tariff-international/countries",
            json=[{"code": "UA", "name": "Ukraine"}],
            status=200,
            match=[matchers.header_matcher({
                "Authorization": "Bearer abc",
                "Accept": "application/json",
            })],
        )

        with GlobalPostClient("abc", "TEST") as client:
            countries = client.get_countries()

        assert countries == [{"code": "UA", "name": "Ukraine"}]

    @responses.activate
    def test_get_options_query(self):
        responses.add(
            responses.GET,
            f"{TEST_URL}/public/tariff-international/get-options",
            json={"options": [{"price": 100}]},
            match=[matchers.query_param_matcher({"from_country": "UA", "to_country": "US", "weight": "1200"})],
        )

        with GlobalPostClient("abc") as client:
            result = client.get_options({"from_country": "UA", "to_country": "US", "weight": 1200})

        assert result == {"options": [{"price": 100}]}

    @responses.activate
    def test_create_short_order_form(self):
        responses.add(
            responses.POST,
            f"{PROD_URL}/api/create-short-order",
            json={"id": 42},
        )

        with GlobalPostClient("abc", "PROD") as client:
            result = client.create_short_order({"recipient_name": "John", "recipient_phone": "+380001112233"})

        assert result == {"id": 42}
        request = responses.calls[0].request
        assert request.headers["Content-Type"] == "application/x-www-form-urlencoded"
        assert request.body == b"recipient_name=John&recipient_phone=%2B380001112233"

    @responses.activate
    def test_print_label_binary(self):
        pdf = b"%PDF-1.4\n\xe2\xe3\xcf\xd3\x00\xff"
        responses.add(
            responses.GET,
            f"{TEST_URL}/api/orders/print-new/en/ORDER-42",
            body=pdf,
            content_type="application/pdf",
            match=[matchers.header_matcher({"Accept": "application/pdf"})],
        )

        with GlobalPostClient("abc") as client:
            assert client.print_label("en", "ORDER-42") == pdf

    @responses.activate
    def test_retry_5xx_then_success(self):
        url = f"{TEST_URL}/public/tariff-international/countries"
        responses.add(responses.GET, url, json={"message": "Internal"}, status=500)
        responses.add(responses.GET, url, json={"ok": True}, status=200)
        logger = MemoryLogger()

        with GlobalPostClient("abc", "TEST", {"max_retries": 2, "retry_delay": 0}, logger=logger) as client:
            result = client.get_countries()

        assert result == {"ok": True}
        assert len(responses.calls) == 2
        assert logger.levels() == ["warning"]

    @responses.activate
    def test_5xx_exhausted(self):
        url = f"{TEST_URL}/public/tariff-international/countries"
        responses.add(responses.GET, url, json={"message": "Maintenance", "code": "SERVER_ERROR"}, status=503)

        with GlobalPostClient("abc", "TEST", {"max_retries": 1, "retry_delay": 0}) as client:
            with pytest.raises(ServiceUnavailableError) as exc_info:
                client.get_countries()

        assert len(responses.calls) == 2
        assert exc_info.value.log_message == "HTTP 503: Maintenance [code: SERVER_ERROR]"

    @responses.activate
    def test_bad_request(self):
        responses.add(
            responses.GET,
            f"{TEST_URL}/public/tariff-international/countries",
            json={"message": "Invalid data", "code": "invalid_data"},
            status=400,
        )

        with GlobalPostClient("abc", "TEST", {"max_retries": 3, "retry_delay": 0}) as client:
            with pytest.raises(BadRequestError) as exc_info:
                client.get_countries()

        assert len(responses.calls) == 1
        error = exc_info.value
        assert error.api_code == "invalid_data"
        assert error.log_message == "HTTP 400: Invalid data [code: invalid_data]"
        assert error.response_headers["content-type"] == ("application/json",)

    @responses.activate
    def test_timeout_retried_then_raised(self):
        url = f"{TEST_URL}/public/tariff-international/countries"
        responses.add(responses.GET, url, body=requests.exceptions.ReadTimeout("Read timed out"))
        responses.add(responses.GET, url, body=requests.exceptions.ReadTimeout("Read timed out"))

        with GlobalPostClient("abc", "TEST", {"max_retries": 1, "retry_delay": 0}) as client:
            with pytest.raises(APITransportError) as exc_info:
                client.get_countries()

        assert len(responses.calls) == 2
        assert exc_info.value.code == "api_transport"
        assert "Read timed out" in exc_info.value.log_message

    @responses.activate
    def test_ssl_error_not_retried(self):
        url = f"{TEST_URL}/public/tariff-international/countries"
        responses.add(responses.GET, url, body=requests.exceptions.SSLError("certificate verify failed"))

        with GlobalPostClient("abc", "TEST", {"max_retries": 3, "retry_delay": 0}) as client:
            with pytest.raises(APITransportError):
                client.get_countries()

        assert len(responses.calls) == 1
