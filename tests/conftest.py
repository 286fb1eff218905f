"""
Pytest configuration and fixtures for globalpost-client tests.
"""

import json

import pytest
import responses as responses_lib

from globalpost_client.core.client import GlobalPostClient
from globalpost_client.core.exceptions import TransportError
from globalpost_client.core.logging import LoggingConfig, MemoryLogger
from globalpost_client.core.response import HttpResponse
from globalpost_client.core.transport import HttpTransport


class MockTransport(HttpTransport):
    """
    Transport that replays queued results and records every call.

    Each queued item is either an HttpResponse (returned) or a
    TransportError (raised).
    """

    def __init__(self, *results):
        self.results = list(results)
        self.calls = []
        self.closed = False

    def queue(self, *results):
        self.results.extend(results)
        return self

    def queue_json(self, status_code, payload, headers=None):
        response_headers = {"Content-Type": "application/json"}
        response_headers.update(headers or {})
        return self.queue(HttpResponse(status_code, response_headers, json.dumps(payload).encode("utf-8")))

    def request(self, method, url, headers=None, body=None):
        self.calls.append({
            "method": method,
            "url": url,
            "headers": dict(headers or {}),
            "body": body,
        })
        if not self.results:
            raise AssertionError(f"Unexpected request: {method} {url}")

        result = self.results.pop(0)
        if isinstance(result, TransportError):
            raise result
        return result

    def close(self):
        self.closed = True

    @property
    def last_call(self):
        return self.calls[-1]


@pytest.fixture
def test_url():
    """Sandbox base URL."""
    return "https://test-api.globalpost.com.ua"


@pytest.fixture
def prod_url():
    """Production base URL."""
    return "https://api.globalpost.com.ua"


@pytest.fixture
def mock_responses():
    """Mock HTTP responses using responses library."""
    with responses_lib.RequestsMock() as rsps:
        yield rsps


@pytest.fixture
def transport():
    """Empty MockTransport; queue results in the test."""
    return MockTransport()


@pytest.fixture
def memory_logger():
    return MemoryLogger()


@pytest.fixture
def sleeps(monkeypatch):
    """Record retry pauses instead of sleeping."""
    recorded = []
    monkeypatch.setattr("globalpost_client.core.retry_engine.time.sleep", recorded.append)
    return recorded


@pytest.fixture
def make_client(transport, memory_logger):
    """
    Factory for GlobalPostClient wired to MockTransport and MemoryLogger.

    Example:
        def test_something(make_client, transport):
            transport.queue_json(200, [])
            client = make_client(config={"debug": True})
    """
    def _make(token="test-token", mode="TEST", config=None):
        return GlobalPostClient(token, mode, config, transport=transport, logger=memory_logger)

    return _make


@pytest.fixture
def logging_config_with_file(tmp_path):
    """
    LoggingConfig fixture with file logging enabled.

    Uses temporary directory for log files to avoid cleanup issues.
    """
    log_file = tmp_path / "globalpost.log"
    return LoggingConfig(
        level="DEBUG",
        format="json",
        console=False,
        file_path=str(log_file),
    )
